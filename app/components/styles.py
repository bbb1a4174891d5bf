from __future__ import annotations

import streamlit as st

from config import GENRE_COLORS, THEME


def apply_theme(site_name: str) -> None:
    st.set_page_config(
        page_title=site_name,
        page_icon="📚",
        layout="wide",
        initial_sidebar_state="collapsed",
    )

    # Centralized theme tokens (config.py) -> CSS variables
    radius = int(THEME["radius_px"])
    css = """
<style>
@import url('https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600;700&family=Lora:wght@600;700&display=swap');

:root{
  --accent: __ACCENT__;
  --accent-2: __ACCENT_2__;
  --ink-900: __INK_900__;

  --bg-primary: __BG_PRIMARY__;
  --bg-secondary: __BG_SECONDARY__;
  --bg-muted: __BG_MUTED__;
  --card-bg: __CARD_BG__;
  --card-border: __CARD_BORDER__;

  --text-primary: __TEXT_PRIMARY__;
  --text-secondary: __TEXT_SECONDARY__;
  --shadow: __SHADOW__;
  --shadow-hover: __SHADOW_HOVER__;
  --radius: __RADIUS_PX__px;
}

/* Hide default Streamlit chrome */
#MainMenu { visibility: hidden; }
header { visibility: hidden; }
footer { visibility: hidden; }

html, body, [data-testid="stAppViewContainer"]{
  background: var(--bg-primary) !important;
  font-family: "Inter", system-ui, -apple-system, Segoe UI, Roboto, Arial, sans-serif !important;
  color: var(--text-primary) !important;
}

/* Site header */
.site-header{
  display:flex;
  align-items:center;
  justify-content:space-between;
  background: var(--bg-secondary);
  border-bottom: 1px solid var(--card-border);
  padding: 14px 4px;
  margin-bottom: 18px;
}
.site-brand{
  display:flex;
  align-items:center;
  gap:10px;
  text-decoration:none !important;
}
.site-brand-mark{ font-size: 28px; }
.site-brand-name{
  font-size: 24px;
  font-weight: 700;
  background: linear-gradient(90deg, var(--accent), var(--accent-2));
  -webkit-background-clip: text;
  background-clip: text;
  color: transparent;
}
.site-nav{ display:flex; align-items:center; gap:10px; }
.site-nav a{
  padding: 8px 14px;
  border-radius: 10px;
  border: 1px solid var(--card-border);
  color: var(--text-primary) !important;
  text-decoration: none !important;
  font-weight: 500;
  font-size: 14px;
}
.site-nav a.primary{
  background: var(--accent);
  border-color: var(--accent);
  color: #FFFFFF !important;
}
.site-user{ font-size: 13px; color: var(--text-secondary); }

.site-footer{
  border-top: 1px solid var(--card-border);
  margin-top: 60px;
  padding: 24px 0;
  text-align: center;
  font-size: 13px;
  color: var(--text-secondary);
}

/* Hero */
.hero{ text-align:center; margin: 12px 0 28px 0; }
.hero-title{
  font-family: "Lora", Georgia, serif;
  font-size: 44px;
  font-weight: 700;
  background: linear-gradient(90deg, var(--accent), var(--accent-2));
  -webkit-background-clip: text;
  background-clip: text;
  color: transparent;
}
.hero-narrative{ font-size: 18px; color: var(--text-secondary); }

/* Story cards */
.post-card{
  display:block;
  background: var(--card-bg);
  border: 1px solid var(--card-border);
  border-radius: var(--radius);
  box-shadow: var(--shadow);
  overflow:hidden;
  margin-bottom: 20px;
  text-decoration: none !important;
  color: var(--text-primary) !important;
  transition: box-shadow .25s ease;
}
.post-card:hover{ box-shadow: var(--shadow-hover); }
.post-card-thumb{
  aspect-ratio: 16 / 9;
  width: 100%;
  background: var(--bg-muted);
  display:flex;
  align-items:center;
  justify-content:center;
  overflow:hidden;
}
.post-card-thumb img{ width:100%; height:100%; object-fit:cover; }
.post-card-thumb .placeholder{ font-size: 40px; opacity: .25; }
.post-card-body{ padding: 14px 16px 6px 16px; }
.post-card-title{
  font-size: 19px;
  font-weight: 700;
  line-height: 1.3;
  margin-top: 8px;
}
.post-meta{
  display:flex;
  gap:16px;
  padding: 8px 16px 14px 16px;
  font-size: 13px;
  color: var(--text-secondary);
}

.genre-badge{
  display:inline-block;
  padding: 2px 10px;
  border-radius: 999px;
  color: #FFFFFF;
  font-size: 12px;
  font-weight: 600;
}
__GENRE_RULES__

/* Detail page */
.post-cover{
  width:100%;
  aspect-ratio: 16 / 9;
  object-fit: cover;
  border-radius: 18px;
  box-shadow: var(--shadow-hover);
  margin-bottom: 24px;
}
.post-title{
  font-family: "Lora", Georgia, serif;
  font-size: 42px;
  font-weight: 700;
  margin: 10px 0 12px 0;
}
.post-body{
  background: var(--card-bg);
  border: 1px solid var(--card-border);
  border-radius: var(--radius);
  padding: 28px 32px;
  font-size: 18px;
  line-height: 1.7;
}
.post-body h1, .post-body h2, .post-body h3{ font-family: "Lora", Georgia, serif; }
.post-body img{ max-width: 100%; border-radius: 12px; }

.empty-state{ text-align:center; padding: 70px 0; }
.empty-state-title{ font-size: 24px; color: var(--text-secondary); }
.empty-state-body{ color: var(--text-secondary); margin-top: 6px; }
</style>
"""

    genre_rules = "\n".join(
        f".genre-{genre}{{ background: {color}; }}" for genre, color in GENRE_COLORS.items()
    )
    tokens = {
        "__ACCENT__": str(THEME["accent_primary"]),
        "__ACCENT_2__": str(THEME["accent_secondary"]),
        "__INK_900__": str(THEME["ink_900"]),
        "__BG_PRIMARY__": str(THEME["bg_primary"]),
        "__BG_SECONDARY__": str(THEME["bg_secondary"]),
        "__BG_MUTED__": str(THEME["bg_muted"]),
        "__CARD_BG__": str(THEME["bg_card"]),
        "__CARD_BORDER__": str(THEME["border_color"]),
        "__TEXT_PRIMARY__": str(THEME["text_primary"]),
        "__TEXT_SECONDARY__": str(THEME["text_secondary"]),
        "__SHADOW__": str(THEME["shadow"]),
        "__SHADOW_HOVER__": str(THEME["shadow_hover"]),
        "__RADIUS_PX__": str(radius),
        "__GENRE_RULES__": genre_rules,
    }
    for k, v in tokens.items():
        css = css.replace(k, v)

    st.markdown(css, unsafe_allow_html=True)
