from __future__ import annotations

from datetime import date
from html import escape
from typing import Optional

import streamlit as st

from components.session import href
from data.models import Profile


def _nav_link(label: str, url: str, primary: bool = False) -> str:
    cls = ' class="primary"' if primary else ""
    return f'<a href="{url}" target="_self"{cls}>{label}</a>'


def render_header(site_name: str, profile: Optional[Profile], signed_in: bool) -> bool:
    """
    Shared page chrome. Returns True when the visitor clicked Sign Out.
    """
    links = [_nav_link("Stories", href("home"))]
    if signed_in and profile and profile.is_admin:
        links.append(_nav_link("✍️ Create Story", href("create"), primary=True))
    if signed_in:
        links.append(_nav_link("Profile", href("profile")))
    else:
        links.append(_nav_link("Sign In", href("auth"), primary=True))

    user_html = ""
    if signed_in and profile:
        user_html = f'<span class="site-user">{escape(profile.full_name or profile.email)}</span>'

    left, right = st.columns([5, 1])
    with left:
        st.markdown(
            f"""
<div class="site-header">
  <a class="site-brand" href="{href('home')}" target="_self">
    <span class="site-brand-mark">📖</span>
    <span class="site-brand-name">{escape(site_name)}</span>
  </a>
  <div class="site-nav">
    {user_html}
    {''.join(links)}
  </div>
</div>
            """,
            unsafe_allow_html=True,
        )
    with right:
        if signed_in:
            return st.button("Sign Out", key="sign_out_btn", use_container_width=True)
    return False


def render_footer(site_name: str) -> None:
    st.markdown(
        f'<div class="site-footer">&copy; {date.today().year} {escape(site_name)}. All rights reserved.</div>',
        unsafe_allow_html=True,
    )
