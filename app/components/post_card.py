from __future__ import annotations

from html import escape

import streamlit as st

from components.session import post_link
from data.models import Post, format_date


def genre_badge(post: Post) -> str:
    return f'<span class="genre-badge genre-{escape(post.genre)}">{escape(post.genre_label)}</span>'


def post_card_html(post: Post) -> str:
    if post.thumbnail_url:
        thumb = f'<img src="{escape(post.thumbnail_url, quote=True)}" alt="{escape(post.title, quote=True)}" />'
    else:
        thumb = '<span class="placeholder">📚</span>'

    return f"""
<a class="post-card" href="{post_link(post.id)}" target="_self">
  <div class="post-card-thumb">{thumb}</div>
  <div class="post-card-body">
    {genre_badge(post)}
    <div class="post-card-title">{escape(post.title)}</div>
  </div>
  <div class="post-meta">
    <span>👤 {escape(post.display_author)}</span>
    <span>📅 {format_date(post.created_at)}</span>
  </div>
</a>
    """


def render_post_grid(posts: list[Post], columns: int = 3) -> None:
    cols = st.columns(columns)
    for i, post in enumerate(posts):
        with cols[i % columns]:
            st.markdown(post_card_html(post), unsafe_allow_html=True)
