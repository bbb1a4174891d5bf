from __future__ import annotations

import streamlit as st

from components.post_card import render_post_grid
from data.client import BackendError
from data.models import GENRE_ALL, GENRES, genre_label
from data.service import Backend, list_posts


GENRE_OPTIONS = [GENRE_ALL, *GENRES]
SORT_OPTIONS = {"newest": "Newest First", "oldest": "Oldest First"}


def render(backend: Backend) -> None:
    st.markdown(
        """
<div class="hero">
  <div class="hero-title">Discover Amazing Stories</div>
  <p class="hero-narrative">Explore our collection of captivating tales across multiple genres</p>
</div>
        """,
        unsafe_allow_html=True,
    )

    c1, c2, _, c4 = st.columns([1, 1, 2, 1])
    with c1:
        genre = st.selectbox(
            "Genre",
            GENRE_OPTIONS,
            format_func=lambda g: "All Genres" if g == GENRE_ALL else genre_label(g),
            key="genre_filter",
        )
    with c2:
        sort = st.selectbox("Sort by", list(SORT_OPTIONS), format_func=SORT_OPTIONS.get, key="sort_order")
    with c4:
        st.write("")
        # Any widget interaction reruns the script, which re-issues the read below
        st.button("🔄 Refresh", key="refresh_posts", use_container_width=True)

    with st.spinner("Loading stories..."):
        try:
            posts = list_posts(backend, genre=genre, sort=sort)
        except BackendError as e:
            st.error(f"Failed to load stories: {e.message}")
            return

    if not posts:
        st.markdown(
            """
<div class="empty-state">
  <div class="empty-state-title">No stories found</div>
  <div class="empty-state-body">Be the first to create one!</div>
</div>
            """,
            unsafe_allow_html=True,
        )
        return

    render_post_grid(posts)
