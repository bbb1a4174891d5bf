from __future__ import annotations

from html import escape
from typing import Optional

import streamlit as st

from components.post_card import genre_badge
from components.session import flash, is_admin, navigate
from data.client import BackendError, NotFoundError
from data.content import html_to_text
from data.models import Post, format_date
from data.service import Backend, delete_post, fetch_image_downloads, get_post


_ACTIVE_KEY = "_active_post_id"
_STATE_NAMES = ("show_text", "images", "confirm_delete")


def _state_key(post_id: str, name: str) -> str:
    return f"_post_{post_id}_{name}"


def release_post_state(keep_post_id: Optional[str]) -> None:
    """Drop per-post state (fetched image bytes included) once the reader moves off that post."""
    active = st.session_state.get(_ACTIVE_KEY)
    if active and active != keep_post_id:
        for name in _STATE_NAMES:
            st.session_state.pop(_state_key(active, name), None)
    if keep_post_id:
        st.session_state[_ACTIVE_KEY] = keep_post_id
    else:
        st.session_state.pop(_ACTIVE_KEY, None)


def render(backend: Backend, post_id: Optional[str]) -> None:
    if not post_id:
        navigate("home")
        return

    with st.spinner("Loading story..."):
        try:
            post = get_post(backend, post_id)
        except NotFoundError:
            flash("Post not found", "error")
            navigate("home")
            return
        except BackendError as e:
            flash(f"Post not found: {e.message}", "error")
            navigate("home")
            return

    if post.thumbnail_url:
        st.markdown(
            f'<img class="post-cover" src="{escape(post.thumbnail_url, quote=True)}" alt="{escape(post.title, quote=True)}" />',
            unsafe_allow_html=True,
        )

    st.markdown(genre_badge(post), unsafe_allow_html=True)
    st.markdown(f'<div class="post-title">{escape(post.title)}</div>', unsafe_allow_html=True)
    st.caption(f"👤 {post.display_author}    📅 {format_date(post.created_at, long=True)}")

    _render_actions(backend, post)

    st.markdown(f'<div class="post-body">{post.content}</div>', unsafe_allow_html=True)


def _render_actions(backend: Backend, post: Post) -> None:
    copy_key = _state_key(post.id, "show_text")
    images_key = _state_key(post.id, "images")
    confirm_key = _state_key(post.id, "confirm_delete")

    admin = is_admin()
    cols = st.columns([1, 1, 1, 3] if admin else [1, 1, 4])

    with cols[0]:
        if st.button("📋 Copy Text", key="copy_text_btn", use_container_width=True):
            st.session_state[copy_key] = True
            st.toast("Text ready to copy, use the copy icon on the box below.", icon="📋")
    with cols[1]:
        if st.button("⬇️ Download Images", key="download_images_btn", use_container_width=True):
            _prepare_downloads(backend, post, images_key)
    if admin:
        with cols[2]:
            if st.button("🗑️ Delete", key="delete_btn", type="primary", use_container_width=True):
                st.session_state[confirm_key] = True

    if st.session_state.get(confirm_key):
        st.warning("Are you sure you want to delete this post?")
        c1, c2, _ = st.columns([1, 1, 4])
        with c1:
            if st.button("Yes, delete", key="confirm_delete_btn", type="primary", use_container_width=True):
                st.session_state.pop(confirm_key, None)
                try:
                    delete_post(backend, post.id)
                except BackendError as e:
                    st.error(f"Failed to delete post: {e.message}")
                    return
                flash("Post deleted successfully", "success")
                navigate("home")
        with c2:
            if st.button("Cancel", key="cancel_delete_btn", use_container_width=True):
                st.session_state.pop(confirm_key, None)
                st.rerun()

    if st.session_state.get(copy_key):
        st.code(html_to_text(post.content), language=None)

    downloads = st.session_state.get(images_key)
    if downloads:
        dl_cols = st.columns(min(len(downloads), 4))
        for i, (item, data) in enumerate(downloads):
            with dl_cols[i % len(dl_cols)]:
                st.download_button(
                    f"💾 {item.filename}",
                    data=data,
                    file_name=item.filename,
                    key=f"dl_{post.id}_{i}",
                    use_container_width=True,
                )


def _prepare_downloads(backend: Backend, post: Post, images_key: str) -> None:
    try:
        with st.spinner("Fetching images..."):
            downloads = fetch_image_downloads(backend, post.content)
    except BackendError as e:
        st.toast(f"Failed to download images: {e.message}", icon="⚠️")
        return

    if not downloads:
        st.toast("No images found in this post", icon="ℹ️")
        return

    st.session_state[images_key] = downloads
    st.toast(f"Prepared {len(downloads)} image(s) for download!", icon="✅")
