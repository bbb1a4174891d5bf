from __future__ import annotations

from html import escape

import streamlit as st

from components.session import current_user, flash, is_admin, navigate
from config import AppConfig
from data.client import BackendError
from data.models import GENRES, PostDraft, UploadedImage, genre_label
from data.service import Backend, ValidationError, create_post, upload_image


_CONTENT_KEY = "story_content"
_INLINE_ERROR_KEY = "_inline_image_error"


def _to_uploaded(file) -> UploadedImage:
    return UploadedImage(
        filename=file.name,
        data=file.getvalue(),
        content_type=file.type or "application/octet-stream",
    )


def _insert_inline_image(backend: Backend, bucket: str) -> None:
    """Upload the picked image and append it to the story body (button callback)."""
    file = st.session_state.get("inline_image")
    if file is None:
        st.session_state[_INLINE_ERROR_KEY] = "Choose an image to insert first"
        return
    try:
        url = upload_image(backend, bucket, _to_uploaded(file))
    except BackendError as e:
        st.session_state[_INLINE_ERROR_KEY] = f"Image upload failed: {e.message}"
        return
    tag = f'<p><img src="{escape(url, quote=True)}" alt="{escape(file.name, quote=True)}"></p>'
    st.session_state[_CONTENT_KEY] = st.session_state.get(_CONTENT_KEY, "") + tag


def _reset_form() -> None:
    for key in ("story_title", "story_genre", _CONTENT_KEY, "story_thumbnail", "inline_image"):
        st.session_state.pop(key, None)


def render(cfg: AppConfig, backend: Backend) -> None:
    user = current_user()
    if not user or not is_admin():
        flash("You must be an admin to create posts", "error")
        navigate("home")
        return

    st.title("Create New Story")

    title = st.text_input("Title", placeholder="Enter your story title", key="story_title")
    genre = st.selectbox(
        "Genre",
        GENRES,
        index=None,
        format_func=genre_label,
        placeholder="Select a genre",
        key="story_genre",
    )

    thumb_col, preview_col = st.columns([2, 1])
    with thumb_col:
        thumbnail = st.file_uploader(
            "Thumbnail (Cover Image)",
            type=["png", "jpg", "jpeg", "gif", "webp"],
            key="story_thumbnail",
        )
    with preview_col:
        if thumbnail is not None:
            st.image(thumbnail, caption="Thumbnail preview", use_container_width=True)

    st.markdown("**Content**")
    editor_col, preview = st.columns(2)
    with editor_col:
        content = st.text_area(
            "Content (HTML)",
            height=360,
            placeholder="<p>Once upon a time...</p>",
            key=_CONTENT_KEY,
            label_visibility="collapsed",
        )
        with st.expander("🖼️ Insert image into story"):
            st.file_uploader("Image", type=["png", "jpg", "jpeg", "gif", "webp"], key="inline_image")
            st.button(
                "Upload & insert",
                key="insert_image_btn",
                on_click=_insert_inline_image,
                args=(backend, cfg.storage_bucket),
            )
            inline_error = st.session_state.pop(_INLINE_ERROR_KEY, None)
            if inline_error:
                st.error(inline_error)
    with preview:
        st.caption("Preview")
        st.markdown(f'<div class="post-body">{content or ""}</div>', unsafe_allow_html=True)

    c1, c2, _ = st.columns([2, 1, 3])
    with c1:
        publish = st.button("Publish Story", key="publish_btn", type="primary", use_container_width=True)
    with c2:
        if st.button("Cancel", key="cancel_create_btn", use_container_width=True):
            _reset_form()
            navigate("home")

    if not publish:
        return

    draft = PostDraft(
        title=title or "",
        content=content or "",
        genre=genre or "",
        thumbnail=_to_uploaded(thumbnail) if thumbnail is not None else None,
    )
    try:
        with st.spinner("Publishing..."):
            post = create_post(backend, cfg.storage_bucket, draft, author_id=user.user_id)
    except ValidationError as e:
        st.error(str(e))
        return
    except BackendError as e:
        st.error(e.message or "Failed to publish story")
        return

    _reset_form()
    flash("Story published successfully!", "success")
    navigate("post", post.id)
