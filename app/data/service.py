from __future__ import annotations

import logging
from typing import Any, Optional, Union

from config import AppConfig
from data import queries
from data.client import BackendClient, get_backend_client
from data.content import ImageDownload, image_downloads
from data.mock_data import MockBackend
from data.models import GENRE_ALL, GENRES, AuthSession, Post, PostDraft, Profile, UploadedImage

logger = logging.getLogger(__name__)

Backend = Union[BackendClient, MockBackend]

MAX_NAME_LENGTH = 100


class ValidationError(ValueError):
    """Form input rejected before any backend call."""


_demo_backend: Optional[MockBackend] = None


def get_demo_backend(request_timeout_s: float = 15.0) -> MockBackend:
    """Process-wide demo backend, so demo writes survive Streamlit reruns."""
    global _demo_backend
    if _demo_backend is None:
        _demo_backend = MockBackend(request_timeout_s=request_timeout_s)
    return _demo_backend


def get_backend(cfg: AppConfig, use_mock: bool, access_token: Optional[str] = None) -> Backend:
    if use_mock:
        return get_demo_backend(cfg.request_timeout_s)
    return get_backend_client(cfg, access_token=access_token)


# --- posts ---

def list_posts(backend: Backend, genre: str = GENRE_ALL, sort: str = "newest") -> list[Post]:
    rows = backend.select(queries.POSTS_TABLE, queries.posts_list_params(genre, sort))
    return [Post.from_row(r) for r in rows or []]


def get_post(backend: Backend, post_id: str) -> Post:
    row = backend.select(queries.POSTS_TABLE, queries.post_by_id_params(post_id), single=True)
    return Post.from_row(row)


def validate_draft(draft: PostDraft) -> None:
    if not draft.title.strip() or not draft.content.strip() or not draft.genre:
        raise ValidationError("Please fill in all fields")
    if draft.genre not in GENRES:
        raise ValidationError(f"Unknown genre: {draft.genre}")


def upload_image(backend: Backend, bucket: str, image: UploadedImage) -> str:
    """Store an image in object storage and return its public URL."""
    name = queries.storage_object_name(image.filename)
    backend.upload(bucket, name, image.data, image.content_type)
    return backend.public_url(bucket, name)


def create_post(backend: Backend, bucket: str, draft: PostDraft, author_id: str) -> Post:
    """
    Thumbnail upload (if any) then insert. Two independent calls: an insert
    failure leaves the uploaded thumbnail in storage.
    """
    try:
        validate_draft(draft)
    except ValidationError as e:
        logger.info("Story submission rejected: %s", e)
        raise

    thumbnail_url = upload_image(backend, bucket, draft.thumbnail) if draft.thumbnail else None

    row: dict[str, Any] = {
        "title": draft.title,
        "content": draft.content,
        "genre": draft.genre,
        "thumbnail_url": thumbnail_url,
        "author_id": author_id,
    }
    created = backend.insert(queries.POSTS_TABLE, row)
    logger.info("Published post %s", created.get("id"))
    return Post.from_row(created)


def delete_post(backend: Backend, post_id: str) -> None:
    backend.delete(queries.POSTS_TABLE, post_id)
    logger.info("Deleted post %s", post_id)


# --- profiles ---

def get_profile(backend: Backend, user_id: str) -> Profile:
    row = backend.select(queries.PROFILES_TABLE, queries.profile_by_id_params(user_id), single=True)
    return Profile.from_row(row)


def validate_display_name(name: str) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValidationError("Name cannot be empty")
    if len(cleaned) > MAX_NAME_LENGTH:
        raise ValidationError(f"Name must be at most {MAX_NAME_LENGTH} characters")
    return cleaned


def update_display_name(backend: Backend, user_id: str, name: str) -> str:
    try:
        cleaned = validate_display_name(name)
    except ValidationError as e:
        logger.info("Profile update rejected: %s", e)
        raise
    backend.update(queries.PROFILES_TABLE, user_id, {"full_name": cleaned})
    return cleaned


# --- auth (delegated to the backend) ---

def sign_in(backend: Backend, email: str, password: str) -> AuthSession:
    if not email.strip() or not password:
        raise ValidationError("Email and password are required")
    return backend.sign_in(email.strip(), password)


def sign_up(backend: Backend, email: str, password: str, full_name: str) -> Optional[AuthSession]:
    if not email.strip() or not password:
        raise ValidationError("Email and password are required")
    return backend.sign_up(email.strip(), password, validate_display_name(full_name))


def sign_out(backend: Backend, access_token: str) -> None:
    backend.sign_out(access_token)


# --- story assets ---

def fetch_image_downloads(backend: Backend, html: str) -> list[tuple[ImageDownload, bytes]]:
    """Fetch every image embedded in a story body, one download per `<img>`."""
    return [(d, backend.fetch_bytes(d.url)) for d in image_downloads(html)]
