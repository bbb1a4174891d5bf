"""
Query-string builders for the hosted data API (PostgREST syntax).

Pure functions only: the live client sends these as URL params and the demo
backend interprets the same dicts, so both honour one filter/sort contract.
"""

from __future__ import annotations

import os
import uuid

from data.models import GENRE_ALL, GENRES, SORT_ORDERS


POSTS_TABLE = "posts"
PROFILES_TABLE = "profiles"

POST_SELECT = "*,profiles(full_name)"
PROFILE_SELECT = "id,full_name,email,role"


def posts_list_params(genre: str = GENRE_ALL, sort: str = "newest") -> dict[str, str]:
    if genre != GENRE_ALL and genre not in GENRES:
        raise ValueError(f"Unknown genre: {genre!r}")
    if sort not in SORT_ORDERS:
        raise ValueError(f"Unknown sort order: {sort!r}")

    params = {"select": POST_SELECT}
    if genre != GENRE_ALL:
        params["genre"] = f"eq.{genre}"
    params["order"] = "created_at.asc" if sort == "oldest" else "created_at.desc"
    return params


def by_id_filter(record_id: str) -> dict[str, str]:
    return {"id": f"eq.{record_id}"}


def post_by_id_params(post_id: str) -> dict[str, str]:
    return {"select": POST_SELECT, **by_id_filter(post_id)}


def profile_by_id_params(user_id: str) -> dict[str, str]:
    return {"select": PROFILE_SELECT, **by_id_filter(user_id)}


def storage_object_name(filename: str) -> str:
    """Random object name that keeps the uploaded file's extension."""
    ext = os.path.splitext(filename or "")[1].lstrip(".").lower()
    name = uuid.uuid4().hex
    return f"{name}.{ext}" if ext else name
