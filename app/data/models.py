from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional, Union

import pandas as pd


GENRES = ("romance", "folklore", "horror", "fantasy", "teen")
GENRE_ALL = "all"
SORT_ORDERS = ("newest", "oldest")
ROLES = ("reader", "admin")

ANONYMOUS = "Anonymous"


@dataclass(frozen=True)
class Post:
    id: str
    title: str
    content: str
    genre: str
    created_at: str
    author_id: Optional[str] = None
    thumbnail_url: Optional[str] = None
    author_name: Optional[str] = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Post":
        """Build from a `posts` row, with or without the embedded `profiles(full_name)`."""
        profile = row.get("profiles") or {}
        return cls(
            id=str(row["id"]),
            title=row.get("title") or "",
            content=row.get("content") or "",
            genre=row.get("genre") or "",
            created_at=str(row.get("created_at") or ""),
            author_id=row.get("author_id"),
            thumbnail_url=row.get("thumbnail_url") or None,
            author_name=profile.get("full_name") or None,
        )

    @property
    def display_author(self) -> str:
        return self.author_name or ANONYMOUS

    @property
    def genre_label(self) -> str:
        return genre_label(self.genre)


@dataclass(frozen=True)
class Profile:
    id: str
    email: str = ""
    full_name: str = ""
    role: str = "reader"

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Profile":
        return cls(
            id=str(row["id"]),
            email=row.get("email") or "",
            full_name=row.get("full_name") or "",
            role=row.get("role") or "reader",
        )

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


@dataclass(frozen=True)
class UploadedImage:
    filename: str
    data: bytes
    content_type: str = "application/octet-stream"


@dataclass(frozen=True)
class PostDraft:
    title: str
    content: str
    genre: str
    thumbnail: Optional[UploadedImage] = None


@dataclass(frozen=True)
class AuthSession:
    access_token: str
    user_id: str
    email: str = ""


def genre_label(genre: str) -> str:
    return genre[:1].upper() + genre[1:] if genre else ""


def format_date(ts: Union[str, datetime, None], long: bool = False) -> str:
    """'Jan 5, 2025' for cards, 'January 5, 2025' for the detail page."""
    if not ts:
        return ""
    try:
        t = pd.Timestamp(ts)
    except (ValueError, TypeError):
        return str(ts)
    month = t.strftime("%B" if long else "%b")
    return f"{month} {t.day}, {t.year}"
