"""
In-memory demo backend.

Same surface as BackendClient so every view works with no hosted backend
configured. Seeded deterministically with Faker; posts are kept in a pandas
DataFrame and filtered/ordered from the same query params the live client sends.
"""
from __future__ import annotations

import base64
import copy
import logging
import random
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import pandas as pd
import requests
from faker import Faker

from data.client import BackendAuthError, BackendError, NotFoundError
from data.content import decode_data_url, is_data_url
from data.models import GENRES, AuthSession
from data.queries import POSTS_TABLE, PROFILES_TABLE

logger = logging.getLogger(__name__)


ADMIN_EMAIL = "admin@bstation.test"
READER_EMAIL = "reader@bstation.test"

POST_COLUMNS = ["id", "title", "content", "thumbnail_url", "genre", "created_at", "author_id"]

_OPENERS = {
    "romance": "The letters arrived every Tuesday, always in the same blue ink.",
    "folklore": "Grandmother said the river spirit only answered to songs older than the village.",
    "horror": "The house had been quiet for eleven years, until the stairs started counting.",
    "fantasy": "Nobody in the guild believed a map could lie, least of all a cartographer.",
    "teen": "Senior year was supposed to be easy, right up until the group chat went silent.",
}


def _image_url(seed: str) -> str:
    return f"https://picsum.photos/seed/{seed}/800/450.jpg"


def _story_html(fake: Faker, genre: str, seed: str, with_images: int) -> str:
    parts = [f"<p>{_OPENERS[genre]} {fake.paragraph(nb_sentences=4)}</p>"]
    for i in range(with_images):
        parts.append(f'<p><img src="{_image_url(f"{seed}-{i}")}" alt="Illustration {i + 1}"></p>')
        parts.append(f"<p>{fake.paragraph(nb_sentences=5)}</p>")
    parts.append(f"<h2>{fake.sentence(nb_words=3).rstrip('.')}</h2>")
    parts.append(f"<p><em>{fake.sentence(nb_words=8)}</em> {fake.paragraph(nb_sentences=3)}</p>")
    return "".join(parts)


def _iso(ts: datetime) -> str:
    return ts.astimezone(timezone.utc).isoformat()


class MockBackend:
    """Process-local stand-in for the hosted backend."""

    def __init__(self, n_posts: int = 12, seed: int = 21, request_timeout_s: float = 15.0):
        self._fake = Faker()
        self._fake.seed_instance(seed)
        self._rng = random.Random(seed)
        self._objects: dict[str, tuple[bytes, str]] = {}
        self.access_token: Optional[str] = None
        self.request_timeout_s = request_timeout_s

        admin_id = self._fake.uuid4()
        reader_id = self._fake.uuid4()
        self._profiles: dict[str, dict[str, Any]] = {
            admin_id: {"id": admin_id, "full_name": self._fake.name(), "email": ADMIN_EMAIL, "role": "admin"},
            reader_id: {"id": reader_id, "full_name": self._fake.name(), "email": READER_EMAIL, "role": "reader"},
        }
        self._posts = self._seed_posts(n_posts, admin_id)

    def _seed_posts(self, n_posts: int, author_id: str) -> pd.DataFrame:
        now = datetime.now(timezone.utc)
        rows = []
        for i in range(n_posts):
            genre = GENRES[i % len(GENRES)]
            seed = f"bstation-{i}"
            rows.append(
                {
                    "id": self._fake.uuid4(),
                    "title": self._fake.sentence(nb_words=self._rng.randint(3, 6)).rstrip("."),
                    "content": _story_html(self._fake, genre, seed, with_images=i % 3),
                    "thumbnail_url": _image_url(seed) if i % 4 != 3 else None,
                    "genre": genre,
                    "created_at": _iso(now - timedelta(days=3 * i, hours=self._rng.randint(0, 20))),
                    "author_id": author_id,
                }
            )
        return pd.DataFrame(rows, columns=POST_COLUMNS)

    def is_configured(self) -> bool:
        return True

    # --- data API ---

    def _post_rows(self, params: dict[str, str]) -> list[dict[str, Any]]:
        df = self._posts
        for col in ("id", "genre"):
            cond = params.get(col)
            if cond and cond.startswith("eq."):
                df = df[df[col] == cond[3:]]

        order = params.get("order")
        if order:
            col, _, direction = order.partition(".")
            key = pd.to_datetime(df[col], utc=True) if col == "created_at" else df[col]
            df = df.assign(_key=key).sort_values("_key", ascending=(direction == "asc")).drop(columns="_key")

        rows = [{k: (None if pd.isna(v) else v) for k, v in rec.items()} for rec in df.to_dict(orient="records")]
        if "profiles(" in params.get("select", ""):
            for r in rows:
                author = self._profiles.get(r.get("author_id") or "")
                r["profiles"] = {"full_name": author.get("full_name") if author else None}
        return rows

    def _profile_rows(self, params: dict[str, str]) -> list[dict[str, Any]]:
        rows = list(self._profiles.values())
        cond = params.get("id")
        if cond and cond.startswith("eq."):
            rows = [p for p in rows if p["id"] == cond[3:]]
        cols = [c for c in params.get("select", "*").split(",") if c and c != "*"]
        return [{c: p.get(c) for c in cols} if cols else dict(p) for p in rows]

    def select(self, table: str, params: dict[str, str], single: bool = False) -> Any:
        logger.debug("demo select %s %s", table, params)
        if table == POSTS_TABLE:
            rows = self._post_rows(params)
        elif table == PROFILES_TABLE:
            rows = self._profile_rows(params)
        else:
            raise BackendError(f"Unknown table: {table}", 404)

        if single:
            if len(rows) != 1:
                raise NotFoundError("Not found", 406)
            return rows[0]
        return rows

    def insert(self, table: str, row: dict[str, Any]) -> dict[str, Any]:
        if table != POSTS_TABLE:
            raise BackendError(f"Insert not supported on {table}", 405)
        if row.get("author_id") not in self._profiles:
            raise BackendError("Author profile does not exist", 409)
        if row.get("genre") not in GENRES:
            raise BackendError(f"invalid input value for enum post_genre: \"{row.get('genre')}\"", 400)

        created = {c: row.get(c) for c in POST_COLUMNS}
        created["id"] = self._fake.uuid4()
        created["created_at"] = _iso(datetime.now(timezone.utc))
        self._posts = pd.concat([self._posts, pd.DataFrame([created], columns=POST_COLUMNS)], ignore_index=True)
        return copy.deepcopy(created)

    def update(self, table: str, match_id: str, values: dict[str, Any]) -> None:
        if table != PROFILES_TABLE:
            raise BackendError(f"Update not supported on {table}", 405)
        profile = self._profiles.get(match_id)
        if profile is not None:
            profile.update(values)

    def delete(self, table: str, match_id: str) -> None:
        if table != POSTS_TABLE:
            raise BackendError(f"Delete not supported on {table}", 405)
        self._posts = self._posts[self._posts["id"] != match_id].reset_index(drop=True)

    # --- storage ---

    def upload(self, bucket: str, name: str, data: bytes, content_type: str) -> str:
        self._objects[f"{bucket}/{name}"] = (data, content_type or "application/octet-stream")
        return name

    def public_url(self, bucket: str, name: str) -> str:
        data, content_type = self._objects[f"{bucket}/{name}"]
        return f"data:{content_type};base64,{base64.b64encode(data).decode('ascii')}"

    def fetch_bytes(self, url: str) -> bytes:
        if is_data_url(url):
            return decode_data_url(url)
        try:
            resp = requests.get(url, timeout=self.request_timeout_s)
            resp.raise_for_status()
        except requests.RequestException as e:
            raise BackendError(f"Could not download {url}") from e
        return resp.content

    # --- auth ---

    def _profile_by_email(self, email: str) -> Optional[dict[str, Any]]:
        email = (email or "").strip().lower()
        return next((p for p in self._profiles.values() if p["email"] == email), None)

    def sign_in(self, email: str, password: str) -> AuthSession:
        profile = self._profile_by_email(email)
        if profile is None or not password:
            raise BackendAuthError("Invalid login credentials", 400)
        return AuthSession(access_token=f"demo-{profile['id']}", user_id=profile["id"], email=profile["email"])

    def sign_up(self, email: str, password: str, full_name: str) -> Optional[AuthSession]:
        if self._profile_by_email(email) is not None:
            raise BackendError("User already registered", 422)
        user_id = self._fake.uuid4()
        self._profiles[user_id] = {
            "id": user_id,
            "full_name": full_name,
            "email": email.strip().lower(),
            "role": "reader",
        }
        return AuthSession(access_token=f"demo-{user_id}", user_id=user_id, email=email.strip().lower())

    def sign_out(self, access_token: str) -> None:
        return None
