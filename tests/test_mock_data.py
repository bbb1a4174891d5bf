"""
Tests for data.mock_data.MockBackend (demo backend).
"""

from unittest import mock

import pytest

from data.client import BackendAuthError, BackendError, NotFoundError
from data.content import find_images
from data.mock_data import ADMIN_EMAIL, READER_EMAIL, MockBackend
from data.models import GENRES


def test_seeding_is_deterministic():
    a = MockBackend(seed=3).select("posts", {"select": "*", "order": "created_at.desc"})
    b = MockBackend(seed=3).select("posts", {"select": "*", "order": "created_at.desc"})
    assert [r["title"] for r in a] == [r["title"] for r in b]


def test_seed_covers_every_genre_and_some_images(demo_backend):
    rows = demo_backend.select("posts", {"select": "*"})
    assert {r["genre"] for r in rows} == set(GENRES)
    assert any(find_images(r["content"]) for r in rows)
    assert any(r["thumbnail_url"] is None for r in rows)


def test_embedded_profile_only_when_selected(demo_backend):
    plain = demo_backend.select("posts", {"select": "*"})
    embedded = demo_backend.select("posts", {"select": "*,profiles(full_name)"})
    assert "profiles" not in plain[0]
    assert embedded[0]["profiles"]["full_name"]


def test_profile_columns_follow_select(demo_backend):
    user_id = demo_backend.sign_in(ADMIN_EMAIL, "x").user_id
    row = demo_backend.select("profiles", {"select": "id,full_name,email,role", "id": f"eq.{user_id}"}, single=True)
    assert set(row) == {"id", "full_name", "email", "role"}
    assert row["role"] == "admin"


def test_single_without_match(demo_backend):
    with pytest.raises(NotFoundError):
        demo_backend.select("posts", {"id": "eq.nope"}, single=True)


def test_unknown_table(demo_backend):
    with pytest.raises(BackendError):
        demo_backend.select("comments", {})


def test_insert_requires_existing_author(demo_backend):
    with pytest.raises(BackendError):
        demo_backend.insert("posts", {"title": "t", "content": "c", "genre": "teen", "author_id": "ghost"})


def test_insert_rejects_unknown_genre(demo_backend):
    admin_id = demo_backend.sign_in(ADMIN_EMAIL, "x").user_id
    with pytest.raises(BackendError):
        demo_backend.insert("posts", {"title": "t", "content": "c", "genre": "western", "author_id": admin_id})


def test_upload_then_public_url_is_data_url(demo_backend):
    demo_backend.upload("post-images", "a.png", b"\x89PNG", "image/png")
    url = demo_backend.public_url("post-images", "a.png")
    assert url.startswith("data:image/png;base64,")
    assert demo_backend.fetch_bytes(url) == b"\x89PNG"


def test_fetch_bytes_percent_encoded_inline_image(demo_backend):
    with mock.patch("data.mock_data.requests.get") as get:
        assert demo_backend.fetch_bytes("data:image/svg+xml,%3Csvg%2F%3E") == b"<svg/>"
    get.assert_not_called()


def test_fetch_bytes_bad_inline_image_is_backend_error(demo_backend):
    with pytest.raises(BackendError):
        demo_backend.fetch_bytes("data:image/png;base64,%%%")


def test_fetch_bytes_uses_configured_timeout():
    backend = MockBackend(n_posts=1, request_timeout_s=2.5)
    with mock.patch("data.mock_data.requests.get") as get:
        get.return_value.content = b"img"
        assert backend.fetch_bytes("https://cdn/a.png") == b"img"
    get.assert_called_once_with("https://cdn/a.png", timeout=2.5)


class TestDemoAuth:
    def test_sign_in_known_accounts(self, demo_backend):
        admin = demo_backend.sign_in(ADMIN_EMAIL, "anything")
        reader = demo_backend.sign_in(READER_EMAIL.upper(), "anything")
        assert admin.user_id != reader.user_id
        assert reader.email == READER_EMAIL

    def test_sign_in_unknown_account(self, demo_backend):
        with pytest.raises(BackendAuthError):
            demo_backend.sign_in("stranger@example.com", "pw")

    def test_sign_up_creates_reader(self, demo_backend):
        session = demo_backend.sign_up("New@Example.com", "pw", "New Reader")
        row = demo_backend.select("profiles", {"select": "*", "id": f"eq.{session.user_id}"}, single=True)
        assert row["role"] == "reader"
        assert row["email"] == "new@example.com"

    def test_sign_up_duplicate(self, demo_backend):
        with pytest.raises(BackendError):
            demo_backend.sign_up(ADMIN_EMAIL, "pw", "Again")
