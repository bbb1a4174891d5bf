"""
Tests for data.models.
"""

from data.models import Post, Profile, format_date, genre_label


class TestPost:
    def test_from_row_with_embedded_profile(self):
        post = Post.from_row(
            {
                "id": 7,
                "title": "The Lantern",
                "content": "<p>x</p>",
                "genre": "folklore",
                "created_at": "2025-03-02T08:00:00+00:00",
                "author_id": "u1",
                "thumbnail_url": "https://cdn/t.jpg",
                "profiles": {"full_name": "Sari"},
            }
        )
        assert post.id == "7"
        assert post.display_author == "Sari"
        assert post.genre_label == "Folklore"
        assert post.thumbnail_url == "https://cdn/t.jpg"

    def test_missing_author_name_is_anonymous(self):
        assert Post.from_row({"id": "1", "profiles": {"full_name": None}}).display_author == "Anonymous"
        assert Post.from_row({"id": "1", "profiles": None}).display_author == "Anonymous"
        assert Post.from_row({"id": "1"}).display_author == "Anonymous"

    def test_empty_thumbnail_is_none(self):
        assert Post.from_row({"id": "1", "thumbnail_url": ""}).thumbnail_url is None


def test_profile_role():
    assert Profile.from_row({"id": "u", "role": "admin"}).is_admin
    assert not Profile.from_row({"id": "u"}).is_admin
    assert Profile.from_row({"id": "u", "full_name": None}).full_name == ""


class TestFormatDate:
    def test_short(self):
        assert format_date("2025-01-05T10:00:00+00:00") == "Jan 5, 2025"

    def test_long(self):
        assert format_date("2025-01-05T10:00:00Z", long=True) == "January 5, 2025"

    def test_empty(self):
        assert format_date(None) == ""
        assert format_date("") == ""

    def test_unparseable_returned_as_is(self):
        assert format_date("someday") == "someday"


def test_genre_label():
    assert genre_label("teen") == "Teen"
    assert genre_label("") == ""
