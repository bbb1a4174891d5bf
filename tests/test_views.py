"""
Tests for the Streamlit views, driven headless through streamlit.testing.

Each script pulls its backend from session state so a Mock(spec=MockBackend)
can record (or prove the absence of) backend calls.
"""

from unittest import mock

import pytest
import streamlit as st
from streamlit.testing.v1 import AppTest

from data.client import NotFoundError
from data.mock_data import MockBackend
from data.models import AuthSession, Profile
from views import post_detail

USER_ID = "user-1"


def _create_script():
    import streamlit as st

    from config import AppConfig
    from views import create_post

    cfg = AppConfig(
        backend_url="",
        backend_anon_key=None,
        storage_bucket="post-images",
        request_timeout_s=5.0,
        default_use_mock=True,
        log_level="INFO",
        site_name="Bstation",
    )
    create_post.render(cfg, st.session_state["_test_backend"])


def _profile_script():
    import streamlit as st

    from views import profile_settings

    profile_settings.render(st.session_state["_test_backend"])


def _routed_detail_script():
    import streamlit as st

    from components.session import current_route, render_flashes
    from views import post_detail

    render_flashes()
    route = current_route()
    if route.view == "post":
        post_detail.render(st.session_state["_test_backend"], route.post_id)
    else:
        st.markdown("home-page")


def _app(script, backend, role="reader") -> AppTest:
    at = AppTest.from_function(script, default_timeout=30)
    at.session_state["_test_backend"] = backend
    at.session_state["_auth_session"] = AuthSession(access_token="tok", user_id=USER_ID, email="ada@example.com")
    at.session_state["_auth_profile"] = Profile(id=USER_ID, email="ada@example.com", full_name="Ada", role=role)
    return at


@pytest.fixture
def spy() -> mock.Mock:
    return mock.Mock(spec=MockBackend)


def test_create_with_missing_fields_shows_error_and_skips_backend(spy):
    at = _app(_create_script, spy, role="admin").run()
    assert not at.exception

    at.text_input(key="story_title").input("Only a title")
    at.button(key="publish_btn").click().run()

    assert [e.value for e in at.error] == ["Please fill in all fields"]
    assert spy.method_calls == []


def test_profile_rejects_blank_name_without_update(spy):
    spy.select.return_value = {"id": USER_ID, "email": "ada@example.com", "full_name": "Ada", "role": "reader"}
    at = _app(_profile_script, spy).run()
    assert not at.exception
    assert at.text_input(key="profile_full_name").value == "Ada"

    at.text_input(key="profile_full_name").input("   ")
    save = next(b for b in at.button if b.label == "Save Changes")
    save.click().run()

    assert [e.value for e in at.error] == ["Name cannot be empty"]
    spy.update.assert_not_called()


def test_missing_post_flashes_and_redirects_home(spy):
    spy.select.side_effect = NotFoundError("Not found", 406)
    at = _app(_routed_detail_script, spy)
    at.query_params["view"] = "post"
    at.query_params["id"] = "missing"
    at.run()

    assert not at.exception
    assert [t.value for t in at.toast] == ["Post not found"]
    assert any(m.value == "home-page" for m in at.markdown)


class TestReleasePostState:
    def test_leaving_a_post_drops_its_downloads(self):
        state = {
            "_active_post_id": "p1",
            "_post_p1_images": [("img", b"bytes")],
            "_post_p1_show_text": True,
            "_post_p1_confirm_delete": True,
            "_flash_messages": [],
        }
        with mock.patch.object(st, "session_state", state):
            post_detail.release_post_state(None)
        assert state == {"_flash_messages": []}

    def test_switching_posts_keeps_only_the_new_one(self):
        state = {"_active_post_id": "p1", "_post_p1_images": [("img", b"a")], "_post_p2_images": [("img", b"b")]}
        with mock.patch.object(st, "session_state", state):
            post_detail.release_post_state("p2")
        assert state == {"_active_post_id": "p2", "_post_p2_images": [("img", b"b")]}

    def test_staying_on_a_post_keeps_its_state(self):
        state = {"_active_post_id": "p1", "_post_p1_images": [("img", b"a")]}
        with mock.patch.object(st, "session_state", state):
            post_detail.release_post_state("p1")
        assert state == {"_active_post_id": "p1", "_post_p1_images": [("img", b"a")]}
