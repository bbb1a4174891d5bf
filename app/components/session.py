"""
Session state helpers: auth context, flash notifications, query-string routing.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlencode

import streamlit as st

from data.models import AuthSession, Profile

logger = logging.getLogger(__name__)

VIEWS = ("home", "post", "create", "profile", "auth")

_AUTH_KEY = "_auth_session"
_PROFILE_KEY = "_auth_profile"
_FLASH_KEY = "_flash_messages"


@dataclass(frozen=True)
class Route:
    view: str
    post_id: Optional[str] = None


# --- auth context ---

def current_user() -> Optional[AuthSession]:
    return st.session_state.get(_AUTH_KEY)


def current_profile() -> Optional[Profile]:
    return st.session_state.get(_PROFILE_KEY)


def access_token() -> Optional[str]:
    user = current_user()
    return user.access_token if user else None


def is_admin() -> bool:
    profile = current_profile()
    return bool(current_user() and profile and profile.is_admin)


def sign_in_user(auth: AuthSession, profile: Optional[Profile]) -> None:
    st.session_state[_AUTH_KEY] = auth
    st.session_state[_PROFILE_KEY] = profile
    logger.info("Signed in user %s", auth.user_id)


def set_profile(profile: Profile) -> None:
    st.session_state[_PROFILE_KEY] = profile


def sign_out_user() -> None:
    st.session_state.pop(_AUTH_KEY, None)
    st.session_state.pop(_PROFILE_KEY, None)


# --- flash notifications (survive one redirect) ---

def flash(message: str, kind: str = "info") -> None:
    st.session_state.setdefault(_FLASH_KEY, []).append((kind, message))


def render_flashes() -> None:
    icons = {"success": "✅", "error": "⚠️", "info": "ℹ️"}
    for kind, message in st.session_state.pop(_FLASH_KEY, []):
        st.toast(message, icon=icons.get(kind, "ℹ️"))


# --- routing ---

def current_route() -> Route:
    view = st.query_params.get("view", "home")
    if view not in VIEWS:
        view = "home"
    return Route(view=view, post_id=st.query_params.get("id"))


def navigate(view: str, post_id: Optional[str] = None) -> None:
    """Redirect: swap the query string and rerun the script."""
    st.query_params.clear()
    if view != "home":
        st.query_params["view"] = view
    if post_id:
        st.query_params["id"] = post_id
    st.rerun()


def href(view: str, post_id: Optional[str] = None) -> str:
    params = {}
    if view != "home":
        params["view"] = view
    if post_id:
        params["id"] = post_id
    return f"?{urlencode(params)}" if params else "?"


def post_link(post_id: str) -> str:
    return href("post", post_id)
