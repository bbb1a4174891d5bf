from __future__ import annotations

import logging

import streamlit as st

from components.session import current_user, flash, navigate, sign_in_user
from config import AppConfig
from data.client import BackendError
from data.models import AuthSession
from data.service import Backend, ValidationError, get_backend, get_profile, sign_in, sign_up

logger = logging.getLogger(__name__)


def _complete_sign_in(backend_factory, auth: AuthSession) -> None:
    # Profile reads run as the signed-in user so row-level policies apply
    user_backend = backend_factory(auth.access_token)
    try:
        profile = get_profile(user_backend, auth.user_id)
    except BackendError as e:
        logger.warning("Signed in but profile lookup failed: %s", e.message)
        profile = None
    sign_in_user(auth, profile)
    flash("Welcome back!" if profile and profile.full_name else "Signed in", "success")
    navigate("home")


def render(cfg: AppConfig, use_mock: bool, backend: Backend) -> None:
    if current_user():
        navigate("home")
        return

    def backend_factory(token: str) -> Backend:
        return get_backend(cfg, use_mock, access_token=token)

    _, middle, _ = st.columns([1, 2, 1])
    with middle:
        st.subheader("Welcome to the story library")
        sign_in_tab, sign_up_tab = st.tabs(["Sign In", "Sign Up"])

        with sign_in_tab:
            with st.form("sign_in_form"):
                email = st.text_input("Email", key="sign_in_email")
                password = st.text_input("Password", type="password", key="sign_in_password")
                submitted = st.form_submit_button("Sign In", type="primary", use_container_width=True)
            if submitted:
                try:
                    auth = sign_in(backend, email, password)
                except ValidationError as e:
                    st.error(str(e))
                except BackendError as e:
                    st.error(f"Sign in failed: {e.message}")
                else:
                    _complete_sign_in(backend_factory, auth)

        with sign_up_tab:
            with st.form("sign_up_form"):
                full_name = st.text_input("Full name", key="sign_up_name", max_chars=100)
                email = st.text_input("Email", key="sign_up_email")
                password = st.text_input("Password", type="password", key="sign_up_password")
                submitted = st.form_submit_button("Create Account", use_container_width=True)
            if submitted:
                try:
                    auth = sign_up(backend, email, password, full_name)
                except ValidationError as e:
                    st.error(str(e))
                except BackendError as e:
                    st.error(f"Sign up failed: {e.message}")
                else:
                    if auth is None:
                        st.success("Check your email to confirm your account, then sign in.")
                    else:
                        _complete_sign_in(backend_factory, auth)
