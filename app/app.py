"""
Routing only.

All view logic lives in app/views/.
All env reads happen ONLY in config.py.
"""

from __future__ import annotations

import logging
import os
import sys

# Make `app/` importable as a flat module path when running:
#   streamlit run app/app.py
APP_DIR = os.path.dirname(__file__)
REPO_ROOT = os.path.abspath(os.path.join(APP_DIR, ".."))
for p in [APP_DIR, REPO_ROOT]:
    if p not in sys.path:
        sys.path.insert(0, p)

import streamlit as st  # noqa: E402

from components.header import render_footer, render_header  # noqa: E402
from components.session import (  # noqa: E402
    access_token,
    current_profile,
    current_route,
    current_user,
    flash,
    navigate,
    render_flashes,
    sign_out_user,
)
from components.sidebar import render_sidebar  # noqa: E402
from components.styles import apply_theme  # noqa: E402
from config import get_config, setup_logging  # noqa: E402
from data.client import BackendError  # noqa: E402
from data.service import get_backend, sign_out  # noqa: E402

from views import auth, create_post, home, post_detail, profile_settings  # noqa: E402

logger = logging.getLogger(__name__)


def _handle_sign_out(backend) -> None:
    token = access_token()
    if token:
        try:
            sign_out(backend, token)
        except BackendError as e:
            # Local session is dropped regardless; the token simply expires server-side
            logger.warning("Backend sign-out failed: %s", e.message)
    sign_out_user()
    flash("Signed out", "info")
    navigate("auth")


def main() -> None:
    cfg = get_config()
    setup_logging(cfg)
    apply_theme(cfg.site_name)
    state = render_sidebar(cfg)

    backend = get_backend(cfg, state.use_mock, access_token=access_token())

    if render_header(cfg.site_name, current_profile(), signed_in=current_user() is not None):
        _handle_sign_out(backend)

    render_flashes()

    # Routing only
    route = current_route()
    post_detail.release_post_state(route.post_id if route.view == "post" else None)
    if route.view == "home":
        home.render(backend)
    elif route.view == "post":
        post_detail.render(backend, route.post_id)
    elif route.view == "create":
        create_post.render(cfg, backend)
    elif route.view == "profile":
        profile_settings.render(backend)
    elif route.view == "auth":
        auth.render(cfg, state.use_mock, backend)
    else:
        st.error("Unknown view")

    render_footer(cfg.site_name)


if __name__ == "__main__":
    main()
