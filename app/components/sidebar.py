from __future__ import annotations

from dataclasses import dataclass

import streamlit as st

from components.session import current_profile, current_user, sign_out_user
from config import AppConfig
from data.mock_data import ADMIN_EMAIL, READER_EMAIL


@dataclass(frozen=True)
class SidebarState:
    use_mock: bool


def render_sidebar(cfg: AppConfig) -> SidebarState:
    with st.sidebar:
        st.markdown(f"### 📖 {cfg.site_name}")
        st.caption("Short stories across romance, folklore, horror, fantasy and teen.")

        user = current_user()
        profile = current_profile()
        if user:
            role = profile.role if profile else "reader"
            st.markdown(f"Signed in as **{user.email}** ({role})")

        with st.expander("⚙️ Settings", expanded=False):
            use_mock = st.toggle(
                "Use demo data",
                value=st.session_state.get("use_mock", cfg.default_use_mock),
                help="When off, the app talks to the hosted backend. Failures are reported, never hidden.",
                disabled=not cfg.is_backend_configured,
            )
            if use_mock != st.session_state.get("use_mock", cfg.default_use_mock):
                # Sessions from one backend are meaningless on the other
                sign_out_user()
            st.session_state["use_mock"] = use_mock

            st.markdown("**Backend**")
            st.code(cfg.backend_host or "(not configured)", language="text")
            if use_mock:
                st.caption(f"Demo accounts: `{ADMIN_EMAIL}` (admin), `{READER_EMAIL}` (reader), any password.")
    use_mock = st.session_state.get("use_mock", cfg.default_use_mock)

    return SidebarState(use_mock=use_mock)
