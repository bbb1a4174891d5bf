from __future__ import annotations

from dataclasses import replace

import streamlit as st

from components.session import current_user, flash, navigate, set_profile
from data.client import BackendError
from data.service import MAX_NAME_LENGTH, Backend, ValidationError, get_profile, update_display_name


def render(backend: Backend) -> None:
    user = current_user()
    if not user:
        flash("Sign in to manage your profile", "info")
        navigate("auth")
        return

    with st.spinner("Loading profile..."):
        try:
            profile = get_profile(backend, user.user_id)
        except BackendError as e:
            st.error(f"Failed to load profile: {e.message}")
            return

    _, middle, _ = st.columns([1, 2, 1])
    with middle:
        st.subheader("👤 Profile Settings")
        st.caption("Manage your profile information")

        with st.form("profile_form"):
            st.text_input("Email", value=profile.email, disabled=True, help="Email cannot be changed")
            full_name = st.text_input(
                "Full name",
                value=profile.full_name,
                key="profile_full_name",
                max_chars=MAX_NAME_LENGTH,
                placeholder="Enter your full name",
            )
            saved = st.form_submit_button("Save Changes", type="primary", use_container_width=True)

        if st.button("Cancel", key="cancel_profile_btn", use_container_width=True):
            navigate("home")

    if not saved:
        return

    try:
        name = update_display_name(backend, user.user_id, full_name)
    except ValidationError as e:
        st.error(str(e))
        return
    except BackendError as e:
        st.error(f"Failed to update profile: {e.message}")
        return

    set_profile(replace(profile, full_name=name))
    st.toast("Profile updated", icon="✅")
