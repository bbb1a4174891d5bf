"""
Tests for config.get_config.
"""

import os
from unittest import mock

import pytest

import config


@pytest.fixture(autouse=True)
def no_dotenv():
    with mock.patch.object(config, "load_dotenv"):
        yield


def test_defaults_without_backend():
    with mock.patch.dict(os.environ, {}, clear=True):
        cfg = config.get_config()
    assert cfg.backend_url == ""
    assert cfg.backend_anon_key is None
    assert not cfg.is_backend_configured
    assert cfg.default_use_mock is True
    assert cfg.storage_bucket == "post-images"
    assert cfg.request_timeout_s == 15.0
    assert cfg.log_level == "INFO"
    assert cfg.site_name == "Bstation"


def test_configured_backend_defaults_to_live_data():
    env = {"BACKEND_URL": "https://proj.example.co/", "BACKEND_ANON_KEY": "k"}
    with mock.patch.dict(os.environ, env, clear=True):
        cfg = config.get_config()
    assert cfg.backend_url == "https://proj.example.co"
    assert cfg.backend_host == "proj.example.co"
    assert cfg.is_backend_configured
    assert cfg.default_use_mock is False


def test_explicit_overrides():
    env = {
        "BACKEND_URL": "https://proj.example.co",
        "BACKEND_ANON_KEY": "k",
        "USE_MOCK_DATA": "TRUE",
        "STORAGE_BUCKET": "covers",
        "REQUEST_TIMEOUT_S": "2.5",
        "LOG_LEVEL": "debug",
        "SITE_NAME": "Tales",
    }
    with mock.patch.dict(os.environ, env, clear=True):
        cfg = config.get_config()
    assert cfg.default_use_mock is True
    assert cfg.storage_bucket == "covers"
    assert cfg.request_timeout_s == 2.5
    assert cfg.log_level == "DEBUG"
    assert cfg.site_name == "Tales"


def test_blank_values_count_as_unset():
    env = {"BACKEND_URL": "   ", "BACKEND_ANON_KEY": "", "STORAGE_BUCKET": " ", "REQUEST_TIMEOUT_S": "soon"}
    with mock.patch.dict(os.environ, env, clear=True):
        cfg = config.get_config()
    assert cfg.backend_url == ""
    assert cfg.backend_anon_key is None
    assert cfg.storage_bucket == "post-images"
    assert cfg.request_timeout_s == 15.0


def test_unconfigured_backend_forces_demo_data():
    env = {"BACKEND_URL": "https://your-project.supabase.co", "BACKEND_ANON_KEY": "", "USE_MOCK_DATA": "false"}
    with mock.patch.dict(os.environ, env, clear=True):
        cfg = config.get_config()
    assert not cfg.is_backend_configured
    assert cfg.default_use_mock is True


def test_genre_colors_cover_every_genre():
    from data.models import GENRES

    assert set(config.GENRE_COLORS) == set(GENRES)
