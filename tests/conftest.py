"""
Pytest configuration and shared fixtures.

`app/` is on the import path via `pythonpath` in pyproject.toml, so tests
import modules the same way the Streamlit entrypoint does (`from data ...`).
"""

from typing import Any
from unittest import mock

import pytest
import requests

from config import AppConfig
from data.mock_data import MockBackend


@pytest.fixture
def cfg() -> AppConfig:
    return AppConfig(
        backend_url="https://stories.example.co",
        backend_anon_key="anon-key",
        storage_bucket="post-images",
        request_timeout_s=5.0,
        default_use_mock=False,
        log_level="DEBUG",
        site_name="Bstation",
    )


@pytest.fixture
def unconfigured_cfg() -> AppConfig:
    return AppConfig(
        backend_url="",
        backend_anon_key=None,
        storage_bucket="post-images",
        request_timeout_s=5.0,
        default_use_mock=True,
        log_level="INFO",
        site_name="Bstation",
    )


@pytest.fixture
def demo_backend() -> MockBackend:
    """Fresh, deterministically seeded demo backend per test."""
    return MockBackend(n_posts=12, seed=21)


def make_response(status_code: int = 200, body: Any = None, reason: str = "OK", content: bytes = b"") -> mock.Mock:
    resp = mock.Mock(spec=requests.Response)
    resp.status_code = status_code
    resp.reason = reason
    resp.content = content
    if isinstance(body, Exception):
        resp.json.side_effect = body
    else:
        resp.json.return_value = body
    return resp


@pytest.fixture
def http_session() -> mock.Mock:
    """A stand-in for requests.Session; tests set `request.return_value`."""
    session = mock.Mock(spec=requests.Session)
    session.request.return_value = make_response(200, [])
    return session
