"""
Backend Client - hosted data / storage / auth API
=================================================
Thin request/response wrapper over the three HTTP surfaces of the hosted
backend:

- /rest/v1     table-scoped select, insert, update, delete (PostgREST)
- /storage/v1  object upload + public URLs
- /auth/v1     password sign-in, sign-up, sign-out

Row-level permissions, referential integrity and sessions are enforced by the
backend; this client only shapes requests and maps failures to BackendError.
"""
from __future__ import annotations

import logging
from typing import Any, Optional

import requests

from config import AppConfig
from data.models import AuthSession
from data.queries import by_id_filter

logger = logging.getLogger(__name__)

_SINGLE_OBJECT = "application/vnd.pgrst.object+json"


class BackendError(RuntimeError):
    """Any failed backend call. `message` is safe to show to the user."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class BackendAuthError(BackendError):
    pass


class NotFoundError(BackendError):
    pass


def _error_message(resp: requests.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        for key in ("message", "msg", "error_description", "error"):
            if body.get(key):
                return str(body[key])
    return resp.reason or f"HTTP {resp.status_code}"


class BackendClient:
    """
    One client per render pass. Anonymous unless an access token from a
    signed-in session is supplied.
    """

    def __init__(
        self,
        cfg: AppConfig,
        access_token: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ):
        self.cfg = cfg
        self.access_token = access_token
        self._session = session or requests.Session()
        self._base_url = cfg.backend_url.rstrip("/")

    def is_configured(self) -> bool:
        return self.cfg.is_backend_configured

    def _headers(self, extra: Optional[dict[str, str]] = None) -> dict[str, str]:
        key = self.cfg.backend_anon_key or ""
        headers = {
            "apikey": key,
            "Authorization": f"Bearer {self.access_token or key}",
        }
        if extra:
            headers.update(extra)
        return headers

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[dict[str, str]] = None,
        json: Any = None,
        data: Optional[bytes] = None,
        headers: Optional[dict[str, str]] = None,
    ) -> requests.Response:
        if not self.is_configured():
            raise BackendAuthError(
                "Backend is not configured. Set BACKEND_URL and BACKEND_ANON_KEY, or switch to demo data."
            )

        logger.debug("%s %s", method, path)
        try:
            resp = self._session.request(
                method,
                f"{self._base_url}{path}",
                params=params,
                json=json,
                data=data,
                headers=self._headers(headers),
                timeout=self.cfg.request_timeout_s,
            )
        except requests.RequestException as e:
            logger.warning("%s %s failed: %s", method, path, type(e).__name__)
            raise BackendError(f"Could not reach the backend: {type(e).__name__}") from e

        if resp.status_code >= 300:
            message = _error_message(resp)
            logger.warning("%s %s -> %s %s", method, path, resp.status_code, message)
            if resp.status_code in (401, 403):
                raise BackendAuthError(message, resp.status_code)
            raise BackendError(message, resp.status_code)
        return resp

    # --- data API ---

    def select(self, table: str, params: dict[str, str], single: bool = False) -> Any:
        """
        Table-scoped read. With `single=True` the backend must return exactly
        one row; zero rows surface as NotFoundError.
        """
        headers = {"Accept": _SINGLE_OBJECT} if single else None
        try:
            resp = self._request("GET", f"/rest/v1/{table}", params=params, headers=headers)
        except BackendError as e:
            if single and e.status_code == 406:
                raise NotFoundError("Not found", 406) from e
            raise
        return resp.json()

    def insert(self, table: str, row: dict[str, Any]) -> dict[str, Any]:
        resp = self._request(
            "POST",
            f"/rest/v1/{table}",
            json=[row],
            headers={"Prefer": "return=representation"},
        )
        created = resp.json()
        if isinstance(created, list):
            if not created:
                raise BackendError("Insert returned no row")
            return created[0]
        return created

    def update(self, table: str, match_id: str, values: dict[str, Any]) -> None:
        self._request(
            "PATCH",
            f"/rest/v1/{table}",
            params=by_id_filter(match_id),
            json=values,
            headers={"Prefer": "return=minimal"},
        )

    def delete(self, table: str, match_id: str) -> None:
        self._request("DELETE", f"/rest/v1/{table}", params=by_id_filter(match_id))

    # --- storage ---

    def upload(self, bucket: str, name: str, data: bytes, content_type: str) -> str:
        self._request(
            "POST",
            f"/storage/v1/object/{bucket}/{name}",
            data=data,
            headers={"Content-Type": content_type or "application/octet-stream"},
        )
        return name

    def public_url(self, bucket: str, name: str) -> str:
        return f"{self._base_url}/storage/v1/object/public/{bucket}/{name}"

    def fetch_bytes(self, url: str) -> bytes:
        """Plain GET for a public asset (embedded story images). Inline `data:` images decode locally."""
        from data.content import decode_data_url, is_data_url

        if is_data_url(url):
            return decode_data_url(url)
        try:
            resp = self._session.get(url, timeout=self.cfg.request_timeout_s)
            resp.raise_for_status()
        except requests.RequestException as e:
            logger.warning("GET %s failed: %s", url, type(e).__name__)
            raise BackendError(f"Could not download {url}") from e
        return resp.content

    # --- auth ---

    def sign_in(self, email: str, password: str) -> AuthSession:
        resp = self._request(
            "POST",
            "/auth/v1/token",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
        )
        return _session_from(resp.json())

    def sign_up(self, email: str, password: str, full_name: str) -> Optional[AuthSession]:
        """
        Returns a session when the backend signs the user in straight away,
        None when it first requires email confirmation.
        """
        resp = self._request(
            "POST",
            "/auth/v1/signup",
            json={"email": email, "password": password, "data": {"full_name": full_name}},
        )
        body = resp.json()
        if not body.get("access_token"):
            return None
        return _session_from(body)

    def sign_out(self, access_token: str) -> None:
        self._request("POST", "/auth/v1/logout", headers={"Authorization": f"Bearer {access_token}"})


def _session_from(body: dict[str, Any]) -> AuthSession:
    user = body.get("user") or {}
    if not body.get("access_token") or not user.get("id"):
        raise BackendAuthError("Sign-in response did not include a session")
    return AuthSession(access_token=body["access_token"], user_id=str(user["id"]), email=user.get("email") or "")


def get_backend_client(cfg: AppConfig, access_token: Optional[str] = None) -> BackendClient:
    return BackendClient(cfg=cfg, access_token=access_token)
