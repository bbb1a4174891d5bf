from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv


#
# Shared theme tokens
# - Centralized here so styles.py and the card/badge components read one palette.
#
THEME = {
    # Backgrounds
    "bg_primary": "#FAF7F2",     # page background (paper)
    "bg_secondary": "#FFFFFF",   # header / sidebar surfaces
    "bg_card": "#FFFFFF",        # card surface
    "bg_muted": "#F1ECE4",       # thumbnail placeholder, disabled inputs
    # Accents
    "accent_primary": "#7C3AED",
    "accent_secondary": "#DB2777",
    "ink_900": "#1F1A17",
    # Text + borders
    "text_primary": "#1F1A17",
    "text_secondary": "rgba(31, 26, 23, 0.65)",
    "border_color": "#E7E0D6",
    "shadow": "0 1px 3px rgba(16,24,40,0.08)",
    "shadow_hover": "0 12px 24px rgba(16,24,40,0.14)",
    "radius_px": 14,
    # Status colors
    "success": "#067647",
    "danger": "#B42318",
}

# Badge colour per genre (keys must match data.models.GENRES)
GENRE_COLORS = {
    "romance": "#EC4899",
    "folklore": "#22C55E",
    "horror": "#EF4444",
    "fantasy": "#A855F7",
    "teen": "#3B82F6",
}


@dataclass(frozen=True)
class AppConfig:
    # Hosted backend (PostgREST + storage + auth behind one base URL)
    backend_url: str
    backend_anon_key: Optional[str]

    # Object storage bucket for thumbnails and inline story images
    storage_bucket: str

    request_timeout_s: float

    # Defaults
    default_use_mock: bool
    log_level: str
    site_name: str

    @property
    def is_backend_configured(self) -> bool:
        return bool(self.backend_url and self.backend_anon_key)

    @property
    def backend_host(self) -> str:
        return self.backend_url.replace("https://", "").replace("http://", "").rstrip("/")


def _getenv(name: str, default: Optional[str] = None) -> Optional[str]:
    v = os.getenv(name, default)
    if v is None:
        return None
    v = v.strip()
    return v if v else None


def _getfloat(name: str, default: float) -> float:
    raw = _getenv(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def get_config() -> AppConfig:
    """
    Centralized config: this is the ONLY place env vars are read.
    - Loads `.env` if present (local dev)
    - With no backend configured the app starts in demo-data mode
    """
    load_dotenv(override=False)

    backend_url = (_getenv("BACKEND_URL") or "").rstrip("/")
    anon_key = _getenv("BACKEND_ANON_KEY")
    configured = bool(backend_url and anon_key)
    mock_default = "false" if configured else "true"
    # Demo data is the only working mode until both URL and key are set
    use_mock = (_getenv("USE_MOCK_DATA", mock_default) or mock_default).lower() == "true" or not configured

    return AppConfig(
        backend_url=backend_url,
        backend_anon_key=anon_key,
        storage_bucket=_getenv("STORAGE_BUCKET", "post-images") or "post-images",
        request_timeout_s=_getfloat("REQUEST_TIMEOUT_S", 15.0),
        default_use_mock=use_mock,
        log_level=(_getenv("LOG_LEVEL", "INFO") or "INFO").upper(),
        site_name=_getenv("SITE_NAME", "Bstation") or "Bstation",
    )


_LOGGING_READY = False


def setup_logging(cfg: AppConfig) -> None:
    """Configure the root logger once per process (Streamlit reruns the script on every interaction)."""
    global _LOGGING_READY
    if _LOGGING_READY:
        return
    logging.basicConfig(
        level=getattr(logging, cfg.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    _LOGGING_READY = True
