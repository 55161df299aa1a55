from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv


#
# Shared theme tokens (clinic admin styling)
# - Centralized here so components/styles.py and the charts agree.
#
THEME = {
    # Backgrounds
    "bg_primary": "#F3F6F8",     # page background
    "bg_secondary": "#FFFFFF",   # sidebar / top surfaces
    "bg_card": "#FFFFFF",        # card surface
    # Accents (teal + slate)
    "accent_primary": "#0F766E",    # teal 700
    "accent_secondary": "#14B8A6",  # teal 500 (hover)
    "navy_900": "#0B1F33",
    "navy_800": "#1E3A5F",
    # Text + borders
    "text_primary": "#111827",
    "text_secondary": "rgba(17, 24, 39, 0.72)",
    "border_color": "#E2E8F0",
    "grid": "rgba(17, 24, 39, 0.10)",
    "shadow": "0 1px 3px rgba(16,24,40,0.08)",
    "radius_px": 10,
    # Status colors
    "success": "#067647",
    "warning": "#F59E0B",
    "danger": "#B42318",
}


@dataclass(frozen=True)
class AppConfig:
    # Required for "real data" mode (Supabase)
    supabase_url: Optional[str]
    supabase_key: Optional[str]

    # Optional collaborators
    document_api_url: Optional[str]
    tally_server_url: Optional[str]
    tally_company: Optional[str]

    # Defaults
    default_use_mock: bool
    log_level: str

    @property
    def has_store_credentials(self) -> bool:
        return bool(self.supabase_url and self.supabase_key)


def _getenv(name: str, default: Optional[str] = None) -> Optional[str]:
    v = os.getenv(name, default)
    if v is None:
        return None
    v = v.strip()
    return v if v else None


def _getbool(name: str, default: bool) -> bool:
    v = _getenv(name)
    if v is None:
        return default
    return v.lower() in ("1", "true", "yes", "on")


def get_config() -> AppConfig:
    """
    Centralized config: this is the ONLY place env vars are read.
    - Loads `.env` if present (local dev)
    - NEXT_PUBLIC_* names are accepted so an existing web `.env` can be reused
    """
    load_dotenv(override=False)

    return AppConfig(
        supabase_url=_getenv("SUPABASE_URL") or _getenv("NEXT_PUBLIC_SUPABASE_URL"),
        supabase_key=_getenv("SUPABASE_KEY") or _getenv("NEXT_PUBLIC_SUPABASE_ANON_KEY"),
        document_api_url=_getenv("DOCUMENT_API_URL"),
        tally_server_url=_getenv("TALLY_SERVER_URL"),
        tally_company=_getenv("TALLY_COMPANY"),
        default_use_mock=_getbool("USE_MOCK_DATA", True),
        log_level=(_getenv("LOG_LEVEL", "INFO") or "INFO").upper(),
    )


def configure_logging(cfg: AppConfig) -> None:
    level = getattr(logging, cfg.log_level, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
