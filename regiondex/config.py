"""
Runtime settings for RegionDex.
Constants live here; each one can be overridden from the environment.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping

# ── Remote API ───────────────────────────────────────────────────────────────
API_BASE_URL = "https://pokeapi.co/api/v2"
REQUEST_TIMEOUT = 10.0  # seconds per request

# ── Browsing ─────────────────────────────────────────────────────────────────
PAGE_SIZE = 20
MAX_HISTORY = 64

# ── Logging ──────────────────────────────────────────────────────────────────
LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


@dataclass(frozen=True)
class Settings:
    api_base_url: str = API_BASE_URL
    request_timeout: float = REQUEST_TIMEOUT
    page_size: int = PAGE_SIZE
    max_history: int = MAX_HISTORY
    log_level: str = LOG_LEVEL


def _positive_int(raw: str | None, default: int) -> int:
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def _positive_float(raw: str | None, default: float) -> float:
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    env = os.environ if environ is None else environ
    base_url = (env.get("REGIONDEX_API_BASE_URL") or API_BASE_URL).rstrip("/")
    return Settings(
        api_base_url=base_url,
        request_timeout=_positive_float(env.get("REGIONDEX_TIMEOUT"), REQUEST_TIMEOUT),
        page_size=_positive_int(env.get("REGIONDEX_PAGE_SIZE"), PAGE_SIZE),
        max_history=_positive_int(env.get("REGIONDEX_MAX_HISTORY"), MAX_HISTORY),
        log_level=(env.get("REGIONDEX_LOG_LEVEL") or LOG_LEVEL).upper(),
    )


def configure_logging(level: str | int = LOG_LEVEL) -> None:
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)
