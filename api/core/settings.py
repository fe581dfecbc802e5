"""
Environment-driven settings.

Everything is read from `os.environ` at call time so tests can patch the
environment without reloading modules.
"""

from __future__ import annotations

import os

DEFAULT_API_HOST = "0.0.0.0"
DEFAULT_API_PORT = 4000
DEFAULT_POOL_MIN_SIZE = 1
DEFAULT_POOL_MAX_SIZE = 5


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def frontend_url() -> str | None:
    """
    The single origin allowed to call the API from a browser.
    """
    return os.environ.get("FRONTEND_URL", "").strip() or None


def log_level() -> str:
    return os.environ.get("LOG_LEVEL", "INFO").strip().upper() or "INFO"


def api_host() -> str:
    return os.environ.get("API_HOST", DEFAULT_API_HOST).strip() or DEFAULT_API_HOST


def api_port() -> int:
    return _env_int("API_PORT", DEFAULT_API_PORT)


def pool_sizes() -> tuple[int, int]:
    min_size = max(_env_int("DB_POOL_MIN_SIZE", DEFAULT_POOL_MIN_SIZE), 0)
    max_size = max(_env_int("DB_POOL_MAX_SIZE", DEFAULT_POOL_MAX_SIZE), 1)
    return min(min_size, max_size), max_size
