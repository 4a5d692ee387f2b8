"""Configuration helpers for environment variables."""

from __future__ import annotations

import logging
import os
from typing import List, Optional

from dotenv import load_dotenv


logger = logging.getLogger(__name__)

DEFAULT_DATASET_URL = "https://s3.amazonaws.com/roxiler.com/product_transaction.json"
DEFAULT_DATASET_TIMEOUT = 15.0
DEFAULT_PORT = 5000


def _should_load_dotenv() -> bool:
    app_env = os.getenv("APP_ENV", "dev").strip().lower()
    return app_env in {"dev", "local"}


if _should_load_dotenv():
    load_dotenv()


def get_env(name: str, default: Optional[str] = None) -> Optional[str]:
    """Return a raw environment value or default."""
    return os.getenv(name, default)


def _float_env(name: str, default: float) -> float:
    raw = (get_env(name, "") or "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("invalid_float_env name=%s value=%r; using %s", name, raw, default)
        return default


def dataset_url() -> str:
    return (get_env("DATASET_URL", "") or "").strip() or DEFAULT_DATASET_URL


def dataset_timeout() -> float:
    return _float_env("DATASET_TIMEOUT", DEFAULT_DATASET_TIMEOUT)


def dataset_cache_ttl() -> float:
    """Seconds a fetched snapshot may be reused; 0 disables caching."""
    return max(0.0, _float_env("DATASET_CACHE_TTL", 0.0))


def cors_allow_origins() -> List[str]:
    raw_origins = get_env("CORS_ALLOW_ORIGINS", "") or ""
    parsed = [origin.strip() for origin in raw_origins.split(",") if origin.strip()]
    return parsed or ["*"]


def server_host() -> str:
    return (get_env("HOST", "") or "").strip() or "0.0.0.0"


def server_port() -> int:
    raw = (get_env("PORT", "") or "").strip()
    if not raw:
        return DEFAULT_PORT
    try:
        return int(raw)
    except ValueError:
        logger.warning("invalid_port_env value=%r; using %s", raw, DEFAULT_PORT)
        return DEFAULT_PORT
