from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from infra.path import default_db_url

logger = logging.getLogger(__name__)

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass(frozen=True)
class AnalyticsSettings:
    db_url: str
    log_level: str = "INFO"
    log_to_file: bool = True
    max_workers: int = 4
    parallel_min_batch: int = 8


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int, *, minimum: int = 1) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring invalid %s=%r, using %s", name, raw, default)
        return default
    if value < minimum:
        logger.warning("Ignoring out-of-range %s=%r, using %s", name, raw, default)
        return default
    return value


def _env_log_level(name: str, default: str) -> str:
    raw = (os.getenv(name) or "").strip().upper()
    if not raw:
        return default
    if raw not in _LOG_LEVELS:
        logger.warning("Ignoring unknown %s=%r, using %s", name, raw, default)
        return default
    return raw


def load_settings() -> AnalyticsSettings:
    """Settings from ``ACTIVITY_REPORTS_*`` environment variables."""
    db_url = (os.getenv("ACTIVITY_REPORTS_DB_URL") or "").strip() or default_db_url()
    return AnalyticsSettings(
        db_url=db_url,
        log_level=_env_log_level("ACTIVITY_REPORTS_LOG_LEVEL", "INFO"),
        log_to_file=_env_flag("ACTIVITY_REPORTS_LOG_TO_FILE", True),
        max_workers=_env_int("ACTIVITY_REPORTS_MAX_WORKERS", 4),
        parallel_min_batch=_env_int("ACTIVITY_REPORTS_PARALLEL_MIN_BATCH", 8),
    )


__all__ = ["AnalyticsSettings", "load_settings"]
