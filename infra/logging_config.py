# infra/logging_config.py
from __future__ import annotations
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from infra.config import AnalyticsSettings, load_settings
from infra.operational_support import TraceIdLogFilter
from infra.path import user_data_dir


def setup_logging(settings: AnalyticsSettings | None = None, log_dir: Path | None = None) -> Path | None:
    """
    Configure application logging.
    Logs go to the per-user data directory; returns the log file path when file
    logging is enabled.
    """
    settings = settings or load_settings()

    logger = logging.getLogger()
    logger.setLevel(getattr(logging, settings.log_level, logging.INFO))

    # Clear any existing handlers so repeated setup does not duplicate output
    logger.handlers.clear()
    trace_filter = TraceIdLogFilter()

    log_file: Path | None = None
    if settings.log_to_file:
        log_dir = log_dir or (user_data_dir() / "logs")
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / "activity_reports.log"

        # File handler (rotating)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=1_000_000,  # 1 MB per file
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.addFilter(trace_filter)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s [%(levelname)s] trace=%(trace_id)s %(name)s - %(message)s")
        )
        logger.addHandler(file_handler)

    console = logging.StreamHandler()
    console.addFilter(trace_filter)
    console.setFormatter(logging.Formatter("%(levelname)s [trace=%(trace_id)s]: %(message)s"))
    logger.addHandler(console)

    if log_file is not None:
        logger.info("Logging initialized. Log file at %s", log_file)
    return log_file
