"""
Logging configuration for the application.

The ``setup_logging`` function configures the root logger with a
console handler and, when a log directory is configured, two daily
rotating file handlers: ``app.log`` for everything at the configured
level and ``errors.log`` for errors only.  Log format includes the
timestamp, logger name, log level and message.  This module ensures
that logging is set up exactly once.
"""

import logging
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers that are too chatty at INFO.
_QUIET_LOGGERS = ("uvicorn.access",)


def setup_logging(level: str = "INFO", log_dir: Optional[str] = None) -> None:
    """Configure root logger.

    If no handlers are attached to the root logger, attach a
    console handler and optionally the rotating file handlers.  The
    root logger's level is set based on the provided ``level``.

    Parameters
    ----------
    level : str
        Logging level name (e.g. ``"DEBUG"``, ``"INFO"``).  Case
        insensitive.  Unknown names fall back to ``INFO``.
    log_dir : Optional[str]
        Directory for log files.  Created if missing.  If omitted, no
        file handlers are added.
    """
    logger = logging.getLogger()
    if logger.handlers:
        # Avoid configuring logging multiple times.  This can happen when
        # running tests or when ``create_app`` is called repeatedly.
        return

    numeric_level = getattr(logging, level.upper(), logging.INFO)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO
    logger.setLevel(numeric_level)

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_dir:
        log_path = Path(log_dir).resolve()
        log_path.mkdir(parents=True, exist_ok=True)

        app_handler = TimedRotatingFileHandler(
            log_path / "app.log", when="midnight", backupCount=30, encoding="utf-8", utc=True
        )
        app_handler.setFormatter(formatter)
        logger.addHandler(app_handler)

        error_handler = TimedRotatingFileHandler(
            log_path / "errors.log", when="midnight", backupCount=90, encoding="utf-8", utc=True
        )
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(formatter)
        logger.addHandler(error_handler)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
