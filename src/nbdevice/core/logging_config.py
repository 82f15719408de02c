"""Logging configuration for nbdevice."""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from rich.logging import RichHandler

from nbdevice.core.settings import settings


def setup_logging(verbose: bool = False, log_file: str | None = None) -> None:
    """Configure application logging levels.

    Args:
        verbose: If True, show DEBUG logs (request payloads) with timestamps and paths.
                 If False, use the configured level and suppress third-party noise.
        log_file: Optional rotating log file (default: settings.log_file_path, empty disables)
    """
    # Root logger - suppress everything by default
    logging.getLogger().setLevel(logging.WARNING)

    level = logging.DEBUG if verbose else getattr(logging, settings.log_level.upper(), logging.INFO)
    app_logger = logging.getLogger("nbdevice")
    app_logger.setLevel(level)

    # Silence HTTP libraries
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("requests").setLevel(logging.WARNING)

    if not any(isinstance(h, RichHandler) for h in app_logger.handlers):
        handler = RichHandler(
            show_time=verbose,
            show_path=verbose,
            markup=False,
            rich_tracebacks=True,
            tracebacks_show_locals=verbose,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        app_logger.addHandler(handler)
        app_logger.propagate = False  # Don't propagate to root logger

    log_file = log_file if log_file is not None else settings.log_file_path
    if log_file and not any(isinstance(h, RotatingFileHandler) for h in app_logger.handlers):
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=settings.log_file_max_size_mb * 1024 * 1024,
            backupCount=settings.log_file_backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        app_logger.addHandler(file_handler)
