"""Logging configuration."""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
import sys

from app.core.log_filter import SensitiveDataFilter


def setup_logging(
    log_level: str = "INFO", redact: bool = True, log_dir: str | None = "./logs"
) -> None:
    """Configure application logging with stdout and rotating file handlers.

    Args:
        log_level: Root log level name
        redact: Attach the sensitive data filter to every handler
        log_dir: Directory for ``app.log``; ``None`` logs to stdout only
    """
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]

    if log_dir:
        logs_dir = Path(log_dir)
        logs_dir.mkdir(parents=True, exist_ok=True)
        handlers.append(
            RotatingFileHandler(
                logs_dir / "app.log",
                maxBytes=10 * 1024 * 1024,  # 10MB
                backupCount=5,
                encoding="utf-8",
            )
        )

    if redact:
        log_filter = SensitiveDataFilter()
        for handler in handlers:
            handler.addFilter(log_filter)

    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
        force=True,
    )


def get_logger(name: str) -> logging.Logger:
    """Get logger instance for module."""
    return logging.getLogger(name)
