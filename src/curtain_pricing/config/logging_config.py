"""
Logging setup shared by the API and the scripts.
"""
import logging
from typing import Optional

LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def configure_logging(level: Optional[str] = None) -> None:
    """Send package logs to the console at the configured level."""
    if level is None:
        from .settings import get_settings
        level = get_settings().log_level

    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
    )


def log_error(logger: logging.Logger, msg: str, exc: Optional[Exception] = None) -> None:
    """Log an error with the traceback of exc when one is given."""
    if exc:
        logger.error(f"{msg}: {exc}", exc_info=True)
    else:
        logger.error(msg)
