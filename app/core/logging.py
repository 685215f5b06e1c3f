"""Logging setup."""

import logging

from app.config import settings

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s:%(funcName)s:%(lineno)d - %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Configure root logging once for the portal process."""
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    # httpx logs every request at INFO; keep it quieter than our own loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
