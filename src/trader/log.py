"""Logging setup for the trader adapter."""

import logging

from src.trader.config import TraderSettings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(settings: TraderSettings) -> None:
    """
    Configure root logging from trader settings.

    DEBUG is forced when settings.debug is set, which makes retry attempts
    and scan progress visible.
    """
    level = logging.DEBUG if settings.debug else getattr(logging, settings.log_level)
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("src.trader").setLevel(level)
