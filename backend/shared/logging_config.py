"""
Logging setup for the Tasker backend.

Modules log through ``logging.getLogger(__name__)``; this only decides
the root format and level once, at application startup.
"""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Configure the root logger. Safe to call more than once."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    logging.getLogger().setLevel(level.upper())
    # httpx logs every request at INFO, including provider URLs with codes
    logging.getLogger("httpx").setLevel(logging.WARNING)
