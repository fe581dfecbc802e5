"""
Process-wide logging setup.
"""

from __future__ import annotations

import logging

from . import settings

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging() -> None:
    # basicConfig is a no-op when uvicorn (or a test runner) already set handlers.
    logging.basicConfig(level=settings.log_level(), format=LOG_FORMAT)
    logging.getLogger().setLevel(settings.log_level())
