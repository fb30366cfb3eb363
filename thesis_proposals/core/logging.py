"""Structured logging configuration.

Every module logs through ``logging.getLogger(__name__)`` with snake_case
event names and an ``extra`` dict of ids; this module only installs the
handler. The level comes from ``settings.LOG_LEVEL`` unless overridden.
"""

from __future__ import annotations

import logging
import sys

from thesis_proposals.core.config import settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def setup_logging(level: str | None = None) -> None:
    """Install a single stdout handler on the root logger.

    Calling it again replaces the handler instead of stacking a new one.
    """
    name = (level or settings.LOG_LEVEL).upper()
    log_level = getattr(logging, name, logging.INFO)

    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S%z"))

    root = logging.getLogger()
    root.setLevel(log_level)
    root.handlers.clear()
    root.addHandler(handler)

    # The webhook sink would log every request otherwise
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
