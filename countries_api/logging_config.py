# countries_api/logging_config.py
"""
Logging for the countries service.

The store logs each write at DEBUG and the router logs one INFO line per
request (``GET /countries/greece -> 200``).  ``main`` calls
``setup_logging`` with the ``--log-level`` / ``--log-file`` settings before
the app starts serving.
"""

import logging
from pathlib import Path
from typing import List, Optional

FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATEFMT = "%Y-%m-%d %H:%M:%S"


def _handlers(logfile: Optional[str]) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if logfile:
        path = Path(logfile)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(path, encoding="utf-8"))
    return handlers


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Send countries_api records to stderr and, with ``logfile``, to a file.

    A root logger that already has handlers is left alone, so a second
    ``main`` in the same process (or pytest's capture handler) wins.
    Unknown level names mean ``INFO``.
    """
    root = logging.getLogger()
    if root.handlers:
        return

    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    formatter = logging.Formatter(fmt=FORMAT, datefmt=DATEFMT)
    for handler in _handlers(logfile):
        handler.setFormatter(formatter)
        root.addHandler(handler)
