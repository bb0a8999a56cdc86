"""
Logging configuration for the CRUD API.

Every module logs through ``logging.getLogger(__name__)``; the records
end up on the root logger, which ``setup_logging`` equips with a
console handler and, optionally, a file handler sharing one format.
The handlers are tagged with ``HANDLER_NAME`` so a second application
in the same process (tests build one per case) only adjusts the level
instead of duplicating output.
"""

import logging
from pathlib import Path
from typing import List, Optional


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
HANDLER_NAME = "crud_api"


def _build_handlers(logfile: Optional[str]) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if logfile:
        handlers.append(logging.FileHandler(Path(logfile).resolve(), encoding="utf-8"))

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in handlers:
        handler.set_name(HANDLER_NAME)
        handler.setFormatter(formatter)
    return handlers


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Configure the root logger.

    ``level`` is a level name, case insensitive; unknown names mean
    ``INFO``.  ``logfile``, when given, receives the same records as
    the console.
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    if any(handler.get_name() == HANDLER_NAME for handler in root.handlers):
        return
    for handler in _build_handlers(logfile):
        root.addHandler(handler)
