"""
Logging setup for the Water Reports API.

Everything, uvicorn's server and access logs included, goes through the
root logger so that a single ``LOG_FILE`` captures the whole request
story: the access line from uvicorn and the service-level ``Created
report 7`` or ``Deleted user 3`` messages that follow it.
"""

import logging
from pathlib import Path

from .config import Settings


LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s | %(message)s"

CONSOLE_HANDLER = "water_reports_api.console"
FILE_HANDLER = "water_reports_api.file"

# Loggers that uvicorn configures with handlers of its own.
SERVER_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def resolve_level(config: Settings) -> int:
    """``DEBUG=true`` wins over ``LOG_LEVEL``; unknown names mean INFO."""
    if config.debug:
        return logging.DEBUG
    return getattr(logging, config.log_level.upper(), logging.INFO)


def setup_logging(config: Settings) -> logging.Logger:
    """Configure the root logger from ``config`` and return it.

    Safe to call once per ``create_app``: our handlers are attached
    only the first time, while the level and the routing of the server
    loggers are refreshed on every call.  Handlers installed by others
    (a test runner, an embedding application) are left alone.
    """
    root = logging.getLogger()
    root.setLevel(resolve_level(config))

    for name in SERVER_LOGGERS:
        server_logger = logging.getLogger(name)
        server_logger.handlers.clear()
        server_logger.propagate = True

    if any(handler.get_name() == CONSOLE_HANDLER for handler in root.handlers):
        return root

    formatter = logging.Formatter(LOG_FORMAT)
    console = logging.StreamHandler()
    console.set_name(CONSOLE_HANDLER)
    handlers = [console]
    if config.log_file:
        logfile = logging.FileHandler(Path(config.log_file).resolve(), encoding="utf-8")
        logfile.set_name(FILE_HANDLER)
        handlers.append(logfile)
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
    return root
