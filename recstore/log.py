"""
Logging helpers.

Library modules log through ``logging.getLogger(__name__)`` under the
``recstore`` namespace and never install handlers themselves. The shell,
or any embedding application, decides where records go.
"""
import logging
import os

from rich.logging import RichHandler

ROOT_LOGGER = "recstore"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"

_file_handler: logging.Handler | None = None


def enable_file_log(path: str | None = None, level: int = logging.INFO) -> logging.Handler:
    """
    Attach a file handler to the recstore logger (only once).

    Defaults to __logs__/recstore.log in the working directory.
    """
    global _file_handler
    if _file_handler is not None:
        return _file_handler

    if path is None:
        os.makedirs("__logs__", exist_ok=True)
        path = os.path.join("__logs__", "recstore.log")

    logger = logging.getLogger(ROOT_LOGGER)
    if logger.level == logging.NOTSET or logger.level > level:
        logger.setLevel(level)
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    _file_handler = handler
    return handler


def disable_file_log() -> None:
    """Detach and close the file handler, if one was attached."""
    global _file_handler
    if _file_handler is None:
        return
    logging.getLogger(ROOT_LOGGER).removeHandler(_file_handler)
    _file_handler.close()
    _file_handler = None


def configure_console_log(verbose: bool = False, console=None) -> logging.Handler:
    """
    Render log records through rich on the given console.

    Only warnings are shown unless verbose is set.
    """
    logger = logging.getLogger(ROOT_LOGGER)
    level = logging.DEBUG if verbose else logging.WARNING
    if logger.level == logging.NOTSET or logger.level > level:
        logger.setLevel(level)
    handler = RichHandler(console=console, show_path=False, markup=False)
    handler.setLevel(level)
    logger.addHandler(handler)
    return handler
