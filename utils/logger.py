"""Logging configuration for the ``sleepmonitor`` logger tree."""
import logging
from pathlib import Path
from rich.logging import RichHandler

FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(log_config=None, verbose=False):
    """Attach a rich console handler, plus a file handler when ``log_config["file"]`` is set.

    ``log_config`` is the ``logging`` section of the loaded config. ``verbose``
    forces DEBUG. Safe to call more than once; handlers are only added the
    first time, later calls just adjust the level.
    """
    log_config = log_config or {}
    level = "DEBUG" if verbose else str(log_config.get("level") or "INFO")
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    root = logging.getLogger("sleepmonitor")
    root.setLevel(numeric_level)

    if not root.handlers:
        root.addHandler(RichHandler(rich_tracebacks=True, markup=False, show_path=verbose))

        log_file = log_config.get("file")
        if log_file:
            Path(log_file).parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_file)
            file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
            root.addHandler(file_handler)

    for handler in root.handlers:
        handler.setLevel(numeric_level)

    return root
