# strapi_catalog/config/logging_config.py

"""Logging setup for CLI runs of strapi_catalog.

A run writes everything (DEBUG and up) under the ``strapi_catalog``
namespace to ``logs/run_<timestamp>.log``. Only warnings and errors reach
the terminal unless the caller asks for a chattier console. Request
failures are logged by the client with the URL they hit, so the file is
enough to diagnose a failed page build without re-running it.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path

from strapi_catalog.config.settings import Settings

LOGGER_NAMESPACE = "strapi_catalog"

_FILE_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)s | "
    "%(funcName)s:%(lineno)d | %(message)s"
)
_CONSOLE_FORMAT = "%(levelname)-8s %(name)s: %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _run_log_path(logs_dir: Path) -> Path:
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return logs_dir / f"run_{stamp}.log"


def setup_logging(
    logs_dir: Path | None = None,
    console_level: int = logging.WARNING,
) -> Path:
    """Attach the per-run file handler and the stderr handler.

    The namespace logger is configured once per process; later calls only
    return a fresh path and leave the existing handlers in place.

    Returns:
        The :class:`~pathlib.Path` of this run's log file.
    """
    logs_dir = logs_dir or Settings.LOGS_DIR
    logs_dir.mkdir(parents=True, exist_ok=True)
    log_file = _run_log_path(logs_dir)

    package_logger = logging.getLogger(LOGGER_NAMESPACE)
    package_logger.setLevel(logging.DEBUG)
    if package_logger.handlers:
        return log_file

    to_file = logging.FileHandler(log_file, encoding="utf-8")
    to_file.setLevel(logging.DEBUG)
    to_file.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt=_DATE_FORMAT))

    to_console = logging.StreamHandler(sys.stderr)
    to_console.setLevel(console_level)
    to_console.setFormatter(logging.Formatter(_CONSOLE_FORMAT))

    package_logger.addHandler(to_file)
    package_logger.addHandler(to_console)
    package_logger.debug("Run log: %s", log_file)

    return log_file
