"""Logging setup shared by the API process."""

import logging
import sys

from cannaconnect.config import LOG_LEVEL

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str | None = None) -> None:
    """
    Configure the root logger with a single stdout handler.

    Safe to call more than once: existing handlers are replaced, not duplicated.
    """
    root = logging.getLogger()
    root.setLevel((level or LOG_LEVEL).upper())
    for h in root.handlers[:]:
        root.removeHandler(h)

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT))
    root.addHandler(console)

    # httpx logs every request at INFO, including the full URL
    logging.getLogger("httpx").setLevel(logging.WARNING)
