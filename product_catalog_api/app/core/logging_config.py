"""
Logging setup for the API process.

Log records go to stderr and, when ``LOG_FILE`` is set, to a file as
well.  In development mode the ``product_catalog_api`` loggers are
lowered to DEBUG so validation failures and handled errors show up in
the console; the root level still follows ``LOG_LEVEL``.
"""

import logging
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
PACKAGE_LOGGER = "product_catalog_api"


def setup_logging(
    level: str = "INFO",
    logfile: Optional[str] = None,
    development: bool = False,
) -> None:
    """Attach console/file handlers to the root logger once.

    Parameters
    ----------
    level : str
        Root logging level name, case insensitive.  Unknown names fall
        back to INFO.
    logfile : Optional[str]
        Extra file to log to.  Its parent directory is created.
    development : bool
        Log this package at DEBUG regardless of ``level``.
    """
    if development:
        logging.getLogger(PACKAGE_LOGGER).setLevel(logging.DEBUG)

    root = logging.getLogger()
    if root.handlers:
        # Configured already: uvicorn, pytest or an earlier create_app().
        return

    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    handlers = [logging.StreamHandler()]
    if logfile:
        log_path = Path(logfile).resolve()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
