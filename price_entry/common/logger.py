"""Package-wide logger configured once on import."""
import logging
import os
import sys


LOG_LEVEL_ENV: str = "PRICE_ENTRY_LOG_LEVEL"


def _build_logger(name: str = "price_entry") -> logging.Logger:
    """
    Create the package logger with a single stdout handler.

    The level is read from the ``PRICE_ENTRY_LOG_LEVEL`` environment variable
    (default ``INFO``). Unknown level names fall back to ``INFO``.

    :param str name: Logger name

    :return: Configured logger
    :rtype: logging.Logger
    """
    log = logging.getLogger(name)
    if log.handlers:
        # Already configured (module re-imported in a worker process)
        return log

    level_name = os.environ.get(LOG_LEVEL_ENV, "INFO").upper().strip()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.INFO
    log.setLevel(level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    log.addHandler(handler)
    log.propagate = False
    return log


logger: logging.Logger = _build_logger()
