"""Logging setup for the docbridge command line."""

from __future__ import annotations

import logging

PACKAGE_LOGGER = "docbridge"
QUIET_LOGGERS = ("pymongo", "sqlalchemy.engine")


def configure_logging(
    *,
    level: int = logging.INFO,
    package_level: int | None = None,
    force: bool = False,
) -> None:
    """Configure the root handler and the ``docbridge`` logger.

    ``level`` applies to the root handler. ``package_level`` sets the
    ``docbridge`` logger on its own, so ``--verbose`` can show the writer's
    debug output without the drivers' chatter; it defaults to ``level``.
    Driver loggers never go below WARNING.
    """

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
    if package_level is None:
        package_level = level
    logging.getLogger(PACKAGE_LOGGER).setLevel(package_level)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
