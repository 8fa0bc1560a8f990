from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest

from docbridge.config import configure_logging

if TYPE_CHECKING:
    from collections.abc import Iterator

_LOGGERS = ("", "docbridge", "pymongo", "sqlalchemy.engine")


@pytest.fixture(autouse=True)
def restore_loggers() -> Iterator[None]:
    root = logging.getLogger()
    handlers = list(root.handlers)
    levels = {name: logging.getLogger(name).level for name in _LOGGERS}
    try:
        yield
    finally:
        for handler in root.handlers:
            if handler not in handlers:
                root.removeHandler(handler)
        for handler in handlers:
            if handler not in root.handlers:
                root.addHandler(handler)
        for name, level in levels.items():
            logging.getLogger(name).setLevel(level)


def test_package_logger_follows_root_level_by_default() -> None:
    configure_logging(level=logging.WARNING, force=True)

    assert logging.getLogger().level == logging.WARNING
    assert logging.getLogger("docbridge").level == logging.WARNING


def test_package_level_is_independent_of_root_level() -> None:
    configure_logging(level=logging.INFO, package_level=logging.DEBUG, force=True)

    assert logging.getLogger().level == logging.INFO
    assert logging.getLogger("docbridge").getEffectiveLevel() == logging.DEBUG
    assert logging.getLogger("docbridge.domain.item_writer").isEnabledFor(logging.DEBUG)
    assert not logging.getLogger("other").isEnabledFor(logging.DEBUG)


def test_driver_loggers_stay_at_warning() -> None:
    configure_logging(level=logging.DEBUG, force=True)

    assert logging.getLogger("pymongo").level == logging.WARNING
    assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
    assert logging.getLogger("docbridge").level == logging.DEBUG
