"""Pytest configuration and fixtures."""

import io
import logging

import pytest

from ccut import catalog as catalog_module
from ccut.catalog import TestCatalog
from ccut.reporting.console import ConsoleReporter
from ccut.styling import Palette


@pytest.fixture(autouse=True)
def cleanup_loggers():
    """Clean up ccut loggers after each test to prevent name collisions."""
    yield

    loggers_to_remove = [
        name
        for name in logging.Logger.manager.loggerDict.keys()
        if name.startswith("ccut")
    ]

    for name in loggers_to_remove:
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            handler.close()
        logger.handlers.clear()
        del logging.Logger.manager.loggerDict[name]


@pytest.fixture(autouse=True)
def fresh_default_catalog(monkeypatch):
    """Give every test its own process-wide catalog."""
    fresh = TestCatalog()
    monkeypatch.setattr(catalog_module, "default_catalog", fresh)
    return fresh


@pytest.fixture
def catalog():
    return TestCatalog()


@pytest.fixture
def stream():
    return io.StringIO()


@pytest.fixture
def plain_reporter(stream):
    """Reporter writing uncoloured text to an in-memory stream."""
    return ConsoleReporter(stream, Palette(enabled=False))
