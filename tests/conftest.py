"""Shared fixtures."""

import logging

import pytest

from paste_cleaner.logger import LOGGER_NAMESPACE


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers installed by setup_logging so later tests start clean."""
    yield
    package_logger = logging.getLogger(LOGGER_NAMESPACE)
    for handler in list(package_logger.handlers):
        handler.close()
        package_logger.removeHandler(handler)
    package_logger.setLevel(logging.NOTSET)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep overrides from the developer's shell out of the tests."""
    for name in ("PASTE_CLEANER_FORMAT", "PASTE_CLEANER_AI_MODEL", "PASTE_CLEANER_API_KEY"):
        monkeypatch.delenv(name, raising=False)
