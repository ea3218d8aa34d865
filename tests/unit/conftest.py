"""Shared fixtures for unit tests."""

import logging

import pytest

from buffet_core.core import config as config_module
from buffet_core.utils.rich_logging import ROOT_LOGGER_NAME


@pytest.fixture(autouse=True)
def reset_active_config():
    """Every test starts from the pt_BR/BRL defaults with an empty file cache."""
    config_module.set_config(None)
    config_module._config_cache.clear()
    yield
    config_module.set_config(None)
    config_module._config_cache.clear()


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers installed by setup_logging (e.g. by CLI runs)."""
    yield
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in logger.handlers[:]:
        handler.close()
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
