"""
pytest fixtures backed by BrowserManager.

Needs pytest installed (``pip install webdriver-facade[pytest]``). Enable from a conftest.py:

    pytest_plugins = ["webdriver_facade.pytest_plugin"]

Each pytest-xdist worker gets its own context, so parallel workers never
share a browser. Override the ``browser_registry`` fixture to swap driver
constructors, e.g. for a custom grid client.
"""

import os
from contextlib import contextmanager
from typing import Iterator, Mapping, Optional

import pytest
from selenium.webdriver.remote.webdriver import WebDriver

from .core.browser_manager import BROWSER_REGISTRY, BrowserManager, BrowserSpec
from .core.config_loader import ConfigLoader
from .data_models import BrowserKind


def worker_context_id() -> str:
    return os.environ.get("PYTEST_XDIST_WORKER", "main")


@contextmanager
def managed_browser_manager(registry: Mapping[BrowserKind, BrowserSpec] = BROWSER_REGISTRY,
                            config_loader: Optional[ConfigLoader] = None) -> Iterator[BrowserManager]:
    """A BrowserManager keyed by worker that quits every remaining session on exit."""
    manager = BrowserManager(config_loader=config_loader or ConfigLoader(), registry=registry,
                             context_resolver=worker_context_id)
    try:
        yield manager
    finally:
        manager.quit_all()


@contextmanager
def managed_driver(manager: BrowserManager) -> Iterator[WebDriver]:
    manager.initialize()
    try:
        yield manager.get_driver()
    finally:
        manager.quit()


@pytest.fixture(scope="session")
def browser_registry():
    return BROWSER_REGISTRY


@pytest.fixture(scope="session")
def browser_manager(browser_registry):
    with managed_browser_manager(browser_registry) as manager:
        yield manager


@pytest.fixture
def driver(browser_manager):
    with managed_driver(browser_manager) as session_driver:
        yield session_driver


@pytest.fixture
def wait(browser_manager, driver):
    return browser_manager.get_wait()
