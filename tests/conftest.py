import os
from unittest.mock import MagicMock

import pytest
from selenium.webdriver.remote.webdriver import WebDriver

from webdriver_facade.constants import ENV_PREFIX
from webdriver_facade.core.browser_manager import BROWSER_REGISTRY, BrowserManager
from webdriver_facade.data_models import BrowserKind, SessionSettings


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """SessionSettings reads WEBDRIVER_FACADE_* variables; keep the developer's shell out of the tests."""
    for name in list(os.environ):
        if name.startswith(ENV_PREFIX):
            monkeypatch.delenv(name)


def make_fake_driver(kind: BrowserKind) -> MagicMock:
    driver = MagicMock(spec=WebDriver)
    driver.capabilities = {"browserName": kind.value}
    driver.title = f"{kind.value} test page"
    driver.current_url = "about:blank"
    return driver


@pytest.fixture
def fake_registry():
    """BROWSER_REGISTRY with driver constructors replaced by fakes that never start a browser."""
    registry = {}
    for kind, spec in BROWSER_REGISTRY.items():
        local = MagicMock(name=f"{kind.value}_local_factory",
                          side_effect=lambda options, configured_path=None, _kind=kind: make_fake_driver(_kind))
        remote = MagicMock(name=f"{kind.value}_remote_factory",
                           side_effect=lambda url, options, _kind=kind: make_fake_driver(_kind))
        registry[kind] = spec._replace(local_factory=local, remote_factory=remote)
    return registry


@pytest.fixture
def settings() -> SessionSettings:
    return SessionSettings()


@pytest.fixture
def manager(settings, fake_registry) -> BrowserManager:
    return BrowserManager(settings=settings, registry=fake_registry, context_resolver=lambda: "worker-1")


@pytest.fixture
def make_driver():
    return make_fake_driver
