"""
Facade over Selenium WebDriver that creates, configures and tears down one
browser session per execution context (thread, pytest-xdist worker, ...).

    from webdriver_facade import BrowserManager

    manager = BrowserManager()
    manager.initialize("firefox", headless=True)
    manager.navigate_to("qa")
    print(manager.get_page_title())
    manager.quit()
"""

from .core import BrowserManager, ConfigLoader
from .data_models import BrowserKind, ExecutionMode, Session, SessionSettings
from .exceptions import (
    InvalidEndpointError,
    NotInitializedError,
    SessionError,
    UnknownEnvironmentError,
    UnsupportedBrowserKindError,
)

__version__ = "0.1.0"

__all__ = [
    "BrowserManager",
    "ConfigLoader",
    "BrowserKind",
    "ExecutionMode",
    "Session",
    "SessionSettings",
    "SessionError",
    "NotInitializedError",
    "UnsupportedBrowserKindError",
    "InvalidEndpointError",
    "UnknownEnvironmentError",
]
