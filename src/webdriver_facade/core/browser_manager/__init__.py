"""
Browser manager package.

Public API:
- BrowserManager: Facade to configure, create, hand out and close one Selenium WebDriver per execution context.
- build_options: Pure construction of the per-browser Selenium options object.
- BROWSER_REGISTRY: Browser kind -> options class and driver constructors.
"""

from .options import build_options
from .registry import BROWSER_REGISTRY, BrowserSpec
from .service import BrowserManager

__all__ = ["BrowserManager", "build_options", "BROWSER_REGISTRY", "BrowserSpec"]
