# This file makes webdriver_facade.utils a Python package and exposes key utilities.

from .logger import setup_logger
from .selenium_waits import wait_for_any_clickable, wait_for_any_present

__all__ = [
    "setup_logger",
    "wait_for_any_clickable",
    "wait_for_any_present",
]
