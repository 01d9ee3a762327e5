from typing import Iterable, Optional, Tuple

from selenium.common.exceptions import TimeoutException
from selenium.webdriver.remote.webelement import WebElement
from selenium.webdriver.support import expected_conditions as EC
from selenium.webdriver.support.ui import WebDriverWait

Locator = Tuple[str, str]


def wait_for_any_present(wait: WebDriverWait, locators: Iterable[Locator]) -> Optional[WebElement]:
    """
    Waits, using the session's explicit-wait policy, for the first present element among the locators.
    Each locator gets the full policy timeout. Returns None if none is found.
    """
    for by, value in locators:
        try:
            return wait.until(EC.presence_of_element_located((by, value)))
        except TimeoutException:
            continue
    return None


def wait_for_any_clickable(wait: WebDriverWait, locators: Iterable[Locator]) -> Optional[WebElement]:
    """
    Waits, using the session's explicit-wait policy, for the first clickable element among the locators.
    Returns None if none becomes clickable.
    """
    for by, value in locators:
        try:
            return wait.until(EC.element_to_be_clickable((by, value)))
        except TimeoutException:
            continue
    return None
