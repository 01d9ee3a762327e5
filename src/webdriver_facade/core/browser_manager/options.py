import logging
from typing import Optional, Union

from selenium.webdriver.chrome.options import Options as ChromeOptions
from selenium.webdriver.edge.options import Options as EdgeOptions
from selenium.webdriver.firefox.options import Options as FirefoxOptions

from ...data_models import BrowserKind
from .registry import get_browser_spec

logger = logging.getLogger(__name__)

BrowserOptions = Union[ChromeOptions, FirefoxOptions, EdgeOptions]

# Chromium prefs: no notification prompts, no password manager / credential service
CHROMIUM_PREFS = {
    "credentials_enable_service": False,
    "profile.password_manager_enabled": False,
    "profile.default_content_setting_values.notifications": 2,
}

FIREFOX_PREFS = {
    "dom.webnotifications.enabled": False,
    "dom.push.enabled": False,
    "signon.rememberSignons": False,
}


def _configure_chromium(options: Union[ChromeOptions, EdgeOptions], *, headless: bool, remote: bool) -> None:
    options.add_experimental_option("prefs", dict(CHROMIUM_PREFS))
    options.add_argument("--disable-notifications")
    options.add_argument("--ignore-certificate-errors")
    if headless:
        options.add_argument("--headless=new")
        options.add_argument("--disable-gpu")
    if remote:
        # Grid nodes usually run in containers with a small /dev/shm
        options.add_argument("--no-sandbox")
        options.add_argument("--disable-dev-shm-usage")


def _configure_firefox(options: FirefoxOptions, *, headless: bool, remote: bool) -> None:
    for name, value in FIREFOX_PREFS.items():
        options.set_preference(name, value)
    if headless:
        options.add_argument("-headless")


def configure_driver_options(
    options: BrowserOptions,
    browser: BrowserKind,
    *,
    headless: bool,
    remote: bool = False,
    window_size: Optional[str] = None,
    additional_options: Optional[list] = None,
) -> BrowserOptions:
    """Populate a fresh Selenium options object for the given browser kind."""
    if browser == BrowserKind.FIREFOX:
        _configure_firefox(options, headless=headless, remote=remote)
    else:
        _configure_chromium(options, headless=headless, remote=remote)

    options.accept_insecure_certs = True

    if window_size:
        width, height = window_size.split(',')
        if browser == BrowserKind.FIREFOX:
            options.add_argument(f"--width={width}")
            options.add_argument(f"--height={height}")
        else:
            options.add_argument(f"--window-size={width},{height}")

    if isinstance(additional_options, list):
        for opt in additional_options:
            if isinstance(opt, str):
                options.add_argument(opt)
            else:
                logger.warning(f"Ignoring non-string driver option: {opt}")
    elif additional_options is not None:
        logger.warning(f"'driver_options' in config is not a list: {additional_options}")

    return options


def build_options(
    browser: Union[BrowserKind, str],
    *,
    headless: bool,
    remote: bool = False,
    window_size: Optional[str] = None,
    additional_options: Optional[list] = None,
) -> BrowserOptions:
    """
    Build a fully populated options object for a browser kind.

    Pure: nothing is launched, so the result can be inspected in tests.
    Raises UnsupportedBrowserKindError for kinds outside chrome/firefox/edge.
    """
    kind = BrowserKind.parse(browser)
    spec = get_browser_spec(kind)
    return configure_driver_options(
        spec.options_class(),
        kind,
        headless=headless,
        remote=remote,
        window_size=window_size,
        additional_options=additional_options,
    )
