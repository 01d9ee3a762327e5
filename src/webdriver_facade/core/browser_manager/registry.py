from typing import Callable, Dict, NamedTuple, Type

from selenium.webdriver.chrome.options import Options as ChromeOptions
from selenium.webdriver.edge.options import Options as EdgeOptions
from selenium.webdriver.firefox.options import Options as FirefoxOptions
from selenium.webdriver.remote.webdriver import WebDriver

from ...data_models import BrowserKind
from . import drivers


class BrowserSpec(NamedTuple):
    options_class: Type
    local_factory: Callable[..., WebDriver]
    remote_factory: Callable[..., WebDriver]
    # SessionSettings field naming a local driver binary
    driver_path_setting: str


BROWSER_REGISTRY: Dict[BrowserKind, BrowserSpec] = {
    BrowserKind.CHROME: BrowserSpec(ChromeOptions, drivers.init_chrome_driver, drivers.init_remote_driver, 'chrome_driver_path'),
    BrowserKind.FIREFOX: BrowserSpec(FirefoxOptions, drivers.init_firefox_driver, drivers.init_remote_driver, 'gecko_driver_path'),
    BrowserKind.EDGE: BrowserSpec(EdgeOptions, drivers.init_edge_driver, drivers.init_remote_driver, 'edge_driver_path'),
}


def get_browser_spec(browser) -> BrowserSpec:
    return BROWSER_REGISTRY[BrowserKind.parse(browser)]
