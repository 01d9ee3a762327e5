from typing import Dict

DEFAULT_BROWSER = "chrome"
DEFAULT_REMOTE_URL = "http://localhost:4444/wd/hub"
DEFAULT_IMPLICIT_WAIT_SECONDS = 10
DEFAULT_EXPLICIT_WAIT_SECONDS = 20

# Base URLs for the symbolic targets accepted by BrowserManager.navigate_to
DEFAULT_ENVIRONMENTS: Dict[str, str] = {
    "qa": "https://qa.example.com",
    "staging": "https://staging.example.com",
    "prod": "https://www.example.com",
}

# Environment variables override the 'browser_settings' block of settings.json.
# Each SessionSettings field is read from ENV_PREFIX + FIELD_NAME, e.g. WEBDRIVER_FACADE_BROWSER.
ENV_PREFIX = "WEBDRIVER_FACADE_"
ENV_SETTINGS_FILE = "WEBDRIVER_FACADE_SETTINGS_FILE"
