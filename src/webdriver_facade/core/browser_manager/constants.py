import os

# Executables looked up on PATH before falling back to webdriver_manager
CHROME_DRIVER_BINARY = "chromedriver"
GECKO_DRIVER_BINARY = "geckodriver"
EDGE_DRIVER_BINARY = "msedgedriver"

# Environment variable key used by webdriver_manager to control SSL verification
WDM_SSL_VERIFY_ENV = "WDM_SSL_VERIFY"

# Errors from driver.quit() that mean the browser or driver process is already gone
ALREADY_TERMINATED_MARKERS = ("invalid session id", "no such window", "session deleted")


def set_wdm_ssl_verify(enabled: bool) -> None:
    os.environ[WDM_SSL_VERIFY_ENV] = '1' if enabled else '0'
