from enum import Enum
from typing import Dict, Hashable, List, Optional, Tuple, Type, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict
from selenium.webdriver.remote.webdriver import WebDriver
from selenium.webdriver.support.ui import WebDriverWait

from .constants import (
    DEFAULT_BROWSER,
    DEFAULT_ENVIRONMENTS,
    DEFAULT_EXPLICIT_WAIT_SECONDS,
    DEFAULT_IMPLICIT_WAIT_SECONDS,
    DEFAULT_REMOTE_URL,
    ENV_PREFIX,
)
from .exceptions import UnsupportedBrowserKindError


class BrowserKind(str, Enum):
    CHROME = "chrome"
    FIREFOX = "firefox"
    EDGE = "edge"

    @classmethod
    def parse(cls, value: Union["BrowserKind", str]) -> "BrowserKind":
        """Return the kind for an enum member or a case-insensitive name."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise UnsupportedBrowserKindError(value)


class ExecutionMode(str, Enum):
    LOCAL = "local"
    REMOTE = "remote"


class SessionSettings(BaseSettings):
    """
    Configuration for BrowserManager, built once at startup.

    Keyword arguments carry the 'browser_settings' block of settings.json; a
    WEBDRIVER_FACADE_<FIELD> environment variable wins over them. Empty variables are ignored.
    """

    model_config = SettingsConfigDict(env_prefix=ENV_PREFIX, env_ignore_empty=True, extra="ignore")

    browser: str = Field(DEFAULT_BROWSER, description="Default browser kind: 'chrome', 'firefox' or 'edge'.")
    remote_url: str = Field(DEFAULT_REMOTE_URL, description="Remote grid endpoint used when remote is enabled.")
    remote: bool = Field(False, description="Run against the remote grid instead of a local driver binary.")
    headless: bool = False
    implicit_wait: float = Field(DEFAULT_IMPLICIT_WAIT_SECONDS, ge=0, description="Implicit wait in seconds.")
    explicit_wait: float = Field(DEFAULT_EXPLICIT_WAIT_SECONDS, ge=0, description="Timeout of the explicit-wait policy in seconds.")
    page_load_timeout: Optional[float] = Field(None, ge=0, description="Page load timeout in seconds. Driver default when None.")
    window_size: Optional[str] = Field(None, description="'width,height'. The window is maximized when None.")
    driver_options: List[str] = Field(default_factory=list, description="Extra command line arguments passed to the browser.")

    chrome_driver_path: Optional[str] = None
    gecko_driver_path: Optional[str] = None
    edge_driver_path: Optional[str] = None
    webdriver_manager_ssl_verify: Optional[bool] = None

    environments: Dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_ENVIRONMENTS),
        description="Symbolic environment name -> base URL, consulted by navigate_to.",
    )

    @field_validator('window_size')
    @classmethod
    def _check_window_size(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        parts = [p.strip() for p in value.lower().replace('x', ',').split(',')]
        if len(parts) != 2 or not all(p.isdigit() for p in parts):
            raise ValueError(f"window_size must look like '1920,1080', got {value!r}")
        return ','.join(parts)

    @field_validator('environments')
    @classmethod
    def _normalize_environment_names(cls, value: Dict[str, str]) -> Dict[str, str]:
        return {name.strip().lower(): url for name, url in value.items()}

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        # First source wins: environment over file values
        return env_settings, init_settings

    @property
    def mode(self) -> ExecutionMode:
        return ExecutionMode.REMOTE if self.remote else ExecutionMode.LOCAL

    def window_dimensions(self) -> Optional[Tuple[int, int]]:
        if not self.window_size:
            return None
        width, height = self.window_size.split(',')
        return int(width), int(height)


class Session(BaseModel):
    """A live, fully configured browser session owned by one execution context."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    context_id: Hashable
    driver: WebDriver
    wait: WebDriverWait
    browser: BrowserKind
    mode: ExecutionMode
    headless: bool = False
    explicit_wait: float = 0
