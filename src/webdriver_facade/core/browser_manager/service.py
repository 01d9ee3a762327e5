import logging
import threading
from typing import Callable, Dict, Hashable, List, Mapping, Optional, Union
from urllib.parse import urlparse

from selenium.common.exceptions import (
    InvalidSessionIdException,
    NoSuchWindowException,
    WebDriverException,
)
from selenium.webdriver.remote.webdriver import WebDriver
from selenium.webdriver.support.ui import WebDriverWait
from urllib3.exceptions import MaxRetryError

from ...data_models import BrowserKind, ExecutionMode, Session, SessionSettings
from ...exceptions import (
    InvalidEndpointError,
    NotInitializedError,
    UnknownEnvironmentError,
)
from ..config_loader import ConfigLoader
from .constants import ALREADY_TERMINATED_MARKERS, set_wdm_ssl_verify
from .options import configure_driver_options
from .registry import BROWSER_REGISTRY, BrowserSpec

logger = logging.getLogger(__name__)

# Targets with these schemes are navigated to verbatim even without a host
HOSTLESS_URL_SCHEMES = ('about', 'data', 'file')


def validate_endpoint(endpoint: str) -> str:
    parsed = urlparse(endpoint or '')
    if parsed.scheme not in ('http', 'https') or not parsed.hostname:
        raise InvalidEndpointError(endpoint)
    try:
        parsed.port
    except ValueError:
        raise InvalidEndpointError(endpoint) from None
    return endpoint


def is_literal_url(target: str) -> bool:
    parsed = urlparse(target)
    if parsed.scheme in HOSTLESS_URL_SCHEMES:
        return True
    return bool(parsed.scheme and parsed.netloc)


def _is_already_terminated(error: Exception) -> bool:
    # MaxRetryError: the driver process or grid node is already unreachable
    if isinstance(error, (InvalidSessionIdException, NoSuchWindowException, ConnectionError, MaxRetryError)):
        return True
    if isinstance(error, WebDriverException):
        message = (error.msg or '').lower()
        return any(marker in message for marker in ALREADY_TERMINATED_MARKERS)
    return False


def current_thread_context() -> Hashable:
    return threading.get_ident()


class BrowserManager:
    """
    Facade that creates, hands out and tears down one Selenium session per execution context.

    Sessions live in a plain dict keyed by context id. Callers pass the id
    explicitly, or let it default to the calling thread. Each context is assumed
    to be driven by a single caller, so no locking is done here.
    """

    def __init__(
        self,
        settings: Optional[SessionSettings] = None,
        config_loader: Optional[ConfigLoader] = None,
        registry: Optional[Mapping[BrowserKind, BrowserSpec]] = None,
        context_resolver: Callable[[], Hashable] = current_thread_context,
    ):
        if settings is None:
            config_loader = config_loader if config_loader else ConfigLoader()
            settings = config_loader.load_session_settings()
        self.settings: SessionSettings = settings
        self.registry: Mapping[BrowserKind, BrowserSpec] = registry if registry is not None else BROWSER_REGISTRY
        self.context_resolver = context_resolver
        self._sessions: Dict[Hashable, Session] = {}

        if self.settings.webdriver_manager_ssl_verify is not None:
            set_wdm_ssl_verify(self.settings.webdriver_manager_ssl_verify)
            logger.info("WebDriver Manager SSL verification set.")

    def _resolve_context(self, context_id: Optional[Hashable]) -> Hashable:
        return self.context_resolver() if context_id is None else context_id

    def _require_session(self, context_id: Optional[Hashable]) -> Session:
        key = self._resolve_context(context_id)
        session = self._sessions.get(key)
        if session is None:
            raise NotInitializedError(key)
        return session

    # -- lifecycle -----------------------------------------------------

    def initialize(
        self,
        browser: Union[BrowserKind, str, None] = None,
        *,
        remote: Optional[bool] = None,
        remote_url: Optional[str] = None,
        headless: Optional[bool] = None,
        implicit_wait: Optional[float] = None,
        explicit_wait: Optional[float] = None,
        context_id: Optional[Hashable] = None,
    ) -> Session:
        """
        Start a session for the context, or return the existing one untouched.

        Every argument left as None falls back to the manager's settings.

        Raises:
            UnsupportedBrowserKindError: browser is not chrome, firefox or edge.
            InvalidEndpointError: remote mode with an endpoint that is not an http(s) URL.
        """
        key = self._resolve_context(context_id)
        existing = self._sessions.get(key)
        if existing is not None:
            logger.debug(f"Session already initialized for context {key!r}; keeping it.")
            return existing

        settings = self.settings
        kind = BrowserKind.parse(browser if browser is not None else settings.browser)
        use_remote = settings.remote if remote is None else remote
        endpoint = remote_url if remote_url is not None else settings.remote_url
        use_headless = settings.headless if headless is None else headless
        implicit = settings.implicit_wait if implicit_wait is None else implicit_wait
        explicit = settings.explicit_wait if explicit_wait is None else explicit_wait

        if use_remote:
            validate_endpoint(endpoint)

        spec = self.registry[kind]
        options = configure_driver_options(
            spec.options_class(),
            kind,
            headless=use_headless,
            remote=use_remote,
            window_size=settings.window_size,
            additional_options=settings.driver_options,
        )

        try:
            if use_remote:
                driver = spec.remote_factory(endpoint, options)
            else:
                driver = spec.local_factory(options, configured_path=getattr(settings, spec.driver_path_setting))
        except Exception as e:
            logger.error(f"Failed to initialize {kind.value} driver: {e}", exc_info=True)
            raise

        try:
            wait = self._configure_driver(driver, implicit, explicit)
        except Exception:
            logger.error(f"Failed to configure {kind.value} driver; shutting it down.", exc_info=True)
            self._terminate(driver)
            raise

        session = Session(
            context_id=key,
            driver=driver,
            wait=wait,
            browser=kind,
            mode=ExecutionMode.REMOTE if use_remote else ExecutionMode.LOCAL,
            headless=use_headless,
            explicit_wait=explicit,
        )
        self._sessions[key] = session
        mode = f"remote ({endpoint})" if use_remote else "local"
        logger.info(f"{kind.value.capitalize()} WebDriver initialized for context {key!r} [{mode}, headless={use_headless}].")
        return session

    def _configure_driver(self, driver: WebDriver, implicit_wait: float, explicit_wait: float) -> WebDriverWait:
        if self.settings.page_load_timeout is not None:
            driver.set_page_load_timeout(self.settings.page_load_timeout)
        dimensions = self.settings.window_dimensions()
        if dimensions:
            driver.set_window_size(*dimensions)
        else:
            driver.maximize_window()
        driver.implicitly_wait(implicit_wait)
        return WebDriverWait(driver, explicit_wait)

    def _terminate(self, driver: WebDriver) -> None:
        try:
            driver.quit()
        except Exception as e:
            if not _is_already_terminated(e):
                raise
            logger.warning(f"Browser was already gone during teardown: {e}")

    def quit(self, context_id: Optional[Hashable] = None) -> None:
        """Close the context's browser and forget its session. No-op when nothing is running."""
        key = self._resolve_context(context_id)
        session = self._sessions.pop(key, None)
        if session is None:
            logger.debug(f"quit() for context {key!r} without an active session; nothing to do.")
            return
        self._terminate(session.driver)
        logger.info(f"WebDriver session closed for context {key!r}.")

    def quit_all(self) -> None:
        errors = []
        for key in list(self._sessions):
            try:
                self.quit(context_id=key)
            except Exception as e:
                logger.error(f"Error closing WebDriver for context {key!r}: {e}", exc_info=True)
                errors.append(e)
        if errors:
            raise errors[0]

    # -- accessors -----------------------------------------------------

    def is_initialized(self, context_id: Optional[Hashable] = None) -> bool:
        return self._resolve_context(context_id) in self._sessions

    def active_contexts(self) -> List[Hashable]:
        return list(self._sessions)

    def get_session(self, context_id: Optional[Hashable] = None) -> Session:
        return self._require_session(context_id)

    def get_driver(self, context_id: Optional[Hashable] = None) -> WebDriver:
        return self._require_session(context_id).driver

    def get_wait(self, context_id: Optional[Hashable] = None) -> WebDriverWait:
        return self._require_session(context_id).wait

    # -- navigation ----------------------------------------------------

    def resolve_target(self, target: str) -> str:
        """Map 'qa' / 'staging' / 'prod' (or any configured name) to its base URL; URLs pass through."""
        if is_literal_url(target):
            return target
        name = target.strip().lower()
        environments = self.settings.environments
        if name not in environments:
            raise UnknownEnvironmentError(target, known=sorted(environments))
        return environments[name]

    def navigate_to(self, target: str, context_id: Optional[Hashable] = None) -> str:
        driver = self.get_driver(context_id)
        url = self.resolve_target(target)
        logger.info(f"Navigating to {url}")
        driver.get(url)
        return url

    def get_page_title(self, context_id: Optional[Hashable] = None) -> str:
        return self.get_driver(context_id).title

    def get_current_url(self, context_id: Optional[Hashable] = None) -> str:
        return self.get_driver(context_id).current_url

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.quit()
