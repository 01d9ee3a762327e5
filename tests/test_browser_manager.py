import threading

import pytest
from selenium.common.exceptions import InvalidSessionIdException, WebDriverException
from urllib3.exceptions import MaxRetryError

from webdriver_facade import (
    BrowserKind,
    BrowserManager,
    ExecutionMode,
    InvalidEndpointError,
    NotInitializedError,
    SessionSettings,
    UnknownEnvironmentError,
    UnsupportedBrowserKindError,
)


class TestInitialize:
    @pytest.mark.parametrize("kind", list(BrowserKind))
    def test_initialize_each_supported_kind(self, manager, fake_registry, kind):
        session = manager.initialize(kind)

        driver = manager.get_driver()
        assert driver is not None
        assert driver is session.driver
        assert driver.capabilities["browserName"] == kind.value
        assert session.browser is kind
        assert session.mode is ExecutionMode.LOCAL
        fake_registry[kind].local_factory.assert_called_once()

    def test_browser_name_is_case_insensitive(self, manager):
        assert manager.initialize("FireFox").browser is BrowserKind.FIREFOX

    def test_default_browser_comes_from_settings(self, fake_registry):
        manager = BrowserManager(settings=SessionSettings(browser="edge"), registry=fake_registry,
                                 context_resolver=lambda: "ctx")
        assert manager.initialize().browser is BrowserKind.EDGE

    def test_second_initialize_is_a_noop(self, manager, fake_registry):
        first = manager.initialize(BrowserKind.CHROME)
        driver_before = manager.get_driver()

        second = manager.initialize(BrowserKind.FIREFOX)

        assert second is first
        assert manager.get_driver() is driver_before
        fake_registry[BrowserKind.CHROME].local_factory.assert_called_once()
        fake_registry[BrowserKind.FIREFOX].local_factory.assert_not_called()

    def test_driver_is_configured_before_session_is_stored(self, manager):
        session = manager.initialize()

        driver = session.driver
        driver.maximize_window.assert_called_once_with()
        driver.implicitly_wait.assert_called_once_with(10)
        driver.set_page_load_timeout.assert_not_called()
        assert session.explicit_wait == 20
        assert manager.get_wait() is session.wait

    def test_call_arguments_override_settings(self, manager):
        session = manager.initialize("chrome", headless=True, implicit_wait=3, explicit_wait=7)

        session.driver.implicitly_wait.assert_called_once_with(3)
        assert session.explicit_wait == 7
        assert session.headless is True

    def test_window_size_and_page_load_timeout_from_settings(self, fake_registry):
        settings = SessionSettings(window_size="1280,720", page_load_timeout=45)
        manager = BrowserManager(settings=settings, registry=fake_registry, context_resolver=lambda: "ctx")

        driver = manager.initialize().driver

        driver.set_window_size.assert_called_once_with(1280, 720)
        driver.maximize_window.assert_not_called()
        driver.set_page_load_timeout.assert_called_once_with(45)

    def test_headless_options_reach_the_driver_factory(self, manager, fake_registry):
        manager.initialize("chrome", headless=True)

        options = fake_registry[BrowserKind.CHROME].local_factory.call_args.args[0]
        assert "--headless=new" in options.arguments

    def test_configured_driver_path_is_passed_to_local_factory(self, fake_registry):
        settings = SessionSettings(gecko_driver_path="/opt/drivers/geckodriver")
        manager = BrowserManager(settings=settings, registry=fake_registry, context_resolver=lambda: "ctx")

        manager.initialize("firefox")

        call = fake_registry[BrowserKind.FIREFOX].local_factory.call_args
        assert call.kwargs["configured_path"] == "/opt/drivers/geckodriver"

    def test_unsupported_browser_leaves_context_uninitialized(self, manager, fake_registry):
        with pytest.raises(UnsupportedBrowserKindError):
            manager.initialize("safari")

        assert not manager.is_initialized()
        with pytest.raises(NotInitializedError):
            manager.get_driver()

        session = manager.initialize(BrowserKind.CHROME)
        assert session.browser is BrowserKind.CHROME

    def test_factory_failure_stores_nothing(self, manager, fake_registry):
        fake_registry[BrowserKind.CHROME].local_factory.side_effect = WebDriverException("chromedriver crashed")

        with pytest.raises(WebDriverException):
            manager.initialize("chrome")

        assert manager.active_contexts() == []

    def test_configuration_failure_quits_driver_and_stores_nothing(self, manager, fake_registry, make_driver):
        broken = make_driver(BrowserKind.CHROME)
        broken.maximize_window.side_effect = WebDriverException("window manager unavailable")
        fake_registry[BrowserKind.CHROME].local_factory.side_effect = None
        fake_registry[BrowserKind.CHROME].local_factory.return_value = broken

        with pytest.raises(WebDriverException):
            manager.initialize("chrome")

        broken.quit.assert_called_once_with()
        assert not manager.is_initialized()


class TestRemoteMode:
    def test_remote_uses_endpoint_and_remote_factory(self, manager, fake_registry):
        session = manager.initialize("firefox", remote=True, remote_url="http://grid.internal:4444/wd/hub")

        spec = fake_registry[BrowserKind.FIREFOX]
        spec.local_factory.assert_not_called()
        url, options = spec.remote_factory.call_args.args
        assert url == "http://grid.internal:4444/wd/hub"
        assert options.preferences["dom.webnotifications.enabled"] is False
        assert session.mode is ExecutionMode.REMOTE

    def test_remote_defaults_from_settings(self, fake_registry):
        manager = BrowserManager(settings=SessionSettings(remote=True), registry=fake_registry,
                                 context_resolver=lambda: "ctx")

        manager.initialize("chrome")

        url, options = fake_registry[BrowserKind.CHROME].remote_factory.call_args.args
        assert url == "http://localhost:4444/wd/hub"
        assert "--no-sandbox" in options.arguments

    @pytest.mark.parametrize("endpoint", ["not a url", "localhost:4444", "ftp://grid/wd/hub", "http://", "http://grid:port/"])
    def test_invalid_endpoint(self, manager, fake_registry, endpoint):
        with pytest.raises(InvalidEndpointError):
            manager.initialize("chrome", remote=True, remote_url=endpoint)

        fake_registry[BrowserKind.CHROME].remote_factory.assert_not_called()
        assert not manager.is_initialized()

    def test_bad_endpoint_is_ignored_in_local_mode(self, manager):
        session = manager.initialize("chrome", remote=False, remote_url="not a url")
        assert session.mode is ExecutionMode.LOCAL


class TestAccessors:
    def test_accessors_require_initialize(self, manager):
        with pytest.raises(NotInitializedError):
            manager.get_driver()
        with pytest.raises(NotInitializedError):
            manager.get_wait()
        with pytest.raises(NotInitializedError):
            manager.get_page_title()
        with pytest.raises(NotInitializedError):
            manager.get_current_url()
        with pytest.raises(NotInitializedError):
            manager.navigate_to("qa")

    def test_title_and_url_are_delegated(self, manager):
        driver = manager.initialize("edge").driver
        driver.current_url = "https://qa.example.com/login"

        assert manager.get_page_title() == "edge test page"
        assert manager.get_current_url() == "https://qa.example.com/login"

    def test_not_initialized_error_names_the_context(self, manager):
        with pytest.raises(NotInitializedError) as exc_info:
            manager.get_driver()
        assert exc_info.value.context_id == "worker-1"


class TestNavigation:
    def test_symbolic_environment_is_resolved(self, manager):
        driver = manager.initialize().driver

        url = manager.navigate_to("qa")

        assert url == "https://qa.example.com"
        driver.get.assert_called_once_with("https://qa.example.com")

    def test_environment_names_are_case_insensitive(self, manager):
        manager.initialize()
        assert manager.navigate_to(" Staging ") == "https://staging.example.com"

    def test_literal_url_is_used_verbatim(self, manager):
        driver = manager.initialize().driver

        manager.navigate_to("https://example.org/path?q=1")

        driver.get.assert_called_once_with("https://example.org/path?q=1")

    def test_about_blank_is_a_literal_url(self, manager):
        assert manager.resolve_target("about:blank") == "about:blank"

    def test_unknown_environment(self, manager):
        driver = manager.initialize().driver

        with pytest.raises(UnknownEnvironmentError) as exc_info:
            manager.navigate_to("unknown")

        assert exc_info.value.known == ("prod", "qa", "staging")
        driver.get.assert_not_called()

    def test_custom_environment_registry(self, fake_registry):
        settings = SessionSettings(environments={"QA": "https://qa.internal", "dev": "http://localhost:8000"})
        manager = BrowserManager(settings=settings, registry=fake_registry, context_resolver=lambda: "ctx")

        assert manager.resolve_target("dev") == "http://localhost:8000"
        assert manager.resolve_target("qa") == "https://qa.internal"
        with pytest.raises(UnknownEnvironmentError):
            manager.resolve_target("prod")


class TestQuit:
    def test_quit_then_get_driver_fails(self, manager):
        driver = manager.initialize().driver

        manager.quit()

        driver.quit.assert_called_once_with()
        with pytest.raises(NotInitializedError):
            manager.get_driver()
        with pytest.raises(NotInitializedError):
            manager.get_wait()

    def test_quit_without_initialize_is_noop(self, manager):
        manager.quit()
        manager.quit()

    def test_initialize_after_quit_creates_fresh_session(self, manager, fake_registry):
        first = manager.initialize().driver
        manager.quit()

        second = manager.initialize().driver

        assert second is not first
        assert fake_registry[BrowserKind.CHROME].local_factory.call_count == 2

    @pytest.mark.parametrize("error", [
        InvalidSessionIdException("invalid session id"),
        WebDriverException("session deleted because of page crash"),
        ConnectionRefusedError(111, "Connection refused"),
        MaxRetryError(None, "/session/abc/window", reason="Failed to establish a new connection"),
    ])
    def test_quit_tolerates_already_dead_browser(self, manager, error):
        manager.initialize().driver.quit.side_effect = error

        manager.quit()

        assert not manager.is_initialized()

    def test_quit_propagates_unexpected_errors_but_still_evicts(self, manager):
        manager.initialize().driver.quit.side_effect = RuntimeError("boom")

        with pytest.raises(RuntimeError):
            manager.quit()

        assert not manager.is_initialized()

    def test_quit_all(self, manager):
        drivers = [manager.initialize(kind, context_id=kind.value).driver for kind in BrowserKind]

        manager.quit_all()

        assert manager.active_contexts() == []
        for driver in drivers:
            driver.quit.assert_called_once_with()

    def test_context_manager_quits_on_exit(self, manager):
        with manager as bm:
            driver = bm.initialize().driver
        driver.quit.assert_called_once_with()
        assert not manager.is_initialized()


class TestContextIsolation:
    def test_explicit_contexts_do_not_share_sessions(self, manager):
        manager.initialize("chrome", context_id="gw0")
        manager.initialize("firefox", context_id="gw1")

        assert manager.get_driver("gw0").capabilities["browserName"] == "chrome"
        assert manager.get_driver("gw1").capabilities["browserName"] == "firefox"
        assert manager.get_wait("gw0") is not manager.get_wait("gw1")

        manager.quit("gw0")
        assert not manager.is_initialized("gw0")
        assert manager.is_initialized("gw1")

    def test_concurrent_threads_see_only_their_own_session(self, settings, fake_registry):
        manager = BrowserManager(settings=settings, registry=fake_registry)
        barrier = threading.Barrier(2)
        results = {}
        errors = []

        def worker(kind: BrowserKind) -> None:
            try:
                barrier.wait(timeout=5)
                manager.initialize(kind)
                barrier.wait(timeout=5)
                driver = manager.get_driver()
                results[kind] = (driver.capabilities["browserName"], manager.get_wait()._driver is driver)
                barrier.wait(timeout=5)
                manager.quit()
            except Exception as e:  # surfaced through the assertion below
                errors.append(e)

        threads = [threading.Thread(target=worker, args=(kind,)) for kind in (BrowserKind.CHROME, BrowserKind.FIREFOX)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert errors == []
        assert results == {
            BrowserKind.CHROME: ("chrome", True),
            BrowserKind.FIREFOX: ("firefox", True),
        }
        assert manager.active_contexts() == []
