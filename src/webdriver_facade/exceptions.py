class SessionError(Exception):
    """Base class for errors raised by the session manager."""


class NotInitializedError(SessionError):
    """An accessor was used before a session was initialized for the context."""

    def __init__(self, context_id=None):
        self.context_id = context_id
        super().__init__(
            f"No browser session initialized for context {context_id!r}. Call initialize() first."
        )


class UnsupportedBrowserKindError(SessionError, ValueError):
    def __init__(self, browser):
        self.browser = browser
        super().__init__(f"Unsupported browser kind: {browser!r}. Expected one of: chrome, firefox, edge.")


class InvalidEndpointError(SessionError, ValueError):
    def __init__(self, endpoint):
        self.endpoint = endpoint
        super().__init__(f"Remote endpoint is not a valid http(s) URL: {endpoint!r}")


class UnknownEnvironmentError(SessionError, LookupError):
    def __init__(self, name, known=()):
        self.name = name
        self.known = tuple(known)
        super().__init__(
            f"Unknown environment {name!r}. Known environments: {', '.join(self.known) or 'none'}."
        )
