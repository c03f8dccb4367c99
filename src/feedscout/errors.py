"""Custom exceptions for the discovery domain."""

HTML_METHOD_REQUIRES_CONTENT = "The html method requires page content."
HEADERS_METHOD_REQUIRES_HEADERS = "The headers method requires response headers."
GUESS_METHOD_REQUIRES_URL = "The guess method requires a non-empty page URL."
PLATFORM_METHOD_REQUIRES_URL = "The platform method requires a non-empty page URL."


class FeedscoutError(Exception):
    """Base exception for this project."""


class ConfigError(FeedscoutError):
    """Raised when runtime or method configuration is invalid."""


class MethodPreconditionError(ConfigError):
    """Raised when a discovery method is requested without the input it needs."""

    default_message = "Discovery method precondition failed."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class HtmlMethodRequiresContentError(MethodPreconditionError):
    default_message = HTML_METHOD_REQUIRES_CONTENT


class HeadersMethodRequiresHeadersError(MethodPreconditionError):
    default_message = HEADERS_METHOD_REQUIRES_HEADERS


class GuessMethodRequiresUrlError(MethodPreconditionError):
    default_message = GUESS_METHOD_REQUIRES_URL


class PlatformMethodRequiresUrlError(MethodPreconditionError):
    default_message = PLATFORM_METHOD_REQUIRES_URL


class FetchError(FeedscoutError):
    """Raised when fetching a URL fails unexpectedly."""
