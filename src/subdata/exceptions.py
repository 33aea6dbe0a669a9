"""Exception classes for the Subsonic data layer."""

from typing import Any, Optional


class SubsonicError(Exception):
    """Base exception for all errors raised by subdata."""

    pass


class SubsonicApiError(SubsonicError):
    """The server reported a failure in the response envelope.

    Attributes:
        code: Subsonic error code
        message: Error message from server
    """

    def __init__(self, code: int, message: str):
        """Initialize Subsonic API error.

        Args:
            code: Subsonic error code (0, 10, 20, 30, 40, 41, 42, 43, 44, 50, 60, 70)
            message: Human-readable error message
        """
        self.code = code
        self.message = message
        super().__init__(f"Subsonic Error {code}: {message}")


class SubsonicAuthenticationError(SubsonicApiError):
    """Authentication failed (error codes 40, 41)."""

    pass


class TokenAuthenticationNotSupportedError(SubsonicApiError):
    """Token authentication not supported (code 42)."""

    pass


class ClientVersionTooOldError(SubsonicApiError):
    """Client must upgrade (code 43)."""

    pass


class ServerVersionTooOldError(SubsonicApiError):
    """Server must upgrade (code 44)."""

    pass


class SubsonicAuthorizationError(SubsonicApiError):
    """User not authorized for requested action (error code 50)."""

    pass


class SubsonicNotFoundError(SubsonicApiError):
    """Requested resource not found (error code 70).

    Raised when an artist, album, song or other entity looked up by
    identity does not exist on the server.
    """

    pass


class SubsonicVersionError(SubsonicApiError):
    """API version incompatibility (error codes 20, 30)."""

    pass


class SubsonicParameterError(SubsonicApiError):
    """Required parameter missing (error code 10)."""

    pass


class SubsonicTrialError(SubsonicApiError):
    """Trial period expired (error code 60)."""

    pass


class UnrecognizedResponseError(SubsonicError):
    """An "ok" envelope carried none of the known payload fields.

    Usually means the server speaks a newer API revision than this
    library understands.
    """

    def __init__(self, version: Optional[str] = None):
        self.version = version
        super().__init__(
            f"Response (API version {version or 'unknown'}) contains no known payload"
        )


class MalformedFieldError(SubsonicError):
    """A wire field could not be coerced to its declared type.

    Attributes:
        field: Wire name of the offending field
        raw: The value as sent by the server, rendered as text
    """

    def __init__(self, field: str, raw: Any):
        self.field = field
        self.raw = raw if isinstance(raw, str) else str(raw)
        super().__init__(f"Malformed field {field!r}: {self.raw!r}")


class SubsonicTransportError(SubsonicError):
    """The transport failed before a response envelope was available.

    The underlying httpx exception is chained as ``__cause__``.
    """

    pass


_ERROR_CLASSES = {
    10: SubsonicParameterError,
    20: SubsonicVersionError,
    30: SubsonicVersionError,
    40: SubsonicAuthenticationError,
    41: SubsonicAuthenticationError,
    42: TokenAuthenticationNotSupportedError,
    43: ClientVersionTooOldError,
    44: ServerVersionTooOldError,
    50: SubsonicAuthorizationError,
    60: SubsonicTrialError,
    70: SubsonicNotFoundError,
}


def api_error(code: int, message: str) -> SubsonicApiError:
    """Build the most specific API exception for a server error code.

    Args:
        code: Subsonic error code from the envelope
        message: Error message from the envelope

    Returns:
        SubsonicApiError subclass instance (not raised)

    Examples:
        >>> type(api_error(70, "Requested resource not found")).__name__
        'SubsonicNotFoundError'
        >>> type(api_error(99, "?")).__name__
        'SubsonicApiError'
    """
    return _ERROR_CLASSES.get(code, SubsonicApiError)(code, message)
