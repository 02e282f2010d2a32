"""
httpdebug.errors
~~~~~~~~~~~~~~~~
Custom exception hierarchy for httpdebug.

All httpdebug exceptions inherit from HttpDebugError so callers can catch
the full family with a single ``except HttpDebugError`` clause.  Errors
raised by the delegate transport are never wrapped and do not appear here.
"""

from __future__ import annotations


class HttpDebugError(Exception):
    """Base class for all httpdebug exceptions."""


class BodyReadError(HttpDebugError):
    """Raised when the request body stream cannot be drained for rendering.

    The request is not forwarded to the delegate transport.  The original
    exception is chained as ``__cause__`` and also exposed as ``cause``.

    Attributes:
        method: HTTP method of the request that failed.
        url: Sanitized request URL (secret params already redacted).
        cause: The exception raised by the body stream.
    """

    def __init__(
        self,
        message: str,
        *,
        method: str = "",
        url: str = "",
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.method = method
        self.url = url
        self.cause = cause


class ConfigurationError(HttpDebugError):
    """Raised when environment settings cannot be turned into a transport.

    Attributes:
        setting: Name of the offending setting.
    """

    def __init__(self, message: str, *, setting: str = "") -> None:
        super().__init__(message)
        self.setting = setting
