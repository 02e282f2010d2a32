"""
httpdebug
~~~~~~~~~
Print outgoing httpx requests as ``curl`` commands, with secrets redacted.

Public surface
--------------
All public symbols are exposed through the top-level namespace::

    from httpdebug import CurlTransport, with_secret_param

    client = CurlTransport(with_secret_param("api_key")).client()

Sub-module summary
------------------
:mod:`httpdebug.render`
    :func:`render_curl` - request to command string.

:mod:`httpdebug.redaction`
    :class:`RedactionPolicy`, URL sanitizing and quote escaping.

:mod:`httpdebug.transport`
    :class:`CurlTransport`, :class:`AsyncCurlTransport` and their
    construction options.

:mod:`httpdebug.sinks`
    Where rendered commands go (standard error, a logger, any callable).

:mod:`httpdebug.config`
    Environment-driven settings (``HTTPDEBUG_*``).

:mod:`httpdebug.errors`
    Exception hierarchy rooted at :exc:`HttpDebugError`.

:mod:`httpdebug.logging`
    JSON log formatting helpers.
"""

from __future__ import annotations

# --- Configuration ----------------------------------------------------------
from httpdebug.config import (
    Settings,
    async_transport_from_settings,
    transport_from_settings,
)

# --- Exceptions -------------------------------------------------------------
from httpdebug.errors import BodyReadError, ConfigurationError, HttpDebugError

# --- Logging ----------------------------------------------------------------
from httpdebug.logging import JsonFormatter, configure_logging

# --- Redaction --------------------------------------------------------------
from httpdebug.redaction import (
    REDACTED_HEADER,
    REDACTED_PARAM,
    RedactionPolicy,
    escape_single_quote,
    sanitize_url,
)

# --- Rendering --------------------------------------------------------------
from httpdebug.render import CONTINUATION, arender_curl, format_headers, render_curl

# --- Sinks ------------------------------------------------------------------
from httpdebug.sinks import LoggingSink, Sink, StreamSink

# --- Transports -------------------------------------------------------------
from httpdebug.transport import (
    AsyncCurlTransport,
    CurlTransport,
    TransportConfig,
    TransportOption,
    with_secret_header,
    with_secret_param,
    with_transport,
)

__all__: list[str] = [
    # Transports
    "AsyncCurlTransport",
    "CurlTransport",
    "TransportConfig",
    "TransportOption",
    "with_secret_header",
    "with_secret_param",
    "with_transport",
    # Rendering
    "CONTINUATION",
    "arender_curl",
    "format_headers",
    "render_curl",
    # Redaction
    "REDACTED_HEADER",
    "REDACTED_PARAM",
    "RedactionPolicy",
    "escape_single_quote",
    "sanitize_url",
    # Sinks
    "LoggingSink",
    "Sink",
    "StreamSink",
    # Errors
    "BodyReadError",
    "ConfigurationError",
    "HttpDebugError",
    # Configuration
    "Settings",
    "async_transport_from_settings",
    "transport_from_settings",
    # Logging
    "configure_logging",
    "JsonFormatter",
]

__version__: str = "0.1.0"
