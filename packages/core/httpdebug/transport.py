"""
httpdebug.transport
~~~~~~~~~~~~~~~~~~~
httpx transports that print every outgoing request as a ``curl`` command.

:class:`CurlTransport` wraps a delegate :class:`httpx.BaseTransport`.  For
each request it renders the command, hands it to its sink, then forwards
the unchanged request to the delegate and returns whatever the delegate
returns.  Delegate exceptions propagate untouched.  If the body cannot be
read the request is never forwarded and :class:`BodyReadError` is raised.

Usage::

    from httpdebug import CurlTransport, with_secret_header

    transport = CurlTransport(with_secret_header("X-Api-Key"))
    with transport.client(base_url="https://api.example.com") as client:
        client.get("/status")

Auth flows (``httpx.Auth``) run before the transport, so headers they
attach are seen here and redacted like any other.  Transports chain:
a :class:`CurlTransport` may delegate to another one.

:class:`AsyncCurlTransport` is the same thing for :class:`httpx.AsyncClient`.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any

import httpx

from httpdebug.errors import BodyReadError
from httpdebug.redaction import RedactionPolicy, sanitize_url
from httpdebug.render import arender_curl, render_curl
from httpdebug.sinks import Sink, StreamSink

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Construction options
# ---------------------------------------------------------------------------


@dataclass
class TransportConfig:
    """Mutable builder the construction options are applied to, in order."""

    policy: RedactionPolicy = field(default_factory=RedactionPolicy)
    transport: Any = None

    @classmethod
    def build(cls, options: Iterable[TransportOption]) -> TransportConfig:
        config = cls()
        for option in options:
            if not callable(option):
                raise TypeError(f"transport option must be callable, got {option!r}")
            option(config)
        return config


TransportOption = Callable[[TransportConfig], None]


def with_secret_header(name: str) -> TransportOption:
    """Add a header name (case-insensitive) to redact.  Blank names are ignored."""

    def apply(config: TransportConfig) -> None:
        config.policy = config.policy.with_secret_header(name)

    return apply


def with_secret_param(name: str) -> TransportOption:
    """Add a query parameter name (case-insensitive) to redact.  Blank names are ignored."""

    def apply(config: TransportConfig) -> None:
        config.policy = config.policy.with_secret_param(name)

    return apply


def with_transport(transport: httpx.BaseTransport | httpx.AsyncBaseTransport | None) -> TransportOption:
    """Set the delegate transport that performs the actual exchange.

    ``None`` keeps the default (a fresh ``httpx.HTTPTransport`` or
    ``httpx.AsyncHTTPTransport``, owned and closed by the wrapper).
    """

    def apply(config: TransportConfig) -> None:
        config.transport = transport

    return apply


# ---------------------------------------------------------------------------
# Transports
# ---------------------------------------------------------------------------


class _CurlTransportBase:
    _delegate_type: type
    _default_delegate: Callable[[], Any]

    def __init__(self, *options: TransportOption, sink: Sink | None = None) -> None:
        config = TransportConfig.build(options)
        delegate = config.transport
        if delegate is not None and not isinstance(delegate, self._delegate_type):
            raise TypeError(
                f"{type(self).__name__} delegate must be an instance of "
                f"{self._delegate_type.__name__}, got {type(delegate).__name__}"
            )
        self._owns_delegate = delegate is None
        self._delegate = delegate if delegate is not None else self._default_delegate()
        self._policy = config.policy
        self._sink: Sink = sink if sink is not None else StreamSink()

    @property
    def policy(self) -> RedactionPolicy:
        return self._policy

    @property
    def delegate(self) -> Any:
        return self._delegate

    @property
    def sink(self) -> Sink:
        return self._sink

    def _emit(self, request: httpx.Request, command: str) -> None:
        self._sink(command)
        logger.debug(
            "Delegating request",
            extra={
                "method": request.method,
                "url": sanitize_url(request.url, self._policy),
            },
        )

    @staticmethod
    def _log_unreadable(exc: BodyReadError) -> None:
        logger.warning(
            "Request body could not be read; request not sent",
            extra={"method": exc.method, "url": exc.url},
        )


class CurlTransport(_CurlTransportBase, httpx.BaseTransport):
    """Transport that renders each request as ``curl`` before delegating.

    Args:
        *options: :func:`with_secret_header`, :func:`with_secret_param` and
            :func:`with_transport` results, applied left to right.
        sink: Receives each rendered command; defaults to :class:`StreamSink`
            (standard error).
    """

    _delegate_type = httpx.BaseTransport
    _default_delegate = httpx.HTTPTransport

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        try:
            command = render_curl(request, self._policy)
        except BodyReadError as exc:
            self._log_unreadable(exc)
            raise
        self._emit(request, command)
        return self._delegate.handle_request(request)

    def client(self, **kwargs: Any) -> httpx.Client:
        """Return an :class:`httpx.Client` that sends through this transport."""
        return httpx.Client(transport=self, **kwargs)

    def close(self) -> None:
        if self._owns_delegate:
            self._delegate.close()


class AsyncCurlTransport(_CurlTransportBase, httpx.AsyncBaseTransport):
    """Async counterpart of :class:`CurlTransport`.  The sink stays synchronous."""

    _delegate_type = httpx.AsyncBaseTransport
    _default_delegate = httpx.AsyncHTTPTransport

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        try:
            command = await arender_curl(request, self._policy)
        except BodyReadError as exc:
            self._log_unreadable(exc)
            raise
        self._emit(request, command)
        return await self._delegate.handle_async_request(request)

    def client(self, **kwargs: Any) -> httpx.AsyncClient:
        """Return an :class:`httpx.AsyncClient` that sends through this transport."""
        return httpx.AsyncClient(transport=self, **kwargs)

    async def aclose(self) -> None:
        if self._owns_delegate:
            await self._delegate.aclose()
