"""
httpdebug.render
~~~~~~~~~~~~~~~~
Render an :class:`httpx.Request` as an equivalent ``curl`` command.

The output is a debug aid meant to be pasted into a terminal, e.g.::

    curl -X POST \\
      https://api.example.com/v1/login?client_secret=REDACTED \\
      -H 'Authorization: <REDACTED>' \\
      -H 'Content-Type: application/json' \\
      -d '{"login":"l\\'a"}'

Segments appear in a fixed order: method, sanitized URL, header flags
sorted by their rendered text, and at most one ``-d`` flag.  Rendering the
same request twice gives the same string.

The body stream is drained to build the ``-d`` flag.  ``Request.read()``
caches the bytes and swaps a streaming body for an :class:`httpx.ByteStream`
holding the same content, so the delegate transport still sends exactly
what the caller built.  When draining fails nothing is re-attached.
"""

from __future__ import annotations

import httpx

from httpdebug.errors import BodyReadError
from httpdebug.redaction import (
    REDACTED_HEADER,
    RedactionPolicy,
    escape_single_quote,
    sanitize_url,
)

# Joins command segments: shell line continuation plus a two-space indent.
CONTINUATION = " \\\n  "


def render_curl(request: httpx.Request, policy: RedactionPolicy | None = None) -> str:
    """Render *request* as a ``curl`` command, applying *policy*.

    Args:
        request: The outgoing request.  Its body stream is drained and
            replaced with a replayable copy of the same bytes.
        policy: Redaction policy; defaults to :class:`RedactionPolicy`.

    Returns:
        The command, segments joined by :data:`CONTINUATION`.

    Raises:
        BodyReadError: The body stream raised while being read.
    """
    if policy is None:
        policy = RedactionPolicy()
    try:
        content = request.read()
    except Exception as exc:
        raise _body_read_error(request, policy, exc) from exc
    return _assemble(request, policy, content)


async def arender_curl(
    request: httpx.Request, policy: RedactionPolicy | None = None
) -> str:
    """Async counterpart of :func:`render_curl` for async body streams."""
    if policy is None:
        policy = RedactionPolicy()
    try:
        content = await request.aread()
    except Exception as exc:
        raise _body_read_error(request, policy, exc) from exc
    return _assemble(request, policy, content)


def format_headers(headers: httpx.Headers, policy: RedactionPolicy) -> list[str]:
    """Return one sorted ``-H '<Key>: <value>'`` flag per distinct header key.

    Keys are matched case-insensitively, as httpx does, and shown with the
    spelling they were first set with.  Repeated keys are merged with their
    values joined by ``", "`` in original order.
    """
    spelling: dict[str, str] = {}
    grouped: dict[str, list[str]] = {}
    for raw_key, raw_value in headers.raw:
        key = raw_key.decode(headers.encoding)
        shown = spelling.setdefault(key.lower(), key)
        grouped.setdefault(shown, []).append(raw_value.decode(headers.encoding))

    flags = []
    for key, values in grouped.items():
        if policy.is_secret_header(key):
            value = REDACTED_HEADER
        else:
            value = escape_single_quote(", ".join(values))
        flags.append(f"-H '{escape_single_quote(key)}: {value}'")
    return sorted(flags)


def _assemble(request: httpx.Request, policy: RedactionPolicy, content: bytes) -> str:
    lines = [
        f"curl -X {request.method}",
        sanitize_url(request.url, policy),
    ]
    lines.extend(format_headers(request.headers, policy))
    if content:
        body = content.decode("utf-8", errors="replace")
        lines.append(f"-d '{escape_single_quote(body)}'")
    return CONTINUATION.join(lines)


def _body_read_error(
    request: httpx.Request, policy: RedactionPolicy, exc: Exception
) -> BodyReadError:
    url = sanitize_url(request.url, policy)
    return BodyReadError(
        f"failed to read request body for {request.method} {url}: {exc}",
        method=request.method,
        url=url,
        cause=exc,
    )
