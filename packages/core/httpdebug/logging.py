"""
httpdebug.logging
~~~~~~~~~~~~~~~~~
JSON log output for rendered commands and transport events.

Each record becomes one JSON object with level, logger, message, service
and timestamp, plus any ``extra={...}`` fields.  Extras pass through the
same :class:`~httpdebug.redaction.RedactionPolicy` the transport uses:

- a field named like a secret header or parameter is replaced by
  ``<REDACTED>``, at any nesting depth;
- a ``url`` field has its secret query values replaced, as in the
  rendered command;
- a ``segments`` field (attached by :class:`~httpdebug.sinks.LoggingSink`)
  keeps the command split at its line continuations, so a multi-line
  ``curl`` command stays readable in a JSON log viewer.

Usage::

    from httpdebug.logging import configure_logging

    configure_logging(level="DEBUG", service_name="billing-sync")
"""

from __future__ import annotations

import json
import logging
import sys
from typing import Any, TextIO

import httpx

from httpdebug.redaction import REDACTED_HEADER, RedactionPolicy, sanitize_url

# Attributes every LogRecord carries; anything else came in through ``extra``.
_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.NOTSET, "", 0, "", None, None))
) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """Format records as single-line JSON, scrubbing extras with *policy*.

    Args:
        service_name: Value of the ``service`` field.
        policy: Names treated as secret; defaults to :class:`RedactionPolicy`.
    """

    def __init__(
        self,
        service_name: str = "httpdebug",
        policy: RedactionPolicy | None = None,
    ) -> None:
        super().__init__()
        self.service_name = service_name
        self.policy = policy if policy is not None else RedactionPolicy()

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "service": self.service_name,
            "timestamp": self.formatTime(record),
        }
        for key, value in vars(record).items():
            if key not in _RECORD_ATTRS:
                payload[key] = self._scrub(key, value)

        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str)

    def _scrub(self, key: str, value: Any) -> Any:
        if key and (self.policy.is_secret_header(key) or self.policy.is_secret_param(key)):
            return REDACTED_HEADER
        if key == "url" and isinstance(value, (str, httpx.URL)):
            return self._sanitize(value)
        if isinstance(value, dict):
            return {k: self._scrub(str(k), v) for k, v in value.items()}
        if isinstance(value, (list, tuple)):
            return [self._scrub("", item) for item in value]
        return value

    def _sanitize(self, url: str | httpx.URL) -> str:
        try:
            return sanitize_url(httpx.URL(url), self.policy)
        except httpx.InvalidURL:
            return str(url)


def configure_logging(
    level: str = "INFO",
    service_name: str = "httpdebug",
    *,
    policy: RedactionPolicy | None = None,
    stream: TextIO | None = None,
) -> None:
    """Install a JSON handler on the root logger.

    Call once at startup.  Output goes to standard error unless *stream* is
    given; pass the transport's ``policy`` so custom secrets are scrubbed
    from log extras too.
    """
    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(JsonFormatter(service_name=service_name, policy=policy))

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.handlers = [handler]
