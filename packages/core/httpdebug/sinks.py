"""
httpdebug.sinks
~~~~~~~~~~~~~~~
Destinations for rendered ``curl`` commands.

A sink is any callable accepting one string.  Transports receive their
sink at construction time; there is no process-wide sink to patch.  Sinks
are expected not to fail.
"""

from __future__ import annotations

import logging
import sys
from typing import Protocol, TextIO, runtime_checkable

from httpdebug.render import CONTINUATION

COMMAND_LOGGER_NAME = "httpdebug.curl"


@runtime_checkable
class Sink(Protocol):
    """Callable that receives one rendered command."""

    def __call__(self, command: str) -> None: ...


class StreamSink:
    """Write each command plus a newline to a text stream.

    With no stream given, ``sys.stderr`` is looked up on every call so
    that redirection done after construction is honoured.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    def __call__(self, command: str) -> None:
        stream = self._stream if self._stream is not None else sys.stderr
        stream.write(command + "\n")
        stream.flush()


class LoggingSink:
    """Route commands through a stdlib logger.

    The record carries the command split at its line continuations as the
    ``segments`` extra, which :class:`~httpdebug.logging.JsonFormatter`
    emits as a JSON list.

    Args:
        logger: Target logger; defaults to ``logging.getLogger("httpdebug.curl")``.
        level: Level to log at (``logging.DEBUG`` by default).
    """

    def __init__(
        self,
        logger: logging.Logger | None = None,
        level: int = logging.DEBUG,
    ) -> None:
        self.logger = logger or logging.getLogger(COMMAND_LOGGER_NAME)
        self.level = level

    def __call__(self, command: str) -> None:
        self.logger.log(
            self.level, command, extra={"segments": command.split(CONTINUATION)}
        )
