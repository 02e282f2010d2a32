"""
httpdebug.config
~~~~~~~~~~~~~~~~
Environment-driven settings for building transports.

Variables are read with the ``HTTPDEBUG_`` prefix, e.g.::

    HTTPDEBUG_SECRET_HEADERS=X-Api-Key,X-Session
    HTTPDEBUG_SECRET_PARAMS=api_key
    HTTPDEBUG_SINK=logging
    HTTPDEBUG_LOG_LEVEL=INFO
    HTTPDEBUG_LOG_FORMAT=json

With ``LOG_FORMAT=json`` the factories install a JSON handler on the root
logger that scrubs log extras with the transport's redaction policy.
"""

from __future__ import annotations

import logging

from pydantic_settings import BaseSettings, SettingsConfigDict

from httpdebug.errors import ConfigurationError
from httpdebug.logging import configure_logging
from httpdebug.redaction import RedactionPolicy
from httpdebug.sinks import LoggingSink, Sink, StreamSink
from httpdebug.transport import (
    AsyncCurlTransport,
    CurlTransport,
    TransportOption,
    with_secret_header,
    with_secret_param,
)

_SINKS = ("stderr", "logging")
_LOG_FORMATS = ("text", "json")


def _split(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="HTTPDEBUG_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Redaction, comma-separated; added on top of the defaults
    SECRET_HEADERS: str = ""
    SECRET_PARAMS: str = ""

    # Output
    SINK: str = "stderr"
    LOG_LEVEL: str = "DEBUG"
    LOG_FORMAT: str = "text"
    SERVICE_NAME: str = "httpdebug"

    def options(self) -> list[TransportOption]:
        """Translate the secret lists into transport options."""
        return [
            *(with_secret_header(name) for name in _split(self.SECRET_HEADERS)),
            *(with_secret_param(name) for name in _split(self.SECRET_PARAMS)),
        ]

    def build_sink(self) -> Sink:
        sink = self.SINK.strip().lower()
        if sink == "stderr":
            return StreamSink()
        if sink == "logging":
            level = logging.getLevelName(self.LOG_LEVEL.upper())
            if not isinstance(level, int):
                raise ConfigurationError(
                    f"unknown log level '{self.LOG_LEVEL}'", setting="LOG_LEVEL"
                )
            return LoggingSink(level=level)
        raise ConfigurationError(
            f"unknown sink '{self.SINK}' (expected one of {', '.join(_SINKS)})",
            setting="SINK",
        )

    def json_logging(self) -> bool:
        """Return True when ``LOG_FORMAT`` asks for JSON log output."""
        log_format = self.LOG_FORMAT.strip().lower()
        if log_format not in _LOG_FORMATS:
            raise ConfigurationError(
                f"unknown log format '{self.LOG_FORMAT}' "
                f"(expected one of {', '.join(_LOG_FORMATS)})",
                setting="LOG_FORMAT",
            )
        return log_format == "json"

    def install_logging(self, policy: RedactionPolicy) -> None:
        configure_logging(
            level=self.LOG_LEVEL, service_name=self.SERVICE_NAME, policy=policy
        )


def transport_from_settings(
    settings: Settings | None = None, *extra_options: TransportOption
) -> CurlTransport:
    """Build a :class:`CurlTransport` from *settings* (read from the environment
    when omitted).  *extra_options* are applied after the settings-derived ones.
    """
    if settings is None:
        settings = Settings()
    json_logging = settings.json_logging()
    transport = CurlTransport(
        *settings.options(), *extra_options, sink=settings.build_sink()
    )
    if json_logging:
        settings.install_logging(transport.policy)
    return transport


def async_transport_from_settings(
    settings: Settings | None = None, *extra_options: TransportOption
) -> AsyncCurlTransport:
    """Async counterpart of :func:`transport_from_settings`."""
    if settings is None:
        settings = Settings()
    json_logging = settings.json_logging()
    transport = AsyncCurlTransport(
        *settings.options(), *extra_options, sink=settings.build_sink()
    )
    if json_logging:
        settings.install_logging(transport.policy)
    return transport
