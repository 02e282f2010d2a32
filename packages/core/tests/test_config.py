"""
Tests for httpdebug.config.

Covers: environment parsing, option translation, sink selection, and the
transport factories.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

import httpx
import pytest

from httpdebug import (
    AsyncCurlTransport,
    ConfigurationError,
    CurlTransport,
    JsonFormatter,
    LoggingSink,
    Settings,
    StreamSink,
    async_transport_from_settings,
    transport_from_settings,
    with_secret_header,
    with_transport,
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "SECRET_HEADERS",
        "SECRET_PARAMS",
        "SINK",
        "LOG_LEVEL",
        "LOG_FORMAT",
        "SERVICE_NAME",
    ):
        monkeypatch.delenv(f"HTTPDEBUG_{name}", raising=False)


class TestSettings:
    def test_defaults(self) -> None:
        settings = Settings()
        assert settings.SECRET_HEADERS == ""
        assert settings.SINK == "stderr"
        assert settings.options() == []

    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HTTPDEBUG_SECRET_PARAMS", "api_key, session")
        monkeypatch.setenv("HTTPDEBUG_SINK", "logging")
        settings = Settings()
        assert settings.SECRET_PARAMS == "api_key, session"
        assert settings.SINK == "logging"

    def test_stderr_sink(self) -> None:
        assert isinstance(Settings(SINK="stderr").build_sink(), StreamSink)

    def test_logging_sink_level(self) -> None:
        sink = Settings(SINK="Logging", LOG_LEVEL="info").build_sink()
        assert isinstance(sink, LoggingSink)
        assert sink.level == logging.INFO

    def test_unknown_sink(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            Settings(SINK="syslog").build_sink()
        assert exc_info.value.setting == "SINK"

    def test_log_format(self) -> None:
        assert Settings().json_logging() is False
        assert Settings(LOG_FORMAT="JSON").json_logging() is True

    def test_unknown_log_format(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            Settings(LOG_FORMAT="xml").json_logging()
        assert exc_info.value.setting == "LOG_FORMAT"

    def test_unknown_log_level(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            Settings(SINK="logging", LOG_LEVEL="chatty").build_sink()
        assert exc_info.value.setting == "LOG_LEVEL"


class TestTransportFromSettings:
    def test_secrets_extend_defaults(self) -> None:
        settings = Settings(SECRET_HEADERS="X-Api-Key, ,X-Session", SECRET_PARAMS="api_key")
        transport = transport_from_settings(settings)

        assert isinstance(transport, CurlTransport)
        assert transport.policy.secret_headers == ("authorization", "X-Api-Key", "X-Session")
        assert transport.policy.secret_params == ("client_secret", "api_key")

    def test_extra_options_applied_last(self) -> None:
        delegate = httpx.MockTransport(lambda request: httpx.Response(200))
        transport = transport_from_settings(
            Settings(SECRET_HEADERS="X-Api-Key"),
            with_secret_header("Cookie"),
            with_transport(delegate),
        )
        assert transport.policy.secret_headers == ("authorization", "X-Api-Key", "Cookie")
        assert transport.delegate is delegate

    def test_reads_environment_when_omitted(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HTTPDEBUG_SECRET_PARAMS", "token")
        transport = transport_from_settings()
        assert transport.policy.secret_params == ("client_secret", "token")

    def test_configured_sink_receives_commands(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.INFO, logger="httpdebug.curl")
        transport = transport_from_settings(
            Settings(SINK="logging", LOG_LEVEL="INFO"),
            with_transport(httpx.MockTransport(lambda request: httpx.Response(204))),
        )
        transport.handle_request(httpx.Request("GET", "/foo"))

        messages = [r.getMessage() for r in caplog.records if r.name == "httpdebug.curl"]
        assert messages == ["curl -X GET \\\n  /foo"]

    def test_async_factory(self) -> None:
        transport = async_transport_from_settings(Settings(SECRET_PARAMS="api_key"))
        assert isinstance(transport, AsyncCurlTransport)
        assert transport.policy.secret_params == ("client_secret", "api_key")


@pytest.fixture
def restore_root_logger() -> Iterator[None]:
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers = handlers
    root.setLevel(level)


class TestJsonLoggingFromSettings:
    def test_text_format_leaves_logging_alone(self, restore_root_logger: None) -> None:
        before = logging.getLogger().handlers[:]
        transport_from_settings(Settings())
        assert logging.getLogger().handlers == before

    def test_json_format_uses_transport_policy(self, restore_root_logger: None) -> None:
        transport = transport_from_settings(
            Settings(LOG_FORMAT="json", LOG_LEVEL="INFO", SERVICE_NAME="svc", SECRET_PARAMS="sig")
        )
        root = logging.getLogger()
        formatter = root.handlers[0].formatter
        assert root.level == logging.INFO
        assert isinstance(formatter, JsonFormatter)
        assert formatter.service_name == "svc"
        assert formatter.policy == transport.policy
        assert formatter.policy.is_secret_param("sig")

    def test_async_factory_json_format(self, restore_root_logger: None) -> None:
        transport = async_transport_from_settings(Settings(LOG_FORMAT="json"))
        assert logging.getLogger().handlers[0].formatter.policy == transport.policy

    def test_unknown_format_rejected_before_building(self) -> None:
        with pytest.raises(ConfigurationError):
            transport_from_settings(Settings(LOG_FORMAT="xml"))
