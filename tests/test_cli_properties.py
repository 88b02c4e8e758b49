"""
Tests for the command-line interface and configuration assembly.
"""

import httpx
import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from synergy_wholesale_exporter import cli
from synergy_wholesale_exporter.api_client import SynergyWholesaleClient
from synergy_wholesale_exporter.cli import (
    API_KEY_ENV,
    RESELLER_ID_ENV,
    build_config,
    create_cache,
    create_parser,
    logging_config,
    main,
)
from synergy_wholesale_exporter.enums import ConfigErrorCode, LogLevel
from synergy_wholesale_exporter.exceptions import ConfigError
from synergy_wholesale_exporter.structured_logger import StructuredLogger


def parse(*argv: str):
    return create_parser().parse_args(list(argv))


class TestDefaults:

    def test_parser_defaults(self) -> None:
        args = parse()

        assert args.address == ":8080"
        assert args.ttl == 3600
        assert args.timeout == 30.0
        assert args.retries == 0
        assert not args.debug
        assert not args.json

    def test_version_flag(self, capsys) -> None:
        with pytest.raises(SystemExit) as exc_info:
            parse("--version")

        assert exc_info.value.code == 0
        assert capsys.readouterr().out.startswith("version: ")


class TestCredentialResolution:
    """Flags win over the environment; missing credentials are fatal."""

    def test_flags_take_precedence(self) -> None:
        args = parse("--reseller-id", "123", "--apikey", "abc")

        config = build_config(args, environ={RESELLER_ID_ENV: "999", API_KEY_ENV: "zzz"})

        assert config.credentials.reseller_id == "123"
        assert config.credentials.api_key == "abc"

    def test_environment_fallback(self) -> None:
        config = build_config(parse(), environ={RESELLER_ID_ENV: "123", API_KEY_ENV: "abc"})

        assert config.credentials.reseller_id == "123"
        assert config.credentials.api_key == "abc"

    @pytest.mark.parametrize("environ, code", [
        ({}, ConfigErrorCode.MISSING_RESELLER_ID),
        ({API_KEY_ENV: "abc"}, ConfigErrorCode.MISSING_RESELLER_ID),
        ({RESELLER_ID_ENV: "123"}, ConfigErrorCode.MISSING_API_KEY),
        ({RESELLER_ID_ENV: "123", API_KEY_ENV: ""}, ConfigErrorCode.MISSING_API_KEY),
    ])
    def test_missing_credentials(self, environ: dict, code: ConfigErrorCode) -> None:
        with pytest.raises(ConfigError) as exc_info:
            build_config(parse(), environ=environ)

        assert exc_info.value.code == code.value

    def test_main_exits_nonzero_without_credentials(self, monkeypatch, tmp_path) -> None:
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv(RESELLER_ID_ENV, raising=False)
        monkeypatch.delenv(API_KEY_ENV, raising=False)

        assert main([]) == 1


class TestConfigValues:

    ENV = {RESELLER_ID_ENV: "123", API_KEY_ENV: "abc"}

    @given(ttl=st.integers(min_value=0, max_value=10**6))
    @settings(max_examples=50)
    def test_ttl_passed_through(self, ttl: int) -> None:
        config = build_config(parse("--ttl", str(ttl)), environ=self.ENV)

        assert config.cache_ttl_seconds == ttl

    def test_negative_ttl_rejected(self) -> None:
        with pytest.raises(ConfigError) as exc_info:
            build_config(parse("--ttl", "-5"), environ=self.ENV)

        assert exc_info.value.code == ConfigErrorCode.INVALID_TTL.value

    def test_invalid_address_rejected(self) -> None:
        with pytest.raises(ConfigError):
            build_config(parse("--address", "localhost"), environ=self.ENV)

    def test_logging_flags(self) -> None:
        args = parse("--debug", "--json")
        config = build_config(args, environ=self.ENV)

        assert config.logging == logging_config(args)
        assert config.logging.level == "debug"
        assert config.logging.output_format == "json"

    def test_retries_and_timeout(self) -> None:
        config = build_config(parse("--retries", "2", "--timeout", "5"), environ=self.ENV)

        assert config.retry.max_retries == 2
        assert config.request_timeout_seconds == 5.0


class TestWiring:

    def test_cache_uses_configured_credentials(self, response_xml: bytes) -> None:
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, content=response_xml)

        config = build_config(
            parse("--ttl", "60"),
            environ={RESELLER_ID_ENV: "123", API_KEY_ENV: "abc"},
        )

        with SynergyWholesaleClient(transport=httpx.MockTransport(handler)) as client:
            cache = create_cache(config, client)
            first = cache.get()
            second = cache.get()

        assert first == second
        assert len(requests) == 1
        assert b"<value>abc</value>" in requests[0].content
        assert cache.ttl_seconds == 60

    def test_main_logs_with_configured_settings(self, monkeypatch, tmp_path) -> None:
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv(RESELLER_ID_ENV, "123")
        monkeypatch.setenv(API_KEY_ENV, "abc")
        served: list[StructuredLogger] = []

        def fake_serve(listen_address, registry, logger=None):
            served.append(logger)
            raise KeyboardInterrupt

        monkeypatch.setattr(cli, "serve", fake_serve)

        assert main(["--debug", "--json", "--address", ":9100"]) == 0

        assert served[0].level == LogLevel.DEBUG
        assert served[0].output_format == "json"
