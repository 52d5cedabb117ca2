"""
Tests for configuration loading and logging setup.
"""

import json
import logging

import pytest

from quotegateway.core.config import (
    DEFAULT_BASE_URL,
    GatewayConfig,
    SourceSettings,
    load_config,
)
from quotegateway.logging_config import (
    HumanFormatter,
    StructuredFormatter,
    get_log_level,
    set_log_level,
    setup_logging,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in (
        "ALPHA_VANTAGE_API_KEY",
        "NEXT_PUBLIC_ALPHA_VANTAGE_API_KEY",
        "QUOTEGATEWAY_BASE_URL",
        "QUOTEGATEWAY_TIMEOUT",
        "QUOTEGATEWAY_RETRY_COUNT",
        "QUOTEGATEWAY_LOG_LEVEL",
    ):
        monkeypatch.delenv(var, raising=False)


class TestSourceSettings:
    """Tests for API key resolution."""

    def test_defaults_to_demo_key(self):
        assert SourceSettings().resolve_api_key() == "demo"

    def test_reads_key_from_environment(self, monkeypatch):
        monkeypatch.setenv("ALPHA_VANTAGE_API_KEY", "env-key")

        assert SourceSettings().resolve_api_key() == "env-key"

    def test_reads_public_key_variable(self, monkeypatch):
        monkeypatch.setenv("NEXT_PUBLIC_ALPHA_VANTAGE_API_KEY", "public-key")

        assert SourceSettings().resolve_api_key() == "public-key"

    def test_explicit_key_wins(self, monkeypatch):
        monkeypatch.setenv("ALPHA_VANTAGE_API_KEY", "env-key")

        assert SourceSettings(api_key="literal").resolve_api_key() == "literal"

    @pytest.mark.parametrize("reference", ["${MY_AV_KEY}", "$MY_AV_KEY"])
    def test_environment_reference(self, monkeypatch, reference):
        monkeypatch.setenv("MY_AV_KEY", "referenced")

        assert SourceSettings(api_key=reference).resolve_api_key() == "referenced"

    def test_unset_reference_falls_back_to_demo(self):
        assert SourceSettings(api_key="${UNSET_AV_KEY_FOR_TEST}").resolve_api_key() == "demo"


class TestLoadConfig:
    """Tests for load_config."""

    def test_defaults_without_file(self):
        config = load_config()

        assert config.source.base_url == DEFAULT_BASE_URL
        assert config.source.timeout == 30.0
        assert config.source.history_limit == 100
        assert config.logging.level == "INFO"

    def test_missing_file_uses_defaults(self, tmp_path):
        config = load_config(tmp_path / "absent.yaml")

        assert config.source.retry_count == 2

    def test_yaml_file(self, tmp_path):
        path = tmp_path / "gateway.yaml"
        path.write_text(
            "source:\n"
            "  api_key: ${AV_KEY}\n"
            "  timeout: 10\n"
            "  requests_per_minute: 5\n"
            "logging:\n"
            "  level: DEBUG\n",
            encoding="utf-8",
        )

        config = load_config(path)

        assert config.source.api_key == "${AV_KEY}"
        assert config.source.timeout == 10.0
        assert config.source.requests_per_minute == 5
        assert config.logging.level == "DEBUG"

    def test_json_file(self, tmp_path):
        path = tmp_path / "gateway.json"
        path.write_text(json.dumps({"source": {"history_limit": 50}}), encoding="utf-8")

        assert load_config(path).source.history_limit == 50

    def test_environment_overrides(self, tmp_path, monkeypatch):
        path = tmp_path / "gateway.yaml"
        path.write_text("source:\n  timeout: 10\n", encoding="utf-8")
        monkeypatch.setenv("QUOTEGATEWAY_TIMEOUT", "2.5")
        monkeypatch.setenv("QUOTEGATEWAY_RETRY_COUNT", "0")
        monkeypatch.setenv("QUOTEGATEWAY_BASE_URL", "http://localhost:8080/query")
        monkeypatch.setenv("QUOTEGATEWAY_LOG_LEVEL", "warning")

        config = load_config(path)

        assert config.source.timeout == 2.5
        assert config.source.retry_count == 0
        assert config.source.base_url == "http://localhost:8080/query"
        assert config.logging.level == "warning"

    def test_to_dict_omits_api_key(self):
        data = GatewayConfig(source=SourceSettings(api_key="secret")).to_dict()

        assert "api_key" not in data["source"]
        assert data["source"]["base_url"] == DEFAULT_BASE_URL


class TestLoggingSetup:
    """Tests for logging_config."""

    @pytest.fixture(autouse=True)
    def restore_logger(self):
        package_logger = logging.getLogger("quotegateway")
        handlers, level = package_logger.handlers[:], package_logger.level
        previous = get_log_level()
        yield
        set_log_level(previous)
        package_logger.handlers = handlers
        package_logger.setLevel(level)

    def test_setup_installs_single_console_handler(self):
        setup_logging("debug")
        setup_logging("debug")

        package_logger = logging.getLogger("quotegateway")
        assert len(package_logger.handlers) == 1
        assert package_logger.level == logging.DEBUG
        assert get_log_level() == "DEBUG"

    def test_structured_setup(self):
        setup_logging("info", structured=True)

        handler = logging.getLogger("quotegateway").handlers[0]
        assert isinstance(handler.formatter, StructuredFormatter)

    def test_set_log_level(self):
        setup_logging("info")
        set_log_level("error")

        package_logger = logging.getLogger("quotegateway")
        assert package_logger.level == logging.ERROR
        assert package_logger.handlers[0].level == logging.ERROR

    def test_structured_formatter_includes_error_details(self):
        record = logging.LogRecord("quotegateway.test", logging.WARNING, __file__, 1, "fell back", None, None)
        record.error_details = {"status_code": 503}

        data = json.loads(StructuredFormatter().format(record))

        assert data["message"] == "fell back"
        assert data["level"] == "WARNING"
        assert data["error_details"] == {"status_code": 503}

    def test_human_formatter_without_color(self):
        record = logging.LogRecord("quotegateway.test", logging.INFO, __file__, 1, "hello", None, None)

        line = HumanFormatter(use_color=False).format(record)

        assert "INFO" in line
        assert "hello" in line
        assert "\033[" not in line
