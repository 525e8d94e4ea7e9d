"""Tests for adapter configuration loading and bidder assembly."""

from unittest.mock import MagicMock, patch

import pytest

from src.mockbidder.bidder import MockBidder
from src.mockbidder.config import (
    BidderConfigurationProperties,
    load_bidder_config,
    merge_configs,
)
from src.mockbidder.config.bidder_config import CurrencyConverterConfig
from src.mockbidder.currency import RateTableCurrencyConverter
from src.mockbidder.exceptions import InvalidBidderConfigError
from src.mockbidder.factory import create_bidder_deps, create_currency_service


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep deployment variables out of the tests."""
    for name in ("MOCKBIDDER_CONFIG", "MOCKBIDDER_ENDPOINT", "MOCKBIDDER_ENABLED"):
        monkeypatch.delenv(name, raising=False)


class TestLoadBidderConfig:
    """Test YAML configuration loading."""

    def test_packaged_defaults(self):
        config = load_bidder_config()

        assert config.enabled is False
        assert config.endpoint == "http://localhost:8080/mockbidder"
        assert config.meta_info.site_media_types == ["banner", "video"]
        assert config.meta_info.vendor_id == 0
        assert config.currency.default_currency == "USD"
        assert config.currency.external_rates_enabled is False

    def test_file_overrides_defaults(self, tmp_path):
        path = tmp_path / "deploy.yaml"
        path.write_text(
            "adapters:\n"
            "  mockbidder:\n"
            "    enabled: true\n"
            "    endpoint: https://exchange.example.com\n"
            "currency-converter:\n"
            "  rates:\n"
            "    USD:\n"
            "      EUR: 0.92\n"
        )

        config = load_bidder_config(path)

        assert config.enabled is True
        assert config.endpoint == "https://exchange.example.com"
        assert config.meta_info.maintainer_email == "prebid@example.com"
        assert config.currency.rates == {"USD": {"EUR": 0.92}}

    def test_config_path_from_env(self, tmp_path, monkeypatch):
        path = tmp_path / "deploy.yaml"
        path.write_text("adapters:\n  mockbidder:\n    endpoint: https://env-file.example.com\n")
        monkeypatch.setenv("MOCKBIDDER_CONFIG", str(path))

        assert load_bidder_config().endpoint == "https://env-file.example.com"

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("MOCKBIDDER_ENDPOINT", "https://override.example.com")
        monkeypatch.setenv("MOCKBIDDER_ENABLED", "true")

        config = load_bidder_config()

        assert config.endpoint == "https://override.example.com"
        assert config.enabled is True

    def test_missing_file(self, tmp_path):
        with pytest.raises(InvalidBidderConfigError, match="Cannot read config file"):
            load_bidder_config(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("adapters: [unclosed\n")

        with pytest.raises(InvalidBidderConfigError, match="YAML error"):
            load_bidder_config(path)

    def test_non_mapping_document(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(InvalidBidderConfigError, match="must contain a mapping"):
            load_bidder_config(path)

    def test_merge_configs_is_deep(self):
        base = {"a": {"b": 1, "c": 2}, "d": 3}
        override = {"a": {"c": 20}, "e": 5}

        assert merge_configs(base, override) == {"a": {"b": 1, "c": 20}, "d": 3, "e": 5}
        assert base == {"a": {"b": 1, "c": 2}, "d": 3}


class TestCreateBidderDeps:
    """Test bidder assembly."""

    def test_assembles_bidder(self):
        config = BidderConfigurationProperties(enabled=True, endpoint="https://x.test")
        currency_service = MagicMock()

        deps = create_bidder_deps(config, currency_service=currency_service)

        assert deps.name == "mockbidder"
        assert deps.enabled is True
        assert isinstance(deps.bidder, MockBidder)
        assert deps.bidder.endpoint_url == "https://x.test"
        assert deps.bidder.floor_converter.currency_service is currency_service

    def test_invalid_endpoint_fails_assembly(self):
        config = BidderConfigurationProperties(endpoint="not a url")

        with pytest.raises(InvalidBidderConfigError):
            create_bidder_deps(config, currency_service=MagicMock())

    def test_builds_currency_service_from_config(self):
        config = BidderConfigurationProperties(
            endpoint="https://x.test",
            currency=CurrencyConverterConfig(rates={"USD": {"EUR": 0.9}}),
        )

        deps = create_bidder_deps(config)

        service = deps.bidder.floor_converter.currency_service
        assert isinstance(service, RateTableCurrencyConverter)

    @patch("src.mockbidder.factory.load_rates_from_url")
    def test_external_rates_layered_over_static(self, mock_load):
        mock_load.return_value = {"USD": {"GBP": 0.8}}
        config = CurrencyConverterConfig(
            rates={"USD": {"EUR": 0.9}},
            external_rates_enabled=True,
            external_rates_url="https://rates.example.com/latest.json",
            external_rates_timeout_ms=250,
        )

        service = create_currency_service(config)

        mock_load.assert_called_once_with("https://rates.example.com/latest.json", 250)
        assert set(service.rates["USD"]) == {"EUR", "GBP"}
