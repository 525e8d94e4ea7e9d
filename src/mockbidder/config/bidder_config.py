"""
Bidder Configuration

Loads the adapter settings from YAML. The packaged ``mockbidder.yaml``
provides defaults; a deployment file and environment variables override it.

Environment:
    MOCKBIDDER_CONFIG: Path to a deployment YAML file
    MOCKBIDDER_ENDPOINT: Exchange base URL
    MOCKBIDDER_ENABLED: "true"/"false"
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from ..exceptions import InvalidBidderConfigError
from ..logging import config_logger

DEFAULT_CONFIG_PATH = Path(__file__).parent / "mockbidder.yaml"
BIDDER_NAME = "mockbidder"

logger = config_logger()


@dataclass
class MetaInfo:
    """Bidder metadata advertised to the auction host."""

    maintainer_email: str = ""
    app_media_types: list[str] = field(default_factory=list)
    site_media_types: list[str] = field(default_factory=list)
    supported_vendors: list[str] = field(default_factory=list)
    vendor_id: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MetaInfo":
        """Create from dictionary."""
        return cls(
            maintainer_email=data.get("maintainer-email", ""),
            app_media_types=list(data.get("app-media-types") or []),
            site_media_types=list(data.get("site-media-types") or []),
            supported_vendors=list(data.get("supported-vendors") or []),
            vendor_id=int(data.get("vendor-id") or 0),
        )


@dataclass
class CurrencyConverterConfig:
    """
    Server currency rates.

    Attributes:
        default_currency: Currency assumed for prices that carry none
        rates: Static rate table ``{from: {to: rate}}``
        external_rates_enabled: Fetch the table from ``external_rates_url``
        external_rates_url: Rates document URL
        external_rates_timeout_ms: Fetch timeout in milliseconds
    """

    default_currency: str = "USD"
    rates: dict[str, dict[str, Any]] = field(default_factory=dict)
    external_rates_enabled: bool = False
    external_rates_url: str = ""
    external_rates_timeout_ms: int = 1000

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CurrencyConverterConfig":
        """Create from dictionary."""
        external = data.get("external-rates") or {}
        return cls(
            default_currency=data.get("default-currency", "USD"),
            rates=dict(data.get("rates") or {}),
            external_rates_enabled=bool(external.get("enabled", False)),
            external_rates_url=external.get("url") or "",
            external_rates_timeout_ms=int(external.get("timeout-ms", 1000)),
        )


@dataclass
class BidderConfigurationProperties:
    """Settings for the mockbidder adapter."""

    enabled: bool = False
    endpoint: str = ""
    meta_info: MetaInfo = field(default_factory=MetaInfo)
    currency: CurrencyConverterConfig = field(default_factory=CurrencyConverterConfig)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BidderConfigurationProperties":
        """Create from a parsed configuration document."""
        adapter = (data.get("adapters") or {}).get(BIDDER_NAME) or {}
        return cls(
            enabled=bool(adapter.get("enabled", False)),
            endpoint=adapter.get("endpoint") or "",
            meta_info=MetaInfo.from_dict(adapter.get("meta-info") or {}),
            currency=CurrencyConverterConfig.from_dict(
                data.get("currency-converter") or {}
            ),
        )


def load_bidder_config(path: str | Path | None = None) -> BidderConfigurationProperties:
    """
    Load adapter settings.

    Args:
        path: Deployment YAML file layered over the packaged defaults
            (falls back to $MOCKBIDDER_CONFIG)

    Returns:
        Effective configuration

    Raises:
        InvalidBidderConfigError: If a file is missing or not valid YAML
    """
    data = _read_yaml(DEFAULT_CONFIG_PATH)

    path = path or os.getenv("MOCKBIDDER_CONFIG")
    if path:
        data = merge_configs(data, _read_yaml(Path(path)))
        logger.info("Loaded bidder configuration", path=str(path))

    config = BidderConfigurationProperties.from_dict(data)

    endpoint = os.getenv("MOCKBIDDER_ENDPOINT")
    if endpoint:
        config.endpoint = endpoint
    enabled = os.getenv("MOCKBIDDER_ENABLED")
    if enabled is not None:
        config.enabled = enabled.strip().lower() in ("1", "true", "yes", "on")

    return config


def merge_configs(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep-merge two configuration documents; override wins on leaves."""
    result = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = value
    return result


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise InvalidBidderConfigError(f"Cannot read config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise InvalidBidderConfigError(f"YAML error in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidBidderConfigError(f"Config file {path} must contain a mapping")
    return data
