"""
Bidder assembly.

Wires the adapter to its configuration, JSON codec and currency service,
the way the auction host registers each bidder it knows about.
"""

from dataclasses import dataclass
from typing import Optional

from .bidder import MockBidder
from .config import BIDDER_NAME, BidderConfigurationProperties, MetaInfo
from .config.bidder_config import CurrencyConverterConfig
from .currency import (
    CurrencyConversionService,
    RateTableCurrencyConverter,
    load_rates_from_url,
)
from .json_codec import JsonMapper, mapper as default_mapper
from .logging import config_logger

logger = config_logger()


@dataclass(frozen=True)
class BidderDeps:
    """A configured bidder as registered with the auction host."""

    name: str
    enabled: bool
    meta_info: MetaInfo
    bidder: MockBidder


def create_currency_service(config: CurrencyConverterConfig) -> RateTableCurrencyConverter:
    """
    Build the bundled currency service.

    External rates, when enabled, are fetched once and layered over the
    static table.

    Raises:
        CurrencyConversionError: If external rates cannot be loaded
    """
    rates = {k: dict(v) for k, v in config.rates.items()}
    if config.external_rates_enabled and config.external_rates_url:
        fetched = load_rates_from_url(
            config.external_rates_url, config.external_rates_timeout_ms
        )
        for from_currency, row in fetched.items():
            rates.setdefault(from_currency, {}).update(row)

    return RateTableCurrencyConverter(rates, default_currency=config.default_currency)


def create_bidder_deps(
    config: BidderConfigurationProperties,
    mapper: Optional[JsonMapper] = None,
    currency_service: Optional[CurrencyConversionService] = None,
) -> BidderDeps:
    """
    Assemble the mockbidder adapter.

    Args:
        config: Adapter configuration
        mapper: JSON codec (shared default if not provided)
        currency_service: Currency service (built from config if not provided)

    Returns:
        BidderDeps for the host registry

    Raises:
        InvalidBidderConfigError: If the endpoint URL is invalid
    """
    if currency_service is None:
        currency_service = create_currency_service(config.currency)

    bidder = MockBidder(config.endpoint, mapper or default_mapper, currency_service)
    logger.info(
        "Bidder assembled",
        bidder=BIDDER_NAME,
        enabled=config.enabled,
        endpoint=config.endpoint,
    )
    return BidderDeps(
        name=BIDDER_NAME,
        enabled=config.enabled,
        meta_info=config.meta_info,
        bidder=bidder,
    )
