"""Adapter configuration loading."""

from .bidder_config import (
    BIDDER_NAME,
    DEFAULT_CONFIG_PATH,
    BidderConfigurationProperties,
    CurrencyConverterConfig,
    MetaInfo,
    load_bidder_config,
    merge_configs,
)

__all__ = [
    "BIDDER_NAME",
    "DEFAULT_CONFIG_PATH",
    "BidderConfigurationProperties",
    "CurrencyConverterConfig",
    "MetaInfo",
    "load_bidder_config",
    "merge_configs",
]
