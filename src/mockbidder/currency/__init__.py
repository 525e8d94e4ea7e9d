"""Currency conversion for bid floors."""

from .conversion_service import (
    DEFAULT_BID_CURRENCY,
    CurrencyConversionService,
    RateTableCurrencyConverter,
    find_conversion_rate,
    load_rates_from_url,
    normalize_rates,
)

__all__ = [
    "DEFAULT_BID_CURRENCY",
    "CurrencyConversionService",
    "RateTableCurrencyConverter",
    "find_conversion_rate",
    "load_rates_from_url",
    "normalize_rates",
]
