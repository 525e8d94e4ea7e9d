"""
Currency Conversion

Defines the currency service contract the adapter consumes and a bundled
rate-table implementation. Rates are stored as ``{from: {to: rate}}`` where
one unit of ``from`` buys ``rate`` units of ``to``.

Rates supplied on the request (``ext.prebid.currency.rates``) win over the
server table; the server table is only consulted as a fallback unless the
request sets ``ext.prebid.currency.usepbsrates`` to false.
"""

from decimal import ROUND_HALF_EVEN, Decimal, InvalidOperation
from typing import Any, Mapping, Optional, Protocol

import requests

from ..exceptions import CurrencyConversionError
from ..logging import currency_logger

DEFAULT_BID_CURRENCY = "USD"
PRICE_PRECISION = Decimal("0.001")

logger = currency_logger()

RateTable = dict[str, dict[str, Decimal]]


class CurrencyConversionService(Protocol):
    """Converts a price between currencies in the context of a bid request."""

    def convert_currency(
        self,
        price: Decimal,
        bid_request: dict[str, Any],
        from_currency: Optional[str],
        to_currency: str,
    ) -> Decimal:
        ...


def normalize_rates(rates: Optional[Mapping[str, Mapping[str, Any]]]) -> RateTable:
    """
    Upper-case currency codes and coerce rates to Decimal.

    Raises:
        CurrencyConversionError: If the table is not an object of objects
            or a rate is not a positive number
    """
    if rates is None:
        return {}
    if not isinstance(rates, Mapping):
        raise CurrencyConversionError("Currency rates must be an object")

    table: RateTable = {}
    for from_currency, targets in rates.items():
        if not isinstance(targets, Mapping):
            raise CurrencyConversionError(
                f"Rates for currency {from_currency} must be an object"
            )
        row = table.setdefault(str(from_currency).upper(), {})
        for to_currency, rate in targets.items():
            try:
                value = Decimal(str(rate))
            except InvalidOperation as e:
                raise CurrencyConversionError(
                    f"Invalid rate {rate!r} for {from_currency}->{to_currency}"
                ) from e
            if not value.is_finite() or value <= 0:
                raise CurrencyConversionError(
                    f"Invalid rate {rate!r} for {from_currency}->{to_currency}"
                )
            row[str(to_currency).upper()] = value
    return table


def find_conversion_rate(
    rates: RateTable, from_currency: str, to_currency: str
) -> Optional[Decimal]:
    """
    Look up the multiplier converting ``from_currency`` into ``to_currency``.

    Tries the direct rate, then the inverse of the reverse rate, then a cross
    rate through any other currency in the table.
    """
    rate = _direct_or_reverse(rates, from_currency, to_currency)
    if rate is not None:
        return rate

    intermediates = set(rates)
    for row in rates.values():
        intermediates.update(row)
    intermediates.discard(from_currency)
    intermediates.discard(to_currency)

    for intermediate in sorted(intermediates):
        first = _direct_or_reverse(rates, from_currency, intermediate)
        if first is None:
            continue
        second = _direct_or_reverse(rates, intermediate, to_currency)
        if second is not None:
            return first * second

    return None


def _direct_or_reverse(
    rates: RateTable, from_currency: str, to_currency: str
) -> Optional[Decimal]:
    direct = rates.get(from_currency, {}).get(to_currency)
    if direct is not None:
        return direct
    reverse = rates.get(to_currency, {}).get(from_currency)
    if reverse is not None:
        return Decimal(1) / reverse
    return None


class RateTableCurrencyConverter:
    """
    Currency service backed by a static server rate table.

    Instances are immutable after construction and safe to share across
    concurrent adapter calls.
    """

    def __init__(
        self,
        rates: Optional[Mapping[str, Mapping[str, Any]]] = None,
        default_currency: str = DEFAULT_BID_CURRENCY,
    ):
        """
        Initialize the converter.

        Args:
            rates: Server rate table
            default_currency: Currency assumed when a price carries none
        """
        self._rates = normalize_rates(rates)
        self.default_currency = default_currency.upper()
        logger.info(
            "Currency rates loaded",
            currencies=len(self._rates),
            default_currency=self.default_currency,
        )

    @property
    def rates(self) -> RateTable:
        """Copy of the server rate table."""
        return {k: dict(v) for k, v in self._rates.items()}

    def convert_currency(
        self,
        price: Decimal,
        bid_request: dict[str, Any],
        from_currency: Optional[str],
        to_currency: str,
    ) -> Decimal:
        """
        Convert a price into ``to_currency``.

        Args:
            price: Amount to convert
            bid_request: Bid request carrying optional request-level rates
            from_currency: Source currency (defaults to USD)
            to_currency: Target currency

        Returns:
            Converted amount rounded to three decimal places

        Raises:
            CurrencyConversionError: If no rate connects the two currencies
        """
        source = (from_currency or self.default_currency).upper()
        target = to_currency.upper()
        amount = price if isinstance(price, Decimal) else Decimal(str(price))

        if source == target:
            return amount

        request_rates, use_server_rates = self._request_rates(bid_request)

        rate = None
        if request_rates:
            rate = find_conversion_rate(request_rates, source, target)
        if rate is None and use_server_rates:
            rate = find_conversion_rate(self._rates, source, target)

        if rate is None:
            raise CurrencyConversionError(
                f"Unable to convert from currency {source} to desired ad server currency {target}"
            )

        return (amount * rate).quantize(PRICE_PRECISION, rounding=ROUND_HALF_EVEN)

    @staticmethod
    def _request_rates(bid_request: dict[str, Any]) -> tuple[RateTable, bool]:
        """Extract request-level rates and the usepbsrates flag."""
        currency: Any = bid_request or {}
        for key in ("ext", "prebid", "currency"):
            currency = currency.get(key) if isinstance(currency, dict) else None
        if not isinstance(currency, dict):
            return {}, True

        use_server_rates = currency.get("usepbsrates")
        if use_server_rates is None:
            use_server_rates = True
        elif not isinstance(use_server_rates, bool):
            raise CurrencyConversionError("Currency usepbsrates flag must be a boolean")

        return normalize_rates(currency.get("rates")), use_server_rates


def load_rates_from_url(url: str, timeout_ms: int = 1000) -> RateTable:
    """
    Fetch a rate table document once.

    The document has the shape ``{"conversions": {"USD": {"EUR": 0.9}}}``.

    Args:
        url: Rates document URL
        timeout_ms: Request timeout in milliseconds

    Returns:
        Normalized rate table

    Raises:
        CurrencyConversionError: If the document cannot be fetched or parsed
    """
    try:
        response = requests.get(url, timeout=timeout_ms / 1000.0)
        response.raise_for_status()
        data = response.json()
    except requests.Timeout as e:
        raise CurrencyConversionError(
            f"Currency rates request timed out after {timeout_ms}ms"
        ) from e
    except (requests.RequestException, ValueError) as e:
        raise CurrencyConversionError(f"Failed to load currency rates: {e}") from e

    if not isinstance(data, dict) or not isinstance(data.get("conversions"), dict):
        raise CurrencyConversionError("Currency rates response has no conversions")

    rates = normalize_rates(data["conversions"])
    logger.info("Fetched currency rates", url=url, currencies=len(rates))
    return rates
