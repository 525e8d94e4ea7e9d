"""Bid floor conversion into the exchange currency."""

from decimal import Decimal, InvalidOperation
from typing import Any

from ..currency import CurrencyConversionService
from ..exceptions import InvalidImpressionError
from ..logging import bidder_logger
from ..models import Price
from ..utils import is_valid_price

logger = bidder_logger("mockbidder")


class FloorConverter:
    """
    Brings impression bid floors into a single target currency.

    Floors that are missing, non-positive or already in the target currency
    pass through untouched.
    """

    def __init__(
        self,
        currency_service: CurrencyConversionService,
        target_currency: str,
    ):
        """
        Initialize the converter.

        Args:
            currency_service: Host currency service
            target_currency: Currency the exchange expects floors in
        """
        self.currency_service = currency_service
        self.target_currency = target_currency

    def convert(self, bid_request: dict[str, Any], imp: dict[str, Any]) -> Price:
        """
        Compute the floor to send for an impression.

        Args:
            bid_request: The incoming bid request (context for rates)
            imp: Impression whose floor is converted

        Returns:
            Price in the target currency, or the original floor when no
            conversion applies

        Raises:
            InvalidImpressionError: If the floor is malformed or the
                currency service fails
        """
        bid_floor = _to_decimal(imp.get("bidfloor"))
        bid_floor_currency = imp.get("bidfloorcur")
        if bid_floor_currency is not None and not isinstance(bid_floor_currency, str):
            raise InvalidImpressionError(f"Invalid bid floor currency: {bid_floor_currency!r}")

        if not self.should_convert(bid_floor, bid_floor_currency):
            return Price(bid_floor_currency, bid_floor)

        try:
            converted = self.currency_service.convert_currency(
                bid_floor, bid_request, bid_floor_currency, self.target_currency
            )
        except (ValueError, ArithmeticError) as e:
            raise InvalidImpressionError(str(e)) from e

        logger.debug(
            "Bid floor converted",
            imp_id=imp.get("id"),
            from_currency=bid_floor_currency,
            amount=str(bid_floor),
            converted=str(converted),
        )
        return Price(self.target_currency, converted)

    def should_convert(self, bid_floor: Decimal | None, bid_floor_currency: str | None) -> bool:
        """Conversion applies to valid floors not already in the target currency."""
        if not is_valid_price(bid_floor):
            return False
        if bid_floor_currency is None:
            return True
        return bid_floor_currency.lower() != self.target_currency.lower()


def _to_decimal(value: Any) -> Decimal | None:
    if value is None:
        return None
    if isinstance(value, Decimal):
        floor = value
    elif isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise InvalidImpressionError(f"Invalid bid floor: {value!r}")
    else:
        try:
            floor = Decimal(str(value))
        except InvalidOperation as e:
            raise InvalidImpressionError(f"Invalid bid floor: {value!r}") from e
    if not floor.is_finite():
        raise InvalidImpressionError(f"Invalid bid floor: {value!r}")
    return floor
