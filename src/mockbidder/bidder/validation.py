"""Structural checks on impressions and their bidder parameters."""

from typing import Any

from ..exceptions import InvalidImpressionError
from ..models import PartnerExtension


def is_blank(value: str | None) -> bool:
    """True for None, empty or whitespace-only strings."""
    return value is None or not value.strip()


def validate_imp(imp: dict[str, Any]) -> None:
    """
    Reject impressions the exchange cannot serve.

    Raises:
        InvalidImpressionError: If the impression has neither banner nor video
    """
    if imp.get("banner") is None and imp.get("video") is None:
        raise InvalidImpressionError("Expected banner or video impression")


def validate_imp_ext(imp_ext: PartnerExtension) -> None:
    """
    Require both bidder parameters.

    Raises:
        InvalidImpressionError: If the slot id or partner name is blank
    """
    if is_blank(imp_ext.slot_id):
        raise InvalidImpressionError("Custom param slot id (sid) is empty")
    if is_blank(imp_ext.partner_name):
        raise InvalidImpressionError("Custom param partner name (name) is empty")
