"""Decoding of the ``imp.ext.bidder`` parameters."""

from decimal import Decimal
from typing import Any

from ..exceptions import InvalidImpressionError
from ..models import PartnerExtension


def parse_imp_ext(imp: dict[str, Any]) -> PartnerExtension:
    """
    Project ``imp.ext.bidder`` onto the partner extension shape.

    Missing fields decode to None and are caught by validation. Scalar
    values are read as strings; objects or arrays are rejected.

    Raises:
        InvalidImpressionError: If the extension has the wrong shape
    """
    ext = imp.get("ext")
    if ext is None:
        return PartnerExtension()
    if not isinstance(ext, dict):
        raise InvalidImpressionError(
            f"Cannot deserialize value of type `ExtPrebid` from {_kind(ext)} value (ext)"
        )

    bidder = ext.get("bidder")
    if bidder is None:
        return PartnerExtension()
    if not isinstance(bidder, dict):
        raise InvalidImpressionError(
            f"Cannot deserialize value of type `ExtImpMockBidder` from {_kind(bidder)} value (ext.bidder)"
        )

    return PartnerExtension(
        slot_id=_as_string(bidder.get("sid"), "ext.bidder.sid"),
        partner_name=_as_string(bidder.get("name"), "ext.bidder.name"),
    )


def _as_string(value: Any, path: str) -> str | None:
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float, Decimal)):
        return str(value)
    raise InvalidImpressionError(
        f"Cannot deserialize value of type `String` from {_kind(value)} value ({path})"
    )


def _kind(value: Any) -> str:
    if isinstance(value, dict):
        return "Object"
    if isinstance(value, list):
        return "Array"
    if isinstance(value, str):
        return "String"
    if isinstance(value, bool):
        return "Boolean"
    return "Number"
