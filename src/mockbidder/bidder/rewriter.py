"""Impression rewriting for the exchange."""

from typing import Any

from ..models import PartnerExtension, Price


def modify_imp(
    imp: dict[str, Any], imp_ext: PartnerExtension, price: Price
) -> dict[str, Any]:
    """
    Return a copy of the impression carrying the exchange floor and slot id.

    Only ``bidfloor``, ``bidfloorcur`` and ``tagid`` change; every other field
    is shared with the source impression. A None value removes the field,
    matching how absent OpenRTB fields are serialized.
    """
    modified = dict(imp)
    _set_or_remove(modified, "bidfloorcur", price.currency)
    _set_or_remove(modified, "bidfloor", price.value)
    _set_or_remove(modified, "tagid", imp_ext.slot_id)
    return modified


def _set_or_remove(obj: dict[str, Any], key: str, value: Any) -> None:
    if value is None:
        obj.pop(key, None)
    else:
        obj[key] = value
