"""
JSON codec shared by the adapter and its host.

Fractional numbers are decoded as ``Decimal`` so bid floors and prices keep
their exact value through the adapter, and ``Decimal`` is written back out
as a plain JSON number.
"""

import json
import re
import uuid
from decimal import Decimal
from typing import Any

from .exceptions import DecodeError


def _encode_default(value: Any) -> Any:
    """Fallback encoder for types the json module does not handle."""
    if isinstance(value, (set, frozenset)):
        return sorted(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


class JsonMapper:
    """Encodes and decodes OpenRTB payloads."""

    def encode_to_string(self, value: Any) -> str:
        """
        Encode a value as a compact JSON string.

        Each Decimal is written with its own digits. It is first encoded as a
        per-call placeholder string, which is then swapped for the number text.
        """
        nonce = uuid.uuid4().hex
        numbers: list[str] = []

        def default(obj: Any) -> Any:
            if isinstance(obj, Decimal):
                if not obj.is_finite():
                    raise ValueError(f"Out of range Decimal value is not JSON compliant: {obj}")
                numbers.append(str(obj))
                return f"{nonce}:{len(numbers) - 1}"
            return _encode_default(obj)

        text = json.dumps(value, default=default, separators=(",", ":"))
        if not numbers:
            return text
        return re.sub(
            rf'"{nonce}:(\d+)"', lambda m: numbers[int(m.group(1))], text
        )

    def encode_to_bytes(self, value: Any) -> bytes:
        """Encode a value as UTF-8 JSON bytes."""
        return self.encode_to_string(value).encode("utf-8")

    def decode_value(self, body: str | bytes | None) -> Any:
        """
        Decode a JSON document.

        Args:
            body: Raw JSON text

        Returns:
            The decoded value

        Raises:
            DecodeError: If the body is missing or not valid JSON
        """
        if body is None:
            raise DecodeError("No content to map due to end-of-input")
        try:
            return json.loads(body, parse_float=Decimal)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise DecodeError(str(e)) from e

    def decode_bid_response(self, body: str | bytes | None) -> dict[str, Any] | None:
        """
        Decode an OpenRTB BidResponse and check the parts the adapter reads.

        A literal ``null`` body decodes to None.

        Raises:
            DecodeError: If the body is not JSON or does not have the
                BidResponse shape
        """
        response = self.decode_value(body)
        if response is None:
            return None
        if not isinstance(response, dict):
            raise DecodeError(
                f"Cannot deserialize BidResponse from {_json_type(response)} value"
            )

        seatbids = response.get("seatbid")
        if seatbids is None:
            return response
        if not isinstance(seatbids, list):
            raise DecodeError(
                f"Cannot deserialize BidResponse.seatbid from {_json_type(seatbids)} value"
            )

        for i, seatbid in enumerate(seatbids):
            if seatbid is None:
                continue
            if not isinstance(seatbid, dict):
                raise DecodeError(
                    f"Cannot deserialize BidResponse.seatbid[{i}] from {_json_type(seatbid)} value"
                )
            bids = seatbid.get("bid")
            if bids is None:
                continue
            if not isinstance(bids, list):
                raise DecodeError(
                    f"Cannot deserialize BidResponse.seatbid[{i}].bid from {_json_type(bids)} value"
                )
            for j, bid in enumerate(bids):
                if bid is not None and not isinstance(bid, dict):
                    raise DecodeError(
                        f"Cannot deserialize BidResponse.seatbid[{i}].bid[{j}] "
                        f"from {_json_type(bid)} value"
                    )

        return response


def _json_type(value: Any) -> str:
    """Name a decoded value by its JSON type."""
    if isinstance(value, bool):
        return "Boolean"
    if isinstance(value, (int, float, Decimal)):
        return "Number"
    if isinstance(value, str):
        return "String"
    if isinstance(value, list):
        return "Array"
    if isinstance(value, dict):
        return "Object"
    return type(value).__name__


# Shared codec instance
mapper = JsonMapper()
