"""
Adapter Data Models

Value objects exchanged between the mockbidder adapter and the auction host:
the decoded impression extension, bid floor prices, outbound HTTP request
descriptors, typed bids and per-call results.

OpenRTB objects themselves (BidRequest, Imp, BidResponse, Bid) stay plain
JSON dictionaries.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class BidType(str, Enum):
    """Media type reported for a bid."""

    BANNER = "banner"
    VIDEO = "video"


class BidderErrorType(str, Enum):
    """Error kinds surfaced to the auction host."""

    GENERIC = "generic"
    BAD_INPUT = "bad_input"  # Problem with a single impression
    BAD_SERVER_RESPONSE = "bad_server_response"  # Exchange sent garbage
    TIMEOUT = "timeout"


@dataclass(frozen=True)
class BidderError:
    """An error record returned alongside requests or bids."""

    type: BidderErrorType
    message: str

    @classmethod
    def bad_input(cls, message: str) -> "BidderError":
        return cls(BidderErrorType.BAD_INPUT, message)

    @classmethod
    def bad_server_response(cls, message: str) -> "BidderError":
        return cls(BidderErrorType.BAD_SERVER_RESPONSE, message)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {"type": self.type.value, "message": self.message}


@dataclass(frozen=True)
class PartnerExtension:
    """
    Bidder parameters carried in ``imp.ext.bidder``.

    Attributes:
        slot_id: Partner-side slot identifier (wire name ``sid``)
        partner_name: Partner routing key (wire name ``name``)
    """

    slot_id: str | None = None
    partner_name: str | None = None


@dataclass(frozen=True)
class Price:
    """A bid floor amount together with its currency."""

    currency: str | None
    value: Decimal | None


@dataclass(frozen=True)
class HttpRequest:
    """
    Outbound HTTP request descriptor handed back to the host.

    Attributes:
        method: HTTP method (always POST for OpenRTB)
        uri: Fully built exchange URL
        headers: Request headers
        body: Encoded JSON body
        payload: The BidRequest dictionary the body was encoded from
    """

    uri: str
    body: bytes
    payload: dict[str, Any]
    headers: dict[str, str] = field(default_factory=dict)
    method: str = "POST"


@dataclass(frozen=True)
class HttpResponse:
    """Exchange reply as received by the host's HTTP client."""

    status_code: int
    body: str | bytes | None
    headers: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class BidderCall:
    """A completed request/response exchange with the bidder endpoint."""

    request: HttpRequest
    response: HttpResponse | None = None


@dataclass(frozen=True)
class BidderBid:
    """
    A bid returned by the exchange, tagged for the auction.

    Attributes:
        bid: The exchange bid object, untouched
        type: Media type derived from the originating impression
        bid_currency: Currency the bid price is expressed in
    """

    bid: dict[str, Any]
    type: BidType
    bid_currency: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "bid": self.bid,
            "type": self.type.value,
            "bid_currency": self.bid_currency,
        }


@dataclass(frozen=True)
class Result(Generic[T]):
    """Values produced by an adapter call together with non-fatal errors."""

    value: T
    errors: list[BidderError] = field(default_factory=list)

    @classmethod
    def of(cls, value: T, errors: list[BidderError]) -> "Result[T]":
        return cls(value=value, errors=list(errors))

    @classmethod
    def with_values(cls, value: T) -> "Result[T]":
        return cls(value=value, errors=[])

    @classmethod
    def with_errors(cls, errors: list[BidderError]) -> "Result[list]":
        return cls(value=[], errors=list(errors))

    @classmethod
    def with_error(cls, error: BidderError) -> "Result[list]":
        return cls(value=[], errors=[error])
