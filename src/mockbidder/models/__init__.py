"""Adapter Models and Data Types."""

from .bidder import (
    BidderBid,
    BidderCall,
    BidderError,
    BidderErrorType,
    BidType,
    HttpRequest,
    HttpResponse,
    PartnerExtension,
    Price,
    Result,
)

__all__ = [
    "BidderBid",
    "BidderCall",
    "BidderError",
    "BidderErrorType",
    "BidType",
    "HttpRequest",
    "HttpResponse",
    "PartnerExtension",
    "Price",
    "Result",
]
