"""Conversion of exchange bid responses into typed bids."""

from typing import Any

from ..logging import bidder_logger
from ..models import BidderBid, BidType

logger = bidder_logger("mockbidder")


def extract_bids(
    bid_request: dict[str, Any],
    bid_response: dict[str, Any] | None,
    bid_currency: str,
) -> list[BidderBid]:
    """
    Flatten the seat bids of a response into typed bids.

    Null seat bids and null bids are skipped; wire order is kept.

    Args:
        bid_request: The request that was sent to the exchange
        bid_response: Decoded exchange response
        bid_currency: Currency every bid is reported in

    Returns:
        Typed bids in response order
    """
    if not bid_response or not bid_response.get("seatbid"):
        return []

    imps = bid_request.get("imp") or []
    bids = []
    for seatbid in bid_response["seatbid"]:
        if seatbid is None:
            continue
        for bid in seatbid.get("bid") or []:
            if bid is None:
                continue
            bids.append(
                BidderBid(
                    bid=bid,
                    type=get_bid_type(bid.get("impid"), imps),
                    bid_currency=bid_currency,
                )
            )
    return bids


def get_bid_type(imp_id: str | None, imps: list[dict[str, Any]]) -> BidType:
    """
    Determine the media type of a bid from the impression it answers.

    Banner wins over video when an impression offers both. Bids for unknown
    impressions, or impressions with neither format, default to banner.
    """
    matched = False
    for imp in imps:
        if imp.get("id") != imp_id:
            continue
        matched = True
        if imp.get("banner") is not None:
            return BidType.BANNER
        if imp.get("video") is not None:
            return BidType.VIDEO

    if matched:
        return BidType.BANNER

    logger.warning("No impression matched bid, defaulting to banner", impid=imp_id)
    return BidType.BANNER
