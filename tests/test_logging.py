"""Tests for adapter logging helpers."""

from unittest.mock import MagicMock

import pytest
import structlog
from structlog.testing import capture_logs

from src.mockbidder.bidder import MockBidder
from src.mockbidder.json_codec import JsonMapper
from src.mockbidder.logging import add_auction_id, auction_context, get_auction_id
from src.mockbidder.models import BidderCall, HttpRequest, HttpResponse


class TestAuctionContext:
    """Test auction id propagation into log entries."""

    def test_auction_id_bound_inside_block(self):
        with auction_context({"id": "auction-1"}) as auction_id:
            assert auction_id == "auction-1"
            assert add_auction_id(None, "info", {})["auction_id"] == "auction-1"

        assert get_auction_id() == ""

    def test_no_auction_id_outside_block(self):
        assert "auction_id" not in add_auction_id(None, "info", {"event": "x"})

    def test_nested_blocks_restore_outer_id(self):
        with auction_context({"id": "outer"}):
            with auction_context({"id": "inner"}):
                assert get_auction_id() == "inner"
            assert get_auction_id() == "outer"


class TestAdapterCallLogging:
    """Test that adapter call summaries carry the auction id."""

    @pytest.fixture
    def bidder(self):
        return MockBidder("https://x.test", JsonMapper(), MagicMock())

    def test_request_summary_has_auction_id(self, bidder):
        bid_request = {
            "id": "auction-7",
            "imp": [{"id": "a", "banner": {}, "ext": {"bidder": {"sid": "s1", "name": "p1"}}}],
        }

        with capture_logs() as logs:
            structlog.get_config()["processors"].insert(0, add_auction_id)
            bidder.make_http_requests(bid_request)

        summary = [e for e in logs if e["event"] == "Adapter call finished"]
        assert len(summary) == 1
        assert summary[0]["auction_id"] == "auction-7"
        assert summary[0]["call"] == "make_http_requests"
        assert summary[0]["values"] == 1

    def test_bids_summary_has_auction_id(self, bidder):
        payload = {"id": "auction-8", "imp": [{"id": "a", "banner": {}}]}
        call = BidderCall(
            request=HttpRequest(uri="https://x.test/p1/bid", body=b"{}", payload=payload),
            response=HttpResponse(200, '{"seatbid": [{"bid": [{"id": "1", "impid": "a"}]}]}'),
        )

        with capture_logs() as logs:
            structlog.get_config()["processors"].insert(0, add_auction_id)
            bidder.make_bids(call, payload)

        summary = [e for e in logs if e["event"] == "Adapter call finished"]
        assert summary[0]["auction_id"] == "auction-8"
        assert summary[0]["call"] == "make_bids"
