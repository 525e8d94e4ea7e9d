"""
Mockbidder exchange adapter.

Components:
- extension.py: Decoding of ``imp.ext.bidder`` parameters
- validation.py: Impression and parameter checks
- floors.py: Bid floor conversion to EUR
- rewriter.py: Impression rewriting for the exchange
- response.py: Bid response classification
- mock_bidder.py: The adapter tying it together
"""

from .extension import parse_imp_ext
from .floors import FloorConverter
from .mock_bidder import BIDDER_CODE, BIDDER_CURRENCY, MockBidder
from .response import extract_bids, get_bid_type
from .rewriter import modify_imp
from .validation import is_blank, validate_imp, validate_imp_ext

__all__ = [
    "BIDDER_CODE",
    "BIDDER_CURRENCY",
    "FloorConverter",
    "MockBidder",
    "extract_bids",
    "get_bid_type",
    "is_blank",
    "modify_imp",
    "parse_imp_ext",
    "validate_imp",
    "validate_imp_ext",
]
