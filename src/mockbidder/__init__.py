"""
Mockbidder adapter for The Nexus Engine auction server.

Splits incoming OpenRTB 2.x bid requests into one exchange request per
partner, converts bid floors to EUR, and classifies exchange bids by
media type.
"""

from .bidder import BIDDER_CODE, BIDDER_CURRENCY, MockBidder
from .config import BidderConfigurationProperties, load_bidder_config
from .currency import CurrencyConversionService, RateTableCurrencyConverter
from .factory import BidderDeps, create_bidder_deps
from .json_codec import JsonMapper
from .models import (
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

__version__ = '1.0.0'

__all__ = [
    'BIDDER_CODE',
    'BIDDER_CURRENCY',
    'MockBidder',
    'BidderConfigurationProperties',
    'load_bidder_config',
    'CurrencyConversionService',
    'RateTableCurrencyConverter',
    'BidderDeps',
    'create_bidder_deps',
    'JsonMapper',
    'BidderBid',
    'BidderCall',
    'BidderError',
    'BidderErrorType',
    'BidType',
    'HttpRequest',
    'HttpResponse',
    'PartnerExtension',
    'Price',
    'Result',
]
