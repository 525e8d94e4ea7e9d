"""Exceptions raised by the mockbidder adapter."""


class MockBidderError(Exception):
    """Base exception for mockbidder adapter errors."""
    pass


class InvalidImpressionError(MockBidderError):
    """Raised when a single impression cannot be sent to the exchange."""
    pass


class CurrencyConversionError(InvalidImpressionError):
    """Raised when a bid floor cannot be converted to the bidder currency."""
    pass


class DecodeError(MockBidderError):
    """Raised when a JSON payload cannot be decoded."""
    pass


class InvalidBidderConfigError(MockBidderError):
    """Raised when the adapter cannot be built from its configuration."""
    pass
