"""HTTP and pricing helpers shared by bidder adapters."""

import ipaddress
import re
from decimal import Decimal
from urllib.parse import urlparse

from ..exceptions import InvalidBidderConfigError

APPLICATION_JSON_CONTENT_TYPE = "application/json;charset=utf-8"

_HOST_PATTERN = re.compile(r"^[a-zA-Z0-9_]([-a-zA-Z0-9_.]*[a-zA-Z0-9_])?$")


def validate_url(url: str | None) -> str:
    """
    Validate an endpoint URL.

    Args:
        url: Absolute http(s) URL

    Returns:
        The URL, unchanged

    Raises:
        InvalidBidderConfigError: If the URL is missing or malformed
    """
    if not url or any(ch.isspace() for ch in url):
        raise InvalidBidderConfigError(f"URL supplied is not valid: {url}")

    try:
        parsed = urlparse(url)
        port = parsed.port
    except ValueError as e:
        raise InvalidBidderConfigError(f"URL supplied is not valid: {url}") from e

    if parsed.scheme not in ("http", "https"):
        raise InvalidBidderConfigError(f"URL supplied is not valid: {url}")
    if not _is_valid_host(parsed.hostname, parsed.netloc):
        raise InvalidBidderConfigError(f"URL supplied is not valid: {url}")
    if port is not None and port == 0:
        raise InvalidBidderConfigError(f"URL supplied is not valid: {url}")

    return url


def _is_valid_host(hostname: str | None, netloc: str) -> bool:
    """Accept DNS-style names (underscores allowed) and bracketed IPv6 literals."""
    if not hostname:
        return False
    if "[" in netloc:
        try:
            ipaddress.IPv6Address(hostname)
        except ValueError:
            return False
        return True
    return bool(_HOST_PATTERN.match(hostname))


def default_headers() -> dict[str, str]:
    """Headers sent with every OpenRTB request."""
    return {
        "Content-Type": APPLICATION_JSON_CONTENT_TYPE,
        "Accept": "application/json",
    }


def is_valid_price(price: Decimal | None) -> bool:
    """A price is valid when present and strictly positive."""
    return price is not None and price > 0
