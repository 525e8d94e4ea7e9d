"""
Mockbidder Adapter

Builds exchange requests from an incoming OpenRTB 2.x bid request and turns
the exchange replies back into typed bids.

Impressions are routed by the partner name in ``imp.ext.bidder.name``: every
partner gets its own POST to ``<endpoint>/<partner>/bid`` carrying only that
partner's impressions, with floors converted to EUR and ``tagid`` set to the
partner slot id. Impressions that fail validation are dropped with a
``bad_input`` error and never block the rest of the request.
"""

from typing import Any

from ..currency import CurrencyConversionService
from ..exceptions import DecodeError, InvalidBidderConfigError, InvalidImpressionError
from ..json_codec import JsonMapper
from ..logging import auction_context, bidder_logger, log_call_summary
from ..models import BidderBid, BidderCall, BidderError, HttpRequest, Result
from ..utils import default_headers, validate_url
from .extension import parse_imp_ext
from .floors import FloorConverter
from .response import extract_bids
from .rewriter import modify_imp
from .validation import validate_imp, validate_imp_ext

BIDDER_CODE = "mockbidder"
BIDDER_CURRENCY = "EUR"

logger = bidder_logger(BIDDER_CODE)


class MockBidder:
    """
    OpenRTB adapter for the mockbidder exchange.

    Holds no per-call state: the endpoint, codec and currency service are
    set once and shared by concurrent calls.
    """

    def __init__(
        self,
        endpoint_url: str,
        mapper: JsonMapper,
        currency_service: CurrencyConversionService,
    ):
        """
        Initialize the adapter.

        Args:
            endpoint_url: Exchange base URL; partner paths are appended to it
            mapper: JSON codec
            currency_service: Service used to convert bid floors

        Raises:
            InvalidBidderConfigError: If the URL is invalid or a collaborator
                is missing
        """
        if mapper is None:
            raise InvalidBidderConfigError("JSON mapper is required")
        if currency_service is None:
            raise InvalidBidderConfigError("Currency conversion service is required")

        self.endpoint_url = validate_url(endpoint_url)
        self.mapper = mapper
        self.floor_converter = FloorConverter(currency_service, BIDDER_CURRENCY)

    def make_http_requests(self, bid_request: dict[str, Any]) -> Result[list[HttpRequest]]:
        """
        Build one exchange request per partner.

        Args:
            bid_request: Incoming OpenRTB bid request

        Returns:
            Outbound requests plus one ``bad_input`` error per dropped
            impression
        """
        with auction_context(bid_request):
            return self._make_http_requests(bid_request)

    @log_call_summary(logger)
    def _make_http_requests(self, bid_request: dict[str, Any]) -> Result[list[HttpRequest]]:
        # Insertion order keeps each partner's imps in request order
        modified_imps: dict[str, list[dict[str, Any]]] = {}
        errors: list[BidderError] = []

        for imp in bid_request.get("imp") or []:
            try:
                validate_imp(imp)

                imp_ext = parse_imp_ext(imp)
                validate_imp_ext(imp_ext)

                price = self.floor_converter.convert(bid_request, imp)
            except InvalidImpressionError as e:
                logger.debug("Impression rejected", imp_id=imp.get("id"), reason=str(e))
                errors.append(
                    BidderError.bad_input(f"{e}. Ignore imp id = {imp.get('id')}.")
                )
                continue

            modified_imps.setdefault(imp_ext.partner_name, []).append(
                modify_imp(imp, imp_ext, price)
            )

        if not modified_imps:
            return Result.with_errors(errors)

        http_requests = [
            self._make_request(bid_request, partner_name, imps)
            for partner_name, imps in modified_imps.items()
        ]
        return Result.of(http_requests, errors)

    def _make_request(
        self,
        bid_request: dict[str, Any],
        partner_name: str,
        imps: list[dict[str, Any]],
    ) -> HttpRequest:
        payload = {**bid_request, "imp": imps}
        return HttpRequest(
            uri=f"{self.endpoint_url}/{partner_name}/bid",
            headers=default_headers(),
            body=self.mapper.encode_to_bytes(payload),
            payload=payload,
        )

    def make_bids(
        self, http_call: BidderCall, bid_request: dict[str, Any]
    ) -> Result[list[BidderBid]]:
        """
        Turn an exchange reply into typed bids.

        Args:
            http_call: The request sent and the response received
            bid_request: The original incoming bid request

        Returns:
            Typed bids in EUR, or a single ``bad_server_response`` error when
            the body cannot be decoded
        """
        with auction_context(bid_request):
            return self._make_bids(http_call)

    @log_call_summary(logger)
    def _make_bids(self, http_call: BidderCall) -> Result[list[BidderBid]]:
        body = http_call.response.body if http_call.response else None
        try:
            bid_response = self.mapper.decode_bid_response(body)
        except DecodeError as e:
            logger.warning("Failed to decode bid response", error=str(e))
            return Result.with_error(BidderError.bad_server_response(str(e)))

        return Result.with_values(
            extract_bids(http_call.request.payload, bid_response, BIDDER_CURRENCY)
        )
