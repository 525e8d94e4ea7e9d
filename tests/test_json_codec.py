"""Tests for the JSON codec and HTTP helpers."""

from decimal import Decimal

import pytest

from src.mockbidder.exceptions import DecodeError, InvalidBidderConfigError
from src.mockbidder.json_codec import JsonMapper
from src.mockbidder.utils import default_headers, is_valid_price, validate_url


class TestJsonMapper:
    """Test encoding and decoding."""

    @pytest.fixture
    def mapper(self):
        return JsonMapper()

    def test_fractions_decode_as_decimal(self, mapper):
        assert mapper.decode_value('{"bidfloor": 0.1}') == {"bidfloor": Decimal("0.1")}

    def test_integers_stay_integers(self, mapper):
        assert mapper.decode_value(b'{"w": 300}') == {"w": 300}

    def test_decimal_encodes_as_number(self, mapper):
        assert mapper.encode_to_string({"bidfloor": Decimal("0.9")}) == '{"bidfloor":0.9}'

    def test_decimal_keeps_all_digits(self, mapper):
        encoded = mapper.encode_to_string({"bidfloor": Decimal("0.12345678901234567891")})

        assert encoded == '{"bidfloor":0.12345678901234567891}'
        assert mapper.decode_value(encoded) == {"bidfloor": Decimal("0.12345678901234567891")}

    def test_decimal_keeps_trailing_zeros(self, mapper):
        assert mapper.encode_to_string([Decimal("0.900"), Decimal("1E+2")]) == "[0.900,1E+2]"

    def test_number_like_strings_stay_strings(self, mapper):
        value = {"id": "0.5", "bidfloor": Decimal("0.5")}

        assert mapper.encode_to_string(value) == '{"id":"0.5","bidfloor":0.5}'

    def test_non_finite_decimal_rejected(self, mapper):
        with pytest.raises(ValueError):
            mapper.encode_to_string({"bidfloor": Decimal("NaN")})

    def test_encode_to_bytes(self, mapper):
        assert mapper.encode_to_bytes({"id": "é"}) == '{"id":"\\u00e9"}'.encode()

    def test_unsupported_type_rejected(self, mapper):
        with pytest.raises(TypeError):
            mapper.encode_to_string({"x": object()})

    def test_malformed_json(self, mapper):
        with pytest.raises(DecodeError, match="Expecting"):
            mapper.decode_value("{")

    def test_none_body(self, mapper):
        with pytest.raises(DecodeError):
            mapper.decode_value(None)

    def test_bid_response_null(self, mapper):
        assert mapper.decode_bid_response("null") is None

    def test_bid_response_valid(self, mapper):
        body = '{"id": "r", "seatbid": [null, {"bid": [null, {"id": "b", "price": 1.5}]}]}'

        response = mapper.decode_bid_response(body)

        assert response["seatbid"][1]["bid"][1]["price"] == Decimal("1.5")

    @pytest.mark.parametrize(
        "body,where",
        [
            ("[]", "BidResponse from Array"),
            ('{"seatbid": {}}', "seatbid from Object"),
            ('{"seatbid": [1]}', "seatbid[0] from Number"),
            ('{"seatbid": [{"bid": "x"}]}', "seatbid[0].bid from String"),
            ('{"seatbid": [{"bid": [true]}]}', "seatbid[0].bid[0] from Boolean"),
        ],
    )
    def test_bid_response_wrong_shape(self, mapper, body, where):
        with pytest.raises(DecodeError, match=where.replace("[", r"\[").replace("]", r"\]")):
            mapper.decode_bid_response(body)


class TestHttpHelpers:
    """Test URL validation and request helpers."""

    @pytest.mark.parametrize(
        "url",
        [
            "https://x.test",
            "http://localhost:8080/mockbidder",
            "https://exchange.example.com/path?x=1",
            "http://[::1]:8080",
            "https://[2001:db8::1]/bid",
            "http://my_host.example.com",
        ],
    )
    def test_valid_urls(self, url):
        assert validate_url(url) == url

    @pytest.mark.parametrize(
        "url",
        [
            None,
            "",
            "invalid_url",
            "ftp://x.test",
            "https://",
            "https://bad host.com",
            "http://x.test:99999",
            "http://[not-an-ip]:8080",
            "http://[::1",
        ],
    )
    def test_invalid_urls(self, url):
        with pytest.raises(InvalidBidderConfigError):
            validate_url(url)

    def test_default_headers(self):
        assert default_headers() == {
            "Content-Type": "application/json;charset=utf-8",
            "Accept": "application/json",
        }

    @pytest.mark.parametrize(
        "price,expected",
        [(None, False), (Decimal("0"), False), (Decimal("-1"), False), (Decimal("0.01"), True)],
    )
    def test_is_valid_price(self, price, expected):
        assert is_valid_price(price) is expected
