"""
Tests for the percent codec.
"""
import pytest
from fetch_request.encoding import append_encoded, decode, encode
from fetch_request.errors import QueryDecodeError


class TestEncode:
    def test_unreserved_kept(self):
        assert encode("AZaz09-._~") == "AZaz09-._~"

    def test_reserved_and_space_encoded(self):
        assert encode("a b+c&d=e/f") == "a%20b%2Bc%26d%3De%2Ff"

    def test_utf8_multibyte(self):
        assert encode("ü€") == "%C3%BC%E2%82%AC"

    def test_append_encoded(self):
        buffer = ["x="]
        append_encoded(buffer, "1 2")
        assert "".join(buffer) == "x=1%202"


class TestDecode:
    def test_plus_is_space(self):
        assert decode("a+b%20c") == "a b c"

    def test_utf8(self):
        assert decode("%C3%BC") == "ü"

    @pytest.mark.parametrize("value", ["%zz", "%", "abc%2", "%G1"])
    def test_malformed_escape(self, value):
        with pytest.raises(QueryDecodeError) as exc:
            decode(value)
        assert exc.value.value == value

    def test_invalid_utf8(self):
        with pytest.raises(QueryDecodeError):
            decode("%C3")


@pytest.mark.parametrize("text", [
    "plain",
    "with space",
    "a+b=c&d",
    "~!@#$%^&*()_+`-={}|[]\\:\";'<>?,./",
    "日本語テキスト",
    "emoji 😀 and ümlauts",
])
def test_round_trip(text):
    assert decode(encode(text)) == text
