"""
Percent-encoding helpers for query components.
"""
import re
from typing import List
from urllib.parse import quote, unquote_plus

from .errors import QueryDecodeError

# A '%' not followed by two hex digits
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def encode(raw: str) -> str:
    """
    Percent-encode a query name or value.

    Only the RFC 3986 unreserved set (ALPHA / DIGIT / "-" / "." / "_" / "~")
    is kept as is; everything else, space included, is encoded from its
    UTF-8 bytes.
    """
    return quote(raw, safe="")


def append_encoded(buffer: List[str], raw: str) -> List[str]:
    """Encode raw and append it to a list used as a string buffer."""
    buffer.append(encode(raw))
    return buffer


def decode(encoded: str) -> str:
    """
    Strictly decode a percent-encoded query component.

    '+' is read as a space. Escapes that are malformed or that do not form
    valid UTF-8 raise QueryDecodeError.
    """
    bad = _BAD_ESCAPE.search(encoded)
    if bad:
        raise QueryDecodeError(encoded, f"incomplete escape at position {bad.start()}")
    try:
        return unquote_plus(encoded, encoding="utf-8", errors="strict")
    except UnicodeDecodeError as e:
        raise QueryDecodeError(encoded, f"invalid UTF-8 sequence ({e.reason})") from e
