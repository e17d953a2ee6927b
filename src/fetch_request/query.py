"""
Query string composition.

A final query string is assembled from two sources: the raw query already
carried by the URI, and the list of params added to the builder. In raw
mode both are concatenated verbatim; in encoded mode every name and value
goes through the percent-encoder, after the raw query has been decoded.
"""
from typing import List, Optional, Sequence, Tuple

from .encoding import append_encoded, decode
from .types import Param


def _split_query(query: str) -> List[str]:
    segments = query.split("&")
    # trailing separators produce no segment
    while segments and not segments[-1]:
        segments.pop()
    return segments


def _append_raw_param(out: List[str], name: str, value: Optional[str]) -> None:
    out.append(name if value is None else f"{name}={value}")


def _append_encoded_param(out: List[str], name: str, value: Optional[str]) -> None:
    segment: List[str] = []
    append_encoded(segment, name)
    if value is not None:
        segment.append("=")
        append_encoded(segment, value)
    out.append("".join(segment))


def _append_encoded_query(out: List[str], query: str) -> None:
    for segment in _split_query(query):
        pos = segment.find("=")
        if pos <= 0:
            _append_encoded_param(out, decode(segment), None)
        else:
            _append_encoded_param(out, decode(segment[:pos]), decode(segment[pos + 1:]))


def compute_final_query_string(
    query: Optional[str],
    params: Optional[Sequence[Param]],
    disable_url_encoding: bool = False,
) -> Optional[str]:
    """
    Merge a URI's raw query with explicit params.

    The raw query always comes first. Returns None when there is neither a
    query nor any param, so that the final URI carries no '?'.

    Raises QueryDecodeError (encoded mode only) when the raw query holds a
    malformed percent-escape.
    """
    has_query = bool(query)
    has_params = bool(params)

    if not has_query and not has_params:
        return None

    if disable_url_encoding and not has_params:
        return query

    out: List[str] = []
    if has_query:
        if disable_url_encoding:
            out.append(query)
        else:
            _append_encoded_query(out, query)

    if has_params:
        for param in params:
            if disable_url_encoding:
                _append_raw_param(out, param.name, param.value)
            else:
                _append_encoded_param(out, param.name, param.value)

    return "&".join(out)


def parse_query_params(query: Optional[str]) -> Tuple[Param, ...]:
    """
    Split a query string into params, without decoding.

    The value starts after the first '='; a segment with no '=' or with
    '=' in first position has no value.
    """
    if not query:
        return ()

    params = []
    for segment in query.split("&"):
        pos = segment.find("=")
        if pos <= 0:
            params.append(Param(segment, None))
        else:
            params.append(Param(segment[:pos], segment[pos + 1:]))
    return tuple(params)
