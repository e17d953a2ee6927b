"""
Tests for the Request descriptor.
"""
from fetch_request.core.request import Request
from fetch_request.body import FormParamsBody
from fetch_request.types import Param
from fetch_request.uri import UriComponents


def make(url: str, **kwargs) -> Request:
    return Request(method="GET", uri=UriComponents.create(url), **kwargs)


class TestQueryParams:
    def test_parsed_on_creation(self):
        request = make("http://x.com/?a=1&b&=c")
        assert request.query_params == (Param("a", "1"), Param("b"), Param("=c"))
        assert request.get_query_params() is request.query_params

    def test_empty(self):
        assert make("http://x.com/").query_params == ()

    def test_new_request_new_view(self):
        first = make("http://x.com/?a=1")
        second = Request(method="GET", uri=first.uri.with_new_query("b=2"))
        assert first.query_params == (Param("a", "1"),)
        assert second.query_params == (Param("b", "2"),)

    def test_not_part_of_equality(self):
        assert make("http://x.com/?a=1") == make("http://x.com/?a=1")


class TestUrl:
    def test_trailing_slash_removed(self):
        assert make("http://x.com/").url == "http://x.com"

    def test_path_kept(self):
        assert make("http://x.com/a/b/?q=1").url == "http://x.com/a/b/?q=1"


def test_str():
    request = Request(
        method="POST",
        uri=UriComponents.create("http://x.com/a"),
        raw_headers=((b"X-A", b"1"), (b"x-a", b"2"), (b"Accept", b"*/*")),
        body=FormParamsBody((Param("f", "v"),)),
    )
    assert str(request) == "http://x.com/a\tPOST\theaders:\tx-a:1, 2\taccept:*/*\tformParams:\tf:v"


def test_neutral_accessors():
    request = make("http://x.com/")
    assert request.byte_data is None
    assert request.string_data is None
    assert request.stream_data is None
    assert request.entity_writer is None
    assert request.body_generator is None
    assert request.form_params == ()
    assert request.parts == ()
    assert request.file is None
