"""
Tests for UriComponents.
"""
import pytest
from fetch_request.errors import UnsupportedSchemeError
from fetch_request.uri import UriComponents, validate_supported_scheme


class TestUriComponents:
    def test_create(self):
        uri = UriComponents.create("http://user:pw@Example.com:8080/a/b?x=1#frag")
        assert uri.scheme == "http"
        assert uri.user_info == "user:pw"
        assert uri.host == "example.com"
        assert uri.port == 8080
        assert uri.path == "/a/b"
        assert uri.query == "x=1"
        assert str(uri) == "http://user:pw@example.com:8080/a/b?x=1"

    def test_create_without_path(self):
        uri = UriComponents.create("http://localhost")
        assert uri.path == ""
        assert uri.query is None
        assert uri.port is None
        assert str(uri) == "http://localhost"

    def test_ipv6(self):
        uri = UriComponents.create("http://[::1]:8080/")
        assert uri.host == "::1"
        assert str(uri) == "http://[::1]:8080/"

    def test_with_new_path_is_a_copy(self):
        uri = UriComponents.create("http://x.com/a?x=1")
        other = uri.with_new_path("/b/c")
        assert uri.path == "/a"
        assert other.path == "/b/c"
        assert other.query == "x=1"
        assert str(other) == "http://x.com/b/c?x=1"

    def test_with_new_query_is_a_copy(self):
        uri = UriComponents.create("http://x.com/a?x=1")
        other = uri.with_new_query(None)
        assert uri.query == "x=1"
        assert other.query is None
        assert str(other) == "http://x.com/a"

    def test_base_url_drops_user_info_and_query(self):
        uri = UriComponents.create("https://user:pw@x.com:8443/p?q=1")
        assert uri.base_url() == "https://x.com:8443/p"

    def test_explicit_port(self):
        assert UriComponents.create("http://x.com").explicit_port() == 80
        assert UriComponents.create("https://x.com").explicit_port() == 443
        assert UriComponents.create("wss://x.com").explicit_port() == 443
        assert UriComponents.create("ws://x.com:9000").explicit_port() == 9000


class TestValidateSupportedScheme:
    @pytest.mark.parametrize("url", ["http://x", "HTTPS://x", "ws://x", "wss://x"])
    def test_supported(self, url):
        validate_supported_scheme(UriComponents.create(url))

    @pytest.mark.parametrize("url", ["ftp://x.com/", "file:///tmp/a", "x.com/path"])
    def test_unsupported(self, url):
        with pytest.raises(UnsupportedSchemeError):
            validate_supported_scheme(UriComponents.create(url))

    def test_custom_allow_list(self):
        uri = UriComponents.create("ws://x.com")
        with pytest.raises(UnsupportedSchemeError) as exc:
            validate_supported_scheme(uri, ("http", "https"))
        assert exc.value.scheme == "ws"
