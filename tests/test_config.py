"""
Tests for builder configuration.
"""
import pytest
from pydantic import ValidationError
from fetch_request.config import BuilderConfig, resolve_config
from fetch_request.core.builder import RequestBuilder
from fetch_request.errors import UnsupportedSchemeError
from fetch_request.realm import AuthScheme, Realm


class TestResolveConfig:
    def test_defaults(self):
        config = resolve_config()
        assert config.default_url == "http://localhost"
        assert config.disable_url_encoding is False
        assert config.supported_schemes == ("http", "https", "ws", "wss")

    @pytest.mark.parametrize("value, expected", [
        ("true", True), ("1", True), ("yes", True), ("off", False), ("false", False),
    ])
    def test_disable_url_encoding_from_env(self, monkeypatch, value, expected):
        monkeypatch.setenv("FETCH_REQUEST_DISABLE_URL_ENCODING", value)
        assert resolve_config().disable_url_encoding is expected

    def test_argument_beats_env(self, monkeypatch):
        monkeypatch.setenv("FETCH_REQUEST_DISABLE_URL_ENCODING", "true")
        assert resolve_config(disable_url_encoding=False).disable_url_encoding is False

    def test_default_url_from_env(self, monkeypatch):
        monkeypatch.setenv("FETCH_REQUEST_DEFAULT_URL", "https://env.local")
        assert RequestBuilder().build().url == "https://env.local"

    def test_builder_reads_env(self, monkeypatch):
        monkeypatch.setenv("FETCH_REQUEST_DISABLE_URL_ENCODING", "true")
        builder = RequestBuilder().set_url("http://x.com/?a=b c")
        assert builder.disable_url_encoding is True
        assert builder.build().uri.query == "a=b c"


class TestBuilderConfig:
    def test_schemes_lowercased(self):
        config = BuilderConfig(supported_schemes=("HTTP", "Https"))
        assert config.supported_schemes == ("http", "https")

    def test_empty_schemes(self):
        with pytest.raises(ValidationError):
            BuilderConfig(supported_schemes=())

    def test_default_url_must_be_supported(self):
        with pytest.raises(ValidationError):
            BuilderConfig(default_url="ftp://localhost")

    def test_restricted_schemes(self):
        config = BuilderConfig(supported_schemes=("https",), default_url="https://localhost")
        builder = RequestBuilder(config=config).set_url("http://x.com/")
        with pytest.raises(UnsupportedSchemeError):
            builder.build()


class TestRealm:
    def test_basic_authorization(self):
        realm = Realm(scheme=AuthScheme.BASIC, principal="Aladdin", password="open sesame")
        assert realm.basic_authorization() == "Basic QWxhZGRpbjpvcGVuIHNlc2FtZQ=="

    def test_requires_credentials(self):
        with pytest.raises(ValidationError):
            Realm(scheme=AuthScheme.DIGEST, principal="u")

    def test_none_scheme(self):
        realm = Realm()
        with pytest.raises(ValueError):
            realm.basic_authorization()
