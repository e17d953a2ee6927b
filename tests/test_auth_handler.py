"""
Tests for auth handlers and the auth signature calculator.
"""
import base64

import pytest
from pydantic import ValidationError
from fetch_request.auth import (
    AuthHeaderSignatureCalculator, BearerAuthHandler, CustomAuthHandler,
    XApiKeyAuthHandler, create_auth_handler,
)
from fetch_request.auth.auth_handler import _mask_value
from fetch_request.config import AuthConfig
from fetch_request.core.builder import RequestBuilder

CONTEXT = {"method": "GET", "url": "https://x.com/", "headers": {}, "body": None}


class TestCreateAuthHandler:
    def test_bearer(self):
        handler = create_auth_handler(AuthConfig(type="bearer", raw_api_key="token"))
        assert isinstance(handler, BearerAuthHandler)
        assert handler.get_header(CONTEXT) == {"Authorization": "Bearer token"}

    def test_basic(self):
        handler = create_auth_handler(AuthConfig(type="basic", username="u", password="p"))
        expected = "Basic " + base64.b64encode(b"u:p").decode()
        assert handler.get_header(CONTEXT) == {"Authorization": expected}

    def test_x_api_key(self):
        handler = create_auth_handler(AuthConfig(type="x-api-key", raw_api_key="secret"))
        assert isinstance(handler, XApiKeyAuthHandler)
        assert handler.get_header(CONTEXT) == {"x-api-key": "secret"}

    def test_custom(self):
        handler = create_auth_handler(AuthConfig(type="custom", header_name="X-Token", raw_api_key="k"))
        assert isinstance(handler, CustomAuthHandler)
        assert handler.get_header(CONTEXT) == {"X-Token": "k"}

    def test_callback_wins(self):
        config = AuthConfig(
            type="bearer",
            raw_api_key="static",
            get_api_key_for_request=lambda ctx: "dynamic" if ctx["method"] == "GET" else None,
        )
        handler = create_auth_handler(config)
        assert handler.get_header(CONTEXT) == {"Authorization": "Bearer dynamic"}
        assert handler.get_header({**CONTEXT, "method": "POST"}) == {"Authorization": "Bearer static"}

    def test_no_key(self):
        assert BearerAuthHandler().get_header(CONTEXT) is None


class TestAuthConfigValidation:
    def test_bearer_requires_key(self):
        with pytest.raises(ValidationError):
            AuthConfig(type="bearer")

    def test_basic_requires_credentials(self):
        with pytest.raises(ValidationError):
            AuthConfig(type="basic", username="u")

    def test_custom_requires_header_name(self):
        with pytest.raises(ValidationError):
            AuthConfig(type="custom", raw_api_key="k")


class TestAuthHeaderSignatureCalculator:
    def test_injects_header(self):
        calculator = AuthHeaderSignatureCalculator(AuthConfig(type="bearer", raw_api_key="token"))
        request = (
            RequestBuilder()
            .set_url("https://x.com/api?q=1")
            .set_signature_calculator(calculator)
            .build()
        )
        assert request.headers["Authorization"] == "Bearer token"
        assert request.uri.query == "q=1"

    def test_handler_sees_base_url_and_body(self):
        seen = {}

        def key_for(ctx):
            seen.update(ctx)
            return "k"

        calculator = AuthHeaderSignatureCalculator(BearerAuthHandler(get_api_key_for_request=key_for))
        (
            RequestBuilder("POST")
            .set_url("https://u:p@x.com/api?q=1")
            .set_header("X-A", "1")
            .set_body("payload")
            .set_signature_calculator(calculator)
            .build()
        )
        assert seen["url"] == "https://x.com/api"
        assert seen["method"] == "POST"
        assert seen["headers"] == {"x-a": "1"}
        assert seen["body"] == "payload"

    def test_no_header_leaves_request(self):
        calculator = AuthHeaderSignatureCalculator(BearerAuthHandler())
        request = RequestBuilder().set_signature_calculator(calculator).build()
        assert "Authorization" not in request.headers


def test_mask_value():
    assert _mask_value(None) == "<empty>"
    assert _mask_value("short") == "*****"
    assert _mask_value("0123456789abc") == "0123456789***"
