"""
Fluent request builder.

The builder accumulates request fields and turns them into a frozen
``Request`` on ``build()``. Finalization happens in this order:

1. URI: default URL, scheme check, path normalization, query composition
2. signature calculator, if any
3. charset, from the Content-Type header when not set explicitly
4. content length, from the Content-Length header when unknown

``build()`` leaves the builder untouched, so it may be called again or
the builder may keep being modified.
"""
import json
import logging
import re
from ipaddress import ip_address
from pathlib import Path
from typing import (
    Any, BinaryIO, Iterable, List, Mapping, Optional, Sequence, TypeVar, Union,
)

import httpx

from ..body import (
    NO_BODY, Body, BytesBody, EntityWriterBody, FormParamsBody, GeneratorBody,
    MultipartBody, StreamBody, TextBody, describe, is_scalar,
)
from ..config import BuilderConfig, resolve_config
from ..errors import MissingUriPathError
from ..multipart import Part
from ..proxy import ProxyServer
from ..query import compute_final_query_string
from ..realm import Realm
from ..types import (
    DEFAULT_CONNECTION_POOL_STRATEGY, BodyGenerator, ConnectionPoolKeyStrategy,
    Cookie, EntityWriter, Param, SignatureCalculator, map_to_param_list,
)
from ..uri import UriComponents, validate_supported_scheme
from .request import Request

logger = logging.getLogger(__name__)

# Constants
LOG_PREFIX = "[RequestBuilder]"
JSON_CONTENT_TYPE = "application/json"

_INTEGER = re.compile(r"[+-]?\d+")

T = TypeVar("T", bound="RequestBuilderBase")

HeaderValues = Union[str, Iterable[str]]
ParamsInput = Union[Sequence[Param], Mapping[str, Iterable[Optional[str]]], None]


def _encode_header_value(value: Union[str, bytes]) -> bytes:
    return value if isinstance(value, bytes) else value.encode("utf-8")


def parse_charset(content_type: str) -> Optional[str]:
    """
    Extract the charset parameter of a Content-Type value.

    Quotes around the value are dropped, as many servers send
    ``charset="utf-8"``.
    """
    for part in content_type.split(";"):
        part = part.strip()
        if part.lower().startswith("charset="):
            value = part.split("=", 1)[1].strip()
            value = value.replace('"', "").replace("'", "")
            return value or None
    return None


def _to_param_list(params: ParamsInput) -> Optional[List[Param]]:
    if params is None:
        return None
    if isinstance(params, Mapping):
        return map_to_param_list(params)
    return list(params)


class RequestBuilderBase:
    """
    Shared accumulator for request builders.

    Fluent setters return the concrete builder type. The reset_* methods
    return None.
    """

    def __init__(
        self,
        method: str = "GET",
        disable_url_encoding: Optional[bool] = None,
        config: Optional[BuilderConfig] = None,
    ):
        self._config = config or resolve_config()
        self.disable_url_encoding = (
            self._config.disable_url_encoding if disable_url_encoding is None else disable_url_encoding
        )

        self._method = method
        self._uri: Optional[UriComponents] = None
        self._address = None
        self._local_address = None
        self._headers = httpx.Headers()
        self._cookies: List[Cookie] = []
        self._body: Body = NO_BODY
        self._file: Optional[Path] = None
        self._content_length = -1
        self._virtual_host: Optional[str] = None
        self._proxy_server: Optional[ProxyServer] = None
        self._realm: Optional[Realm] = None
        self._follow_redirects: Optional[bool] = None
        self._request_timeout_ms = 0
        self._range_offset = 0
        self._charset: Optional[str] = None
        self._connection_pool_key_strategy: ConnectionPoolKeyStrategy = DEFAULT_CONNECTION_POOL_STRATEGY

        # pending params, merged into the URI query on build()
        self._query_params: Optional[List[Param]] = None
        self._signature_calculator: Optional[SignatureCalculator] = None

    @classmethod
    def from_prototype(cls, prototype: Request, config: Optional[BuilderConfig] = None):
        """Create a builder pre-filled with a copy of ``prototype``'s fields."""
        builder = cls(prototype.method, config=config)
        builder._uri = prototype.uri
        builder._address = prototype.address
        builder._local_address = prototype.local_address
        builder._headers = prototype.headers
        builder._cookies = list(prototype.cookies)
        builder._body = prototype.body
        builder._file = prototype.file
        builder._content_length = prototype.content_length
        builder._virtual_host = prototype.virtual_host
        builder._proxy_server = prototype.proxy_server
        builder._realm = prototype.realm
        builder._follow_redirects = prototype.follow_redirects
        builder._request_timeout_ms = prototype.request_timeout_ms
        builder._range_offset = prototype.range_offset
        builder._charset = prototype.charset
        builder._connection_pool_key_strategy = prototype.connection_pool_key_strategy
        return builder

    # Read access, mostly for signature calculators

    @property
    def method(self) -> str:
        return self._method

    @property
    def uri(self) -> Optional[UriComponents]:
        return self._uri

    @property
    def headers(self) -> httpx.Headers:
        return self._headers.copy()

    @property
    def body(self) -> Body:
        return self._body

    # Method, URI and addressing

    def set_method(self: T, method: str) -> T:
        self._method = method
        return self

    def set_url(self: T, url: str) -> T:
        return self.set_uri(UriComponents.create(url))

    def set_uri(self: T, uri: UriComponents) -> T:
        if uri.path is None:
            raise MissingUriPathError(uri)
        self._uri = uri
        return self

    def set_inet_address(self: T, address: Any) -> T:
        self._address = ip_address(address) if address is not None else None
        return self

    def set_local_inet_address(self: T, address: Any) -> T:
        self._local_address = ip_address(address) if address is not None else None
        return self

    def set_virtual_host(self: T, virtual_host: Optional[str]) -> T:
        self._virtual_host = virtual_host
        return self

    # Headers

    def set_header(self: T, name: str, value: Optional[str]) -> T:
        """Replace every value of ``name`` with ``value``. None removes it."""
        key = name.lower().encode("utf-8")
        items = [(k, v) for k, v in self._headers.raw if k.lower() != key]
        if value is not None:
            items.append((name, _encode_header_value(value)))
        self._headers = httpx.Headers(items)
        return self

    def add_header(self: T, name: str, value: Optional[str]) -> T:
        if value is None:
            logger.warning(f"{LOG_PREFIX} Value of header '{name}' was None, set to \"\"")
            value = ""
        self._headers = httpx.Headers([*self._headers.raw, (name, _encode_header_value(value))])
        return self

    def set_headers(self: T, headers: Union[httpx.Headers, Mapping[str, HeaderValues], None]) -> T:
        if headers is None:
            self._headers = httpx.Headers()
        elif isinstance(headers, httpx.Headers):
            self._headers = headers.copy()
        else:
            items = []
            for name, values in headers.items():
                if isinstance(values, (str, bytes)):
                    items.append((name, _encode_header_value(values)))
                else:
                    items.extend((name, _encode_header_value(value)) for value in values)
            self._headers = httpx.Headers(items)
        return self

    def set_content_length(self: T, length: int) -> T:
        self._content_length = length
        return self

    # Cookies

    def set_cookies(self: T, cookies: Optional[Iterable[Cookie]]) -> T:
        self._cookies = list(cookies) if cookies is not None else []
        return self

    def add_cookie(self: T, cookie: Cookie) -> T:
        self._cookies.append(cookie)
        return self

    def add_or_replace_cookie(self: T, cookie: Cookie) -> T:
        """Replace the first cookie with the same name in place, or append."""
        for index, existing in enumerate(self._cookies):
            if existing.name == cookie.name:
                self._cookies[index] = cookie
                return self
        self._cookies.append(cookie)
        return self

    def reset_cookies(self) -> None:
        self._cookies.clear()

    # Query

    def add_query_param(self: T, name: str, value: Optional[str] = None) -> T:
        if self._query_params is None:
            self._query_params = []
        self._query_params.append(Param(name, value))
        return self

    def set_query_params(self: T, params: ParamsInput) -> T:
        self._query_params = _to_param_list(params)
        return self

    def reset_query(self) -> None:
        """Drop pending params and the query carried by the URI."""
        self._query_params = None
        if self._uri is not None:
            self._uri = self._uri.with_new_query(None)

    # Body

    def _install_body(self, body: Body) -> None:
        self._body = body
        self._content_length = -1

    def reset_form_params(self) -> None:
        if isinstance(self._body, FormParamsBody):
            self._body = NO_BODY

    def reset_multipart_data(self) -> None:
        if isinstance(self._body, MultipartBody):
            self._body = NO_BODY

    def reset_non_multipart_data(self) -> None:
        if is_scalar(self._body):
            self._body = NO_BODY
        self._content_length = -1

    def set_body(self: T, data: Any) -> T:
        """
        Set the body from bytes, text, a readable stream, an entity writer,
        an iterable of byte chunks, or a Path (see ``set_body_file``).
        None clears the body.
        """
        if data is None:
            self.reset_form_params()
            self.reset_multipart_data()
            self.reset_non_multipart_data()
            return self
        if isinstance(data, Path):
            return self.set_body_file(data)
        if isinstance(data, (bytes, bytearray)):
            self._install_body(BytesBody(bytes(data)))
        elif isinstance(data, str):
            self._install_body(TextBody(data))
        elif isinstance(data, EntityWriter):
            return self.set_entity_writer(data)
        elif hasattr(data, "read"):
            return self.set_body_stream(data)
        elif isinstance(data, Iterable):
            return self.set_body_generator(data)
        else:
            raise TypeError(f"Unsupported body type: {type(data).__name__}")
        return self

    def set_body_stream(self: T, stream: BinaryIO) -> T:
        self._install_body(StreamBody(stream))
        return self

    def set_entity_writer(self: T, writer: EntityWriter, length: int = -1) -> T:
        self._body = EntityWriterBody(writer, length)
        self._content_length = length
        return self

    def set_body_generator(self: T, generator: BodyGenerator) -> T:
        self._install_body(GeneratorBody(generator))
        return self

    def set_body_file(self: T, file: Union[str, Path, None]) -> T:
        """Upload ``file``. Does not clear any other body."""
        self._file = Path(file) if file is not None else None
        return self

    def set_json_body(self: T, data: Any) -> T:
        """Serialize ``data`` as a text body and default Content-Type to JSON."""
        self._install_body(TextBody(json.dumps(data)))
        if "Content-Type" not in self._headers:
            self._headers["Content-Type"] = JSON_CONTENT_TYPE
        return self

    def add_form_param(self: T, name: str, value: Optional[str]) -> T:
        params = self._body.params if isinstance(self._body, FormParamsBody) else ()
        self._install_body(FormParamsBody(params + (Param(name, value),)))
        return self

    def set_form_params(self: T, params: ParamsInput) -> T:
        param_list = _to_param_list(params)
        self._install_body(FormParamsBody(tuple(param_list)) if param_list is not None else NO_BODY)
        return self

    def add_body_part(self: T, part: Part) -> T:
        parts = self._body.parts if isinstance(self._body, MultipartBody) else ()
        self._install_body(MultipartBody(parts + (part,)))
        return self

    # Auxiliary fields

    def set_proxy_server(self: T, proxy_server: Optional[ProxyServer]) -> T:
        self._proxy_server = proxy_server
        return self

    def set_realm(self: T, realm: Optional[Realm]) -> T:
        self._realm = realm
        return self

    def set_follow_redirects(self: T, follow_redirects: bool) -> T:
        self._follow_redirects = follow_redirects
        return self

    def set_request_timeout_ms(self: T, request_timeout_ms: int) -> T:
        self._request_timeout_ms = request_timeout_ms
        return self

    def set_range_offset(self: T, range_offset: int) -> T:
        self._range_offset = range_offset
        return self

    def set_body_encoding(self: T, charset: Optional[str]) -> T:
        self._charset = charset
        return self

    def set_connection_pool_key_strategy(self: T, strategy: ConnectionPoolKeyStrategy) -> T:
        self._connection_pool_key_strategy = strategy
        return self

    def set_signature_calculator(self: T, calculator: Optional[SignatureCalculator]) -> T:
        self._signature_calculator = calculator
        return self

    # Finalization

    def _first_header(self, name: str) -> Optional[str]:
        values = self._headers.get_list(name)
        return values[0] if values else None

    def _compute_final_uri(self) -> UriComponents:
        uri = self._uri
        if uri is None:
            logger.debug(f"{LOG_PREFIX} set_url hasn't been invoked. Using {self._config.default_url}")
            uri = UriComponents.create(self._config.default_url)

        validate_supported_scheme(uri, self._config.supported_schemes)

        path = uri.path if uri.path else "/"
        query = compute_final_query_string(uri.query, self._query_params, self.disable_url_encoding)
        return UriComponents(uri.scheme, uri.user_info, uri.host, uri.port, path, query)

    def _execute_signature_calculator(self, uri: UriComponents) -> None:
        # Runs before charset/length derivation; nothing depends on that order yet
        if self._signature_calculator is None:
            return
        url = uri.base_url()
        logger.debug(f"{LOG_PREFIX} Computing signature for {url}")
        self._signature_calculator.calculate_and_add_signature(url, self._snapshot(uri), self)

    def _compute_request_charset(self) -> Optional[str]:
        if self._charset is not None:
            return self._charset
        content_type = self._first_header("Content-Type")
        if content_type is not None:
            return parse_charset(content_type)
        return None

    def _compute_request_length(self) -> int:
        # streamed bodies stay chunked
        if self._content_length >= 0 or isinstance(self._body, StreamBody):
            return self._content_length
        content_length = self._first_header("Content-Length")
        if content_length is not None:
            value = content_length.strip()
            if _INTEGER.fullmatch(value):
                return int(value)
            logger.debug(f"{LOG_PREFIX} Ignoring invalid Content-Length '{content_length}'")
        return self._content_length

    def _snapshot(
        self,
        uri: UriComponents,
        charset: Optional[str] = None,
        content_length: Optional[int] = None,
    ) -> Request:
        return Request(
            method=self._method,
            uri=uri,
            raw_headers=tuple(self._headers.raw),
            cookies=tuple(self._cookies),
            body=self._body,
            file=self._file,
            content_length=self._content_length if content_length is None else content_length,
            address=self._address,
            local_address=self._local_address,
            virtual_host=self._virtual_host,
            proxy_server=self._proxy_server,
            realm=self._realm,
            follow_redirects=self._follow_redirects,
            request_timeout_ms=self._request_timeout_ms,
            range_offset=self._range_offset,
            charset=self._charset if charset is None else charset,
            connection_pool_key_strategy=self._connection_pool_key_strategy,
        )

    def build(self) -> Request:
        """
        Finalize and return a frozen Request.

        Raises UnsupportedSchemeError for a scheme outside the configured
        allow-list, and QueryDecodeError when the URI query holds a
        malformed percent-escape (encoded mode only).
        """
        uri = self._compute_final_uri()
        self._execute_signature_calculator(uri)
        charset = self._compute_request_charset()
        content_length = self._compute_request_length()

        request = self._snapshot(uri, charset, content_length)
        logger.debug(f"{LOG_PREFIX} Built: {request.method} {request.uri} body={describe(request.body)}")
        return request


class RequestBuilder(RequestBuilderBase):
    """
    Public request builder.

    Usage:
        request = (
            RequestBuilder("POST")
            .set_url("https://example.com/api?x=1")
            .add_query_param("q", "search term")
            .set_header("Content-Type", "application/json; charset=utf-8")
            .set_body('{"foo": "bar"}')
            .build()
        )
    """

    def __repr__(self) -> str:
        return f"RequestBuilder(method={self._method!r}, uri={self._uri!s})"
