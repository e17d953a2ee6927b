"""
Immutable request descriptor.
"""
from dataclasses import dataclass, field
from ipaddress import IPv4Address, IPv6Address
from pathlib import Path
from typing import BinaryIO, Optional, Tuple, Union

import httpx

from ..body import (
    NO_BODY, Body, BytesBody, EntityWriterBody, FormParamsBody,
    GeneratorBody, MultipartBody, StreamBody, TextBody,
)
from ..multipart import Part
from ..proxy import ProxyServer
from ..query import parse_query_params
from ..realm import Realm
from ..types import (
    DEFAULT_CONNECTION_POOL_STRATEGY, BodyGenerator, ConnectionPoolKeyStrategy,
    Cookie, EntityWriter, Param,
)
from ..uri import UriComponents

IPAddress = Union[IPv4Address, IPv6Address]
RawHeaders = Tuple[Tuple[bytes, bytes], ...]


@dataclass(frozen=True)
class Request:
    """
    A finished request, as produced by ``RequestBuilder.build()``.

    Every collection is held as a tuple and headers are stored as raw
    pairs, so nothing done to a builder after ``build()`` can change a
    Request. ``query_params`` is parsed from ``uri.query`` when the
    instance is created.
    """
    method: str
    uri: UriComponents
    raw_headers: RawHeaders = ()
    cookies: Tuple[Cookie, ...] = ()
    body: Body = NO_BODY
    file: Optional[Path] = None
    content_length: int = -1
    address: Optional[IPAddress] = None
    local_address: Optional[IPAddress] = None
    virtual_host: Optional[str] = None
    proxy_server: Optional[ProxyServer] = None
    realm: Optional[Realm] = None
    follow_redirects: Optional[bool] = None
    request_timeout_ms: int = 0
    range_offset: int = 0
    charset: Optional[str] = None
    connection_pool_key_strategy: ConnectionPoolKeyStrategy = DEFAULT_CONNECTION_POOL_STRATEGY
    query_params: Tuple[Param, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "query_params", parse_query_params(self.uri.query))

    @property
    def headers(self) -> httpx.Headers:
        """A fresh, case-insensitive copy of the request headers."""
        return httpx.Headers(list(self.raw_headers))

    @property
    def url(self) -> str:
        """The URI as a string, without a trailing slash."""
        url = str(self.uri)
        return url[:-1] if url.endswith("/") else url

    def get_query_params(self) -> Tuple[Param, ...]:
        return self.query_params

    @property
    def byte_data(self) -> Optional[bytes]:
        return self.body.data if isinstance(self.body, BytesBody) else None

    @property
    def string_data(self) -> Optional[str]:
        return self.body.data if isinstance(self.body, TextBody) else None

    @property
    def stream_data(self) -> Optional[BinaryIO]:
        return self.body.stream if isinstance(self.body, StreamBody) else None

    @property
    def entity_writer(self) -> Optional[EntityWriter]:
        return self.body.writer if isinstance(self.body, EntityWriterBody) else None

    @property
    def body_generator(self) -> Optional[BodyGenerator]:
        return self.body.generator if isinstance(self.body, GeneratorBody) else None

    @property
    def form_params(self) -> Tuple[Param, ...]:
        return self.body.params if isinstance(self.body, FormParamsBody) else ()

    @property
    def parts(self) -> Tuple[Part, ...]:
        return self.body.parts if isinstance(self.body, MultipartBody) else ()

    def connection_pool_key(self) -> str:
        return self.connection_pool_key_strategy.get_key(self.uri)

    def __str__(self) -> str:
        out = [str(self.uri), self.method, "headers:"]
        headers = self.headers
        for name in headers.keys():
            out.append(f"{name}:{', '.join(headers.get_list(name))}")
        if self.form_params:
            out.append("formParams:")
            for param in self.form_params:
                out.append(f"{param.name}:{param.value}")
        return "\t".join(out)
