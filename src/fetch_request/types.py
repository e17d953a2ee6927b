"""
Core type definitions for fetch-request.
"""
from dataclasses import dataclass
from typing import (
    TYPE_CHECKING, Any, BinaryIO, Dict, Iterable, List, Literal, Mapping,
    Optional, Protocol, TypedDict, runtime_checkable,
)

if TYPE_CHECKING:
    from .uri import UriComponents

# Authentication Types
AuthType = Literal[
    "basic",
    "bearer",
    "bearer_oauth",
    "bearer_jwt",
    "x-api-key",
    "custom",
    "custom_header",
]

# Chunks produced by a body generator
BodyGenerator = Iterable[bytes]


@dataclass(frozen=True)
class Param:
    """A query or form parameter. A value of None renders as a bare name."""
    name: str
    value: Optional[str] = None


def map_to_param_list(mapping: Optional[Mapping[str, Iterable[Optional[str]]]]) -> Optional[List[Param]]:
    """
    Flatten a name -> values mapping into an ordered list of Param,
    one per value, keeping key order and then value order.
    """
    if mapping is None:
        return None

    params: List[Param] = []
    for name, values in mapping.items():
        for value in values:
            params.append(Param(name, value))
    return params


@dataclass(frozen=True)
class Cookie:
    """Request cookie. Attributes are carried, not interpreted."""
    name: str
    value: str
    domain: Optional[str] = None
    path: Optional[str] = None
    max_age: Optional[int] = None
    secure: bool = False
    http_only: bool = False

    def __str__(self) -> str:
        return f"{self.name}={self.value}"


class RequestContext(TypedDict):
    """Context passed to auth callbacks."""
    method: str
    url: str
    headers: Dict[str, str]
    body: Any


@runtime_checkable
class EntityWriter(Protocol):
    """Writes the request entity to an output stream."""
    def write_entity(self, out: BinaryIO) -> None: ...


@runtime_checkable
class SignatureCalculator(Protocol):
    """
    Computes a request signature and adds it through the builder.

    ``url`` is the base URL of the request: scheme, host, port and path,
    never user-info or query.
    """
    def calculate_and_add_signature(self, url: str, request: Any, builder: Any) -> None: ...


@runtime_checkable
class ConnectionPoolKeyStrategy(Protocol):
    """Maps a request URI to the key of the connection pool serving it."""
    def get_key(self, uri: "UriComponents") -> str: ...


class DefaultConnectionPoolStrategy:
    """Pools connections by scheme, host and effective port."""

    def get_key(self, uri: "UriComponents") -> str:
        host = f"[{uri.host}]" if uri.host and ":" in uri.host else uri.host
        return f"{uri.scheme}://{host}:{uri.explicit_port()}"

    def __repr__(self) -> str:
        return "DefaultConnectionPoolStrategy()"


DEFAULT_CONNECTION_POOL_STRATEGY = DefaultConnectionPoolStrategy()
