"""
Immutable URI components.
"""
from dataclasses import dataclass, replace
from typing import Iterable, Optional
from urllib.parse import urlsplit

from .errors import UnsupportedSchemeError

SUPPORTED_SCHEMES = ("http", "https", "ws", "wss")
SECURE_SCHEMES = ("https", "wss")


@dataclass(frozen=True)
class UriComponents:
    """
    A URI split into the components a request needs.

    Values are never mutated; the ``with_new_*`` helpers return copies.
    ``port`` is None when the URI does not carry one.
    """
    scheme: Optional[str]
    user_info: Optional[str]
    host: Optional[str]
    port: Optional[int]
    path: Optional[str]
    query: Optional[str]

    @classmethod
    def create(cls, url: str) -> "UriComponents":
        """Parse an absolute URL. The fragment, if any, is dropped."""
        parsed = urlsplit(url)
        user_info = parsed.netloc.rpartition("@")[0] if "@" in parsed.netloc else None
        return cls(
            scheme=parsed.scheme or None,
            user_info=user_info or None,
            host=parsed.hostname,
            port=parsed.port,
            path=parsed.path,
            query=parsed.query or None,
        )

    def with_new_query(self, query: Optional[str]) -> "UriComponents":
        return replace(self, query=query)

    def with_new_path(self, path: Optional[str]) -> "UriComponents":
        return replace(self, path=path)

    def base_url(self) -> str:
        """Scheme, host, port and path only."""
        return str(UriComponents(self.scheme, None, self.host, self.port, self.path, None))

    def explicit_port(self) -> int:
        if self.port is not None:
            return self.port
        return 443 if (self.scheme or "").lower() in SECURE_SCHEMES else 80

    def __str__(self) -> str:
        out = []
        if self.scheme:
            out.append(f"{self.scheme}://")
        if self.user_info:
            out.append(f"{self.user_info}@")
        if self.host:
            out.append(f"[{self.host}]" if ":" in self.host else self.host)
        if self.port is not None:
            out.append(f":{self.port}")
        if self.path:
            out.append(self.path)
        if self.query is not None:
            out.append(f"?{self.query}")
        return "".join(out)


def validate_supported_scheme(uri: UriComponents, supported: Iterable[str] = SUPPORTED_SCHEMES) -> None:
    """Fail if the URI scheme is not one of ``supported`` (case-insensitive)."""
    allowed = tuple(s.lower() for s in supported)
    scheme = uri.scheme
    if scheme is None or scheme.lower() not in allowed:
        raise UnsupportedSchemeError(uri, scheme, allowed)
