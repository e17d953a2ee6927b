"""
Fetch Request - request construction core
"""

__version__ = "0.1.0"

from .config import BuilderConfig, AuthConfig, resolve_config
from .types import (
    Param, Cookie, SignatureCalculator, ConnectionPoolKeyStrategy,
    DefaultConnectionPoolStrategy, map_to_param_list,
)
from .uri import UriComponents, validate_supported_scheme
from .query import compute_final_query_string, parse_query_params
from .multipart import StringPart, ByteArrayPart, FilePart
from .proxy import ProxyServer, ProxyProtocol, resolve_proxy_url, resolve_proxy_server
from .realm import Realm, AuthScheme
from .core.request import Request
from .core.builder import RequestBuilder, RequestBuilderBase
from .auth import AuthHandler, create_auth_handler, AuthHeaderSignatureCalculator
from .adapters import to_httpx_request
from .errors import (
    RequestBuilderError, MissingUriPathError, UnsupportedSchemeError, QueryDecodeError,
)

__all__ = [
    "BuilderConfig", "AuthConfig", "resolve_config",
    "Param", "Cookie", "SignatureCalculator", "ConnectionPoolKeyStrategy",
    "DefaultConnectionPoolStrategy", "map_to_param_list",
    "UriComponents", "validate_supported_scheme",
    "compute_final_query_string", "parse_query_params",
    "StringPart", "ByteArrayPart", "FilePart",
    "ProxyServer", "ProxyProtocol", "resolve_proxy_url", "resolve_proxy_server",
    "Realm", "AuthScheme",
    "Request", "RequestBuilder", "RequestBuilderBase",
    "AuthHandler", "create_auth_handler", "AuthHeaderSignatureCalculator",
    "to_httpx_request",
    "RequestBuilderError", "MissingUriPathError", "UnsupportedSchemeError", "QueryDecodeError",
]
