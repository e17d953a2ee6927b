from typing import Any


class RequestBuilderError(Exception):
    """Base exception for request construction errors."""
    pass


class MissingUriPathError(RequestBuilderError, ValueError):
    def __init__(self, uri: Any):
        msg = f"URI '{uri}' has no path component"
        super().__init__(msg)
        self.uri = uri


class UnsupportedSchemeError(RequestBuilderError, ValueError):
    def __init__(self, uri: Any, scheme: Any, supported: Any = ()):
        allowed = ", ".join(f"'{s}'" for s in supported)
        msg = f"The URI scheme, of the URI {uri}, must be equal (ignoring case) to one of {allowed}"
        super().__init__(msg)
        self.uri = uri
        self.scheme = scheme
        self.supported = tuple(supported)


class QueryDecodeError(RequestBuilderError, ValueError):
    def __init__(self, value: str, reason: str):
        msg = f"Cannot decode query component '{value}': {reason}"
        super().__init__(msg)
        self.value = value
        self.reason = reason
