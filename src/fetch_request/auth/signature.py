"""
Signature calculators backed by auth handlers.
"""
import logging
from typing import Any, Union

from ..body import TextBody, BytesBody, describe
from ..config import AuthConfig
from ..types import RequestContext
from .auth_handler import AuthHandler, create_auth_handler

logger = logging.getLogger(__name__)
LOG_PREFIX = "[AUTH]"


class AuthHeaderSignatureCalculator:
    """
    Adds the headers produced by an AuthHandler to the request being built.

    The handler sees the base URL (no query, no user-info), the method,
    the current headers and the body when it is bytes or text.
    """

    def __init__(self, handler: Union[AuthHandler, AuthConfig]):
        if isinstance(handler, AuthConfig):
            handler = create_auth_handler(handler)
        self._handler = handler

    def calculate_and_add_signature(self, url: str, request: Any, builder: Any) -> None:
        body = request.body
        context: RequestContext = {
            "method": request.method,
            "url": url,
            "headers": dict(request.headers),
            "body": body.data if isinstance(body, (TextBody, BytesBody)) else None,
        }
        auth_headers = self._handler.get_header(context)
        if not auth_headers:
            logger.debug(f"{LOG_PREFIX} No auth header for {request.method} {url} body={describe(body)}")
            return
        for name, value in auth_headers.items():
            builder.set_header(name, value)
