"""
Auth handler utilities for fetch_request.
"""
import logging
from abc import ABC, abstractmethod
from typing import Callable, Dict, Optional

from ..types import RequestContext
from ..config import AuthConfig

logger = logging.getLogger(__name__)
LOG_PREFIX = "[AUTH]"


def _mask_value(val: Optional[str]) -> str:
    """Mask sensitive value for logging, showing first 10 chars."""
    if not val:
        return "<empty>"
    if len(val) <= 10:
        return "*" * len(val)
    return val[:10] + "*" * (len(val) - 10)


class AuthHandler(ABC):
    """Auth handler interface."""

    @abstractmethod
    def get_header(self, context: RequestContext) -> Optional[Dict[str, str]]:
        """Get auth header for request."""
        ...


class _KeyedAuthHandler(AuthHandler):
    def __init__(
        self,
        api_key: Optional[str] = None,
        get_api_key_for_request: Optional[
            Callable[[RequestContext], Optional[str]]
        ] = None,
    ):
        self._api_key = api_key
        self._get_api_key_for_request = get_api_key_for_request

    def _resolve_key(self, context: RequestContext) -> Optional[str]:
        key = None
        if self._get_api_key_for_request:
            key = self._get_api_key_for_request(context)
        return key or self._api_key


class BearerAuthHandler(_KeyedAuthHandler):
    """Bearer token auth handler."""

    def get_header(self, context: RequestContext) -> Optional[Dict[str, str]]:
        key = self._resolve_key(context)
        if not key:
            return None
        header = {"Authorization": f"Bearer {key}"}
        logger.debug(
            f"{LOG_PREFIX} BearerAuthHandler.get_header: api_key={_mask_value(key)} -> "
            f"Authorization={_mask_value(header['Authorization'])}"
        )
        return header


class XApiKeyAuthHandler(_KeyedAuthHandler):
    """X-API-Key auth handler."""

    def get_header(self, context: RequestContext) -> Optional[Dict[str, str]]:
        key = self._resolve_key(context)
        if not key:
            return None
        logger.debug(f"{LOG_PREFIX} XApiKeyAuthHandler.get_header: api_key={_mask_value(key)}")
        return {"x-api-key": key}


class CustomAuthHandler(_KeyedAuthHandler):
    """Custom header auth handler."""

    def __init__(
        self,
        header_name: str,
        api_key: Optional[str] = None,
        get_api_key_for_request: Optional[
            Callable[[RequestContext], Optional[str]]
        ] = None,
    ):
        super().__init__(api_key, get_api_key_for_request)
        self._header_name = header_name

    def get_header(self, context: RequestContext) -> Optional[Dict[str, str]]:
        key = self._resolve_key(context)
        if not key:
            return None
        logger.debug(
            f"{LOG_PREFIX} CustomAuthHandler.get_header: header_name={self._header_name}, "
            f"api_key={_mask_value(key)}"
        )
        return {self._header_name: key}


def create_auth_handler(config: AuthConfig) -> AuthHandler:
    """Create auth handler from config."""
    raw_key = config.raw_api_key.get_secret_value() if config.raw_api_key else None

    logger.debug(
        f"{LOG_PREFIX} create_auth_handler: type={config.type}, "
        f"raw_api_key={_mask_value(raw_key)}, username={_mask_value(config.username)}"
    )

    t = config.type

    # Basic carries a pre-computed base64 credential
    if t == "basic":
        return CustomAuthHandler(
            header_name="Authorization",
            api_key="Basic " + config.api_key,
            get_api_key_for_request=config.get_api_key_for_request,
        )

    if t in ("bearer", "bearer_oauth", "bearer_jwt"):
        return BearerAuthHandler(raw_key, config.get_api_key_for_request)

    if t == "x-api-key":
        return XApiKeyAuthHandler(raw_key, config.get_api_key_for_request)

    if t in ("custom", "custom_header"):
        return CustomAuthHandler(
            config.get_auth_header_name(),
            raw_key,
            config.get_api_key_for_request,
        )

    logger.warning(
        f"{LOG_PREFIX} create_auth_handler: Unknown type '{config.type}', defaulting to bearer"
    )
    return BearerAuthHandler(raw_key, config.get_api_key_for_request)
