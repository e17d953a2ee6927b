"""
Configuration models and validation for fetch-request.
"""
import base64
import os
from typing import Any, Callable, List, Optional, Tuple, Union

from pydantic import BaseModel, SecretStr, field_validator, model_validator

from .types import AuthType, RequestContext
from .uri import SUPPORTED_SCHEMES, UriComponents

# Constants
DEFAULT_REQUEST_URL = "http://localhost"
ENV_DISABLE_URL_ENCODING = "FETCH_REQUEST_DISABLE_URL_ENCODING"
ENV_DEFAULT_URL = "FETCH_REQUEST_DEFAULT_URL"


class AuthConfig(BaseModel):
    """Authentication configuration."""
    type: AuthType
    raw_api_key: Optional[SecretStr] = None
    username: Optional[str] = None
    password: Optional[SecretStr] = None
    header_name: Optional[str] = None

    # Callback for dynamic key resolution
    get_api_key_for_request: Optional[Callable[[RequestContext], Optional[str]]] = None

    @property
    def api_key(self) -> str:
        """
        Get the computed API key ready for the header.
        - For basic: Returns the base64 encoded "username:password"
        - For bearer/x-api-key/custom: Returns the raw key
        """
        if self.type == "basic":
            credentials = f"{self.username}:{self.password.get_secret_value()}"
            return base64.b64encode(credentials.encode()).decode()
        if self.raw_api_key:
            return self.raw_api_key.get_secret_value()
        return ""

    def get_auth_header_name(self) -> str:
        """Get the expected header name."""
        if self.type == "x-api-key":
            return "x-api-key"
        if self.type in ("custom", "custom_header"):
            return self.header_name or "Authorization"
        return "Authorization"

    @model_validator(mode='after')
    def validate_auth_config(self) -> 'AuthConfig':
        """Validate that required fields are present for the selected auth type."""
        t = self.type

        if t == "basic" and not (self.username and self.password):
            raise ValueError("Basic auth requires 'username' and 'password'")

        if t in ("bearer", "bearer_oauth", "bearer_jwt", "x-api-key") and not self.raw_api_key:
            raise ValueError(f"{t} requires 'raw_api_key'")

        if t in ("custom", "custom_header") and not (self.header_name and self.raw_api_key):
            raise ValueError(f"{t} requires 'header_name' and 'raw_api_key'")

        return self


class BuilderConfig(BaseModel):
    """Request builder configuration."""
    model_config = {"frozen": True}

    default_url: str = DEFAULT_REQUEST_URL
    supported_schemes: Tuple[str, ...] = SUPPORTED_SCHEMES
    disable_url_encoding: bool = False

    @field_validator("supported_schemes")
    @classmethod
    def normalize_schemes(cls, v: Tuple[str, ...]) -> Tuple[str, ...]:
        if not v:
            raise ValueError("supported_schemes must not be empty")
        return tuple(s.lower() for s in v)

    @model_validator(mode='after')
    def validate_default_url(self) -> 'BuilderConfig':
        scheme = UriComponents.create(self.default_url).scheme
        if not scheme or scheme.lower() not in self.supported_schemes:
            raise ValueError(f"default_url must use one of {', '.join(self.supported_schemes)}")
        return self


def _resolve(arg: Any, env_keys: Union[str, List[str]], default: Any) -> Any:
    """
    Resolve configuration value from multiple sources in priority order:
    1. Direct argument (if not None)
    2. Environment variables
    3. Default value
    """
    if arg is not None:
        return arg

    if isinstance(env_keys, str):
        env_keys = [env_keys]

    for key in env_keys:
        val = os.getenv(key)
        if val is not None:
            return val

    return default


def _resolve_bool(arg: Any, env_keys: Union[str, List[str]], default: bool) -> bool:
    """Resolve boolean value with string conversion support."""
    val = _resolve(arg, env_keys, default)

    if isinstance(val, bool):
        return val
    if isinstance(val, str):
        return val.lower() in ("true", "1", "yes", "on")
    return bool(val)


def resolve_config(
    default_url: Optional[str] = None,
    disable_url_encoding: Optional[bool] = None,
    supported_schemes: Optional[Tuple[str, ...]] = None,
) -> BuilderConfig:
    """Apply environment overrides and defaults and return the config."""
    return BuilderConfig(
        default_url=_resolve(default_url, ENV_DEFAULT_URL, DEFAULT_REQUEST_URL),
        disable_url_encoding=_resolve_bool(disable_url_encoding, ENV_DISABLE_URL_ENCODING, False),
        supported_schemes=supported_schemes or SUPPORTED_SCHEMES,
    )
