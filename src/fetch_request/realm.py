"""
Authentication realm attached to a request.
"""
import base64
from enum import Enum
from typing import Optional

from pydantic import BaseModel, SecretStr, model_validator


class AuthScheme(str, Enum):
    BASIC = "basic"
    DIGEST = "digest"
    NTLM = "ntlm"
    SPNEGO = "spnego"
    KERBEROS = "kerberos"
    NONE = "none"


class Realm(BaseModel):
    """Credentials and challenge data for server authentication."""
    model_config = {"frozen": True}

    scheme: AuthScheme = AuthScheme.NONE
    principal: Optional[str] = None
    password: Optional[SecretStr] = None
    realm_name: Optional[str] = None
    nonce: Optional[str] = None
    algorithm: str = "MD5"
    qop: Optional[str] = None
    opaque: Optional[str] = None
    ntlm_domain: Optional[str] = None
    ntlm_host: Optional[str] = None
    charset: str = "utf-8"
    use_preemptive_auth: bool = False
    omit_query: bool = False

    @model_validator(mode="after")
    def validate_realm(self) -> "Realm":
        """Validate that the selected scheme has what it needs."""
        needs_credentials = (AuthScheme.BASIC, AuthScheme.DIGEST, AuthScheme.NTLM)
        if self.scheme in needs_credentials and not (self.principal and self.password):
            raise ValueError(f"{self.scheme.value} realm requires 'principal' and 'password'")
        return self

    def basic_authorization(self) -> str:
        """Value of a preemptive Basic Authorization header."""
        if self.scheme is not AuthScheme.BASIC:
            raise ValueError(f"Not a basic realm: {self.scheme.value}")
        credentials = f"{self.principal}:{self.password.get_secret_value()}"
        return "Basic " + base64.b64encode(credentials.encode(self.charset)).decode("ascii")
