"""
EdgeGrid Client Library for Akamai OPEN APIs

A Python client library that signs HTTP requests with Akamai EdgeGrid
(EG1-HMAC-SHA256) authentication.

Example usage:
    from edgegrid_client import EdgeGridClient

    client = EdgeGridClient.from_edgerc("~/.edgerc", "default")
    response = client.get("/billing-usage/v1/reportSources")
"""

from .auth import EdgeGridAuth, sign_request
from .canonical import RequestDescriptor, canonicalize
from .client import EdgeGridClient
from .config import load_edgerc, load_env, resolve_credentials
from .credentials import Credentials
from .exceptions import (
    EdgeGridError,
    ConfigurationError,
    MissingCredentialError,
    InvalidSectionError,
    SigningError,
    EncodingError,
    HTTPError
)
from .constants import (
    AUTH_TYPE,
    HEADER_AUTHORIZATION,
    DEFAULT_CONFIG,
    MAX_BODY
)
from .header import auth_header_prefix, build_header
from .signer import eg_timestamp, make_signing_key, new_nonce, sign

__version__ = "1.0.0"
__all__ = [
    "EdgeGridClient",
    "EdgeGridAuth",
    "Credentials",
    "RequestDescriptor",
    "canonicalize",
    "sign",
    "make_signing_key",
    "sign_request",
    "auth_header_prefix",
    "build_header",
    "eg_timestamp",
    "new_nonce",
    "load_edgerc",
    "load_env",
    "resolve_credentials",
    "EdgeGridError",
    "ConfigurationError",
    "MissingCredentialError",
    "InvalidSectionError",
    "SigningError",
    "EncodingError",
    "HTTPError",
    "AUTH_TYPE",
    "HEADER_AUTHORIZATION",
    "DEFAULT_CONFIG",
    "MAX_BODY"
]
