"""
Authorization header values.

The signature covers a partial header holding every field except the
signature itself, so the prefix is built first and only extended with
the signature once that has been computed.
"""

from .constants import AUTH_TYPE
from .credentials import Credentials


def auth_header_prefix(credentials: Credentials, timestamp: str, nonce: str) -> str:
    """
    Build the Authorization header value without the signature field.

    Args:
        credentials: Credential set supplying the tokens
        timestamp: EdgeGrid timestamp of the request
        nonce: Unique nonce of the request

    Returns:
        Header prefix ending with ';'
    """
    return (
        f"{AUTH_TYPE} "
        f"client_token={credentials.client_token};"
        f"access_token={credentials.access_token};"
        f"timestamp={timestamp};"
        f"nonce={nonce};"
    )


def build_header(credentials: Credentials, timestamp: str, nonce: str, signature: str) -> str:
    """Build the complete Authorization header value."""
    return f"{auth_header_prefix(credentials, timestamp, nonce)}signature={signature}"
