"""
EdgeGrid signature computation.

A signing key is derived from the client secret and the request timestamp,
then used to compute the HMAC-SHA256 signature of the canonical request
string. Both steps are pure; only the timestamp and nonce helpers read the
clock or the random source.
"""

import base64
import datetime
import hashlib
import hmac
import uuid
from typing import Optional

from .constants import TIMESTAMP_FORMAT
from .credentials import Credentials
from .exceptions import EncodingError, SigningError


def encode_utf8(value: str, name: str) -> bytes:
    """
    Encode signing input as UTF-8.

    Raises:
        EncodingError: If value contains characters that cannot be encoded
    """
    try:
        return value.encode('utf-8')
    except UnicodeEncodeError as e:
        raise EncodingError(f"{name} is not valid UTF-8: {e}")


def eg_timestamp(now: Optional[datetime.datetime] = None) -> str:
    """
    Format a UTC instant as an EdgeGrid timestamp.

    Args:
        now: Instant to format (defaults to the current time)

    Returns:
        Timestamp such as 20140321T19:34:21+0000
    """
    if now is None:
        now = datetime.datetime.now(datetime.timezone.utc)
    elif now.tzinfo is not None:
        now = now.astimezone(datetime.timezone.utc)
    return now.strftime(TIMESTAMP_FORMAT)


def new_nonce() -> str:
    """Generate a fresh UUID v4 nonce."""
    return str(uuid.uuid4())


def base64_hmac_sha256(key: bytes, message: bytes) -> str:
    mac = hmac.new(key, message, hashlib.sha256)
    return base64.b64encode(mac.digest()).decode('ascii')


def make_signing_key(client_secret: str, timestamp: str) -> str:
    """
    Derive the per-request signing key.

    Args:
        client_secret: Client secret from the credential set
        timestamp: EdgeGrid timestamp of the request

    Returns:
        Base64-encoded HMAC-SHA256 of the timestamp keyed by the secret

    Raises:
        SigningError: If the client secret is empty
        EncodingError: If the secret or timestamp is not valid UTF-8
    """
    if not client_secret:
        raise SigningError("client_secret is empty")

    return base64_hmac_sha256(
        encode_utf8(client_secret, 'client_secret'),
        encode_utf8(timestamp, 'timestamp'),
    )


def sign(credentials: Credentials, canonical_string: str, timestamp: str) -> str:
    """
    Sign a canonical request string.

    The base64 text of the signing key is used as the HMAC key, exactly as
    the Akamai reference libraries do.

    Args:
        credentials: Credential set holding the client secret
        canonical_string: Output of canonicalize()
        timestamp: Timestamp embedded in the canonical string

    Returns:
        Base64-encoded signature

    Raises:
        SigningError: If the client secret is empty
        EncodingError: If any input is not valid UTF-8
    """
    signing_key = make_signing_key(credentials.client_secret, timestamp)
    return base64_hmac_sha256(
        signing_key.encode('ascii'),
        encode_utf8(canonical_string, 'canonical string'),
    )
