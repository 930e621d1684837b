"""
Canonical request construction for EdgeGrid signatures.

The canonical string is the tab-separated concatenation of:

    METHOD, SCHEME, HOST, PATH_AND_QUERY, CANONICALIZED_HEADERS,
    BODY_HASH, AUTH_HEADER_PREFIX

The server rebuilds the same string from the request it receives, so every
field must be reproduced byte for byte.
"""

import base64
import hashlib
import logging
from dataclasses import dataclass, field
from typing import Iterable, Mapping, Optional, Sequence, Tuple, Union
from urllib.parse import quote

from .credentials import Credentials
from .header import auth_header_prefix
from .signer import encode_utf8

logger = logging.getLogger(__name__)

# RFC 3986 unreserved characters are left as-is
QUERY_SAFE_CHARS = "-_.~"


@dataclass(frozen=True)
class RequestDescriptor:
    """
    Description of an outgoing request, as seen by the signer.

    Attributes:
        method: HTTP method (upper-cased on construction)
        path: URL path
        query: Query parameters as (key, value) pairs
        headers: Request headers
        body: Request body bytes, if any
        scheme: URL scheme
    """

    method: str
    path: str = "/"
    query: Sequence[Tuple[str, str]] = ()
    headers: Mapping[str, str] = field(default_factory=dict)
    body: Optional[Union[bytes, str]] = None
    scheme: str = "https"

    def __post_init__(self):
        object.__setattr__(self, 'method', self.method.upper())
        object.__setattr__(self, 'query', tuple((str(k), str(v)) for k, v in self.query))
        object.__setattr__(self, 'scheme', self.scheme.lower())
        if isinstance(self.body, str):
            object.__setattr__(self, 'body', encode_utf8(self.body, 'body'))


def canonicalize_path(path: str) -> str:
    """Ensure the path is absolute; an empty path becomes '/'."""
    if not path:
        return "/"
    if not path.startswith("/"):
        return "/" + path
    return path


def _encode_query_part(value: str, name: str) -> str:
    return quote(encode_utf8(value, name), safe=QUERY_SAFE_CHARS)


def canonicalize_query(query: Iterable[Tuple[str, str]]) -> str:
    """
    Sort and encode query parameters.

    Parameters are ordered by key, then by value, so the result does not
    depend on the order they were supplied in.

    Args:
        query: (key, value) pairs

    Returns:
        Encoded query string without the leading '?'
    """
    pairs = sorted(((str(k), str(v)) for k, v in query), key=lambda kv: (kv[0], kv[1]))
    return "&".join(
        f"{_encode_query_part(k, 'query key')}={_encode_query_part(v, 'query value')}"
        for k, v in pairs
    )


def path_and_query(request: RequestDescriptor) -> str:
    """Canonical path followed by the canonical query string, if any."""
    path = canonicalize_path(request.path)
    query = canonicalize_query(request.query)
    if query:
        return f"{path}?{query}"
    return path


def canonicalize_headers(headers: Mapping[str, str], headers_to_sign: Iterable[str] = ()) -> str:
    """
    Canonicalize the headers declared for signing.

    Header names are lower-cased and sorted. Values are trimmed and runs of
    internal whitespace collapse to a single space. A declared header missing
    from the request keeps its slot with an empty value.

    Args:
        headers: Request headers
        headers_to_sign: Header names to include

    Returns:
        Tab-separated 'name:value' entries
    """
    present = {name.lower(): value for name, value in headers.items()}
    names = sorted({name.strip().lower() for name in headers_to_sign if name.strip()})

    entries = []
    for name in names:
        value = present.get(name)
        if value is None:
            value = ""
        elif isinstance(value, bytes):
            value = value.decode('latin-1')
        value = " ".join(str(value).split())
        entries.append(f"{name}:{value}")
    return "\t".join(entries)


def hash_body(body: Optional[bytes], max_body: int) -> str:
    """
    Hash the signed portion of a request body.

    Only the first max_body bytes are hashed. Bytes past the limit are not
    covered by the signature but are still sent.

    Args:
        body: Request body, or None
        max_body: Maximum number of bytes to hash

    Returns:
        Base64 SHA-256 of the truncated body, or '' when there is no body
    """
    if not body:
        return ""

    if len(body) > max_body:
        logger.warning(
            f"Request body size ({len(body)}) exceeds max_body ({max_body}), truncating for signing"
        )
        body = body[:max_body]

    return base64.b64encode(hashlib.sha256(body).digest()).decode('ascii')


def canonicalize(
    credentials: Credentials,
    request: RequestDescriptor,
    timestamp: str,
    nonce: str,
    headers_to_sign: Iterable[str] = (),
) -> str:
    """
    Build the canonical string for a request.

    Args:
        credentials: Credential set (supplies host, tokens and max_body)
        request: Request to canonicalize
        timestamp: EdgeGrid timestamp of the request
        nonce: Unique nonce of the request
        headers_to_sign: Header names covered by the signature

    Returns:
        Tab-separated canonical string

    Raises:
        EncodingError: If query parameters are not valid UTF-8
    """
    fields = [
        request.method,
        request.scheme,
        credentials.host,
        path_and_query(request),
        canonicalize_headers(request.headers, headers_to_sign),
        hash_body(request.body, credentials.max_body),
        auth_header_prefix(credentials, timestamp, nonce),
    ]
    return "\t".join(fields)
