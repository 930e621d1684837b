"""
EdgeGrid request signing.

sign_request() runs the signing pipeline for a RequestDescriptor:

    partial header -> canonical string -> signature -> final header

EdgeGridAuth plugs the same pipeline into requests so every prepared
request gets a fresh Authorization header.
"""

import logging
from typing import Callable, Iterable, Optional
from urllib.parse import parse_qsl, urlsplit, urlunsplit

from requests.auth import AuthBase

from .canonical import RequestDescriptor, canonicalize, canonicalize_query
from .constants import ACCOUNT_SWITCH_KEY_PARAM, HEADER_AUTHORIZATION
from .credentials import Credentials
from .exceptions import SigningError
from .header import build_header
from .signer import eg_timestamp, new_nonce, sign

logger = logging.getLogger(__name__)


def sign_request(
    credentials: Credentials,
    request: RequestDescriptor,
    headers_to_sign: Iterable[str] = (),
    timestamp: Optional[str] = None,
    nonce: Optional[str] = None,
) -> str:
    """
    Compute the Authorization header value for a request.

    Args:
        credentials: Credential set to sign with
        request: Request to sign
        headers_to_sign: Header names covered by the signature
        timestamp: EdgeGrid timestamp (defaults to now)
        nonce: Request nonce (defaults to a new UUID)

    Returns:
        Complete Authorization header value

    Raises:
        SigningError: If the signature cannot be computed
    """
    if timestamp is None:
        timestamp = eg_timestamp()
    if nonce is None:
        nonce = new_nonce()

    canonical_string = canonicalize(credentials, request, timestamp, nonce, headers_to_sign)
    signature = sign(credentials, canonical_string, timestamp)
    return build_header(credentials, timestamp, nonce, signature)


class EdgeGridAuth(AuthBase):
    """
    requests authentication handler for Akamai EdgeGrid.

    The query string of each request is rewritten into canonical order
    before signing so the URL sent on the wire is the one that was signed.

    Example:
        session = requests.Session()
        session.auth = EdgeGridAuth(credentials)
        session.get(credentials.base_url + "/billing-usage/v1/reportSources")
    """

    def __init__(
        self,
        credentials: Credentials,
        headers_to_sign: Iterable[str] = (),
        clock: Callable[[], str] = eg_timestamp,
        nonce_factory: Callable[[], str] = new_nonce,
    ):
        """
        Initialize EdgeGrid authentication.

        Args:
            credentials: Credential set to sign with
            headers_to_sign: Header names covered by the signature
            clock: Returns the EdgeGrid timestamp for a request
            nonce_factory: Returns a unique nonce for a request
        """
        self.credentials = credentials
        self.headers_to_sign = tuple(headers_to_sign)
        self.clock = clock
        self.nonce_factory = nonce_factory

    def _descriptor(self, r) -> RequestDescriptor:
        url = urlsplit(r.url)
        query = parse_qsl(url.query, keep_blank_values=True)

        switch_key = self.credentials.account_switch_key
        if switch_key and not any(k == ACCOUNT_SWITCH_KEY_PARAM for k, _ in query):
            query.append((ACCOUNT_SWITCH_KEY_PARAM, switch_key))

        body = r.body
        if body is not None and not isinstance(body, (bytes, str)):
            raise SigningError(f"cannot sign streamed request body of type {type(body).__name__}")

        return RequestDescriptor(
            method=r.method,
            path=url.path,
            query=query,
            headers=r.headers,
            body=body,
            scheme=url.scheme or "https",
        )

    def __call__(self, r):
        request = self._descriptor(r)

        url = urlsplit(r.url)
        r.url = urlunsplit(
            (url.scheme, url.netloc, url.path, canonicalize_query(request.query), url.fragment)
        )

        r.headers[HEADER_AUTHORIZATION] = sign_request(
            self.credentials,
            request,
            self.headers_to_sign,
            timestamp=self.clock(),
            nonce=self.nonce_factory(),
        )
        logger.debug(f"Signed {request.method} request to {r.url}")
        return r
