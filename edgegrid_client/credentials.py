"""
EdgeGrid credential set.

Credentials are created once per configuration section and never change
afterwards, so a single instance can be shared by any number of threads
signing requests at the same time.
"""

from dataclasses import dataclass
from typing import Optional

from .constants import MAX_BODY, REQUIRED_FIELDS
from .exceptions import ConfigurationError, MissingCredentialError

# A path, query or fragment after the host name would change the signed URL
HOST_INVALID_CHARS = "/?#"


def normalize_host(host: str) -> str:
    """Strip scheme and trailing slashes, leaving the bare API host name."""
    host = host.strip()
    for scheme in ("https://", "http://"):
        if host.lower().startswith(scheme):
            host = host[len(scheme):]
            break
    return host.rstrip('/')


@dataclass(frozen=True)
class Credentials:
    """
    Client credentials for an Akamai OPEN API host.

    Attributes:
        client_token: Client token from the API client
        client_secret: Client secret used to derive signing keys
        access_token: Access token from the API client
        host: API host name, e.g. akab-xxx.luna.akamaiapis.net
        max_body: Maximum number of body bytes covered by the signature
        account_switch_key: Optional account to act on behalf of
    """

    client_token: str
    client_secret: str
    access_token: str
    host: str
    max_body: int = MAX_BODY
    account_switch_key: Optional[str] = None

    def __post_init__(self):
        for field in REQUIRED_FIELDS:
            value = getattr(self, field)
            if value is None:
                raise MissingCredentialError(field)
            if not isinstance(value, str):
                raise ConfigurationError(f"{field} must be a string, got {type(value).__name__}")
            if not value.strip():
                raise MissingCredentialError(field)

        object.__setattr__(self, 'host', normalize_host(self.host))
        if not self.host:
            raise MissingCredentialError('host')
        if any(c in self.host for c in HOST_INVALID_CHARS):
            raise ConfigurationError(f"host must be a bare host name, got {self.host!r}")

        if isinstance(self.max_body, bool) or not isinstance(self.max_body, int):
            raise ConfigurationError(f"max_body must be an integer, got {self.max_body!r}")
        if self.max_body <= 0:
            raise ConfigurationError("max_body must be positive")

        if self.account_switch_key is not None and not self.account_switch_key.strip():
            object.__setattr__(self, 'account_switch_key', None)

    @property
    def base_url(self) -> str:
        """HTTPS base URL for the API host."""
        return f"https://{self.host}"

    def __repr__(self) -> str:
        return (
            f"Credentials(host={self.host!r}, client_token={self.client_token!r}, "
            f"access_token={self.access_token!r}, max_body={self.max_body})"
        )
