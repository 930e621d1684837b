"""
HTTP client for Akamai OPEN APIs.

This module provides a thin requests-based client that signs every
request with EdgeGrid authentication.
"""

import json
from typing import Any, Optional
from urllib.parse import urljoin

import requests

from .auth import EdgeGridAuth
from .config import load_edgerc, load_env, resolve_credentials
from .constants import DEFAULT_CONFIG, DEFAULT_EDGERC, DEFAULT_SECTION
from .credentials import Credentials
from .exceptions import ConfigurationError, HTTPError


class EdgeGridClient:
    """
    EdgeGrid client for making authenticated requests to Akamai APIs.

    Requests are sent to the credential set's host; each one is signed with
    a fresh timestamp and nonce just before it goes out.
    """

    def __init__(self, credentials: Credentials, **config):
        """
        Initialize EdgeGrid client.

        Args:
            credentials: Credential set to sign requests with
            **config: Configuration options (timeout, headers_to_sign)
        """
        self.credentials = credentials
        self.base_url = credentials.base_url

        # Merge default config with user overrides
        self.config = {**DEFAULT_CONFIG, **config}

        # Validate configuration
        self._validate_config()

        # Create HTTP session
        self.session = requests.Session()
        self.session.auth = EdgeGridAuth(credentials, self.config['headers_to_sign'])

    @classmethod
    def from_edgerc(cls, path: str = DEFAULT_EDGERC, section: str = DEFAULT_SECTION, **config) -> 'EdgeGridClient':
        """Create a client from a section of an .edgerc file."""
        return cls(load_edgerc(path, section), **config)

    @classmethod
    def from_env(cls, section: str = DEFAULT_SECTION, **config) -> 'EdgeGridClient':
        """
        Create a client from AKAMAI_* environment variables.

        Raises:
            ConfigurationError: If no credentials are set in the environment
        """
        credentials = load_env(section)
        if credentials is None:
            raise ConfigurationError(f"no credentials in environment for section '{section}'")
        return cls(credentials, **config)

    @classmethod
    def from_config(cls, section: str = DEFAULT_SECTION, path: str = DEFAULT_EDGERC, **config) -> 'EdgeGridClient':
        """Create a client from the environment, falling back to .edgerc."""
        return cls(resolve_credentials(section, path), **config)

    def _validate_config(self):
        """Validate client configuration."""
        timeout = self.config['timeout']
        if timeout is not None:
            values = timeout if isinstance(timeout, tuple) else (timeout,)
            if isinstance(timeout, tuple) and len(timeout) != 2:
                raise ConfigurationError("timeout tuple must be (connect, read)")
            for value in values:
                if value is None:
                    continue
                if isinstance(value, bool) or not isinstance(value, (int, float)):
                    raise ConfigurationError(f"timeout must be a number, got {value!r}")
                if value <= 0:
                    raise ConfigurationError("timeout must be positive")

        if isinstance(self.config['headers_to_sign'], str):
            raise ConfigurationError("headers_to_sign must be a sequence of header names")

    def _prepare_request_body(self, json_data=None, data=None) -> Optional[bytes]:
        """Prepare request body for sending."""
        if json_data is not None:
            return json.dumps(json_data, separators=(',', ':')).encode('utf-8')
        elif data is not None:
            if isinstance(data, str):
                return data.encode('utf-8')
            elif isinstance(data, bytes):
                return data
            else:
                return str(data).encode('utf-8')
        else:
            return None

    def _make_request(self, method: str, path: str, json_data=None, data=None, **kwargs) -> requests.Response:
        """
        Make authenticated HTTP request.

        Args:
            method: HTTP method
            path: URL path (relative to the API host)
            json_data: JSON data to send
            data: Raw data to send
            **kwargs: Additional requests arguments

        Returns:
            requests.Response object

        Raises:
            HTTPError: If request fails
            SigningError: If the request cannot be signed
        """
        url = urljoin(self.base_url + '/', path.lstrip('/'))

        body = self._prepare_request_body(json_data, data)

        headers = dict(kwargs.get('headers') or {})
        if json_data is not None:
            headers['Content-Type'] = 'application/json'
        kwargs['headers'] = headers

        if body is not None:
            kwargs['data'] = body

        kwargs.setdefault('timeout', self.config['timeout'])

        try:
            return self.session.request(method, url, **kwargs)
        except requests.RequestException as e:
            raise HTTPError(f"HTTP request failed: {e}")

    def get(self, path: str, params: Any = None, **kwargs) -> requests.Response:
        """Make authenticated GET request."""
        return self._make_request('GET', path, params=params, **kwargs)

    def post(self, path: str, json=None, data=None, **kwargs) -> requests.Response:
        """Make authenticated POST request."""
        return self._make_request('POST', path, json_data=json, data=data, **kwargs)

    def put(self, path: str, json=None, data=None, **kwargs) -> requests.Response:
        """Make authenticated PUT request."""
        return self._make_request('PUT', path, json_data=json, data=data, **kwargs)

    def patch(self, path: str, json=None, data=None, **kwargs) -> requests.Response:
        """Make authenticated PATCH request."""
        return self._make_request('PATCH', path, json_data=json, data=data, **kwargs)

    def delete(self, path: str, **kwargs) -> requests.Response:
        """Make authenticated DELETE request."""
        return self._make_request('DELETE', path, **kwargs)

    def request_json(self, method: str, path: str, json=None, data=None, **kwargs) -> Any:
        """
        Make authenticated request and decode the JSON response.

        Args:
            method: HTTP method
            path: URL path (relative to the API host)
            json: JSON data to send
            data: Raw data to send
            **kwargs: Additional requests arguments

        Returns:
            Decoded response body, or None for an empty body

        Raises:
            HTTPError: If the request fails, the status is not 2xx or the
                body is not JSON
        """
        response = self._make_request(method, path, json_data=json, data=data, **kwargs)
        if not 200 <= response.status_code < 300:
            raise HTTPError(
                f"HTTP {response.status_code}: {response.text}",
                status_code=response.status_code
            )
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise HTTPError(f"invalid JSON response: {e}", status_code=response.status_code)

    def close(self):
        """Close HTTP session."""
        if self.session:
            self.session.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
