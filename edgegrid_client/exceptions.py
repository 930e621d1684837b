"""
Custom exceptions for EdgeGrid client library.
"""

from typing import Optional


class EdgeGridError(Exception):
    """Base exception for EdgeGrid client errors."""
    pass


class ConfigurationError(EdgeGridError):
    """Raised when credentials or client configuration are invalid."""
    pass


class MissingCredentialError(ConfigurationError):
    """Raised when a required credential field is absent or empty."""

    def __init__(self, field: str):
        super().__init__(f"missing required credential: {field}")
        self.field = field


class InvalidSectionError(ConfigurationError):
    """Raised when a named configuration section does not exist."""

    def __init__(self, section: str):
        super().__init__(f"section '{section}' not found")
        self.section = section


class SigningError(EdgeGridError):
    """Raised when a request signature cannot be computed."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class EncodingError(SigningError):
    """Raised when signing input cannot be encoded as UTF-8."""
    pass


class HTTPError(EdgeGridError):
    """Raised when HTTP request fails."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
