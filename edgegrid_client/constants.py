"""
Constants for EdgeGrid client library.
Values match the Akamai EdgeGrid V1 authentication scheme.
"""

# Authorization header
HEADER_AUTHORIZATION = "Authorization"
AUTH_TYPE = "EG1-HMAC-SHA256"

# Timestamp format, e.g. 20140321T19:34:21+0000
TIMESTAMP_FORMAT = "%Y%m%dT%H:%M:%S+0000"

# Maximum number of body bytes included in the content hash (128KB)
MAX_BODY = 131072

# Query parameter added when credentials carry an account switch key
ACCOUNT_SWITCH_KEY_PARAM = "accountSwitchKey"

# Credentials sources
DEFAULT_EDGERC = "~/.edgerc"
DEFAULT_SECTION = "default"
ENV_PREFIX = "AKAMAI_"

# Required credential fields, in validation order
REQUIRED_FIELDS = ("client_token", "client_secret", "access_token", "host")

# Default client configuration values
DEFAULT_CONFIG = {
    'timeout': 30,          # HTTP timeout in seconds
    'headers_to_sign': (),  # Header names included in the signature
}
