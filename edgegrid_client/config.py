"""
Credential resolution from .edgerc files and environment variables.

An .edgerc file is an INI file with one section per API client:

    [default]
    client_secret = abcdEcSnaAt123FNkBxy456z25qx9Yp5CPUxlEfQeTDkfh4QA=I
    host = akab-lmn789n2k53w7qrs10cxy-nfkxaa4lfk3kd6ym.luna.akamaiapis.net
    access_token = akab-zyx987xa6osbli4k-e7jf5ikib5jknes3
    client_token = akab-nomoflavjuc4422-fa2xznerxrm3teg7

Environment variables take the form AKAMAI_HOST for the default section and
AKAMAI_<SECTION>_HOST for any other.
"""

import configparser
import logging
import os
from typing import Mapping, Optional

from .constants import DEFAULT_EDGERC, DEFAULT_SECTION, ENV_PREFIX, MAX_BODY, REQUIRED_FIELDS
from .credentials import Credentials
from .exceptions import ConfigurationError, InvalidSectionError, MissingCredentialError

logger = logging.getLogger(__name__)

# Alternate spellings accepted in .edgerc files
KEY_ALIASES = {
    'max-body': 'max_body',
    'account_key': 'account_switch_key',
    'account-key': 'account_switch_key',
}


def _unquote(value: str) -> str:
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ('"', "'"):
        return value[1:-1]
    return value


def _parse_max_body(value: Optional[str], source: str) -> int:
    if value is None or not value.strip():
        return MAX_BODY
    try:
        return int(value)
    except ValueError:
        raise ConfigurationError(f"max_body in {source} must be an integer, got {value!r}")


def credentials_from_mapping(values: Mapping[str, str], source: str) -> Credentials:
    """
    Build Credentials from a flat mapping of field names to values.

    Args:
        values: Field values keyed by credential field name
        source: Description of where the values came from (for errors)

    Returns:
        Validated Credentials

    Raises:
        MissingCredentialError: If a required field is absent or empty
        ConfigurationError: If max_body is invalid
    """
    for field in REQUIRED_FIELDS:
        if not values.get(field, '').strip():
            raise MissingCredentialError(field)

    return Credentials(
        client_token=values['client_token'].strip(),
        client_secret=values['client_secret'].strip(),
        access_token=values['access_token'].strip(),
        host=values['host'].strip(),
        max_body=_parse_max_body(values.get('max_body'), source),
        account_switch_key=values.get('account_switch_key') or None,
    )


def load_edgerc(path: str = DEFAULT_EDGERC, section: str = DEFAULT_SECTION) -> Credentials:
    """
    Load credentials from a section of an .edgerc file.

    Args:
        path: Path to the .edgerc file ('~' is expanded)
        section: Section name

    Returns:
        Credentials for the section

    Raises:
        ConfigurationError: If the file cannot be read or parsed
        InvalidSectionError: If the section does not exist
        MissingCredentialError: If a required field is missing
    """
    filename = os.path.expanduser(path)
    parser = configparser.ConfigParser(interpolation=None, inline_comment_prefixes=(';', '#'))

    try:
        with open(filename, encoding='utf-8') as fh:
            parser.read_file(fh)
    except OSError as e:
        raise ConfigurationError(f"cannot read {filename}: {e}")
    except configparser.Error as e:
        raise ConfigurationError(f"cannot parse {filename}: {e}")

    if not parser.has_section(section):
        raise InvalidSectionError(section)

    values = {}
    for key, value in parser.items(section):
        values[KEY_ALIASES.get(key, key)] = _unquote(value)

    logger.debug(f"Loaded credentials from {filename} [{section}]")
    return credentials_from_mapping(values, f"{filename} [{section}]")


def env_prefix(section: str = DEFAULT_SECTION) -> str:
    """Environment variable prefix for a section."""
    if section == DEFAULT_SECTION:
        return ENV_PREFIX
    return f"{ENV_PREFIX}{section.upper()}_"


def load_env(section: str = DEFAULT_SECTION, environ: Optional[Mapping[str, str]] = None) -> Optional[Credentials]:
    """
    Load credentials from AKAMAI_* environment variables.

    Args:
        section: Section name selecting the variable prefix
        environ: Environment mapping (defaults to os.environ)

    Returns:
        Credentials, or None if no required variable is set

    Raises:
        MissingCredentialError: If only some required variables are set
    """
    if environ is None:
        environ = os.environ
    prefix = env_prefix(section)

    values = {}
    for field in REQUIRED_FIELDS + ('max_body',):
        value = environ.get(prefix + field.upper())
        if value is not None:
            values[field] = value
    account_key = environ.get(prefix + 'ACCOUNT_KEY')
    if account_key:
        values['account_switch_key'] = account_key

    if not any(values.get(field) for field in REQUIRED_FIELDS):
        return None

    logger.debug(f"Loaded credentials from {prefix}* environment variables")
    return credentials_from_mapping(values, f"{prefix}* environment variables")


def resolve_credentials(
    section: str = DEFAULT_SECTION,
    path: str = DEFAULT_EDGERC,
    environ: Optional[Mapping[str, str]] = None,
) -> Credentials:
    """
    Resolve credentials for a section, preferring the environment.

    The .edgerc file is only consulted when none of the required variables
    for the section is set. A partially configured environment raises
    instead of silently falling back to the file.

    Args:
        section: Section name
        path: Path to the .edgerc file used when the environment is empty
        environ: Environment mapping (defaults to os.environ)

    Returns:
        Credentials for the section

    Raises:
        MissingCredentialError: If the environment sets only some of the
            required variables, or the file section lacks a field
        InvalidSectionError: If the environment is empty and the file has
            no such section
    """
    credentials = load_env(section, environ)
    if credentials is not None:
        logger.info(f"Using credentials from environment variables for section '{section}'")
        return credentials
    return load_edgerc(path, section)
