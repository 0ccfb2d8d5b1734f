"""
Input validation functions for the BANKSapi client.

Provides validation for key-store aliases, the API base URL and credential
sets handed to the encryptor.
"""

from collections.abc import Mapping
from typing import Any
from urllib.parse import urlparse


def validate_alias(alias: str) -> str:
    """Validate a key-store entry alias.

    Args:
        alias: The alias to validate

    Returns:
        The validated alias

    Raises:
        ValueError: If the alias is empty
    """
    if not alias or not alias.strip():
        raise ValueError(
            "Key-store alias cannot be empty. "
            "Hint: Use the alias the BANKSapi certificate was imported under."
        )

    return alias


def validate_base_url(url: str) -> str:
    """Validate the BANKSapi base URL.

    Args:
        url: The base URL to validate

    Returns:
        The validated URL

    Raises:
        ValueError: If the URL is not an absolute http(s) URL
    """
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError(
            f"Invalid URL '{url}'. "
            "Must be an absolute http(s) URL (e.g., 'https://banksapi.io'). "
            "Hint: Check BANKSAPI_BASE_URL or base_url in the config file."
        )

    return url


def validate_credential_set(credentials: Mapping[str, Any]) -> Mapping[str, str]:
    """Validate a credential set before encryption.

    Args:
        credentials: Mapping of field name to credential value

    Returns:
        The validated mapping

    Raises:
        TypeError: If the set is not a mapping, or a name or value is not a string
    """
    if not isinstance(credentials, Mapping):
        raise TypeError(
            f"Credentials must be a mapping of field name to value, "
            f"got {type(credentials).__name__}"
        )

    for name, value in credentials.items():
        if not isinstance(name, str):
            raise TypeError(
                f"Credential field names must be strings, got {type(name).__name__}"
            )
        if not isinstance(value, str):
            raise TypeError(
                f"Credential '{name}' must be a string, got {type(value).__name__}. "
                "Hint: Convert PINs and TANs to text before encrypting."
            )

    return credentials
