"""
Error handling utilities for the BANKSapi client.

Provides the crypto error taxonomy, input validators, and error-to-hint mapping.
"""

from .exceptions import (
    CryptoServiceError,
    KeyMaterialError,
    UnsupportedAlgorithmError,
    EncryptionError,
)
from .validators import (
    validate_alias,
    validate_base_url,
    validate_credential_set,
)
from .crypto_handlers import (
    map_crypto_error,
)

__all__ = [
    # Exceptions
    "CryptoServiceError",
    "KeyMaterialError",
    "UnsupportedAlgorithmError",
    "EncryptionError",
    # Validators
    "validate_alias",
    "validate_base_url",
    "validate_credential_set",
    # Error mapping
    "map_crypto_error",
]
