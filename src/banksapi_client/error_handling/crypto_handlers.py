"""
Crypto error handling utilities.

Maps credential encryption errors to user-friendly messages with
actionable hints.
"""

from .exceptions import (
    KeyMaterialError,
    UnsupportedAlgorithmError,
    EncryptionError,
)


def map_crypto_error(error: Exception, operation: str) -> dict[str, str]:
    """Map a credential encryption error to a user-friendly message with hints.

    None of these errors are transient, so the hints never suggest retrying.

    Args:
        error: The error that was raised
        operation: Description of the operation that failed (e.g., "key loading")

    Returns:
        Dictionary with keys:
        - error: User-friendly error message
        - hint: Actionable hint for resolving the issue
        - category: One of key_material, unsupported_algorithm, encryption, unknown
    """
    if isinstance(error, KeyMaterialError):
        return {
            "error": f"Invalid trust material during {operation}: {error}",
            "hint": (
                "1. Check the certificate or key-store path in the configuration\n"
                "2. Verify the file is a PEM/DER X.509 certificate or a PKCS#12 store\n"
                "3. Verify the key-store alias and password"
            ),
            "category": "key_material",
        }

    elif isinstance(error, UnsupportedAlgorithmError):
        return {
            "error": f"Unsupported algorithm during {operation}: {error}",
            "hint": (
                "1. Upgrade the cryptography package\n"
                "2. Check that the OpenSSL build allows RSA-OAEP with SHA-1\n"
                "3. Re-export the key store with a supported integrity algorithm"
            ),
            "category": "unsupported_algorithm",
        }

    elif isinstance(error, EncryptionError):
        return {
            "error": f"Encryption failed during {operation}: {error}",
            "hint": (
                "1. Check the credential value length against the key size\n"
                "2. Verify the configured certificate belongs to BANKSapi"
            ),
            "category": "encryption",
        }

    return {
        "error": f"Unknown error during {operation}: {error}",
        "hint": "Check the application logs for details.",
        "category": "unknown",
    }
