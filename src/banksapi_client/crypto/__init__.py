"""
Credential encryption for BANKSapi requests.

Provides public key loading from certificates and key stores, and the
credential encryptor built on top of it.
"""

from .key_loader import PublicKeyHandle, load_from_certificate, load_from_keystore
from .encryptor import CredentialEncryptor, create_encryptor

__all__ = [
    "PublicKeyHandle",
    "load_from_certificate",
    "load_from_keystore",
    "CredentialEncryptor",
    "create_encryptor",
]
