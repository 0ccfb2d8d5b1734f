"""
Credential encryption with the BANKSapi public key.

The crypto system is fixed by the BANKSapi contract and must match it
bit for bit:

- Encryption algorithm: RSA
- Block cipher mode of operation: none
- Padding: OAEP with SHA-1 (hash function) and MGF1 with SHA-1 (mask
  generation function), no label
- Output: standard, padded Base64 of the raw ciphertext

OAEP is probabilistic. The random seed is drawn from the cryptography
provider's CSPRNG on every call, so encrypting the same value twice gives
different ciphertexts. No state is kept between calls and one encryptor can
be shared by any number of threads.

See RFC 8017 for OAEP.
"""

import base64
import logging
from collections.abc import Callable, Mapping
from typing import TypeVar

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding

from ..config import BanksapiConfig
from ..error_handling import (
    EncryptionError,
    UnsupportedAlgorithmError,
    map_crypto_error,
    validate_credential_set,
)
from ..models import CredentialSet, CredentialSetCollection, LoginCredentials
from .key_loader import PublicKeyHandle, load_from_certificate, load_from_keystore

logger = logging.getLogger("banksapi-client")

K = TypeVar("K")
V = TypeVar("V")
R = TypeVar("R")


def _map_values(mapping: Mapping[K, V], transform: Callable[[V], R]) -> dict[K, R]:
    """Apply transform to every value, keeping the keys.

    Builds a new dict; if transform raises, nothing is returned.
    """
    return {key: transform(value) for key, value in mapping.items()}


class CredentialEncryptor:
    """Encrypts credentials with one BANKSapi public key.

    The key is set at construction and never changes.
    """

    HASH_ALGORITHM = hashes.SHA1

    def __init__(self, public_key: PublicKeyHandle):
        """Initialize the encryptor.

        Args:
            public_key: Handle on the BANKSapi RSA public key
        """
        if not isinstance(public_key, PublicKeyHandle):
            raise TypeError(
                f"public_key must be a PublicKeyHandle, got {type(public_key).__name__}"
            )
        self._public_key = public_key

    @property
    def public_key(self) -> PublicKeyHandle:
        """The key handle this encryptor was built with."""
        return self._public_key

    @property
    def max_plaintext_length(self) -> int:
        """Largest plaintext in bytes that fits one RSA-OAEP block (k - 2h - 2)."""
        digest_size = self.HASH_ALGORITHM.digest_size
        return self._public_key.key_size_bytes - 2 * digest_size - 2

    def _padding(self) -> padding.OAEP:
        """Build the OAEP padding for one encryption."""
        return padding.OAEP(
            mgf=padding.MGF1(algorithm=self.HASH_ALGORITHM()),
            algorithm=self.HASH_ALGORITHM(),
            label=None,
        )

    def encrypt_string(self, plaintext: str) -> str:
        """Encrypt a plaintext and encode the ciphertext to Base64.

        Args:
            plaintext: Text to encrypt, encoded as UTF-8

        Returns:
            Base64 encoded ciphertext

        Raises:
            TypeError: If plaintext is not a string
            EncryptionError: If the plaintext is too long for the key, or encryption fails
            UnsupportedAlgorithmError: If the provider lacks RSA-OAEP with SHA-1
        """
        if not isinstance(plaintext, str):
            raise TypeError(f"plaintext must be a string, got {type(plaintext).__name__}")

        data = plaintext.encode("utf-8")
        limit = self.max_plaintext_length
        if len(data) > limit:
            raise EncryptionError(
                f"Plaintext is {len(data)} bytes, a {self._public_key.key_size}-bit "
                f"key with OAEP/SHA-1 encrypts at most {limit} bytes"
            )

        try:
            ciphertext = self._public_key.key.encrypt(data, self._padding())
        except UnsupportedAlgorithm as e:
            raise UnsupportedAlgorithmError(
                "RSA with OAEP (SHA-1, MGF1) is not available in this runtime"
            ) from e
        except ValueError as e:
            raise EncryptionError("Unable to encrypt") from e

        return base64.b64encode(ciphertext).decode("ascii")

    def encrypt_credential_set(self, credentials: Mapping[str, str]) -> CredentialSet:
        """Encrypt every value of a credential set.

        Args:
            credentials: Field name to plaintext value

        Returns:
            New mapping with the same field names and encrypted values
        """
        validate_credential_set(credentials)
        return _map_values(credentials, self.encrypt_string)

    def _encrypt_login(self, login: LoginCredentials) -> LoginCredentials:
        return login.with_credentials(self.encrypt_credential_set(login.credentials))

    def encrypt_credential_set_collection(
        self,
        collection: Mapping[str, LoginCredentials],
    ) -> CredentialSetCollection:
        """Encrypt the credentials of every access in a collection.

        Provider IDs and sync flags are copied unchanged. If any value fails
        to encrypt the whole call fails.

        Args:
            collection: Access ID to login credentials

        Returns:
            New collection with the same access IDs and encrypted credentials
        """
        encrypted = _map_values(collection, self._encrypt_login)
        logger.debug("Encrypted credentials for %d access(es)", len(encrypted))
        return encrypted


def create_encryptor(config: BanksapiConfig) -> CredentialEncryptor:
    """Create an encryptor from the trust material in a configuration.

    The key store is used when configured, otherwise the certificate.

    Args:
        config: Validated client configuration

    Returns:
        A new CredentialEncryptor

    Raises:
        ValueError: If the configuration is invalid
        KeyMaterialError: If the trust material cannot be loaded
        UnsupportedAlgorithmError: If the runtime lacks a required algorithm
    """
    config.validate()

    try:
        if config.keystore_path:
            handle = load_from_keystore(
                config.keystore_path,
                config.keystore_alias,
                password=config.keystore_password_bytes,
            )
        else:
            handle = load_from_certificate(config.certificate_path)
    except Exception as e:
        mapped = map_crypto_error(e, "key loading")
        logger.error("%s\n%s", mapped["error"], mapped["hint"])
        raise

    logger.info("Credential encryption ready (key %s from %s)", handle.fingerprint, handle.source)
    return CredentialEncryptor(handle)
