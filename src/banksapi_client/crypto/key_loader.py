"""
Public key loading for BANKSapi credential encryption.

Extracts the RSA public key from a BANKSapi X.509 certificate, given either
as a standalone certificate file/stream or as an entry inside a PKCS#12 key
store. Certificates are not validated beyond reading the embedded key.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Optional, Union

from cryptography import x509
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.hazmat.primitives.serialization import pkcs12

from ..error_handling import (
    KeyMaterialError,
    UnsupportedAlgorithmError,
    validate_alias,
)

logger = logging.getLogger("banksapi-client")

PEM_MARKER = b"-----BEGIN"

CertificateSource = Union[str, os.PathLike, BinaryIO]


@dataclass(frozen=True)
class PublicKeyHandle:
    """An RSA public key loaded from trust material.

    Attributes:
        key: The RSA public key
        source: Where the key was loaded from (for diagnostics)
    """
    key: rsa.RSAPublicKey
    source: str

    @property
    def key_size(self) -> int:
        """Modulus size in bits."""
        return self.key.key_size

    @property
    def key_size_bytes(self) -> int:
        """Modulus size in bytes."""
        return (self.key.key_size + 7) // 8

    @property
    def fingerprint(self) -> str:
        """SHA256 fingerprint of the DER encoded SubjectPublicKeyInfo."""
        der = self.key.public_bytes(
            encoding=serialization.Encoding.DER,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        )
        digest = hashes.Hash(hashes.SHA256())
        digest.update(der)
        return digest.finalize().hex().upper()


def _read_source(source: CertificateSource) -> tuple[bytes, str]:
    """Read raw bytes from a path or binary stream."""
    if hasattr(source, "read"):
        description = getattr(source, "name", None) or "<stream>"
        try:
            data = source.read()
        except OSError as e:
            raise KeyMaterialError(f"Unable to read certificate from {description}") from e
        if isinstance(data, str):
            raise KeyMaterialError(
                f"Certificate stream {description} must be opened in binary mode"
            )
        return data, str(description)

    path = Path(source)
    try:
        return path.read_bytes(), str(path)
    except OSError as e:
        raise KeyMaterialError(f"Unable to read certificate file '{path}'") from e


def _rsa_key_from_certificate(cert: x509.Certificate, description: str) -> rsa.RSAPublicKey:
    """Extract the public key from a certificate, requiring RSA."""
    try:
        public_key = cert.public_key()
    except UnsupportedAlgorithm as e:
        raise UnsupportedAlgorithmError(
            f"Key algorithm of certificate {description} is not supported"
        ) from e
    except ValueError as e:
        raise KeyMaterialError(
            f"Certificate {description} carries an invalid public key"
        ) from e

    if not isinstance(public_key, rsa.RSAPublicKey):
        raise KeyMaterialError(
            f"Certificate {description} carries a {type(public_key).__name__}, "
            "an RSA public key is required"
        )
    return public_key


def load_from_certificate(source: CertificateSource) -> PublicKeyHandle:
    """Load the public key from a single X.509 certificate.

    PEM is the expected encoding; DER input (no PEM armour) is accepted too.

    Args:
        source: Path to the certificate file, or a binary stream

    Returns:
        Handle on the certificate's RSA public key

    Raises:
        KeyMaterialError: If the certificate cannot be read or parsed, or is not RSA
        UnsupportedAlgorithmError: If the key algorithm is not supported
    """
    data, description = _read_source(source)

    try:
        if PEM_MARKER in data:
            cert = x509.load_pem_x509_certificate(data)
        else:
            cert = x509.load_der_x509_certificate(data)
    except ValueError as e:
        raise KeyMaterialError(
            f"{description} does not contain a valid X.509 certificate"
        ) from e

    handle = PublicKeyHandle(
        key=_rsa_key_from_certificate(cert, description),
        source=description,
    )
    logger.debug(
        "Loaded %d-bit RSA key %s from certificate %s",
        handle.key_size, handle.fingerprint, description,
    )
    return handle


def _find_certificate(
    store: pkcs12.PKCS12KeyAndCertificates,
    alias: str,
) -> Optional[x509.Certificate]:
    """Find a certificate entry by alias (case-insensitive)."""
    entries = []
    if store.cert is not None:
        entries.append(store.cert)
    entries.extend(store.additional_certs)

    wanted = alias.lower()
    for entry in entries:
        if entry.friendly_name is None:
            continue
        name = entry.friendly_name.decode("utf-8", errors="replace")
        if name.lower() == wanted:
            return entry.certificate
    return None


def load_from_keystore(
    path: Union[str, os.PathLike],
    alias: str,
    password: Optional[bytes] = None,
) -> PublicKeyHandle:
    """Load the public key of a certificate entry in a PKCS#12 key store.

    Certificates are public, so the store is opened without a password unless
    one is given. Stores written with a MAC password need it passed here.

    Args:
        path: Path to the PKCS#12 key store
        alias: Alias (friendly name) of the certificate entry
        password: Store password, None for password-less stores

    Returns:
        Handle on the entry's RSA public key

    Raises:
        KeyMaterialError: If the alias is blank, the store is unreadable or
            malformed, or the alias is absent
        UnsupportedAlgorithmError: If the store's integrity algorithm is not supported
    """
    try:
        validate_alias(alias or "")
    except ValueError as e:
        raise KeyMaterialError(str(e)) from e
    path = Path(path)

    try:
        data = path.read_bytes()
    except OSError as e:
        raise KeyMaterialError(f"Unable to read key store '{path}'") from e

    try:
        store = pkcs12.load_pkcs12(data, password)
    except UnsupportedAlgorithm as e:
        raise UnsupportedAlgorithmError(
            f"Integrity algorithm of key store '{path}' is not supported"
        ) from e
    except (ValueError, TypeError) as e:
        raise KeyMaterialError(
            f"Key store '{path}' is malformed or the password is wrong"
        ) from e

    cert = _find_certificate(store, alias)
    if cert is None:
        raise KeyMaterialError(f"Alias '{alias}' not found in key store '{path}'")

    description = f"{path}#{alias}"
    handle = PublicKeyHandle(
        key=_rsa_key_from_certificate(cert, description),
        source=description,
    )
    logger.debug(
        "Loaded %d-bit RSA key %s from key store %s",
        handle.key_size, handle.fingerprint, description,
    )
    return handle
