"""Shared pytest fixtures for banksapi-client tests.

Provides throwaway RSA keys, self-signed certificates and PKCS#12 key stores,
plus environment isolation for configuration tests.
"""

from pathlib import Path
from typing import Generator

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, rsa
from cryptography.hazmat.primitives.serialization import pkcs12

from banksapi_client.crypto import CredentialEncryptor, load_from_certificate
from tests.helpers import (
    KEYSTORE_ALIAS,
    KEYSTORE_PASSWORD,
    TEST_KEY_SIZE,
    build_self_signed_cert,
)

BANKSAPI_ENV_VARS = [
    "BANKSAPI_CONFIG_PATH",
    "BANKSAPI_BASE_URL",
    "BANKSAPI_CERTIFICATE",
    "BANKSAPI_KEYSTORE",
    "BANKSAPI_KEYSTORE_ALIAS",
    "BANKSAPI_KEYSTORE_PASSWORD",
]


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")


@pytest.fixture(scope="session")
def rsa_private_key() -> rsa.RSAPrivateKey:
    """Private half of the test key pair (never used by library code)."""
    return rsa.generate_private_key(public_exponent=65537, key_size=TEST_KEY_SIZE)


@pytest.fixture(scope="session")
def certificate(rsa_private_key) -> x509.Certificate:
    """Self-signed certificate for the test key."""
    return build_self_signed_cert(rsa_private_key)


@pytest.fixture
def temp_trust_dir(tmp_path: Path) -> Generator[Path, None, None]:
    """Provide an isolated directory for certificates and key stores.

    Yields:
        Path to a temporary trust material directory
    """
    trust_dir = tmp_path / "trust"
    trust_dir.mkdir()
    yield trust_dir


@pytest.fixture
def certificate_pem_path(temp_trust_dir, certificate) -> Path:
    """PEM encoded test certificate on disk."""
    path = temp_trust_dir / "banksapi.crt"
    path.write_bytes(certificate.public_bytes(serialization.Encoding.PEM))
    return path


@pytest.fixture
def certificate_der_path(temp_trust_dir, certificate) -> Path:
    """DER encoded test certificate on disk."""
    path = temp_trust_dir / "banksapi.der"
    path.write_bytes(certificate.public_bytes(serialization.Encoding.DER))
    return path


@pytest.fixture
def ec_certificate_path(temp_trust_dir) -> Path:
    """PEM certificate carrying an EC key instead of RSA."""
    key = ec.generate_private_key(ec.SECP256R1())
    path = temp_trust_dir / "ec.crt"
    path.write_bytes(build_self_signed_cert(key).public_bytes(serialization.Encoding.PEM))
    return path


@pytest.fixture
def keystore_path(temp_trust_dir, certificate) -> Path:
    """Password-less PKCS#12 store with the test certificate under KEYSTORE_ALIAS."""
    data = pkcs12.serialize_key_and_certificates(
        name=KEYSTORE_ALIAS.encode(),
        key=None,
        cert=certificate,
        cas=None,
        encryption_algorithm=serialization.NoEncryption(),
    )
    path = temp_trust_dir / "banksapi.p12"
    path.write_bytes(data)
    return path


@pytest.fixture
def protected_keystore_path(temp_trust_dir, certificate) -> Path:
    """PKCS#12 store protected with KEYSTORE_PASSWORD."""
    data = pkcs12.serialize_key_and_certificates(
        name=KEYSTORE_ALIAS.encode(),
        key=None,
        cert=certificate,
        cas=None,
        encryption_algorithm=serialization.BestAvailableEncryption(KEYSTORE_PASSWORD),
    )
    path = temp_trust_dir / "protected.p12"
    path.write_bytes(data)
    return path


@pytest.fixture
def truststore_path(temp_trust_dir, certificate) -> Path:
    """PKCS#12 trust store holding the test certificate only as a trusted entry."""
    data = pkcs12.serialize_key_and_certificates(
        name=None,
        key=None,
        cert=None,
        cas=[pkcs12.PKCS12Certificate(certificate, b"Trusted")],
        encryption_algorithm=serialization.NoEncryption(),
    )
    path = temp_trust_dir / "truststore.p12"
    path.write_bytes(data)
    return path


@pytest.fixture
def encryptor(certificate_pem_path) -> CredentialEncryptor:
    """Encryptor built from the PEM test certificate."""
    return CredentialEncryptor(load_from_certificate(certificate_pem_path))


@pytest.fixture
def clean_env(monkeypatch):
    """Provide a clean environment without BANKSapi config vars."""
    for var in BANKSAPI_ENV_VARS:
        monkeypatch.delenv(var, raising=False)


# Autouse fixture for test isolation
@pytest.fixture(autouse=True)
def isolate_environment(clean_env) -> Generator[None, None, None]:
    """Ensure the developer's BANKSapi settings never leak into tests."""
    yield
