"""Helpers shared by the banksapi-client test suite."""

import base64
from datetime import datetime, timedelta, timezone

from cryptography import x509
from cryptography.x509.oid import NameOID
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding, rsa

# Smaller than production keys to keep the suite fast
TEST_KEY_SIZE = 2048
KEYSTORE_ALIAS = "banksapi"
KEYSTORE_PASSWORD = b"changeit"

# k - 2*h - 2 for a 2048-bit key and SHA-1
MAX_PLAINTEXT_BYTES = TEST_KEY_SIZE // 8 - 2 * 20 - 2


def build_self_signed_cert(key, common_name: str = "BANKSapi Test") -> x509.Certificate:
    """Build a self-signed certificate for the given private key."""
    subject = issuer = x509.Name([
        x509.NameAttribute(NameOID.ORGANIZATION_NAME, "BANKSapi Test"),
        x509.NameAttribute(NameOID.COMMON_NAME, common_name),
    ])

    now = datetime.now(timezone.utc)
    return (
        x509.CertificateBuilder()
        .subject_name(subject)
        .issuer_name(issuer)
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now)
        .not_valid_after(now + timedelta(days=30))
        .sign(key, hashes.SHA256())
    )


def decrypt_ciphertext(private_key: rsa.RSAPrivateKey, ciphertext: str) -> str:
    """Reference decryption with the BANKSapi OAEP parameters."""
    plaintext = private_key.decrypt(
        base64.b64decode(ciphertext, validate=True),
        padding.OAEP(
            mgf=padding.MGF1(algorithm=hashes.SHA1()),
            algorithm=hashes.SHA1(),
            label=None,
        ),
    )
    return plaintext.decode("utf-8")
