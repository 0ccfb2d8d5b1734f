"""
Exception types raised by the credential encryption subsystem.

Callers can tell "fix your trust material" (KeyMaterialError) apart from
"fix your runtime" (UnsupportedAlgorithmError) and from a single failed
encryption call (EncryptionError). The underlying cryptography exception,
when there is one, is always attached as ``__cause__``.
"""


class CryptoServiceError(Exception):
    """Base class for all credential encryption errors."""


class KeyMaterialError(CryptoServiceError):
    """The certificate or key store is missing, unreadable or malformed,
    or the requested alias does not exist."""


class UnsupportedAlgorithmError(CryptoServiceError):
    """The cryptography provider lacks an algorithm this client requires."""


class EncryptionError(CryptoServiceError):
    """A single encryption call failed.

    The encryptor stays usable for further calls with valid input.
    """
