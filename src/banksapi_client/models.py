"""
Request models for BANKSapi login credentials.

A credential set maps field names (e.g. "user", "pin") to values for one
banking login. A credential set collection maps an access identifier to the
login credentials of one bank access.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any

# Field name -> credential value (plaintext or ciphertext)
CredentialSet = dict[str, str]


@dataclass(frozen=True)
class LoginCredentials:
    """Credentials for one bank access.

    Attributes:
        provider_id: Identifier of the bank/provider
        credentials: Field name to credential value
        sync: Whether the access should be synchronized after creation
    """
    provider_id: str
    credentials: CredentialSet = field(default_factory=dict)
    sync: bool = False

    def with_credentials(self, credentials: Mapping[str, str]) -> "LoginCredentials":
        """Return a copy with the credential set replaced."""
        return replace(self, credentials=dict(credentials))

    def to_dict(self) -> dict:
        """Convert to the request payload form."""
        return {
            "providerId": self.provider_id,
            "credentials": dict(self.credentials),
            "sync": self.sync,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LoginCredentials":
        """Create from a payload dict (camelCase or snake_case keys).

        Raises:
            ValueError: If the provider ID is missing
        """
        provider_id = data.get("providerId", data.get("provider_id"))
        if not provider_id:
            raise ValueError("Login credentials require a provider ID")

        return cls(
            provider_id=provider_id,
            credentials=dict(data.get("credentials") or {}),
            sync=bool(data.get("sync", False)),
        )


# Access identifier -> login credentials
CredentialSetCollection = dict[str, LoginCredentials]


def collection_to_payload(collection: Mapping[str, LoginCredentials]) -> dict[str, dict]:
    """Serialize a credential set collection to the request payload form."""
    return {access_id: login.to_dict() for access_id, login in collection.items()}


def collection_from_payload(payload: Mapping[str, Mapping[str, Any]]) -> CredentialSetCollection:
    """Build a credential set collection from its payload form."""
    return {
        access_id: LoginCredentials.from_dict(data)
        for access_id, data in payload.items()
    }
