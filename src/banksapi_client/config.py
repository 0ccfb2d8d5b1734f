"""
Configuration for the BANKSapi client.

Holds the API base URL and the location of the trust material (certificate
or PKCS#12 key store) used for credential encryption. Configuration is an
immutable value that is passed to whatever needs it; nothing is kept in
module-level state.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml

from .error_handling import validate_alias, validate_base_url

DEFAULT_BASE_URL = "https://banksapi.io"


def _is_blank(value) -> bool:
    """True for None, empty, or whitespace-only values."""
    return value is None or not str(value).strip()


def _optional(value) -> Optional[str]:
    """Normalize a config value to a stripped string, None when blank.

    YAML may hand over numbers (e.g. ``keystore_alias: 1234``).
    """
    return None if _is_blank(value) else str(value).strip()


@dataclass(frozen=True)
class BanksapiConfig:
    """Configuration for connecting to BANKSapi.

    Attributes:
        base_url: BANKSapi base URL (blank falls back to https://banksapi.io)
        certificate_path: Path to the PEM/DER encoded BANKSapi certificate
        keystore_path: Path to a PKCS#12 key store holding the certificate
        keystore_alias: Alias of the certificate entry in the key store
        keystore_password: Key-store password, None for password-less stores
    """
    base_url: str = DEFAULT_BASE_URL
    certificate_path: Optional[str] = None
    keystore_path: Optional[str] = None
    keystore_alias: Optional[str] = None
    keystore_password: Optional[str] = None

    def __post_init__(self):
        if _is_blank(self.base_url):
            object.__setattr__(self, "base_url", DEFAULT_BASE_URL)

    @property
    def keystore_password_bytes(self) -> Optional[bytes]:
        """Key-store password as bytes, as expected by the PKCS#12 loader."""
        if self.keystore_password is None:
            return None
        return self.keystore_password.encode("utf-8")

    @property
    def has_trust_material(self) -> bool:
        """True if a certificate or key store is configured."""
        return bool(self.certificate_path or self.keystore_path)

    @classmethod
    def from_config_file(cls, config_path: str) -> "BanksapiConfig":
        """Load configuration from a YAML file.

        Relative certificate and key-store paths are resolved against the
        directory of the config file.

        Args:
            config_path: Path to the YAML config file

        Returns:
            Loaded configuration

        Raises:
            FileNotFoundError: If the config file does not exist
            ValueError: If the file does not contain a mapping
        """
        path = Path(config_path).expanduser()
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ValueError(f"Config file {config_path} must contain a mapping")

        def resolve(value):
            value = _optional(value)
            if value is None:
                return None
            candidate = Path(value).expanduser()
            if not candidate.is_absolute():
                candidate = path.parent / candidate
            return str(candidate)

        password = data.get("keystore_password")
        return cls(
            base_url=_optional(data.get("base_url")) or DEFAULT_BASE_URL,
            certificate_path=resolve(data.get("certificate")),
            keystore_path=resolve(data.get("keystore")),
            keystore_alias=_optional(data.get("keystore_alias")),
            keystore_password=None if password is None else str(password),
        )

    @classmethod
    def from_env(cls) -> "BanksapiConfig":
        """Load configuration from environment variables.

        Reads BANKSAPI_BASE_URL, BANKSAPI_CERTIFICATE, BANKSAPI_KEYSTORE,
        BANKSAPI_KEYSTORE_ALIAS and BANKSAPI_KEYSTORE_PASSWORD.
        """
        return cls(
            base_url=os.environ.get("BANKSAPI_BASE_URL") or DEFAULT_BASE_URL,
            certificate_path=_optional(os.environ.get("BANKSAPI_CERTIFICATE")),
            keystore_path=_optional(os.environ.get("BANKSAPI_KEYSTORE")),
            keystore_alias=_optional(os.environ.get("BANKSAPI_KEYSTORE_ALIAS")),
            keystore_password=os.environ.get("BANKSAPI_KEYSTORE_PASSWORD"),
        )

    def validate(self) -> None:
        """Validate the configuration.

        Raises:
            ValueError: If the configuration is invalid
        """
        validate_base_url(self.base_url)

        if not self.has_trust_material:
            raise ValueError(
                "A certificate or key store is required for credential encryption"
            )
        if self.certificate_path and self.keystore_path:
            raise ValueError(
                "Configure either a certificate or a key store, not both"
            )
        if self.keystore_path:
            validate_alias(self.keystore_alias or "")


def load_config() -> BanksapiConfig:
    """Load BANKSapi configuration.

    Tries, in order:
    1. The YAML file named by BANKSAPI_CONFIG_PATH
    2. Environment variables

    Returns:
        Validated configuration

    Raises:
        ValueError: If no trust material is configured, or the configuration is invalid
    """
    config_path = os.environ.get("BANKSAPI_CONFIG_PATH")
    if config_path:
        config = BanksapiConfig.from_config_file(config_path)
    else:
        config = BanksapiConfig.from_env()

    if not config.has_trust_material:
        raise ValueError(
            "No BANKSapi trust material configured. "
            "Set BANKSAPI_CONFIG_PATH to a YAML config file, or set "
            "BANKSAPI_CERTIFICATE (or BANKSAPI_KEYSTORE and "
            "BANKSAPI_KEYSTORE_ALIAS)."
        )

    config.validate()
    return config
