"""
Configuration — typed, validated settings loaded from environment/.env.

Uses pydantic-settings to:
  - Load from environment variables (12-factor app)
  - Fall back to .env file
  - Validate types and the anchor identity mode at startup

Only AppSettings is a BaseSettings instance. AnchorSettings is a plain
BaseModel populated via env_nested_delimiter="__", so the env var
ANCHOR__CERTIFICATE_PATH maps to anchor.certificate_path, and so on.
"""

from __future__ import annotations

from enum import Enum, unique
from pathlib import Path

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve the .env file relative to the project root (two levels above this file),
# so settings load correctly regardless of the working directory at runtime.
_ENV_FILE = Path(__file__).parent.parent.parent / ".env"


@unique
class AnchorMode(Enum):
    """How the configured anchor identifies its authority."""

    CERTIFICATE = "certificate"
    NAME_AND_KEY = "name_and_key"


class AnchorSettings(BaseModel):
    """
    Trust anchor inputs.

    Either ANCHOR__CERTIFICATE_PATH, or both ANCHOR__CA_NAME and
    ANCHOR__PUBLIC_KEY_PATH. ANCHOR__NAME_CONSTRAINTS_PATH is optional in
    both modes. Files may be PEM or DER.
    """

    certificate_path: Path | None = Field(default=None, description="Trusted CA certificate (PEM or DER)")
    ca_name: str | None = Field(default=None, description="CA distinguished name, RFC 2253 text")
    public_key_path: Path | None = Field(default=None, description="CA public key (PEM or DER SPKI)")
    name_constraints_path: Path | None = Field(
        default=None,
        description="DER NameConstraints value, or a NAME CONSTRAINTS PEM block",
    )

    @model_validator(mode="after")
    def check_identity_mode(self) -> AnchorSettings:
        """
        Require exactly one identity mode.

        Raises ValueError at startup when both or neither modes are configured,
        or when the name/key mode is only half configured.
        """
        by_name = self.ca_name is not None or self.public_key_path is not None
        if self.certificate_path is not None and by_name:
            raise ValueError("Set ANCHOR__CERTIFICATE_PATH or ANCHOR__CA_NAME/ANCHOR__PUBLIC_KEY_PATH, not both")
        if self.certificate_path is None and not by_name:
            raise ValueError("Set ANCHOR__CERTIFICATE_PATH or both ANCHOR__CA_NAME and ANCHOR__PUBLIC_KEY_PATH")
        if by_name:
            missing = [f for f, v in [
                ("ANCHOR__CA_NAME", self.ca_name),
                ("ANCHOR__PUBLIC_KEY_PATH", self.public_key_path),
            ] if v is None]
            if missing:
                raise ValueError("Name/key anchor is missing: " + ", ".join(missing))
        return self

    @property
    def mode(self) -> AnchorMode:
        if self.certificate_path is not None:
            return AnchorMode.CERTIFICATE
        return AnchorMode.NAME_AND_KEY


class AppSettings(BaseSettings):
    """
    Root application settings.

    Load order (highest priority first):
      1. Environment variables
      2. .env file
      3. Default values
    """

    model_config = SettingsConfigDict(
        env_file=_ENV_FILE,
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    anchor: AnchorSettings
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        return value.strip().upper()
