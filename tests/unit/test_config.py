"""
Unit tests for configuration loading and anchor mode validation.

Settings are built from monkeypatched environment variables; the .env file
is disabled so a developer's local file cannot leak into the tests.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from trust_anchor.config import AnchorMode, AnchorSettings, AppSettings


def _settings() -> AppSettings:
    return AppSettings(_env_file=None)  # type: ignore[call-arg]


class TestAnchorSettings:
    """Exactly one identity mode must be configured."""

    def test_certificate_mode(self) -> None:
        settings = AnchorSettings(certificate_path=Path("root.pem"))
        assert settings.mode is AnchorMode.CERTIFICATE

    def test_name_and_key_mode(self) -> None:
        settings = AnchorSettings(ca_name="CN=Root", public_key_path=Path("root.pub"))
        assert settings.mode is AnchorMode.NAME_AND_KEY

    def test_both_modes_rejected(self) -> None:
        """
        GIVEN a certificate path AND a CA name
        WHEN settings are validated
        THEN a ValidationError explains that only one mode is allowed.
        """
        with pytest.raises(ValidationError, match="not both"):
            AnchorSettings(certificate_path=Path("root.pem"), ca_name="CN=Root")

    def test_no_mode_rejected(self) -> None:
        with pytest.raises(ValidationError):
            AnchorSettings()

    def test_half_configured_name_mode_rejected(self) -> None:
        with pytest.raises(ValidationError, match="ANCHOR__PUBLIC_KEY_PATH"):
            AnchorSettings(ca_name="CN=Root")


class TestAppSettings:
    def test_nested_env_vars(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """
        GIVEN ANCHOR__* environment variables
        WHEN AppSettings is loaded
        THEN they populate the nested anchor settings.
        """
        monkeypatch.setenv("ANCHOR__CERTIFICATE_PATH", "/etc/pki/root.pem")
        monkeypatch.setenv("ANCHOR__NAME_CONSTRAINTS_PATH", "/etc/pki/root-nc.der")
        settings = _settings()
        assert settings.anchor.certificate_path == Path("/etc/pki/root.pem")
        assert settings.anchor.name_constraints_path == Path("/etc/pki/root-nc.der")
        assert settings.log_level == "INFO"

    def test_log_level_normalized(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ANCHOR__CERTIFICATE_PATH", "root.pem")
        monkeypatch.setenv("LOG_LEVEL", " debug ")
        assert _settings().log_level == "DEBUG"

    def test_missing_anchor_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("ANCHOR__CERTIFICATE_PATH", raising=False)
        monkeypatch.delenv("ANCHOR__CA_NAME", raising=False)
        monkeypatch.delenv("ANCHOR__PUBLIC_KEY_PATH", raising=False)
        with pytest.raises(ValidationError):
            _settings()
