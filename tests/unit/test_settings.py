"""Unit tests for EnvSettings."""

import pytest
from pydantic import ValidationError

from nbdevice.core.settings import EnvSettings


class TestEnvSettings:
    """Tests for environment loading and normalization."""

    def test_defaults(self, monkeypatch):
        for var in ("NETBOX_URL", "NETBOX_TOKEN", "NETBOX_ROLE_FIELD", "NETBOX_VERIFY_SSL"):
            monkeypatch.delenv(var, raising=False)

        settings = EnvSettings(_env_file=None)

        assert settings.netbox_url == ""
        assert settings.netbox_verify_ssl is True
        assert settings.netbox_timeout == 30.0
        assert settings.netbox_role_field == "device_role"
        assert settings.log_level == "INFO"

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("NETBOX_URL", "https://netbox.example.com/")
        monkeypatch.setenv("NETBOX_TOKEN", "abc")
        monkeypatch.setenv("NETBOX_VERIFY_SSL", "false")
        monkeypatch.setenv("NETBOX_ROLE_FIELD", "role")

        settings = EnvSettings(_env_file=None)

        assert settings.netbox_url == "https://netbox.example.com"
        assert settings.netbox_token == "abc"
        assert settings.netbox_verify_ssl is False
        assert settings.netbox_role_field == "role"

    def test_env_file(self, tmp_path, monkeypatch):
        monkeypatch.delenv("NETBOX_TOKEN", raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text("NETBOX_TOKEN=from-file\nNETBOX_TAG_COLOR=#FF0000\n", encoding="utf-8")

        settings = EnvSettings(_env_file=str(env_file))

        assert settings.netbox_token == "from-file"
        assert settings.netbox_tag_color == "ff0000"

    def test_invalid_role_field(self, monkeypatch):
        monkeypatch.setenv("NETBOX_ROLE_FIELD", "device-role")

        with pytest.raises(ValidationError):
            EnvSettings(_env_file=None)
