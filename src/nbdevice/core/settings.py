"""Environment settings - loads NetBox credentials and runtime options from .env.

Priority:
1. Environment variables (highest priority)
2. .env file values
3. Default values in this file
"""

from pathlib import Path
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Project root: src/nbdevice/core/settings.py -> src/nbdevice/core/ -> src/nbdevice/ -> src/ -> project_root/
PROJECT_ROOT = Path(__file__).parent.parent.parent.parent
ENV_FILE_PATH = PROJECT_ROOT / ".env"


class EnvSettings(BaseSettings):
    """Environment-based configuration loaded from .env file."""

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE_PATH),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ============================================
    # NetBox (remote inventory API)
    # ============================================
    netbox_url: str = ""
    netbox_token: str = ""
    netbox_verify_ssl: bool = True
    netbox_timeout: float = 30.0

    # NetBox < 3.6 names the device role relation "device_role", newer releases "role"
    netbox_role_field: Literal["device_role", "role"] = "device_role"

    # Defaults used when a declared tag has to be created
    netbox_tag_color: str = "9e9e9e"
    netbox_tag_description: str = "Created by nbdevice"

    # ============================================
    # Logging
    # ============================================
    log_level: str = "INFO"
    log_file_path: str = ""  # Empty disables file logging
    log_file_max_size_mb: int = 10
    log_file_backup_count: int = 5

    @field_validator("netbox_url", mode="after")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("netbox_tag_color", mode="after")
    @classmethod
    def normalize_color(cls, value: str) -> str:
        return value.lstrip("#").lower()


settings = EnvSettings()


__all__ = [
    "ENV_FILE_PATH",
    "PROJECT_ROOT",
    "EnvSettings",
    "settings",
]
