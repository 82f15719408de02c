"""
Data models for the netbox_device resource.

Defines:
- DeviceConfig: declared (user-settable) attributes with required/optional flags
- DeviceState: observed attributes, every field nullable, plus computed ones
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DeviceConfig(BaseModel):
    """
    Declared attribute set for one netbox_device instance.

    Relations are plain integer ids. None means "not set"; 0 is a valid id
    value and never used as an unset marker.
    """

    model_config = ConfigDict(extra="forbid")

    name: str = Field(description="Device display name")
    device_type_id: int = Field(description="ID of the device type")
    tenant_id: int | None = Field(default=None, description="ID of the owning tenant")
    location_id: int | None = Field(default=None, description="ID of the location within the site")
    role_id: int = Field(description="ID of the device role")
    serial: str | None = Field(default=None, description="Chassis serial number")
    site_id: int = Field(description="ID of the site")
    comments: str | None = Field(default=None, description="Free-text comments")
    tags: frozenset[str] = Field(default_factory=frozenset, description="Tag names")

    @field_validator("serial", "comments")
    @classmethod
    def strip_free_text(cls, v: str | None) -> str | None:
        """NetBox strips free text, so blank values mean "not set"."""
        if v is None:
            return None
        return v.strip() or None

    @field_validator("tags", mode="before")
    @classmethod
    def null_tags_as_empty(cls, v: Any) -> Any:
        """A bare `tags:` key in YAML loads as None."""
        return frozenset() if v is None else v


class DeviceState(BaseModel):
    """Observed state of a netbox_device, as written back by Read."""

    name: str | None = None
    device_type_id: int | None = None
    tenant_id: int | None = None
    location_id: int | None = None
    role_id: int | None = None
    serial: str | None = None
    site_id: int | None = None
    comments: str | None = None
    tags: frozenset[str] = Field(default_factory=frozenset)
    primary_ipv4: int | None = Field(default=None, description="ID of the primary IPv4 address")
