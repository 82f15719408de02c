"""
netbox_device resource.

Maps a declared device configuration onto /api/dcim/devices/ and writes the
observed NetBox state back into ResourceData.

Free-text quirk: NetBox cannot tell an empty `comments`/`serial` apart from
an omitted one on update, so clearing either field sends a single space,
which NetBox strips to an empty value.
"""

import logging
from typing import Any

from nbdevice.client import NetBoxClient
from nbdevice.core.settings import settings
from nbdevice.diagnostics import Diagnostics
from nbdevice.exceptions import NetBoxError, NetBoxNotFoundError
from nbdevice.models import DeviceConfig, DeviceState
from nbdevice.resources.base import ResourceRegistry
from nbdevice.schema import ResourceData, ResourceSchema
from nbdevice.tags import TagResolver, extract_tag_names

logger = logging.getLogger(__name__)

# Value NetBox interprets as "clear this free-text field"
CLEAR_SENTINEL = " "

# (local attribute, remote field) for relations that may be absent
OPTIONAL_RELATIONS = (
    ("tenant_id", "tenant"),
    ("location_id", "location"),
)

# Free-text fields that use CLEAR_SENTINEL on update
SENTINEL_FIELDS = ("comments", "serial")

DEVICE_SCHEMA = ResourceSchema(config_model=DeviceConfig, state_model=DeviceState)


class DeviceResource:
    """
    Lifecycle adapter for NetBox devices.

    Attributes:
        type_name: Resource type identifier
        description: Resource description shown to users
        schema: Attribute schema (see nbdevice.models)
        role_field: Remote field name for the device role ("device_role" or "role")
    """

    type_name = "netbox_device"
    description = """From the [official documentation](https://docs.netbox.dev/en/stable/core-functionality/devices/#devices):

> Every piece of hardware which is installed within a site or rack exists in NetBox as a device. Devices are measured in rack units (U) and can be half depth or full depth. A device may have a height of 0U: These devices do not consume vertical rack space and cannot be assigned to a particular rack unit. A common example of a 0U device is a vertically-mounted PDU."""
    schema = DEVICE_SCHEMA

    def __init__(
        self,
        client: NetBoxClient | None = None,
        tag_resolver: TagResolver | None = None,
        role_field: str | None = None,
    ) -> None:
        """
        Initialize DeviceResource.

        Args:
            client: Shared NetBox client (default: created from settings on first use)
            tag_resolver: Tag collaborator (default: TagResolver over the client)
            role_field: Remote role field name (default: settings.netbox_role_field)
        """
        self._client = client
        self._tag_resolver = tag_resolver
        self.role_field = role_field or settings.netbox_role_field

    @property
    def client(self) -> NetBoxClient:
        if self._client is None:
            self._client = NetBoxClient()
        return self._client

    @property
    def tag_resolver(self) -> TagResolver:
        if self._tag_resolver is None:
            self._tag_resolver = TagResolver(self.client)
        return self._tag_resolver

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def create(self, data: ResourceData) -> Diagnostics:
        """Create the device; optional fields are only sent when set."""
        payload = self._base_payload(data)

        for attr, field in OPTIONAL_RELATIONS:
            value, ok = data.get_ok(attr)
            if ok:
                payload[field] = value

        for attr in SENTINEL_FIELDS:
            value, ok = data.get_ok(attr)
            if ok:
                payload[attr] = value

        try:
            tags = self.tag_resolver.resolve(data.get("tags"))
            if tags:
                payload["tags"] = tags
            logger.debug(f"Creating device with payload {payload}")
            result = self.client.create_device(payload)
        except NetBoxError as e:
            logger.error(f"Device creation failed: {e}")
            return Diagnostics.from_error(e)

        data.set_id(str(result["id"]))
        logger.info(f"Created device '{payload['name']}' with ID {data.id}")

        return self.read(data)

    def read(self, data: ResourceData) -> Diagnostics:
        """Refresh data from NetBox; a missing device clears the identifier."""
        try:
            device_id = self._parse_id(data.id)
        except ValueError as e:
            return Diagnostics.error(str(e))

        try:
            device = self.client.read_device(device_id)
        except NetBoxNotFoundError:
            # Destroyed out of band: drop the id so the host plans a re-create
            logger.warning(f"Device {device_id} no longer exists in NetBox, removing it from state")
            data.set_id("")
            return Diagnostics()
        except NetBoxError as e:
            logger.error(f"Device read failed: {e}")
            return Diagnostics.from_error(e)

        data.set_id(str(device["id"]))
        self._apply_remote(data, device)
        return Diagnostics()

    def update(self, data: ResourceData) -> Diagnostics:
        """Replace the device with the declared configuration."""
        try:
            device_id = self._parse_id(data.id)
        except ValueError as e:
            return Diagnostics.error(str(e))

        payload = self._base_payload(data)

        for attr, field in OPTIONAL_RELATIONS:
            value, ok = data.get_ok(attr)
            if ok:
                payload[field] = value
            elif data.has_change(attr):
                payload[field] = None

        primary_ip, ok = data.get_ok("primary_ipv4")
        if ok:
            payload["primary_ip4"] = primary_ip

        for attr in SENTINEL_FIELDS:
            if data.has_change(attr):
                value, ok = data.get_ok(attr)
                payload[attr] = value if ok else CLEAR_SENTINEL

        try:
            payload["tags"] = self.tag_resolver.resolve(data.get("tags"))
            logger.debug(f"Updating device {device_id} with payload {payload}")
            self.client.update_device(device_id, payload)
        except NetBoxError as e:
            logger.error(f"Device update failed: {e}")
            return Diagnostics.from_error(e)

        logger.info(f"Updated device '{payload['name']}' (ID {device_id})")

        return self.read(data)

    def delete(self, data: ResourceData) -> Diagnostics:
        """Delete the device. A device that is already gone is reported as an error."""
        try:
            device_id = self._parse_id(data.id)
        except ValueError as e:
            return Diagnostics.error(str(e))

        try:
            self.client.delete_device(device_id)
        except NetBoxError as e:
            logger.error(f"Device delete failed: {e}")
            return Diagnostics.from_error(e)

        logger.info(f"Deleted device ID {device_id}")
        data.set_id("")
        return Diagnostics()

    def import_state(self, id: str) -> tuple[ResourceData, Diagnostics]:
        """Populate a fresh ResourceData from the remote identifier alone."""
        data = ResourceData(self.schema, id=id)
        diags = self.read(data)
        if not diags.has_error() and not data.id:
            diags.extend(Diagnostics.error(f"Cannot import non-existent remote object with ID {id}"))
        return data, diags

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _base_payload(self, data: ResourceData) -> dict[str, Any]:
        """Fields sent on every write."""
        return {
            "name": data.get("name"),
            "device_type": data.get("device_type_id"),
            self.role_field: data.get("role_id"),
            "site": data.get("site_id"),
        }

    def _apply_remote(self, data: ResourceData, device: dict[str, Any]) -> None:
        """Write the remote payload into data, clearing every absent relation."""
        data.set("name", device.get("name"))
        data.set("device_type_id", _nested_id(device.get("device_type")))
        data.set("tenant_id", _nested_id(device.get("tenant")))
        data.set("location_id", _nested_id(device.get("location")))
        role = device.get(self.role_field) or device.get("role") or device.get("device_role")
        data.set("role_id", _nested_id(role))
        data.set("site_id", _nested_id(device.get("site")))
        data.set("primary_ipv4", _nested_id(device.get("primary_ip4")))
        data.set("comments", device.get("comments") or None)
        data.set("serial", device.get("serial") or None)
        data.set("tags", extract_tag_names(device.get("tags")))

    @staticmethod
    def _parse_id(value: str) -> int:
        """Local ids are the decimal form of the remote id: ASCII digits only."""
        if not isinstance(value, str) or not (value.isascii() and value.isdecimal()):
            raise ValueError(f"Invalid device ID '{value}': expected a decimal integer")
        return int(value)


def _nested_id(value: dict[str, Any] | None) -> int | None:
    """{"id": 5, ...} -> 5, None -> None."""
    if not value:
        return None
    return value.get("id")


ResourceRegistry.register(DeviceResource())
