"""Pytest configuration and shared fixtures.

Adds `src/` to `sys.path` so tests can import the project package
without requiring installation.

FakeNetBox emulates the subset of NetBox behaviour the device resource
relies on:
- Nested relation objects ({"id": ...}) and nested tags on read
- 404 for unknown device IDs (NetBoxNotFoundError)
- PUT leaves omitted fields untouched, explicit null clears a relation
- Free-text fields are whitespace-stripped (" " clears them)
"""

import itertools
import os
import sys
from typing import Any

import pytest

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
SRC_PATH = os.path.join(PROJECT_ROOT, "src")
if SRC_PATH not in sys.path:
    sys.path.insert(0, SRC_PATH)

from nbdevice.exceptions import NetBoxAPIError, NetBoxNotFoundError  # noqa: E402
from nbdevice.resources.device import DeviceResource  # noqa: E402
from nbdevice.tags import TagResolver  # noqa: E402

RELATION_FIELDS = ("device_type", "tenant", "location", "device_role", "role", "site", "primary_ip4")
TEXT_FIELDS = ("comments", "serial")


class FakeNetBox:
    """In-memory stand-in for NetBoxClient."""

    base_url = "https://netbox.example.com"

    def __init__(self) -> None:
        self.devices: dict[int, dict[str, Any]] = {}
        self.tags: dict[str, dict[str, Any]] = {}
        self.calls: list[tuple[str, Any]] = []
        self.fail_next: NetBoxAPIError | None = None
        self._device_ids = itertools.count(42)
        self._tag_ids = itertools.count(1)

    def _maybe_fail(self) -> None:
        if self.fail_next is not None:
            error, self.fail_next = self.fail_next, None
            raise error

    def _store(self, record: dict[str, Any], payload: dict[str, Any]) -> None:
        for key, value in payload.items():
            if key in TEXT_FIELDS:
                value = (value or "").strip()
            if key == "tags":
                value = [dict(self.tags[t["name"]]) for t in value]
            record[key] = value

    def _render(self, device_id: int) -> dict[str, Any]:
        record = self.devices[device_id]
        rendered: dict[str, Any] = {"id": device_id, "name": record.get("name")}
        for field in RELATION_FIELDS:
            if field in ("device_role", "role"):
                continue
            value = record.get(field)
            rendered[field] = {"id": value} if value is not None else None
        role = record.get("device_role", record.get("role"))
        rendered["device_role"] = {"id": role} if role is not None else None
        for field in TEXT_FIELDS:
            rendered[field] = record.get(field, "")
        # NetBox does not guarantee tag order
        rendered["tags"] = list(reversed(record.get("tags", [])))
        return rendered

    # --- devices -----------------------------------------------------

    def create_device(self, data: dict[str, Any]) -> dict[str, Any]:
        self.calls.append(("create_device", dict(data)))
        self._maybe_fail()
        device_id = next(self._device_ids)
        self.devices[device_id] = {}
        self._store(self.devices[device_id], data)
        return self._render(device_id)

    def read_device(self, device_id: int) -> dict[str, Any]:
        self.calls.append(("read_device", device_id))
        self._maybe_fail()
        if device_id not in self.devices:
            raise NetBoxNotFoundError(404, "Not Found", {"detail": "No Device matches the given query."})
        return self._render(device_id)

    def update_device(self, device_id: int, data: dict[str, Any]) -> dict[str, Any]:
        self.calls.append(("update_device", dict(data)))
        self._maybe_fail()
        if device_id not in self.devices:
            raise NetBoxNotFoundError(404, "Not Found", {"detail": "No Device matches the given query."})
        self._store(self.devices[device_id], data)
        return self._render(device_id)

    def delete_device(self, device_id: int) -> None:
        self.calls.append(("delete_device", device_id))
        self._maybe_fail()
        if device_id not in self.devices:
            raise NetBoxNotFoundError(404, "Not Found", {"detail": "No Device matches the given query."})
        del self.devices[device_id]

    # --- tags --------------------------------------------------------

    def find_tag(self, name: str) -> dict[str, Any] | None:
        self.calls.append(("find_tag", name))
        return self.tags.get(name)

    def create_tag(self, name: str, slug: str, color: str, description: str = "") -> dict[str, Any]:
        self.calls.append(("create_tag", name))
        tag = {"id": next(self._tag_ids), "name": name, "slug": slug, "color": color}
        self.tags[name] = tag
        return tag

    # --- helpers -----------------------------------------------------

    def last_payload(self, call: str) -> dict[str, Any]:
        """Payload of the most recent call of the given kind."""
        for name, payload in reversed(self.calls):
            if name == call:
                return payload
        raise AssertionError(f"No {call} call recorded")


@pytest.fixture
def fake_netbox() -> FakeNetBox:
    """Empty in-memory NetBox."""
    return FakeNetBox()


@pytest.fixture
def device_resource(fake_netbox: FakeNetBox) -> DeviceResource:
    """DeviceResource wired to the fake NetBox."""
    return DeviceResource(
        client=fake_netbox,
        tag_resolver=TagResolver(fake_netbox, color="9e9e9e", description=""),
        role_field="device_role",
    )


@pytest.fixture
def base_config() -> dict[str, Any]:
    """Minimal valid declared configuration."""
    return {"name": "sw1", "device_type_id": 5, "role_id": 2, "site_id": 1}
