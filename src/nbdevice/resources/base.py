"""
Resource protocol and registry.

A resource adapts one NetBox object type to the host's lifecycle contract:
create / read / update / delete, plus import by remote identifier. Every
operation works on a ResourceData and returns Diagnostics.

Usage:
    from nbdevice.resources.base import ResourceRegistry

    resource = ResourceRegistry.get_resource("netbox_device")
    data, diags = resource.import_state("42")
"""

import logging
from typing import Protocol

from nbdevice.diagnostics import Diagnostics
from nbdevice.schema import ResourceData, ResourceSchema

logger = logging.getLogger(__name__)


class Resource(Protocol):
    """
    Protocol for lifecycle adapters.

    Required Attributes:
        type_name: Unique resource type identifier (e.g., "netbox_device")
        description: Human-readable description
        schema: Attribute schema exposed to the host
    """

    type_name: str
    description: str
    schema: ResourceSchema

    def create(self, data: ResourceData) -> Diagnostics: ...

    def read(self, data: ResourceData) -> Diagnostics: ...

    def update(self, data: ResourceData) -> Diagnostics: ...

    def delete(self, data: ResourceData) -> Diagnostics: ...

    def import_state(self, id: str) -> tuple[ResourceData, Diagnostics]: ...


class ResourceRegistry:
    """Registry of resource adapters keyed by type name."""

    _resources: dict[str, Resource] = {}

    @classmethod
    def register(cls, resource: Resource) -> None:
        """
        Register a resource instance.

        Note:
            Re-registering the same class under the same name is a no-op,
            so modules can register at import time safely.
        """
        if not hasattr(resource, "type_name") or not hasattr(resource, "read"):
            msg = f"Resource {resource.__class__.__name__} does not implement Resource protocol"
            raise TypeError(msg)

        if resource.type_name in cls._resources:
            existing = cls._resources[resource.type_name]
            if existing.__class__ is resource.__class__:
                return
            msg = (
                f"Resource type conflict: '{resource.type_name}' - "
                f"Existing: {existing.__class__.__name__}, "
                f"New: {resource.__class__.__name__}"
            )
            raise ValueError(msg)

        cls._resources[resource.type_name] = resource
        logger.debug(f"Registered resource: {resource.type_name}")

    @classmethod
    def get_resource(cls, type_name: str) -> Resource | None:
        return cls._resources.get(type_name)

    @classmethod
    def list_resources(cls) -> list[Resource]:
        return list(cls._resources.values())

    @classmethod
    def resource_names(cls) -> list[str]:
        return list(cls._resources.keys())

    @classmethod
    def clear(cls) -> None:
        """Clear all registered resources (primarily for testing)."""
        cls._resources.clear()
