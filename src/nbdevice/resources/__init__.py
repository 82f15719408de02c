"""
Resource adapters.

Importing this package registers every resource with ResourceRegistry.
"""

from nbdevice.resources.base import Resource, ResourceRegistry
from nbdevice.resources.device import DeviceResource

__all__ = [
    "DeviceResource",
    "Resource",
    "ResourceRegistry",
]
