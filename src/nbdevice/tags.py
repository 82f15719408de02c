"""
Tag collaborators.

- TagResolver: declared tag names -> nested tag references for write payloads
  (missing tags are created in NetBox)
- extract_tag_names: nested tag list from a read payload -> flat set of names
"""

import logging
import re
from collections.abc import Iterable
from typing import Any

from nbdevice.client import NetBoxClient
from nbdevice.core.settings import settings

logger = logging.getLogger(__name__)

_SLUG_INVALID = re.compile(r"[^a-z0-9_]+")


def slugify(name: str) -> str:
    """Convert a tag name to a NetBox slug ("Core Switch" -> "core-switch")."""
    return _SLUG_INVALID.sub("-", name.strip().lower()).strip("-")


class TagResolver:
    """Resolve declared tag names into NetBox nested tag references."""

    def __init__(
        self,
        client: NetBoxClient,
        color: str | None = None,
        description: str | None = None,
    ) -> None:
        self.client = client
        self.color = color or settings.netbox_tag_color
        self.description = settings.netbox_tag_description if description is None else description

    def resolve(self, names: Iterable[str] | None) -> list[dict[str, Any]]:
        """
        Look up each tag by name, creating the ones NetBox does not know yet.

        Args:
            names: Declared tag names (duplicates and order are irrelevant)

        Returns:
            List of {"name", "slug"} references, sorted by name

        Raises:
            NetBoxError: Any lookup or creation failure (not swallowed)
        """
        references = []
        for name in sorted(set(names or ())):
            tag = self.client.find_tag(name)
            if tag is None:
                tag = self.client.create_tag(
                    name=name,
                    slug=slugify(name),
                    color=self.color,
                    description=self.description,
                )
                logger.info(f"Created tag '{name}' with ID {tag.get('id')}")
            references.append({"name": tag["name"], "slug": tag["slug"]})
        return references


def extract_tag_names(nested_tags: list[dict[str, Any]] | None) -> frozenset[str]:
    """Flatten a NetBox nested tag list into the set of tag names."""
    return frozenset(tag["name"] for tag in nested_tags or [] if tag.get("name"))
