"""
Resource schema and per-instance data.

ResourceSchema describes the attributes a resource exposes to the host
(required / optional / computed) and validates declared configuration.

ResourceData is the host's view of one resource instance while a lifecycle
operation runs:
- config: the declared attribute set (None during Read and Import)
- state: the last observed state (empty during Create)
- writes: values set by the running operation

Usage:
    data = ResourceData(schema, config=schema.validate(user_config))
    diags = resource.create(data)
    data.id        # "42"
    data.state()   # {"id": "42", "name": "sw1", ...}
"""

from collections.abc import Iterable
from dataclasses import dataclass
from functools import cached_property
from typing import Any

from pydantic import BaseModel


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (set, frozenset, list, tuple, dict)):
        return len(value) == 0
    return False


def _comparable(value: Any) -> Any:
    """Collapse the different spellings of "absent" and make collections order-free."""
    if _is_empty(value):
        return None
    if isinstance(value, (set, frozenset, list, tuple)):
        return frozenset(value)
    return value


@dataclass(frozen=True)
class ResourceSchema:
    """
    Attribute schema derived from a config model and a state model.

    Attributes:
        config_model: Pydantic model of user-settable attributes
        state_model: Pydantic model of observed attributes (superset of config)
    """

    config_model: type[BaseModel]
    state_model: type[BaseModel]

    @cached_property
    def attributes(self) -> tuple[str, ...]:
        return tuple(self.state_model.model_fields)

    @cached_property
    def required(self) -> tuple[str, ...]:
        return tuple(n for n, f in self.config_model.model_fields.items() if f.is_required())

    @cached_property
    def optional(self) -> tuple[str, ...]:
        return tuple(n for n, f in self.config_model.model_fields.items() if not f.is_required())

    @cached_property
    def computed(self) -> tuple[str, ...]:
        return tuple(n for n in self.state_model.model_fields if n not in self.config_model.model_fields)

    def validate(self, config: dict[str, Any]) -> dict[str, Any]:
        """
        Validate declared configuration and return the normalized attribute dict.

        Raises:
            pydantic.ValidationError: missing required attribute, wrong type,
                unknown or computed attribute supplied
        """
        return self.config_model.model_validate(config).model_dump()

    def normalize_state(self, state: dict[str, Any]) -> dict[str, Any]:
        """Fill missing attributes of an observed state with their empty value."""
        return self.state_model.model_validate(
            {k: v for k, v in state.items() if k in self.attributes}
        ).model_dump()


class ResourceData:
    """Per-instance data handed to lifecycle operations."""

    def __init__(
        self,
        schema: ResourceSchema,
        config: dict[str, Any] | None = None,
        state: dict[str, Any] | None = None,
        id: str = "",
    ) -> None:
        self.schema = schema
        self._config = dict(config) if config is not None else None
        self._state = schema.normalize_state(state or {})
        self._writes: dict[str, Any] = {}
        self._id = id

    @property
    def id(self) -> str:
        return self._id

    def set_id(self, value: str) -> None:
        """Set the local identifier; "" marks the resource as absent."""
        self._id = value

    def _check(self, key: str) -> None:
        if key not in self.schema.attributes:
            raise KeyError(f"Unknown attribute '{key}'")

    def get(self, key: str) -> Any:
        """Current value: operation writes, then declared config, then prior state."""
        self._check(key)
        if key in self._writes:
            return self._writes[key]
        if self._config is not None and key not in self.schema.computed:
            return self._config.get(key)
        return self._state.get(key)

    def get_ok(self, key: str) -> tuple[Any, bool]:
        """Return (value, ok) where ok is False for None, "" and empty collections."""
        value = self.get(key)
        return value, not _is_empty(value)

    def has_change(self, key: str) -> bool:
        """True when the declared value differs from the prior state."""
        self._check(key)
        if self._config is None or key in self.schema.computed:
            return False
        return _comparable(self._config.get(key)) != _comparable(self._state.get(key))

    def has_changes(self, *keys: str) -> bool:
        return any(self.has_change(k) for k in keys)

    def set(self, key: str, value: Any) -> None:
        self._check(key)
        if isinstance(value, Iterable) and not isinstance(value, (str, bytes, dict)):
            value = frozenset(value)
        self._writes[key] = value

    def state(self) -> dict[str, Any]:
        """Merged attribute view, including the identifier."""
        return {"id": self._id, **{k: self.get(k) for k in self.schema.attributes}}
