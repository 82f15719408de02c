"""
Structured lifecycle results.

Resource operations do not raise on remote failures. They return a
Diagnostics collection which the host inspects: an empty collection means
success, any ERROR entry means the operation failed and the host decides
what to do next (retry, abort the run, show the operator).

Usage:
    diags = resource.create(data)
    if diags.has_error():
        for diag in diags:
            print(diag.summary, diag.detail)
"""

from collections.abc import Iterator
from enum import Enum

from pydantic import BaseModel, Field

from nbdevice.exceptions import NetBoxAPIError, NetBoxError


class Severity(str, Enum):
    """Diagnostic severity."""

    ERROR = "error"
    WARNING = "warning"


class Diagnostic(BaseModel):
    """
    Single diagnostic entry.

    Attributes:
        severity: ERROR fails the operation, WARNING is informational
        summary: Short message (usually str(exception))
        detail: Longer explanation or remote error body
        attribute: Attribute the diagnostic relates to (optional)
        status_code: HTTP status of the failed remote call (optional)
    """

    severity: Severity = Field(description="ERROR fails the operation")
    summary: str = Field(description="Short human readable message")
    detail: str = Field(default="", description="Extended explanation")
    attribute: str | None = Field(default=None, description="Related attribute name")
    status_code: int | None = Field(default=None, description="HTTP status of the failed call")


class Diagnostics:
    """Ordered collection of Diagnostic entries returned by lifecycle operations."""

    def __init__(self, items: list[Diagnostic] | None = None) -> None:
        self._items: list[Diagnostic] = list(items or [])

    @classmethod
    def from_error(cls, exc: Exception, attribute: str | None = None) -> "Diagnostics":
        """Wrap an exception as a single ERROR diagnostic, keeping the remote cause."""
        detail = ""
        status_code = None
        if isinstance(exc, NetBoxAPIError):
            status_code = exc.status_code
            detail = str(exc.body) if exc.body else ""
        elif isinstance(exc, NetBoxError) and exc.__cause__ is not None:
            detail = str(exc.__cause__)
        return cls(
            [
                Diagnostic(
                    severity=Severity.ERROR,
                    summary=str(exc),
                    detail=detail,
                    attribute=attribute,
                    status_code=status_code,
                )
            ]
        )

    @classmethod
    def error(cls, summary: str, detail: str = "", attribute: str | None = None) -> "Diagnostics":
        return cls([Diagnostic(severity=Severity.ERROR, summary=summary, detail=detail, attribute=attribute)])

    @classmethod
    def warning(cls, summary: str, detail: str = "", attribute: str | None = None) -> "Diagnostics":
        return cls(
            [Diagnostic(severity=Severity.WARNING, summary=summary, detail=detail, attribute=attribute)]
        )

    def extend(self, other: "Diagnostics") -> "Diagnostics":
        """Append entries from another collection (in place) and return self."""
        self._items.extend(other)
        return self

    def has_error(self) -> bool:
        return any(d.severity == Severity.ERROR for d in self._items)

    def errors(self) -> list[Diagnostic]:
        return [d for d in self._items if d.severity == Severity.ERROR]

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __repr__(self) -> str:
        return f"Diagnostics({self._items!r})"
