"""NetBox client exceptions."""

from typing import Any


class NetBoxError(Exception):
    """Base class for all NetBox client errors."""


class NetBoxConfigError(NetBoxError):
    """NetBox URL or token is not configured."""


class NetBoxConnectionError(NetBoxError):
    """Transport-level failure (DNS, refused connection, timeout, TLS)."""

    def __init__(self, message: str, url: str) -> None:
        super().__init__(message)
        self.url = url


class NetBoxAPIError(NetBoxError):
    """NetBox answered with a non-success HTTP status.

    Attributes:
        status_code: HTTP status code
        reason: HTTP reason phrase
        body: Parsed JSON error body, or {"detail": <text>} when not JSON
        method: HTTP method of the failed request
        url: Full request URL
    """

    def __init__(
        self,
        status_code: int,
        reason: str,
        body: dict[str, Any] | None = None,
        method: str = "",
        url: str = "",
    ) -> None:
        self.status_code = status_code
        self.reason = reason
        self.body = body or {}
        self.method = method
        self.url = url
        super().__init__(self._format())

    def _format(self) -> str:
        detail = self.body.get("detail") if isinstance(self.body, dict) else None
        message = f"HTTP {self.status_code}: {self.reason}"
        if self.method and self.url:
            message = f"{self.method} {self.url} failed with {message}"
        if detail:
            message = f"{message} - {detail}"
        elif self.body:
            message = f"{message} - {self.body}"
        return message


class NetBoxNotFoundError(NetBoxAPIError):
    """NetBox answered 404 for the requested object."""
