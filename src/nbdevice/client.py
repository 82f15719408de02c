"""
NetBox REST client.

Thin synchronous wrapper over a requests.Session:
- Token authentication and JSON headers
- Path normalization ("/dcim/devices/" -> "<base>/api/dcim/devices/")
- Status code validation mapped onto the nbdevice.exceptions hierarchy

The client is constructed once by the host and shared by every lifecycle
call. It does not retry, reconnect or cache.
"""

import logging
from typing import Any, Literal

import requests

from nbdevice.core.settings import settings
from nbdevice.exceptions import (
    NetBoxAPIError,
    NetBoxConfigError,
    NetBoxConnectionError,
    NetBoxNotFoundError,
)

logger = logging.getLogger(__name__)

HTTPMethod = Literal["GET", "POST", "PUT", "PATCH", "DELETE"]

DEVICES_PATH = "/api/dcim/devices/"
TAGS_PATH = "/api/extras/tags/"


class NetBoxClient:
    """
    NetBox API client.

    Attributes:
        base_url: NetBox server URL (without trailing slash)
        token: Authentication token
        verify_ssl: Verify TLS certificates
        timeout: Per-request timeout in seconds
    """

    def __init__(
        self,
        base_url: str | None = None,
        token: str | None = None,
        verify_ssl: bool | None = None,
        timeout: float | None = None,
        session: requests.Session | None = None,
    ) -> None:
        """
        Initialize NetBoxClient.

        Args:
            base_url: NetBox server URL (default: from settings)
            token: NetBox API token (default: from settings)
            verify_ssl: TLS verification (default: from settings)
            timeout: Request timeout in seconds (default: from settings)
            session: Pre-built requests session (default: new session)
        """
        self.base_url = (base_url or settings.netbox_url).rstrip("/")
        self.token = token or settings.netbox_token
        self.verify_ssl = settings.netbox_verify_ssl if verify_ssl is None else verify_ssl
        self.timeout = timeout or settings.netbox_timeout

        if not self.base_url or not self.token:
            logger.warning("NetBox base_url or token not configured")

        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "Authorization": f"Token {self.token}",
                "Content-Type": "application/json",
                "Accept": "application/json",
            }
        )

    def url_for(self, path: str) -> str:
        """Build the full URL for an API path."""
        if not path.startswith("/"):
            path = f"/{path}"
        if not path.startswith("/api"):
            path = f"/api{path}"
        return f"{self.base_url}{path}"

    def request(
        self,
        method: HTTPMethod,
        path: str,
        data: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """
        Execute a NetBox API request.

        Args:
            method: HTTP method
            path: API path (e.g., "/dcim/devices/" or "/api/dcim/devices/42/")
            data: JSON request body for POST/PUT/PATCH
            params: Query parameters

        Returns:
            Parsed JSON body, or None for empty responses (204 No Content)

        Raises:
            NetBoxConfigError: URL or token missing
            NetBoxConnectionError: Transport failure
            NetBoxNotFoundError: HTTP 404
            NetBoxAPIError: Any other non-2xx status
        """
        if not self.base_url or not self.token:
            raise NetBoxConfigError(
                "NetBox base_url or token not configured (set NETBOX_URL and NETBOX_TOKEN)"
            )

        url = self.url_for(path)
        logger.debug(f"{method} {url} params={params} data={data}")

        try:
            response = self.session.request(
                method=method,
                url=url,
                json=data,
                params=params,
                verify=self.verify_ssl,
                timeout=self.timeout,
            )
        except requests.exceptions.Timeout as e:
            raise NetBoxConnectionError(f"Request timeout after {self.timeout}s: {url}", url) from e
        except requests.exceptions.RequestException as e:
            raise NetBoxConnectionError(f"Connection error (is NetBox running?): {url}", url) from e

        if not response.ok:
            self._raise_for_status(response, method, url)

        if response.status_code == 204 or not response.content:
            return None

        try:
            return response.json()
        except ValueError as e:
            raise NetBoxAPIError(
                response.status_code,
                "Invalid JSON in response",
                {"detail": response.text[:200]},
                method=method,
                url=url,
            ) from e

    def _raise_for_status(self, response: requests.Response, method: str, url: str) -> None:
        """Map an error response onto the exception hierarchy."""
        try:
            body = response.json()
        except ValueError:
            body = {"detail": response.text}
        if not isinstance(body, dict):
            body = {"detail": body}

        error_cls = NetBoxNotFoundError if response.status_code == 404 else NetBoxAPIError
        raise error_cls(response.status_code, response.reason or "", body, method=method, url=url)

    def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return self.request("GET", path, params=params)

    def post(self, path: str, data: dict[str, Any]) -> Any:
        return self.request("POST", path, data=data)

    def put(self, path: str, data: dict[str, Any]) -> Any:
        return self.request("PUT", path, data=data)

    def delete(self, path: str) -> Any:
        return self.request("DELETE", path)

    # ------------------------------------------------------------------
    # dcim/devices
    # ------------------------------------------------------------------

    def create_device(self, data: dict[str, Any]) -> dict[str, Any]:
        return self.post(DEVICES_PATH, data)

    def read_device(self, device_id: int) -> dict[str, Any]:
        return self.get(f"{DEVICES_PATH}{device_id}/")

    def update_device(self, device_id: int, data: dict[str, Any]) -> dict[str, Any]:
        return self.put(f"{DEVICES_PATH}{device_id}/", data)

    def delete_device(self, device_id: int) -> None:
        self.delete(f"{DEVICES_PATH}{device_id}/")

    # ------------------------------------------------------------------
    # extras/tags
    # ------------------------------------------------------------------

    def find_tag(self, name: str) -> dict[str, Any] | None:
        """Return the tag named `name`, or None when it does not exist."""
        result = self.get(TAGS_PATH, params={"name": name})
        results = (result or {}).get("results", [])
        return results[0] if results else None

    def create_tag(self, name: str, slug: str, color: str, description: str = "") -> dict[str, Any]:
        return self.post(
            TAGS_PATH,
            {"name": name, "slug": slug, "color": color, "description": description},
        )
