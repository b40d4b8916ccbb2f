"""Apigee Edge management API client used to provision the portal role."""

import logging
from typing import Any, Optional
from urllib.parse import quote

import requests

from .config import API_TIMEOUT, PROBE_TIMEOUT
from .permissions import PermissionRule

logger = logging.getLogger(__name__)


class EdgeAPIError(Exception):
    """Base exception for Apigee Edge API errors."""

    pass


class EdgeConnectionError(EdgeAPIError):
    """Exception raised when the management API cannot be reached."""

    pass


class EdgeHTTPError(EdgeAPIError):
    """Exception raised for unexpected HTTP status codes from Edge."""

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.status_code = status_code


class EdgeAuthenticationError(EdgeHTTPError):
    """Exception raised when credentials are rejected or lack the orgadmin role."""

    pass


class EdgeClient:
    """Minimal client for the Edge organization and user role endpoints.

    Every call returns the HTTP status code only; response bodies are not used.
    Redirects are never followed so that a misconfigured base URL surfaces as
    a 302 instead of silently landing on a login page.
    """

    def __init__(self, base_url: str, org: str, username: str, password: str, timeout: int = API_TIMEOUT):
        """Initialize the Edge API client.

        Args:
            base_url: Management API base URL (e.g., "https://api.enterprise.apigee.com/v1")
            org: Edge organization name
            username: Orgadmin user used for HTTP Basic authentication
            password: Password for the orgadmin user
            timeout: Request timeout in seconds for role and permission calls (default: 30)
        """
        self.base_url = base_url.rstrip("/")
        self.org = org
        self.timeout = timeout

        self._session = requests.Session()
        # Credentials go out as UTF-8 bytes
        self._session.auth = (username.encode("utf-8"), password.encode("utf-8"))

    @property
    def org_url(self) -> str:
        return f"{self.base_url}/o/{quote(self.org, safe='')}"

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> "EdgeClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _request(self, method: str, url: str, timeout: Optional[int], **kwargs: Any) -> int:
        """Send a request and return its status code.

        Raises:
            EdgeConnectionError: If the request fails at the transport level
        """
        try:
            response = self._session.request(method, url, timeout=timeout, allow_redirects=False, **kwargs)
        except requests.exceptions.RequestException as e:
            logger.debug("%s %s failed: %s", method, url, e)
            raise EdgeConnectionError(f"{method} {url} failed: {e}") from e

        logger.debug("%s %s -> %s", method, url, response.status_code)
        return response.status_code

    def get_organization(self) -> int:
        """Probe the organization with the configured credentials.

        Returns:
            HTTP status code of ``GET /o/{org}``

        Raises:
            EdgeConnectionError: If the API cannot be reached
        """
        return self._request("GET", self.org_url, timeout=PROBE_TIMEOUT)

    def get_role(self, role: str) -> int:
        """Check whether a user role exists.

        Returns:
            HTTP status code of ``GET /o/{org}/userroles/{role}``

        Raises:
            EdgeConnectionError: If the API cannot be reached
        """
        return self._request("GET", f"{self.org_url}/userroles/{quote(role, safe='')}", timeout=self.timeout)

    def create_role(self, role: str) -> int:
        """Create a user role.

        Returns:
            HTTP status code of ``POST /o/{org}/userroles``

        Raises:
            EdgeConnectionError: If the API cannot be reached
        """
        return self._request(
            "POST",
            f"{self.org_url}/userroles",
            timeout=self.timeout,
            json={"role": [role]},
        )

    def add_role_permission(self, role: str, rule: PermissionRule) -> int:
        """Attach a resource path permission to a user role.

        Returns:
            HTTP status code of ``POST /o/{org}/userroles/{role}/permissions``

        Raises:
            EdgeConnectionError: If the API cannot be reached
        """
        return self._request(
            "POST",
            f"{self.org_url}/userroles/{quote(role, safe='')}/permissions",
            timeout=self.timeout,
            data=rule.to_xml(),
            headers={"Content-Type": "application/xml"},
        )
