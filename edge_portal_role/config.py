"""Configuration defaults for the Drupal portal role provisioner."""

from typing import Final, Optional

DEFAULT_BASE_URL: Final[str] = "https://api.enterprise.apigee.com/v1"
DEFAULT_ROLE: Final[str] = "drupalportal"

# Seconds to wait on role and permission calls
API_TIMEOUT: Final[int] = 30
# The connectivity probe relies on the transport default (no timeout)
PROBE_TIMEOUT: Final[Optional[int]] = None


def validate_options(org: str, base_url: str, role: str) -> None:
    """Validate resolved command-line options.

    Raises:
        ValueError: If any option value is invalid.
    """
    if not org:
        raise ValueError("no org specified.")

    if not base_url.startswith(("http://", "https://")):
        raise ValueError(f"base URL must start with http:// or https://, got '{base_url}'")

    if not role:
        raise ValueError("role name must not be empty")
