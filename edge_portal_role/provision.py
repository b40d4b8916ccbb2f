"""
Create the Drupal portal role in an Apigee Edge organization.

Execution Flow:
===============
1. Verify the orgadmin credentials can reach the organization
2. Create the role if it does not exist yet
3. Post every resource path permission from PERMISSION_RULES to the role

Every failure raises an EdgeAPIError subclass carrying the message shown to
the operator. Nothing is rolled back: a failed run leaves the role partially
configured, and rerunning finds the role and re-submits the permissions,
which Edge treats as upserts.
"""

from dataclasses import dataclass, field
from typing import Callable, Iterable

from rich.console import Console
from rich.markup import escape

from .api import (
    EdgeAuthenticationError,
    EdgeClient,
    EdgeConnectionError,
    EdgeHTTPError,
)
from .permissions import PERMISSION_RULES, PermissionRule

console = Console(soft_wrap=True, highlight=False)

# Status reported when no HTTP response was received, as curl reports it
NO_RESPONSE = 0


@dataclass(frozen=True)
class EdgeSession:
    """Resolved settings for one provisioning run."""

    org: str
    base_url: str
    username: str
    password: str = field(repr=False)
    role: str
    debug: bool = False

    def client(self) -> EdgeClient:
        return EdgeClient(self.base_url, self.org, self.username, self.password)


def _status(call: Callable[..., int], *args: object) -> int:
    try:
        return call(*args)
    except EdgeConnectionError:
        return NO_RESPONSE


def _debug(session: EdgeSession, step: int, status: int) -> None:
    if session.debug:
        console.print(f"{step}> {status:03d}")


def verify_connection(client: EdgeClient, session: EdgeSession) -> None:
    """
    Make sure the orgadmin user can connect to the organization.

    Status handling for ``GET /o/{org}``:
        200: credentials are valid, continue
        401: username or password is wrong
        403: user is not an orgadmin of this org
        302: base URL points somewhere that redirects (login page, proxy)
        no response: DNS, TLS, or network failure
        anything else: the org does not exist

    Raises:
        EdgeAuthenticationError: On 401 or 403
        EdgeConnectionError: When the API cannot be reached
        EdgeHTTPError: On a redirect or any other unexpected status
    """
    status = _status(client.get_organization)
    _debug(session, 1, status)

    if status == 200:
        return
    if status == 401:
        raise EdgeAuthenticationError("Username/Password is incorrect.", status)
    if status == 403:
        raise EdgeAuthenticationError(
            f"User '{session.username}' is not an orgadmin for organization: '{session.org}'", status
        )
    if status == NO_RESPONSE:
        raise EdgeConnectionError(
            f'Error connecting to the API, can your system connect to the URL "{session.base_url}"?'
        )
    if status == 302:
        raise EdgeHTTPError(
            f"Calling endpoint gives a redirect response, is this a valid base URL?: {client.org_url}", status
        )
    raise EdgeHTTPError(f"Org {session.org} does not exist.", status)


def ensure_role(client: EdgeClient, session: EdgeSession) -> bool:
    """
    Create the role unless it already exists.

    Returns:
        True if the role was created, False if it already existed

    Raises:
        EdgeAuthenticationError: If the user lost orgadmin rights on the org
        EdgeHTTPError: On an unexpected status from the existence check or
            if the creation call does not return 201
    """
    role = session.role
    status = _status(client.get_role, role)
    _debug(session, 2, status)

    if status == 200:
        console.print(f"Role '{escape(role)}' already exists in org '{escape(session.org)}'")
        return False
    if status == 403:
        raise EdgeAuthenticationError(
            f"The user {session.username} does not have orgadmin privileges in org '{session.org}', "
            "getting unauthorized response when checking if role exists in system.",
            status,
        )
    if status != 404:
        raise EdgeHTTPError(f"Invalid HTTP response code determining if role {role} exists: {status:03d}", status)

    console.print(f"Creating role '{escape(role)}' in org '{escape(session.org)}'")
    status = _status(client.create_role, role)
    _debug(session, 3, status)

    if status not in (200, 201):
        raise EdgeHTTPError(f"Error: Role '{role}' was not created, HTTP response code: {status:03d}", status)
    return True


def assign_permissions(
    client: EdgeClient, session: EdgeSession, rules: Iterable[PermissionRule] = PERMISSION_RULES
) -> int:
    """
    Post each permission rule to the role, stopping at the first failure.

    Returns:
        Number of permissions created

    Raises:
        EdgeHTTPError: As soon as a permission call does not return 201
    """
    count = 0
    for rule in rules:
        status = _status(client.add_role_permission, session.role, rule)
        console.print(f"{escape(rule.path)}: {status:03d}")
        if status != 201:
            raise EdgeHTTPError("Error: Permission was not created properly", status)
        count += 1
    return count


@dataclass(frozen=True)
class ProvisionResult:
    """Outcome of a successful provisioning run."""

    role_created: bool
    permissions: int


def provision_role(session: EdgeSession) -> ProvisionResult:
    """
    Run connection check, role creation and permission assignment in order.

    Returns:
        Whether the role was created and how many permissions were set

    Raises:
        EdgeAPIError: On the first failing step
    """
    with session.client() as client:
        verify_connection(client, session)

        console.print("==== Create Role ====")
        created = ensure_role(client, session)

        console.print()
        console.print("==== Create Role Permissions ====")
        console.print(f"Setting permissions on role '{escape(session.role)}'")
        console.print()
        return ProvisionResult(role_created=created, permissions=assign_permissions(client, session))
