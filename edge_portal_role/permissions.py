"""Resource path permissions granted to the Drupal portal role.

The Apigee Edge UI can only assign coarse permissions per resource type. The
Drupal Apigee Edge module needs finer grained access, so the rules below are
posted one by one to the role's ``permissions`` endpoint.

Each rule is serialized as a ``ResourcePermission`` XML document::

    <ResourcePermission path="/apiproducts">
      <Permissions>
        <Permission>get</Permission>
        <Permission>put</Permission>
      </Permissions>
    </ResourcePermission>

A rule with no operations still gets posted; it explicitly denies access to
the path.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple
from xml.etree import ElementTree


class Operation(str, Enum):
    """Operations Edge understands on a resource path."""

    GET = "get"
    PUT = "put"
    DELETE = "delete"


READ_ONLY: Tuple[Operation, ...] = (Operation.GET,)
READ_WRITE: Tuple[Operation, ...] = (Operation.GET, Operation.PUT)
READ_WRITE_DELETE: Tuple[Operation, ...] = (Operation.GET, Operation.PUT, Operation.DELETE)
NO_ACCESS: Tuple[Operation, ...] = ()


@dataclass(frozen=True)
class PermissionRule:
    """A resource path and the operations allowed on it."""

    path: str
    operations: Tuple[Operation, ...]

    def to_xml(self) -> str:
        """Render the rule as a ``ResourcePermission`` document."""
        root = ElementTree.Element("ResourcePermission", {"path": self.path})
        permissions = ElementTree.SubElement(root, "Permissions")
        for operation in self.operations:
            ElementTree.SubElement(permissions, "Permission").text = operation.value
        return ElementTree.tostring(root, encoding="unicode")


def _tier(operations: Tuple[Operation, ...], *paths: str) -> Tuple[PermissionRule, ...]:
    return tuple(PermissionRule(path=path, operations=operations) for path in paths)


PERMISSION_RULES: Tuple[PermissionRule, ...] = (
    *_tier(
        READ_ONLY,
        "/",
        "/environments/",
        "/userroles",
        "/environments/*/stats/*",
    ),
    *_tier(
        READ_WRITE,
        "/apiproducts",
        "/companies",
        "/companies/*/apps",
    ),
    *_tier(
        READ_WRITE_DELETE,
        "/developers",
        "/developers/*/apps",
        "/developers/*/apps/*",
        "/companies/*",
        "/companies/*/apps/*",
        "/apimodels",
        "/apimodels/*",
        "/keyvaluemaps",
        "/keyvaluemaps/*",
        "/environments/*/keyvaluemaps",
        "/environments/*/keyvaluemaps/*",
    ),
    *_tier(
        NO_ACCESS,
        "/users",
    ),
)
