"""
In-memory ResourceProvider implementation.

Simulates the provider side of a run without network access: every call
is recorded, ARM-style identifiers are echoed back, and the ordering
rules the real service enforces are checked.

Used By:
    - `azure-samples run <sample> --dry-run` to preview a sample's calls
    - Unit tests of the sequencer and of every sample workflow

Simulated Rules:
    - Creating a resource in a group that was not ensured fails (404)
    - Creating a child before its parent (subnet before virtual network,
      endpoint before profile, replication before registry) fails (404)
    - Deleting a group deletes everything in it; deleting a missing group
      is not an error
"""

import copy
import logging
from typing import Any, Dict, List, Optional, Tuple

from azure_samples.core.exceptions import ResourceNotFoundError
from azure_samples.providers.base import BaseProvider

logger = logging.getLogger(__name__)

# Child kind -> parent kind; the parent path is the child path minus its last name
PARENT_KINDS = {
    "subnet": "virtual_network",
    "cdn_endpoint": "cdn_profile",
    "container_registry_replication": "container_registry",
}

# Results for actions that do not echo a stored resource
CANNED_KEYS = {"key1": "memory-key-1", "key2": "memory-key-2"}


class InMemoryProvider(BaseProvider):
    """
    Recording fake of the ResourceProvider protocol.

    Attributes:
        name: Provider identifier ("memory")
        calls: Every verb issued, in order, as (verb, target, path) tuples
        groups: Ensured resource groups by name
        resources: Created resources keyed by (kind, *path)
    """

    name: str = "memory"

    def __init__(self):
        super().__init__()
        self.calls: List[Tuple[str, str, Tuple[Any, ...]]] = []
        self.groups: Dict[str, Dict[str, Any]] = {}
        self.resources: Dict[Tuple[str, ...], Dict[str, Any]] = {}

    # ==========================================
    # Verbs
    # ==========================================

    def authenticate(self) -> None:
        self.calls.append(("authenticate", "", ()))
        logger.info("✓ Credential acquired (in-memory)")

    def ensure_group(self, group_name: str, location: str) -> Dict[str, Any]:
        self.calls.append(("ensure_group", group_name, (location,)))
        group = self.groups.get(group_name)
        if group is None:
            group = {
                "id": f"{self._subscription_prefix()}/resourceGroups/{group_name}",
                "name": group_name,
                "location": location,
            }
            self.groups[group_name] = group
        else:
            group["location"] = location
        return copy.deepcopy(group)

    def create_resource(self, kind: str, *path: str, parameters: Dict[str, Any]) -> Dict[str, Any]:
        self.calls.append(("create_resource", kind, tuple(path)))
        self._log_resource_creation(kind.replace("_", " "), path[-1])
        self._require_group(path[0], f"create {kind} '{path[-1]}'")

        parent_kind = PARENT_KINDS.get(kind)
        if parent_kind and (parent_kind, *path[:-1]) not in self.resources:
            raise ResourceNotFoundError(
                f"create {kind} '{path[-1]}'",
                status_code=404,
                reason=f"Parent {parent_kind} '{path[-2]}' was not found",
            )

        resource = copy.deepcopy(parameters)
        resource["id"] = self._resource_id(kind, path)
        resource["name"] = path[-1]
        self.resources[(kind, *path)] = resource
        return copy.deepcopy(resource)

    def get_resource(self, kind: str, *path: str) -> Dict[str, Any]:
        self.calls.append(("get_resource", kind, tuple(path)))
        resource = self.resources.get((kind, *path))
        if resource is None:
            raise ResourceNotFoundError(
                f"get {kind} '{path[-1]}'", status_code=404, reason="ResourceNotFound"
            )
        return copy.deepcopy(resource)

    def invoke_action(
        self, kind: str, action: str, *args: Any, target: Optional[str] = None, **kwargs: Any
    ) -> Any:
        self.calls.append(("invoke_action", f"{kind}.{action}", tuple(args)))
        names = tuple(a for a in args if isinstance(a, str))
        body = next((a for a in args if isinstance(a, dict)), None)
        group_scoped = bool(names) and names[0] in self.groups

        if action == "check_existence":
            return (kind, *names) in self.resources
        if action == "list_keys":
            return dict(CANNED_KEYS)
        if action == "begin_validate":
            return {"properties": {"provisioning_state": "Succeeded"}}

        if action.startswith(("create_or_update_", "begin_create_or_update_")):
            parent = self._require_resource(kind, names[:2], action, target)
            suffix = action.replace("begin_", "", 1).replace("create_or_update_", "", 1)
            child = "/".join(names[2:]) or "default"
            result = copy.deepcopy(body or {})
            result["id"] = f"{parent['id']}/{suffix}/{child}"
            return result

        if action.startswith("get_") or action == "generate_sso_uri":
            parent = self._require_resource(kind, names[:2], action, target)
            if action == "generate_sso_uri":
                return {"sso_uri_value": f"https://memory.invalid/sso/{parent['name']}"}
            return {"id": f"{parent['id']}/{action[len('get_'):]}"}

        if group_scoped:
            return copy.deepcopy(self._require_resource(kind, names, action, target))

        # Subscription-level actions (e.g., purging a soft-deleted service)
        return None

    def delete_group(self, group_name: str) -> None:
        self.calls.append(("delete_group", group_name, ()))
        self._log_resource_deletion("Resource Group", group_name)
        if self.groups.pop(group_name, None) is None:
            self._log_resource_not_found("Resource Group", group_name)
            return

        # Cascade to everything the group owns
        for key in [key for key in self.resources if key[1] == group_name]:
            del self.resources[key]

    # ==========================================
    # Helpers
    # ==========================================

    def verbs(self) -> List[str]:
        """Return the recorded verb names, in call order."""
        return [verb for verb, _, _ in self.calls]

    def _subscription_prefix(self) -> str:
        subscription_id = self._config.subscription_id if self._config else "00000000-0000-0000-0000-000000000000"
        return f"/subscriptions/{subscription_id}"

    def _resource_id(self, kind: str, path: Tuple[str, ...]) -> str:
        group, names = path[0], path[1:]
        return f"{self._subscription_prefix()}/resourceGroups/{group}/providers/memory/{kind}/{'/'.join(names)}"

    def _require_group(self, group_name: str, operation: str) -> None:
        if group_name not in self.groups:
            raise ResourceNotFoundError(
                operation, status_code=404, reason=f"Resource group '{group_name}' could not be found"
            )

    def _require_resource(
        self, kind: str, names: Tuple[str, ...], action: str, target: Optional[str] = None
    ) -> Dict[str, Any]:
        resource: Optional[Dict[str, Any]] = self.resources.get((kind, *names))
        if resource is None:
            target = target or (names[-1] if names else kind)
            raise ResourceNotFoundError(
                f"{action} on {kind} '{target}'", status_code=404, reason="ResourceNotFound"
            )
        return resource
