"""
Azure ResourceProvider implementation.

This module provides the Azure implementation of the ResourceProvider
protocol on top of the azure-mgmt-* SDK clients.

Credential:
    A single DefaultAzureCredential (environment, managed identity, Azure
    CLI, ...) is shared by every client of a run.

Error Mapping:
    ClientAuthenticationError -> AuthenticationError
    ResourceNotFoundError     -> core ResourceNotFoundError
    HttpResponseError         -> RemoteOperationError (status + message verbatim)
    AzureError                -> RemoteOperationError

Usage:
    from azure_samples.providers.azure.provider import AzureProvider

    provider = AzureProvider()
    provider.initialize_clients(config)
    provider.authenticate()
    provider.ensure_group("sample-resource-group", "westus")
"""

import importlib
import logging
from typing import Any, Dict, Optional

from azure.core.exceptions import (
    AzureError,
    ClientAuthenticationError,
    HttpResponseError,
    ResourceNotFoundError as AzureResourceNotFoundError,
)

from azure_samples import constants as CONSTANTS
from azure_samples.core.exceptions import (
    AuthenticationError,
    RemoteOperationError,
    ResourceNotFoundError,
)
from azure_samples.providers.base import BaseProvider, to_plain
from .catalog import CLIENT_CATALOG, RESOURCE_KINDS, ResourceKind, is_long_running

logger = logging.getLogger(__name__)


class AzureProvider(BaseProvider):
    """
    Azure implementation of the ResourceProvider protocol.

    Attributes:
        name: Provider identifier ("azure")
        clients: Dictionary of Azure SDK clients built so far
        credential: Shared token credential
    """

    name: str = "azure"

    def __init__(self, credential: Any = None):
        """
        Initialize Azure provider.

        Args:
            credential: Optional token credential; DefaultAzureCredential is
                used when omitted.
        """
        super().__init__()
        self._credential = credential
        self._clients: Dict[str, Any] = {}

    @property
    def subscription_id(self) -> str:
        return self.config.subscription_id

    @property
    def credential(self) -> Any:
        if self._credential is None:
            from azure.identity import DefaultAzureCredential
            self._credential = DefaultAzureCredential()
        return self._credential

    @property
    def clients(self) -> Dict[str, Any]:
        """Get the dictionary of Azure SDK clients built so far."""
        return self._clients

    def client(self, key: str) -> Any:
        """
        Get (building on first use) the management client for a catalog key.

        Raises:
            KeyError: If the key is not in CLIENT_CATALOG
        """
        if key not in self._clients:
            if key not in CLIENT_CATALOG:
                raise KeyError(f"Unknown Azure client '{key}'. Available: {sorted(CLIENT_CATALOG)}")
            module_name, class_name = CLIENT_CATALOG[key]
            client_class = getattr(importlib.import_module(module_name), class_name)
            options = {"logging_enable": True} if self.config.debug else {}
            self._clients[key] = client_class(
                credential=self.credential,
                subscription_id=self.subscription_id,
                **options
            )
        return self._clients[key]

    # ==========================================
    # Stage 2: Credential Acquisition
    # ==========================================

    def authenticate(self) -> None:
        """
        Acquire a management token once so credential failures surface now.

        Raises:
            AuthenticationError: If the credential chain cannot issue a token
        """
        try:
            self.credential.get_token(CONSTANTS.MANAGEMENT_SCOPE)
        except ClientAuthenticationError as e:
            logger.error(f"PERMISSION DENIED acquiring credential: {e.message}")
            raise AuthenticationError(f"Credential acquisition failed: {e.message}", original_error=e) from e
        logger.info("✓ Credential acquired")

    # ==========================================
    # Resource Group Management
    # ==========================================

    def ensure_group(self, group_name: str, location: str) -> Dict[str, Any]:
        """
        Create or update the Resource Group.

        create_or_update is a no-op when the group already exists in the
        same location.
        """
        resource_groups = self.client("resource").resource_groups
        return self._call(
            resource_groups,
            "create_or_update",
            f"create Resource Group '{group_name}'",
            group_name,
            {"location": location},
        )

    def delete_group(self, group_name: str) -> None:
        """
        Delete the Resource Group and ALL resources within it.

        Warning:
            Provider-side cascading deletion removes every resource in the
            group; nothing is deleted individually.
        """
        self._log_resource_deletion("Resource Group", group_name)
        resource_groups = self.client("resource").resource_groups
        try:
            self._call(
                resource_groups,
                "begin_delete",
                f"delete Resource Group '{group_name}'",
                group_name,
            )
        except ResourceNotFoundError:
            self._log_resource_not_found("Resource Group", group_name)

    # ==========================================
    # Generic Resource Verbs
    # ==========================================

    def create_resource(self, kind: str, *path: str, parameters: Dict[str, Any]) -> Dict[str, Any]:
        """
        Create a resource and wait for it if the SDK call is long-running.

        Args:
            kind: Key in RESOURCE_KINDS (e.g., "cdn_endpoint")
            path: Resource group followed by parent and resource names
            parameters: Request body as a dict

        Example:
            provider.create_resource(
                "container_registry_replication",
                "sample-resource-group", "sample2registry", "sample2replication",
                parameters={"location": "eastus"},
            )
        """
        resource_kind = self._kind(kind)
        if resource_kind.create is None:
            raise ValueError(f"Resource kind '{kind}' cannot be created")

        label = resource_kind.display_name(kind)
        self._log_resource_creation(label, path[-1])
        return self._call(
            self._operations(resource_kind),
            resource_kind.create,
            f"create {label} '{path[-1]}'",
            *path,
            parameters
        )

    def get_resource(self, kind: str, *path: str) -> Dict[str, Any]:
        resource_kind = self._kind(kind)
        label = resource_kind.display_name(kind)
        return self._call(self._operations(resource_kind), resource_kind.get, f"get {label} '{path[-1]}'", *path)

    def invoke_action(
        self, kind: str, action: str, *args: Any, target: Optional[str] = None, **kwargs: Any
    ) -> Any:
        """
        Call any operation on the kind's operation group.

        `action` is the SDK method name (e.g., "begin_purge_content",
        "generate_sso_uri", "list_keys"); begin_* actions are waited on.
        `target` is the resource named in logs and errors; without it the
        last string argument is used.
        """
        resource_kind = self._kind(kind)
        if target is None:
            names = [arg for arg in args if isinstance(arg, str)]
            target = names[-1] if names else kind
        label = resource_kind.display_name(kind)
        return self._call(
            self._operations(resource_kind), action, f"{action} on {label} '{target}'", *args, **kwargs
        )

    # ==========================================
    # Helpers
    # ==========================================

    def _kind(self, kind: str) -> ResourceKind:
        if kind not in RESOURCE_KINDS:
            raise KeyError(f"Unknown resource kind '{kind}'. Available: {sorted(RESOURCE_KINDS)}")
        return RESOURCE_KINDS[kind]

    def _operations(self, resource_kind: ResourceKind) -> Any:
        return getattr(self.client(resource_kind.client), resource_kind.operations)

    def _call(self, operations: Any, method_name: str, operation: str, *args: Any, **kwargs: Any) -> Any:
        """
        Invoke an SDK method, waiting on it if it is long-running.

        Args:
            operations: SDK operation group (e.g., client.registries)
            method_name: Method to call on it
            operation: Description used in logs and errors

        Raises:
            AuthenticationError: If the token is rejected
            ResourceNotFoundError: If the addressed resource does not exist
            RemoteOperationError: For every other provider-side failure
        """
        method = getattr(operations, method_name)
        try:
            if is_long_running(method_name):
                poller = method(*args, polling_interval=self.config.poll_interval, **kwargs)
                result = self.wait_until_terminal(poller, operation)
            else:
                result = method(*args, **kwargs)
        except ClientAuthenticationError as e:
            logger.error(f"PERMISSION DENIED while trying to {operation}: {e.message}")
            raise AuthenticationError(f"Not authorized to {operation}: {e.message}", original_error=e) from e
        except AzureResourceNotFoundError as e:
            raise ResourceNotFoundError(
                operation, status_code=e.status_code, reason=e.message, original_error=e
            ) from e
        except HttpResponseError as e:
            logger.error(f"Failed to {operation}: {e.status_code} - {e.message}")
            raise RemoteOperationError(
                operation, status_code=e.status_code, reason=e.message, original_error=e
            ) from e
        except AzureError as e:
            logger.error(f"Azure error while trying to {operation}: {type(e).__name__}: {e}")
            raise RemoteOperationError(operation, reason=str(e), original_error=e) from e

        return to_plain(result)
