"""
Protocol definitions for the sample runner.

Samples never talk to an SDK client directly. They call a small capability
interface with one method per verb actually used, so the orchestration
can run against Azure or against an in-memory fake.

Why Protocols instead of ABC?
    - No explicit inheritance required (duck typing)
    - Test doubles only need the methods a test exercises
    - Runtime checking with @runtime_checkable decorator
"""

from typing import Any, Dict, Optional, Protocol, runtime_checkable, TYPE_CHECKING

if TYPE_CHECKING:
    from .context import SampleConfig


@runtime_checkable
class ResourceProvider(Protocol):
    """
    Protocol defining the verbs a sample may issue against a cloud.

    Implementations:
        AzureProvider: Azure management SDK clients
        InMemoryProvider: Recording fake used for dry runs and tests

    Resource addressing:
        Resources are addressed by a `kind` (e.g., "cdn_endpoint") and a
        path of names starting with the resource group, e.g.
        ("sample-resource-group", "profile", "endpoint").
    """

    @property
    def name(self) -> str:
        """Return the provider identifier ("azure", "memory")."""
        ...

    def initialize_clients(self, config: 'SampleConfig') -> None:
        """
        Prepare SDK clients for the given run configuration.

        Must be called before any other verb. Does not make remote calls.
        """
        ...

    def authenticate(self) -> None:
        """
        Acquire a token from the default credential chain.

        Raises:
            AuthenticationError: If no credential can issue a token.
        """
        ...

    def ensure_group(self, group_name: str, location: str) -> Dict[str, Any]:
        """
        Create or update a resource group (idempotent).

        Returns:
            The resource group representation (includes "id").
        """
        ...

    def create_resource(self, kind: str, *path: str, parameters: Dict[str, Any]) -> Dict[str, Any]:
        """
        Create a resource and wait until the provider reports completion.

        Returns:
            The created resource representation (includes "id").
        """
        ...

    def get_resource(self, kind: str, *path: str) -> Dict[str, Any]:
        """
        Read a resource back by its (group, ..., name) path.

        Raises:
            ResourceNotFoundError: If the resource does not exist.
        """
        ...

    def invoke_action(
        self, kind: str, action: str, *args: Any, target: Optional[str] = None, **kwargs: Any
    ) -> Any:
        """
        Call a resource-specific operation (purge, start, stop, validate, ...).

        Long-running actions are waited on before returning. `target` names
        the addressed resource in logs and errors; it defaults to the last
        string argument.
        """
        ...

    def delete_group(self, group_name: str) -> None:
        """
        Delete a resource group and everything in it, waiting for completion.

        Deleting a group that does not exist is not an error.
        """
        ...

    def wait_until_terminal(self, poller: Any, description: str) -> Any:
        """Block until a long-running operation reaches a terminal state."""
        ...
