"""
Sample configuration and run context.

Each run builds exactly one immutable SampleConfig from the process
environment and passes it explicitly to every stage, instead of keeping
names and regions in module-level variables.

Design Pattern: Dependency Injection
    - SampleDefinition describes a sample (defaults, workflow, teardown policy)
    - SampleConfig is resolved once at startup and never mutated
    - SampleContext wraps config + provider + outputs of earlier steps
    - Context is passed explicitly to every workflow step
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping, Optional, TYPE_CHECKING
import logging

from .exceptions import ConfigurationError

if TYPE_CHECKING:
    from .protocols import ResourceProvider

logger = logging.getLogger(__name__)


class TeardownPolicy(str, Enum):
    """Whether a sample deletes its resource group at the end of a run."""

    # Delete the group unless KEEP_RESOURCE is set
    UNLESS_KEPT = "unless_kept"
    # Teardown disabled for this sample
    NEVER = "never"


class RunState(str, Enum):
    """Forward-only progress of a single run."""

    NOT_STARTED = "not_started"
    GROUP_ENSURED = "group_ensured"
    PROVISIONED = "provisioned"
    TORN_DOWN = "torn_down"
    FAILED = "failed"


@dataclass(frozen=True)
class EnvParameter:
    """
    A sample-specific setting read from the environment.

    Attributes:
        env_var: Environment variable name
        key: Key under which the value is stored in SampleConfig.parameters
        required: If True, a missing or empty value is a ConfigurationError
        default: Value used when the variable is unset (optional parameters)
    """

    env_var: str
    key: str
    required: bool = False
    default: Any = None


@dataclass(frozen=True)
class SampleDefinition:
    """
    Static description of a runnable sample.

    Attributes:
        name: CLI name (e.g., "container-registry")
        description: One-line summary shown by `azure-samples list`
        workflow: Primary workflow, called with the SampleContext
        location: Default Azure region
        resource_group: Default resource group name
        names: Default resource names keyed by role (e.g., {"registry": "..."})
        parameters: Default feature parameters (SKUs, address prefixes, ...)
        env: Sample-specific environment inputs
        teardown: Teardown policy for this sample
        manages_group: False for samples that only call existing resources
        requires_subscription: False for samples that never touch ARM
    """

    name: str
    description: str
    workflow: Callable[['SampleContext'], None]
    location: str = "westus"
    resource_group: str = "sample-resource-group"
    names: Mapping[str, str] = field(default_factory=dict)
    parameters: Mapping[str, Any] = field(default_factory=dict)
    env: tuple[EnvParameter, ...] = ()
    teardown: TeardownPolicy = TeardownPolicy.UNLESS_KEPT
    manages_group: bool = True
    requires_subscription: bool = True


@dataclass(frozen=True)
class SampleConfig:
    """
    Immutable configuration for one run, resolved from the environment.

    Attributes:
        sample_name: Name of the sample being run
        subscription_id: Azure subscription ID
        location: Azure region for the resource group and regional resources
        resource_group: Resource group that scopes every created resource
        names: Resource names keyed by role (read-only)
        parameters: Feature parameters (read-only)
        keep_resources: True when KEEP_RESOURCE is set to a non-empty value
        teardown: Teardown policy of the sample
        poll_interval: Seconds between long-running operation polls
        max_wait: Seconds before a long-running operation is abandoned
        debug: Enables debug logging and SDK HTTP logging
        dry_run: Run against the in-memory provider; samples skip calls outside it
    """

    sample_name: str
    subscription_id: str
    location: str
    resource_group: str
    names: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    parameters: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))
    keep_resources: bool = False
    teardown: TeardownPolicy = TeardownPolicy.UNLESS_KEPT
    poll_interval: float = 10.0
    max_wait: float = 1800.0
    debug: bool = False
    dry_run: bool = False

    def __post_init__(self):
        # Freeze mappings so stages cannot mutate shared configuration
        if not isinstance(self.names, MappingProxyType):
            object.__setattr__(self, "names", MappingProxyType(dict(self.names)))
        if not isinstance(self.parameters, MappingProxyType):
            object.__setattr__(self, "parameters", MappingProxyType(dict(self.parameters)))

    @property
    def teardown_enabled(self) -> bool:
        """True if the teardown stage should run after the workflow."""
        return self.teardown == TeardownPolicy.UNLESS_KEPT and not self.keep_resources


@dataclass
class SampleContext:
    """
    Encapsulates all state needed while a sample runs.

    Lifecycle:
        1. Created by the SampleRunner after configuration is resolved
        2. Passed to every workflow step
        3. Collects identifiers produced by earlier steps in `outputs`
        4. Returned to the caller when the run ends

    Attributes:
        config: Resolved SampleConfig
        provider: Initialized ResourceProvider
        outputs: Identifiers and results recorded by workflow steps
        state: Current RunState
    """

    config: SampleConfig
    provider: 'ResourceProvider'
    outputs: Dict[str, Any] = field(default_factory=dict)
    state: RunState = RunState.NOT_STARTED

    @property
    def resource_group(self) -> str:
        return self.config.resource_group

    @property
    def location(self) -> str:
        return self.config.location

    def name(self, key: str) -> str:
        """
        Get a configured resource name by role.

        Raises:
            ConfigurationError: If the sample does not define that name
        """
        if key not in self.config.names:
            raise ConfigurationError(
                f"Sample has no resource name '{key}'", sample=self.config.sample_name
            )
        return self.config.names[key]

    def param(self, key: str, default: Any = ...) -> Any:
        """
        Get a feature parameter.

        Raises:
            ConfigurationError: If the parameter is missing and no default is given
        """
        if key in self.config.parameters:
            return self.config.parameters[key]
        if default is not ...:
            return default
        raise ConfigurationError(
            f"Sample has no parameter '{key}'", sample=self.config.sample_name
        )

    def record(self, label: str, resource: Optional[dict], key: Optional[str] = None) -> Optional[dict]:
        """
        Log a completed step and remember its result for later steps.

        Args:
            label: Human-readable label (e.g., "cdn profile")
            resource: Result returned by the provider
            key: Output key, defaults to the label

        Returns:
            The resource, unchanged
        """
        self.outputs[key or label] = resource
        resource_id = resource.get("id") if isinstance(resource, dict) else None
        if resource_id:
            logger.info(f"✓ {label}: {resource_id}")
        else:
            logger.info(f"✓ {label}: {resource}")
        return resource
