"""
Core abstractions for the sample runner.

Modules:
    protocols: ResourceProvider capability interface
    context: SampleDefinition, SampleConfig and SampleContext
    registry: ProviderRegistry and SampleRegistry
    config_loader: Environment and JSON input loading
    polling: Blocking wait for long-running operations
    sequencer: SampleRunner, the fixed stage order
    exceptions: Error taxonomy

Usage:
    from azure_samples.core import SampleRegistry, SampleRunner, load_sample_config

    definition = SampleRegistry.get("private-dns")
    config = load_sample_config(definition, os.environ)
"""

from .protocols import ResourceProvider
from .context import (
    EnvParameter,
    RunState,
    SampleConfig,
    SampleContext,
    SampleDefinition,
    TeardownPolicy,
)
from .registry import ProviderRegistry, SampleRegistry
from .config_loader import load_json_file, load_sample_config
from .sequencer import SampleRunner
from .exceptions import (
    AuthenticationError,
    ConfigurationError,
    OperationFailedError,
    OperationTimeoutError,
    ProviderNotFoundError,
    RemoteOperationError,
    ResourceNotFoundError,
    SampleError,
    SampleNotFoundError,
)

__all__ = [
    # Protocols
    "ResourceProvider",
    # Context
    "EnvParameter",
    "RunState",
    "SampleConfig",
    "SampleContext",
    "SampleDefinition",
    "TeardownPolicy",
    # Registry
    "ProviderRegistry",
    "SampleRegistry",
    # Loading / running
    "load_json_file",
    "load_sample_config",
    "SampleRunner",
    # Exceptions
    "AuthenticationError",
    "ConfigurationError",
    "OperationFailedError",
    "OperationTimeoutError",
    "ProviderNotFoundError",
    "RemoteOperationError",
    "ResourceNotFoundError",
    "SampleError",
    "SampleNotFoundError",
]
