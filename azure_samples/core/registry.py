"""
Registries for dynamic provider and sample lookup.

Design Pattern: Registry Pattern
    - Providers and samples register themselves when their module is imported
    - Lookup is done by string name (e.g., "azure", "cdn-endpoint")
    - Enables runtime selection from the command line

How Registration Works:
    Each provider package calls ProviderRegistry.register() in its
    __init__.py, and each sample module calls SampleRegistry.register()
    with its SampleDefinition. Importing `azure_samples.providers` and
    `azure_samples.samples` triggers all registrations.
"""

from typing import Dict, Type, TYPE_CHECKING

from .exceptions import ProviderNotFoundError, SampleNotFoundError

if TYPE_CHECKING:
    from .context import SampleDefinition
    from .protocols import ResourceProvider


class ProviderRegistry:
    """
    Central registry for ResourceProvider implementations.

    Class-level state is used because providers register themselves at
    import time, before any instances are created.

    Example Usage:
        ProviderRegistry.register("azure", AzureProvider)
        provider = ProviderRegistry.get("azure")
        provider.initialize_clients(config)
    """

    _providers: Dict[str, Type['ResourceProvider']] = {}

    @classmethod
    def register(cls, name: str, provider_class: Type['ResourceProvider']) -> None:
        """
        Register a provider class under a name.

        Registering the same name twice with the same class is allowed;
        a different class raises an error.

        Raises:
            ValueError: If name is already registered with a different class
        """
        if name in cls._providers:
            existing_class = cls._providers[name]
            if existing_class is not provider_class:
                raise ValueError(
                    f"Provider '{name}' is already registered with {existing_class.__name__}. "
                    f"Cannot re-register with {provider_class.__name__}."
                )
            return

        cls._providers[name] = provider_class

    @classmethod
    def get(cls, name: str) -> 'ResourceProvider':
        """
        Get a new instance of the named provider.

        Raises:
            ProviderNotFoundError: If no provider is registered with that name.
        """
        if name not in cls._providers:
            raise ProviderNotFoundError(name, list(cls._providers.keys()))

        return cls._providers[name]()

    @classmethod
    def list_providers(cls) -> list[str]:
        """List all registered provider names, sorted alphabetically."""
        return sorted(cls._providers.keys())

    @classmethod
    def is_registered(cls, name: str) -> bool:
        return name in cls._providers

    @classmethod
    def clear(cls) -> None:
        """
        Clear all registered providers.

        Used by tests to reset state between tests.
        """
        cls._providers.clear()


class SampleRegistry:
    """
    Central registry for SampleDefinitions, keyed by sample name.

    Example Usage:
        SampleRegistry.register(SAMPLE)
        definition = SampleRegistry.get("private-dns")
    """

    _samples: Dict[str, 'SampleDefinition'] = {}

    @classmethod
    def register(cls, definition: 'SampleDefinition') -> None:
        """
        Register a sample definition under its name.

        Raises:
            ValueError: If the name is already taken by a different definition
        """
        existing = cls._samples.get(definition.name)
        if existing is not None:
            if existing is not definition:
                raise ValueError(f"Sample '{definition.name}' is already registered.")
            return

        cls._samples[definition.name] = definition

    @classmethod
    def get(cls, name: str) -> 'SampleDefinition':
        """
        Raises:
            SampleNotFoundError: If no sample is registered with that name.
        """
        if name not in cls._samples:
            raise SampleNotFoundError(name, cls.list_samples())
        return cls._samples[name]

    @classmethod
    def list_samples(cls) -> list[str]:
        return sorted(cls._samples.keys())

    @classmethod
    def definitions(cls) -> list['SampleDefinition']:
        return [cls._samples[name] for name in cls.list_samples()]

    @classmethod
    def clear(cls) -> None:
        cls._samples.clear()
