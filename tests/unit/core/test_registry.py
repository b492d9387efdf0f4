"""
Unit tests for ProviderRegistry and SampleRegistry.

The registries hold import-time registrations used by other tests, so
each test restores the previous contents instead of leaving them empty.
"""

import pytest

from azure_samples.core.context import SampleDefinition
from azure_samples.core.exceptions import ProviderNotFoundError, SampleNotFoundError
from azure_samples.core.registry import ProviderRegistry, SampleRegistry


def noop(context):
    pass


class TestProviderRegistry:
    """Test suite for ProviderRegistry."""

    def setup_method(self):
        self._saved = dict(ProviderRegistry._providers)
        ProviderRegistry.clear()

    def teardown_method(self):
        ProviderRegistry.clear()
        ProviderRegistry._providers.update(self._saved)

    def test_register_and_get_provider(self):
        """Test registering a provider and retrieving a new instance by name."""
        class MockProvider:
            name = "mock"

        ProviderRegistry.register("mock", MockProvider)
        provider = ProviderRegistry.get("mock")

        assert isinstance(provider, MockProvider)
        assert ProviderRegistry.get("mock") is not provider

    def test_get_unknown_provider_raises_error(self):
        with pytest.raises(ProviderNotFoundError) as exc_info:
            ProviderRegistry.get("nonexistent")

        assert "nonexistent" in str(exc_info.value)
        assert "not found" in str(exc_info.value).lower()

    def test_list_providers_returns_sorted_names(self):
        class ProviderA:
            pass

        class ProviderB:
            pass

        ProviderRegistry.register("zulu", ProviderA)
        ProviderRegistry.register("alpha", ProviderB)

        assert ProviderRegistry.list_providers() == ["alpha", "zulu"]

    def test_is_registered_returns_correct_boolean(self):
        class MockProvider:
            pass

        ProviderRegistry.register("exists", MockProvider)

        assert ProviderRegistry.is_registered("exists") is True
        assert ProviderRegistry.is_registered("missing") is False

    def test_register_same_class_twice_is_idempotent(self):
        class MockProvider:
            pass

        ProviderRegistry.register("mock", MockProvider)
        ProviderRegistry.register("mock", MockProvider)

        assert ProviderRegistry.list_providers() == ["mock"]

    def test_register_different_class_same_name_raises(self):
        class ProviderA:
            pass

        class ProviderB:
            pass

        ProviderRegistry.register("mock", ProviderA)

        with pytest.raises(ValueError) as exc_info:
            ProviderRegistry.register("mock", ProviderB)

        assert "already registered" in str(exc_info.value)


class TestBuiltInProviders:

    def test_azure_and_memory_are_registered(self):
        import azure_samples.providers  # noqa: F401

        assert ProviderRegistry.is_registered("azure")
        assert ProviderRegistry.is_registered("memory")


class TestSampleRegistry:

    def setup_method(self):
        self._saved = dict(SampleRegistry._samples)
        SampleRegistry.clear()

    def teardown_method(self):
        SampleRegistry.clear()
        SampleRegistry._samples.update(self._saved)

    def test_register_and_get(self):
        definition = SampleDefinition(name="demo", description="", workflow=noop)

        SampleRegistry.register(definition)

        assert SampleRegistry.get("demo") is definition
        assert SampleRegistry.definitions() == [definition]

    def test_unknown_sample_lists_available(self):
        SampleRegistry.register(SampleDefinition(name="demo", description="", workflow=noop))

        with pytest.raises(SampleNotFoundError) as exc_info:
            SampleRegistry.get("missing")

        assert exc_info.value.available_samples == ["demo"]

    def test_conflicting_definition_raises(self):
        SampleRegistry.register(SampleDefinition(name="demo", description="a", workflow=noop))

        with pytest.raises(ValueError):
            SampleRegistry.register(SampleDefinition(name="demo", description="b", workflow=noop))


class TestBuiltInSamples:

    def test_all_samples_registered(self):
        import azure_samples.samples  # noqa: F401

        assert SampleRegistry.list_samples() == [
            "api-management",
            "cdn-endpoint",
            "cdn-profile",
            "container-registry",
            "custom-search",
            "mysql-server",
            "private-dns",
            "resource-deployment",
            "servicebus-namespace",
            "web-app",
        ]
