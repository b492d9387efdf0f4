"""
Azure Provider package.

Auto-registers AzureProvider with ProviderRegistry on import.
"""

from azure_samples.core.registry import ProviderRegistry
from .provider import AzureProvider

ProviderRegistry.register("azure", AzureProvider)

__all__ = ["AzureProvider"]
