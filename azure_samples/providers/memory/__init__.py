"""
In-memory provider package.

Importing this package registers InMemoryProvider under "memory" so
`--provider memory` and `--dry-run` can resolve it.
"""

from azure_samples.core.registry import ProviderRegistry
from .provider import InMemoryProvider

ProviderRegistry.register("memory", InMemoryProvider)

__all__ = ["InMemoryProvider"]
