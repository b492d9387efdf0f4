"""
Provider implementations.

Importing this package registers every provider with ProviderRegistry:
    - azure: azure-mgmt-* SDK clients with DefaultAzureCredential
    - memory: recording in-memory fake for dry runs and tests
"""

from . import azure  # noqa: F401
from . import memory  # noqa: F401
