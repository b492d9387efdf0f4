"""
Shared base class for provider implementations.

Contents:
    - BaseProvider: run configuration storage, initialization guard,
      polling delegation and consistent log lines
    - to_plain: SDK model to dict conversion
"""

import logging
from typing import Any, Optional, TYPE_CHECKING

from azure_samples.core.polling import wait_until_terminal

if TYPE_CHECKING:
    from azure_samples.core.context import SampleConfig

logger = logging.getLogger(__name__)


def to_plain(result: Any) -> Any:
    """
    Convert an SDK result into plain Python data.

    Azure management models expose as_dict(); booleans, None and dicts
    pass through unchanged.
    """
    if result is None or isinstance(result, (bool, dict, str, int, float, list)):
        return result
    if hasattr(result, "as_dict"):
        return result.as_dict()
    return result


class BaseProvider:
    """
    Base class for ResourceProvider implementations.

    Common Functionality:
        - Stores the SampleConfig given to initialize_clients()
        - Guards against use before initialization
        - Delegates long-running waits to core.polling with the configured
          interval and max wait
    """

    name: str = "base"

    def __init__(self):
        self._config: Optional['SampleConfig'] = None
        self._initialized: bool = False

    @property
    def config(self) -> 'SampleConfig':
        if not self._initialized or self._config is None:
            raise RuntimeError(
                "Provider not initialized. Call initialize_clients() first."
            )
        return self._config

    def initialize_clients(self, config: 'SampleConfig') -> None:
        self._config = config
        self._initialized = True

    def wait_until_terminal(self, poller: Any, description: str) -> Any:
        """Block until the operation completes, using the run's poll settings."""
        config = self.config
        return wait_until_terminal(
            poller,
            interval=config.poll_interval,
            max_wait=config.max_wait,
            description=description,
        )

    def _log_resource_creation(self, resource_type: str, resource_name: str) -> None:
        logger.info(f"Creating {resource_type}: {resource_name}")

    def _log_resource_deletion(self, resource_type: str, resource_name: str) -> None:
        logger.info(f"Deleting {resource_type}: {resource_name}")

    def _log_resource_not_found(self, resource_type: str, resource_name: str) -> None:
        logger.info(f"{resource_type} not found (already deleted?): {resource_name}")
