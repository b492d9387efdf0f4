"""
Orchestration sequencer.

Runs the fixed stage order shared by every sample:

    1. Credential acquisition
    2. Resource-group ensure (skipped for samples that manage no group)
    3. Primary workflow
    4. Conditional teardown

Environment resolution happens before the runner is built (see
config_loader), so a configuration error never reaches a provider.

Failure Policy:
    Any exception aborts the sequence immediately and propagates. There is
    no retry and no rollback; the only corrective action is deleting the
    whole resource group, and only when teardown is enabled.
"""

import logging
from typing import TYPE_CHECKING

from .context import RunState, SampleContext, SampleDefinition, SampleConfig

if TYPE_CHECKING:
    from .protocols import ResourceProvider

logger = logging.getLogger(__name__)


class SampleRunner:
    """
    Executes one sample end to end.

    Attributes:
        definition: The sample being run
        config: Immutable run configuration
        provider: Initialized ResourceProvider
        cleanup_on_failure: Attempt teardown when the workflow fails

    Example:
        runner = SampleRunner(definition, config, provider)
        context = runner.run()
    """

    def __init__(
        self,
        definition: SampleDefinition,
        config: SampleConfig,
        provider: 'ResourceProvider',
        cleanup_on_failure: bool = False
    ):
        self.definition = definition
        self.config = config
        self.provider = provider
        self.cleanup_on_failure = cleanup_on_failure
        self.context = SampleContext(config=config, provider=provider)

    def run(self) -> SampleContext:
        """
        Run every stage in order, stopping at the first failure.

        Returns:
            The SampleContext with outputs of all workflow steps

        Raises:
            SampleError: Whatever the failing stage raised
        """
        name = self.definition.name
        logger.info(f"========== Sample: {name} ==========")

        try:
            self.acquire_credentials()
            if self.definition.manages_group:
                self.ensure_group()
            self.run_workflow()
            self.teardown()
        except Exception:
            group_ensured = self.context.state == RunState.GROUP_ENSURED
            self.context.state = RunState.FAILED
            if self.cleanup_on_failure and group_ensured:
                self._teardown_after_failure()
            raise

        logger.info(f"========== Sample Complete: {name} ==========")
        return self.context

    def cleanup(self) -> SampleContext:
        """
        Delete the sample's resource group on explicit request.

        Used by the `cleanup` command after a run that kept its resources.
        """
        logger.info(f"========== Cleanup: {self.definition.name} ==========")
        if not self.definition.manages_group:
            logger.info(f"Sample {self.definition.name} manages no resource group, nothing to clean up.")
            return self.context
        self.acquire_credentials()
        self._delete_group()
        return self.context

    # ==========================================
    # Stages
    # ==========================================

    def acquire_credentials(self) -> None:
        logger.info("Acquiring credentials...")
        self.provider.authenticate()

    def ensure_group(self) -> None:
        group = self.config.resource_group
        logger.info(f"Ensuring Resource Group: {group} in {self.config.location}")
        resource_group = self.provider.ensure_group(group, self.config.location)
        self.context.record("resources group", resource_group, key="resource_group")
        self.context.state = RunState.GROUP_ENSURED

    def run_workflow(self) -> None:
        self.definition.workflow(self.context)
        self.context.state = RunState.PROVISIONED

    def teardown(self) -> None:
        """Delete the resource group if the config allows it."""
        if not self.definition.manages_group:
            return
        if self.config.keep_resources:
            logger.info("KEEP_RESOURCE is set, skipping cleanup.")
            return
        if not self.config.teardown_enabled:
            logger.info("Cleanup is disabled for this sample, resources were kept.")
            return

        self._delete_group()

    # ==========================================
    # Helpers
    # ==========================================

    def _delete_group(self) -> None:
        group = self.config.resource_group
        logger.info(f"Deleting Resource Group: {group}")
        self.provider.delete_group(group)
        self.context.state = RunState.TORN_DOWN
        logger.info("✓ cleaned up successfully.")

    def _teardown_after_failure(self) -> None:
        """Best-effort teardown; the workflow error always wins."""
        if not self.config.teardown_enabled:
            return
        logger.warning("Workflow failed, cleaning up resource group before exiting...")
        try:
            self._delete_group()
        except Exception as e:
            logger.error(f"Cleanup after failure did not complete: {e}")
