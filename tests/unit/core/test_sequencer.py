"""
Unit tests for SampleRunner.

Covers stage ordering, short-circuiting on failure, the KEEP_RESOURCE
flag, teardown policies and the cleanup-on-failure path, using the
in-memory provider as a recording fake.
"""

import dataclasses

import pytest
from unittest.mock import MagicMock

from azure_samples.core.context import RunState, TeardownPolicy
from azure_samples.core.exceptions import (
    AuthenticationError,
    RemoteOperationError,
    ResourceNotFoundError,
)
from azure_samples.core.sequencer import SampleRunner


def create_thing(context):
    return context.record(
        "thing",
        context.provider.create_resource(
            "thing", context.resource_group, context.name("thing"), parameters={"size": context.param("size")}
        ),
        key="thing",
    )


def failing_workflow(context):
    create_thing(context)
    raise RemoteOperationError("create second thing", status_code=409, reason="Conflict")


class TestStageOrder:

    def test_successful_run_order(self, make_definition, sample_config, memory_provider):
        runner = SampleRunner(make_definition(create_thing), sample_config, memory_provider)

        context = runner.run()

        assert memory_provider.verbs() == ["authenticate", "ensure_group", "create_resource", "delete_group"]
        assert context.state == RunState.TORN_DOWN

    def test_group_id_round_trips_into_outputs(self, make_definition, sample_config, memory_provider):
        runner = SampleRunner(make_definition(create_thing), sample_config, memory_provider)

        context = runner.run()

        assert context.outputs["resource_group"]["id"] == (
            f"/subscriptions/{sample_config.subscription_id}/resourceGroups/test-rg"
        )
        assert context.outputs["thing"]["id"].endswith("/resourceGroups/test-rg/providers/memory/thing/test-thing")
        assert context.outputs["thing"]["size"] == 1

    def test_workflow_sees_group_already_ensured(self, make_definition, sample_config, memory_provider):
        seen = []

        def workflow(context):
            seen.append((context.state, dict(memory_provider.groups)))

        SampleRunner(make_definition(workflow), sample_config, memory_provider).run()

        state, groups = seen[0]
        assert state == RunState.GROUP_ENSURED
        assert "test-rg" in groups

    def test_authentication_failure_stops_everything(self, make_definition, sample_config):
        provider = MagicMock()
        provider.authenticate.side_effect = AuthenticationError("no credential")
        workflow = MagicMock()

        with pytest.raises(AuthenticationError):
            SampleRunner(make_definition(workflow), sample_config, provider).run()

        provider.ensure_group.assert_not_called()
        workflow.assert_not_called()
        provider.delete_group.assert_not_called()

    def test_group_failure_skips_workflow_and_teardown(self, make_definition, sample_config, memory_provider, monkeypatch):
        def reject(group_name, location):
            raise RemoteOperationError(f"create Resource Group '{group_name}'", status_code=403, reason="Forbidden")

        monkeypatch.setattr(memory_provider, "ensure_group", reject)
        workflow = MagicMock()
        runner = SampleRunner(make_definition(workflow), sample_config, memory_provider, cleanup_on_failure=True)

        with pytest.raises(RemoteOperationError) as exc_info:
            runner.run()

        assert exc_info.value.status_code == 403
        workflow.assert_not_called()
        assert "delete_group" not in memory_provider.verbs()
        assert runner.context.state == RunState.FAILED

    def test_sample_without_group_skips_ensure_and_teardown(self, make_definition, sample_config, memory_provider):
        workflow = MagicMock()
        definition = make_definition(workflow, manages_group=False)

        context = SampleRunner(definition, sample_config, memory_provider).run()

        workflow.assert_called_once()
        assert memory_provider.verbs() == ["authenticate"]
        assert context.state == RunState.PROVISIONED


class TestTeardown:

    def test_teardown_runs_exactly_once(self, make_definition, sample_config):
        provider = MagicMock()
        provider.ensure_group.return_value = {"id": "/subscriptions/x/resourceGroups/test-rg"}

        SampleRunner(make_definition(MagicMock()), sample_config, provider).run()

        provider.delete_group.assert_called_once_with("test-rg")

    def test_keep_resource_suppresses_teardown(self, make_definition, sample_config, memory_provider):
        config = dataclasses.replace(sample_config, keep_resources=True)
        memory_provider.initialize_clients(config)

        context = SampleRunner(make_definition(create_thing), config, memory_provider).run()

        assert "delete_group" not in memory_provider.verbs()
        assert context.state == RunState.PROVISIONED
        assert "test-rg" in memory_provider.groups

    def test_never_policy_suppresses_teardown(self, make_definition, sample_config, memory_provider):
        config = dataclasses.replace(sample_config, teardown=TeardownPolicy.NEVER)

        SampleRunner(make_definition(create_thing), config, memory_provider).run()

        assert "delete_group" not in memory_provider.verbs()

    def test_teardown_removes_group_and_children(self, make_definition, sample_config, memory_provider):
        SampleRunner(make_definition(create_thing), sample_config, memory_provider).run()

        assert memory_provider.groups == {}
        assert memory_provider.resources == {}

    def test_teardown_failure_propagates(self, make_definition, sample_config):
        provider = MagicMock()
        provider.ensure_group.return_value = {"id": "rg"}
        provider.delete_group.side_effect = RemoteOperationError("delete Resource Group 'test-rg'", status_code=409)

        runner = SampleRunner(make_definition(MagicMock()), sample_config, provider)

        with pytest.raises(RemoteOperationError):
            runner.run()
        assert runner.context.state == RunState.FAILED


class TestFailureHandling:

    def test_workflow_failure_keeps_resources_by_default(self, make_definition, sample_config, memory_provider):
        runner = SampleRunner(make_definition(failing_workflow), sample_config, memory_provider)

        with pytest.raises(RemoteOperationError):
            runner.run()

        assert "delete_group" not in memory_provider.verbs()
        assert runner.context.state == RunState.FAILED

    def test_cleanup_on_failure_deletes_group_and_reraises(self, make_definition, sample_config, memory_provider):
        runner = SampleRunner(
            make_definition(failing_workflow), sample_config, memory_provider, cleanup_on_failure=True
        )

        with pytest.raises(RemoteOperationError) as exc_info:
            runner.run()

        assert exc_info.value.status_code == 409
        assert memory_provider.verbs()[-1] == "delete_group"
        assert memory_provider.groups == {}

    def test_cleanup_on_failure_respects_keep_resource(self, make_definition, sample_config, memory_provider):
        config = dataclasses.replace(sample_config, keep_resources=True)
        runner = SampleRunner(make_definition(failing_workflow), config, memory_provider, cleanup_on_failure=True)

        with pytest.raises(RemoteOperationError):
            runner.run()

        assert "delete_group" not in memory_provider.verbs()

    def test_cleanup_failure_does_not_mask_original_error(self, make_definition, sample_config):
        provider = MagicMock()
        provider.ensure_group.return_value = {"id": "rg"}
        provider.delete_group.side_effect = RemoteOperationError("delete Resource Group 'test-rg'")
        workflow = MagicMock(side_effect=ResourceNotFoundError("get thing 'x'", status_code=404))

        runner = SampleRunner(make_definition(workflow), sample_config, provider, cleanup_on_failure=True)

        with pytest.raises(ResourceNotFoundError):
            runner.run()
        provider.delete_group.assert_called_once_with("test-rg")


class TestExplicitCleanup:

    def test_cleanup_deletes_group_even_when_kept(self, make_definition, sample_config, memory_provider):
        config = dataclasses.replace(sample_config, keep_resources=True)
        memory_provider.ensure_group("test-rg", "westus")

        context = SampleRunner(make_definition(MagicMock()), config, memory_provider).cleanup()

        assert memory_provider.verbs()[-2:] == ["authenticate", "delete_group"]
        assert context.state == RunState.TORN_DOWN
        assert memory_provider.groups == {}

    def test_cleanup_of_missing_group_succeeds(self, make_definition, sample_config, memory_provider):
        context = SampleRunner(make_definition(MagicMock()), sample_config, memory_provider).cleanup()

        assert context.state == RunState.TORN_DOWN

    def test_cleanup_of_sample_without_group_is_noop(self, make_definition, sample_config, memory_provider):
        definition = make_definition(MagicMock(), manages_group=False)

        context = SampleRunner(definition, sample_config, memory_provider).cleanup()

        assert memory_provider.verbs() == []
        assert context.state == RunState.NOT_STARTED
