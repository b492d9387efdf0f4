import os
import pytest

from azure_samples.core.context import SampleConfig, SampleDefinition, TeardownPolicy
from azure_samples.providers.memory import InMemoryProvider

# Inputs read by the loader or by samples; cleared so the host shell cannot leak in
SAMPLE_ENV_VARS = (
    "AZURE_SUBSCRIPTION_ID",
    "AZURE_LOCATION",
    "AZURE_RESOURCE_GROUP",
    "KEEP_RESOURCE",
    "SAMPLES_POLL_INTERVAL",
    "SAMPLES_MAX_WAIT",
    "SAMPLES_MODE",
    "AZURE_MYSQL_ADMIN_LOGIN",
    "AZURE_MYSQL_ADMIN_PASSWORD",
    "AZURE_STATIC_SITE_REPOSITORY_TOKEN",
    "AZURE_COGNITIVE_ACCOUNT_NAME",
    "AZURE_COGNITIVE_RESOURCE_GROUP",
    "BING_CUSTOM_CONFIG_ID",
    "DEPLOYMENT_TEMPLATE_FILE",
    "DEPLOYMENT_PARAMETERS_FILE",
)

TEST_SUBSCRIPTION_ID = "00000000-1111-2222-3333-444444444444"


@pytest.fixture(scope="function", autouse=True)
def isolated_env(monkeypatch):
    """Start every test from an environment without sample inputs."""
    for name in SAMPLE_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def mock_sleep(monkeypatch):
    """Skip time.sleep calls to speed up tests."""
    monkeypatch.setattr("time.sleep", lambda x: None)


@pytest.fixture
def sample_config():
    """A resolved configuration with teardown enabled."""
    return SampleConfig(
        sample_name="test-sample",
        subscription_id=TEST_SUBSCRIPTION_ID,
        location="westus",
        resource_group="test-rg",
        names={"thing": "test-thing"},
        parameters={"size": 1},
        teardown=TeardownPolicy.UNLESS_KEPT,
        poll_interval=1.0,
        max_wait=30.0,
    )


@pytest.fixture
def memory_provider(sample_config):
    provider = InMemoryProvider()
    provider.initialize_clients(sample_config)
    return provider


@pytest.fixture
def make_definition():
    """Build a SampleDefinition around an arbitrary workflow."""
    def _make(workflow, **overrides):
        values = {
            "name": "test-sample",
            "description": "test",
            "workflow": workflow,
            "resource_group": "test-rg",
        }
        values.update(overrides)
        return SampleDefinition(**values)
    return _make


@pytest.fixture
def subscription_env(monkeypatch):
    monkeypatch.setenv("AZURE_SUBSCRIPTION_ID", TEST_SUBSCRIPTION_ID)
    return TEST_SUBSCRIPTION_ID
