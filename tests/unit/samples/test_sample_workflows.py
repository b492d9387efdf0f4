"""
Workflow tests for every registered sample.

Each sample runs end to end against the in-memory provider; assertions
check the call sequence, the parameters sent and the ids carried between
steps.
"""

import json

import pytest
import requests
from unittest.mock import MagicMock, patch

import azure_samples.samples  # noqa: F401
from azure_samples.core.config_loader import load_sample_config
from azure_samples.core.context import RunState
from azure_samples.core.exceptions import ConfigurationError, RemoteOperationError
from azure_samples.core.registry import SampleRegistry
from azure_samples.core.sequencer import SampleRunner
from azure_samples.providers.memory import InMemoryProvider

SUBSCRIPTION = "00000000-1111-2222-3333-444444444444"


def run_sample(name, env=None, keep=False, dry_run=False):
    """Run a sample against a fresh in-memory provider."""
    environ = {"AZURE_SUBSCRIPTION_ID": SUBSCRIPTION, **(env or {})}
    if keep:
        environ["KEEP_RESOURCE"] = "1"
    definition = SampleRegistry.get(name)
    config = load_sample_config(definition, environ, dry_run=dry_run)
    provider = InMemoryProvider()
    provider.initialize_clients(config)
    context = SampleRunner(definition, config, provider).run()
    return context, provider


def calls_of(provider, verb):
    return [(target, path) for v, target, path in provider.calls if v == verb]


class TestApiManagement:

    def test_purges_then_creates_and_keeps_service(self):
        context, provider = run_sample("api-management")

        assert provider.calls[2] == (
            "invoke_action", "api_management_deleted_service.begin_purge", ("sample-api-service", "westus")
        )
        assert calls_of(provider, "create_resource") == [
            ("api_management_service", ("sample-resource-group", "sample-api-service"))
        ]
        service = context.outputs["service"]
        assert service["sku"] == {"name": "Standard", "capacity": 2}
        assert service["publisher_name"] == "sample"
        # Teardown is disabled for this sample
        assert "delete_group" not in provider.verbs()
        assert context.state == RunState.PROVISIONED


class TestCdn:

    def test_profile_and_sso_uri(self):
        context, provider = run_sample("cdn-profile")

        assert context.outputs["profile"]["location"] == "Global"
        assert context.outputs["profile"]["sku"] == {"name": "Premium_Verizon"}
        assert context.outputs["sso_uri"].endswith("/sample2cdn2profile")
        assert provider.groups == {}

    def test_endpoint_purge_stop_start_order(self):
        context, provider = run_sample("cdn-endpoint", keep=True)

        actions = [target for target, _ in calls_of(provider, "invoke_action")]
        assert actions == [
            "cdn_endpoint.begin_purge_content",
            "cdn_endpoint.begin_stop",
            "cdn_endpoint.begin_start",
        ]
        purge_args = calls_of(provider, "invoke_action")[0][1]
        assert purge_args == (
            "sample-resource-group2", "sample2cdn2profile", "sample-endpoint", {"content_paths": ["/sample"]}
        )
        assert context.outputs["endpoint"]["origins"] == [
            {"name": "sample1", "host_name": "sample2.azureedge.net"}
        ]
        assert "sample-resource-group2" in provider.groups


class TestContainerRegistry:

    def test_registry_then_replication(self):
        context, provider = run_sample("container-registry")

        assert calls_of(provider, "create_resource") == [
            ("container_registry", ("sample-resource-group", "sample2registry")),
            ("container_registry_replication", ("sample-resource-group", "sample2registry", "sample2replication")),
        ]
        assert context.outputs["registry"]["admin_user_enabled"] is True
        assert context.outputs["registry"]["tags"] == {"key": "value"}
        assert context.outputs["replication"]["location"] == "eastus"
        assert context.outputs["replication_read"]["id"] == context.outputs["replication"]["id"]
        assert provider.verbs()[-1] == "delete_group"


class TestResourceDeployment:

    def test_deploys_packaged_template(self):
        context, provider = run_sample("resource-deployment")

        assert context.outputs["deployment_exists"] is False
        properties = context.outputs["deployment"]["properties"]
        assert properties["mode"] == "Incremental"
        assert "resources" in properties["template"]
        # The ARM document wrapper is unwrapped
        assert properties["parameters"]["tagValue"] == {"value": "sample"}
        actions = [target for target, _ in calls_of(provider, "invoke_action")]
        assert actions == ["deployment.check_existence", "deployment.begin_validate"]

    def test_accepts_bare_parameter_mapping(self, tmp_path):
        parameters_file = tmp_path / "parameters.json"
        parameters_file.write_text(json.dumps({"tagValue": {"value": "bare"}}))

        context, _ = run_sample("resource-deployment", env={"DEPLOYMENT_PARAMETERS_FILE": str(parameters_file)})

        assert context.outputs["deployment"]["properties"]["parameters"] == {"tagValue": {"value": "bare"}}

    def test_malformed_template_fails_before_deployment(self, tmp_path):
        template_file = tmp_path / "template.json"
        template_file.write_text("{")

        with pytest.raises(ConfigurationError):
            run_sample("resource-deployment", env={"DEPLOYMENT_TEMPLATE_FILE": str(template_file)})


class TestMySqlServer:

    def test_requires_admin_password(self):
        with pytest.raises(ConfigurationError) as exc_info:
            run_sample("mysql-server")

        assert "AZURE_MYSQL_ADMIN_PASSWORD" in str(exc_info.value)

    def test_creates_and_reads_server(self):
        context, provider = run_sample("mysql-server", env={"AZURE_MYSQL_ADMIN_PASSWORD": "P@ssw0rd!"})

        server = context.outputs["server"]
        assert server["location"] == "eastus"
        assert server["properties"]["create_mode"] == "Default"
        assert server["properties"]["administrator_login"] == "sampleadmin"
        assert server["sku"] == {"name": "GP_Gen5_2", "tier": "GeneralPurpose", "capacity": 2, "family": "Gen5"}
        assert calls_of(provider, "get_resource") == [("mysql_server", ("sample-resource-group", "sample2server"))]


class TestPrivateDns:

    def test_zone_is_global(self):
        context, provider = run_sample("private-dns")

        assert context.outputs["zone"]["location"] == "global"
        assert provider.calls[1] == ("ensure_group", "sample-resource-group", ("eastus",))


class TestServiceBusNamespace:

    def test_network_rule_set_uses_created_subnet(self):
        context, provider = run_sample("servicebus-namespace")

        creates = [kind for kind, _ in calls_of(provider, "create_resource")]
        assert creates == ["virtual_network", "subnet", "servicebus_namespace"]

        assert context.outputs["virtual_network"]["address_space"] == {"address_prefixes": ["10.0.0.0/16"]}
        assert context.outputs["namespace"]["sku"] == {"name": "Premium", "tier": "Premium"}
        assert context.outputs["authorization_rule"]["rights"] == ["Listen", "Send"]

        rule_set = context.outputs["network_rule_set"]
        assert rule_set["default_action"] == "Deny"
        assert rule_set["virtual_network_rules"][0]["subnet"]["id"] == context.outputs["subnet"]["id"]
        assert [rule["ip_mask"] for rule in rule_set["ip_rules"]] == [f"1.1.1.{i}" for i in range(1, 6)]
        assert all(rule["action"] == "Allow" for rule in rule_set["ip_rules"])


class TestWebApp:

    def test_web_app_on_plan_without_static_site(self):
        context, provider = run_sample("web-app")

        assert context.outputs["web_app"]["server_farm_id"] == context.outputs["plan"]["id"]
        assert context.outputs["plan"]["sku"] == {"name": "S1", "tier": "Standard", "capacity": 1}
        assert context.outputs["app_configuration"]["id"].startswith(context.outputs["web_app"]["id"])
        assert "static_site" not in context.outputs
        assert "delete_group" not in provider.verbs()

    def test_static_site_created_with_token(self):
        context, _ = run_sample("web-app", env={"AZURE_STATIC_SITE_REPOSITORY_TOKEN": "ghp_token"})

        site = context.outputs["static_site"]
        assert site["sku"] == {"name": "Free"}
        assert site["branch"] == "master"
        assert site["repository_token"] == "ghp_token"
        assert site["build_properties"] == {"app_location": "app", "api_location": "api"}


class TestCustomSearch:

    ENV = {
        "AZURE_COGNITIVE_ACCOUNT_NAME": "search-account",
        "AZURE_COGNITIVE_RESOURCE_GROUP": "search-rg",
        "BING_CUSTOM_CONFIG_ID": "12345",
    }

    def test_requires_account_name(self):
        with pytest.raises(ConfigurationError):
            run_sample("custom-search", env={"AZURE_COGNITIVE_RESOURCE_GROUP": "search-rg"})

    @patch("azure_samples.samples.custom_search.requests.get")
    def test_queries_with_first_key(self, mock_get):
        response = MagicMock()
        response.json.return_value = {"webPages": {"value": [{"name": "Xbox", "url": "https://www.xbox.com"}]}}
        mock_get.return_value = response

        context, provider = run_sample("custom-search", env=self.ENV)

        _, kwargs = mock_get.call_args
        assert kwargs["headers"] == {"Ocp-Apim-Subscription-Key": "memory-key-1"}
        assert kwargs["params"]["q"] == "Xbox"
        assert kwargs["params"]["customconfig"] == "12345"
        assert kwargs["params"]["safeSearch"] == "Strict"
        assert context.outputs["web_pages"]["value"][0]["name"] == "Xbox"
        # No group is ensured or deleted
        assert provider.verbs() == ["authenticate", "invoke_action"]

    @patch("azure_samples.samples.custom_search.requests.get")
    def test_http_error_becomes_remote_error(self, mock_get):
        error_response = MagicMock(status_code=401)
        response = MagicMock()
        response.raise_for_status.side_effect = requests.HTTPError("401 Unauthorized", response=error_response)
        mock_get.return_value = response

        with pytest.raises(RemoteOperationError) as exc_info:
            run_sample("custom-search", env=self.ENV)

        assert exc_info.value.status_code == 401

    @patch("azure_samples.samples.custom_search.requests.get")
    def test_non_json_body_becomes_remote_error(self, mock_get):
        response = MagicMock()
        response.json.side_effect = requests.JSONDecodeError("Expecting value", "<html>", 0)
        mock_get.return_value = response

        with pytest.raises(RemoteOperationError) as exc_info:
            run_sample("custom-search", env=self.ENV)

        assert "run custom search 'Xbox'" in str(exc_info.value)
        assert exc_info.value.status_code is None

    @patch("azure_samples.samples.custom_search.requests.get")
    def test_dry_run_skips_http_call(self, mock_get):
        context, _ = run_sample("custom-search", env=self.ENV, dry_run=True)

        mock_get.assert_not_called()
        assert "web_pages" not in context.outputs
