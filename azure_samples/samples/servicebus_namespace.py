"""
Service Bus namespace sample.

Builds a virtual network and subnet, a Premium namespace with a
Listen/Send authorization rule, and a network rule set that denies by
default while allowing the subnet and a fixed list of IP addresses.

Dependency Order:
    virtual network -> subnet -> namespace -> authorization rule
                                           -> network rule set (needs subnet id)
"""

import logging

from azure_samples.core.context import SampleContext, SampleDefinition
from azure_samples.core.registry import SampleRegistry

logger = logging.getLogger(__name__)


def create_virtual_network(context: SampleContext) -> dict:
    vnet = context.provider.create_resource(
        "virtual_network",
        context.resource_group,
        context.name("virtual_network"),
        parameters={
            "location": context.location,
            "address_space": {"address_prefixes": [context.param("vnet_address_prefix")]},
        },
    )
    return context.record("virtual network", vnet, key="virtual_network")


def create_subnet(context: SampleContext) -> dict:
    subnet = context.provider.create_resource(
        "subnet",
        context.resource_group,
        context.name("virtual_network"),
        context.name("subnet"),
        parameters={"address_prefix": context.param("subnet_address_prefix")},
    )
    return context.record("subnet", subnet, key="subnet")


def create_namespace(context: SampleContext) -> dict:
    namespace = context.provider.create_resource(
        "servicebus_namespace",
        context.resource_group,
        context.name("namespace"),
        parameters={
            "location": context.location,
            "sku": {"name": context.param("sku"), "tier": context.param("sku")},
        },
    )
    return context.record("namespace", namespace, key="namespace")


def create_authorization_rule(context: SampleContext) -> dict:
    rule = context.provider.invoke_action(
        "servicebus_namespace",
        "create_or_update_authorization_rule",
        context.resource_group,
        context.name("namespace"),
        context.name("authorization_rule"),
        {"rights": list(context.param("rights"))},
    )
    return context.record("namespace authorization rule", rule, key="authorization_rule")


def create_network_rule_set(context: SampleContext) -> dict:
    """Deny by default; allow the subnet created earlier and the configured IPs."""
    subnet_id = context.outputs["subnet"]["id"]
    rule_set = context.provider.invoke_action(
        "servicebus_namespace",
        "create_or_update_network_rule_set",
        context.resource_group,
        context.name("namespace"),
        {
            "default_action": "Deny",
            "virtual_network_rules": [
                {
                    "subnet": {"id": subnet_id},
                    "ignore_missing_vnet_service_endpoint": True,
                }
            ],
            "ip_rules": [
                {"ip_mask": ip, "action": "Allow"} for ip in context.param("allowed_ips")
            ],
        },
    )
    return context.record("namespace network rule set", rule_set, key="network_rule_set")


def run(context: SampleContext) -> None:
    logger.info("Step 1/5: Creating virtual network")
    create_virtual_network(context)

    logger.info("Step 2/5: Creating subnet")
    create_subnet(context)

    logger.info("Step 3/5: Creating Service Bus namespace")
    create_namespace(context)

    logger.info("Step 4/5: Creating authorization rule")
    create_authorization_rule(context)

    logger.info("Step 5/5: Creating network rule set")
    create_network_rule_set(context)


SAMPLE = SampleDefinition(
    name="servicebus-namespace",
    description="Create a Premium Service Bus namespace locked down to a subnet and IP list",
    workflow=run,
    location="westus",
    resource_group="sample-resource-group",
    names={
        "virtual_network": "sample-virtual-network",
        "subnet": "sample-subnet",
        "namespace": "sample-sb-namespace",
        "authorization_rule": "sample-sb-authorization-rule",
    },
    parameters={
        "vnet_address_prefix": "10.0.0.0/16",
        "subnet_address_prefix": "10.0.0.0/24",
        "sku": "Premium",
        "rights": ("Listen", "Send"),
        "allowed_ips": ("1.1.1.1", "1.1.1.2", "1.1.1.3", "1.1.1.4", "1.1.1.5"),
    },
)

SampleRegistry.register(SAMPLE)
