"""
Container Registry sample.

Creates a Premium registry (replication requires Premium), adds a
geo-replica in a second region and reads the replica back.
"""

import logging

from azure_samples.core.context import SampleContext, SampleDefinition
from azure_samples.core.registry import SampleRegistry

logger = logging.getLogger(__name__)


def create_registry(context: SampleContext) -> dict:
    registry = context.provider.create_resource(
        "container_registry",
        context.resource_group,
        context.name("registry"),
        parameters={
            "location": context.location,
            "tags": dict(context.param("tags")),
            "sku": {"name": context.param("sku_name")},
            "admin_user_enabled": True,
        },
    )
    return context.record("registry", registry, key="registry")


def create_replication(context: SampleContext) -> dict:
    replication = context.provider.create_resource(
        "container_registry_replication",
        context.resource_group,
        context.name("registry"),
        context.name("replication"),
        parameters={"location": context.param("replication_location")},
    )
    return context.record("replication", replication, key="replication")


def get_replication(context: SampleContext) -> dict:
    replication = context.provider.get_resource(
        "container_registry_replication",
        context.resource_group,
        context.name("registry"),
        context.name("replication"),
    )
    return context.record("get replication", replication, key="replication_read")


def run(context: SampleContext) -> None:
    logger.info("Step 1/3: Creating container registry")
    create_registry(context)

    logger.info("Step 2/3: Creating replication")
    create_replication(context)

    logger.info("Step 3/3: Reading replication")
    get_replication(context)


SAMPLE = SampleDefinition(
    name="container-registry",
    description="Create a Premium container registry with a geo-replication",
    workflow=run,
    location="westus",
    resource_group="sample-resource-group",
    names={"registry": "sample2registry", "replication": "sample2replication"},
    parameters={
        "sku_name": "Premium",
        "tags": {"key": "value"},
        "replication_location": "eastus",
    },
)

SampleRegistry.register(SAMPLE)
