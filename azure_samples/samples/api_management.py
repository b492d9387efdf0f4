"""
API Management sample.

Purges a soft-deleted API Management service of the same name (a deleted
service keeps its name reserved), then creates the service again.

Resources:
    - API Management service (Standard, capacity 2)

Teardown:
    Disabled; an API Management service takes long to provision and is
    usually kept for follow-up experiments.
"""

import logging

from azure_samples.core.context import SampleContext, SampleDefinition, TeardownPolicy
from azure_samples.core.exceptions import ResourceNotFoundError
from azure_samples.core.registry import SampleRegistry

logger = logging.getLogger(__name__)


def purge_deleted_service(context: SampleContext) -> None:
    """Purge the soft-deleted service; nothing to purge is not an error."""
    service_name = context.name("service")
    try:
        result = context.provider.invoke_action(
            "api_management_deleted_service", "begin_purge", service_name, context.location,
            target=service_name,
        )
    except ResourceNotFoundError:
        logger.info(f"No soft-deleted service named {service_name}, nothing to purge.")
        return
    context.record("purged deleted service", result or service_name, key="purged_service")


def create_api_management_service(context: SampleContext) -> dict:
    service = context.provider.create_resource(
        "api_management_service",
        context.resource_group,
        context.name("service"),
        parameters={
            "location": context.location,
            "publisher_name": context.param("publisher_name"),
            "publisher_email": context.param("publisher_email"),
            "sku": {
                "name": context.param("sku_name"),
                "capacity": context.param("sku_capacity"),
            },
        },
    )
    return context.record("api management service", service, key="service")


def run(context: SampleContext) -> None:
    logger.info("Step 1/2: Purging soft-deleted API Management service")
    purge_deleted_service(context)

    logger.info("Step 2/2: Creating API Management service")
    create_api_management_service(context)


SAMPLE = SampleDefinition(
    name="api-management",
    description="Purge a soft-deleted API Management service and create it again",
    workflow=run,
    location="westus",
    resource_group="sample-resource-group",
    names={"service": "sample-api-service"},
    parameters={
        "publisher_name": "sample",
        "publisher_email": "xxx@wircesoft.com",
        "sku_name": "Standard",
        "sku_capacity": 2,
    },
    teardown=TeardownPolicy.NEVER,
)

SampleRegistry.register(SAMPLE)
