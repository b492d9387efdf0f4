"""Private DNS zone sample."""

import logging

from azure_samples.core.context import SampleContext, SampleDefinition
from azure_samples.core.registry import SampleRegistry

logger = logging.getLogger(__name__)

# Private DNS zones are global resources
ZONE_LOCATION = "global"


def create_private_zone(context: SampleContext) -> dict:
    zone = context.provider.create_resource(
        "private_dns_zone",
        context.resource_group,
        context.name("zone"),
        parameters={"location": ZONE_LOCATION},
    )
    return context.record("private zone", zone, key="zone")


def run(context: SampleContext) -> None:
    logger.info("Step 1/1: Creating private DNS zone")
    create_private_zone(context)


SAMPLE = SampleDefinition(
    name="private-dns",
    description="Create a private DNS zone",
    workflow=run,
    location="eastus",
    resource_group="sample-resource-group",
    names={"zone": "sample.private.zone"},
)

SampleRegistry.register(SAMPLE)
