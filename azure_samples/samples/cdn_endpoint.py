"""
CDN endpoint sample.

Creates a CDN profile with one endpoint in front of a custom origin,
purges cached content, then stops and restarts the endpoint.
"""

import logging

from azure_samples.core.context import SampleContext, SampleDefinition
from azure_samples.core.registry import SampleRegistry
from .cdn_profile import CDN_LOCATION, create_cdn_profile

logger = logging.getLogger(__name__)


def create_endpoint(context: SampleContext) -> dict:
    endpoint = context.provider.create_resource(
        "cdn_endpoint",
        context.resource_group,
        context.name("profile"),
        context.name("endpoint"),
        parameters={
            "location": CDN_LOCATION,
            "origins": [
                {
                    "name": context.param("origin_name"),
                    "host_name": context.param("origin_host_name"),
                }
            ],
        },
    )
    return context.record("cdn endpoint", endpoint, key="endpoint")


def _endpoint_action(context: SampleContext, action: str, *extra) -> object:
    return context.provider.invoke_action(
        "cdn_endpoint",
        action,
        context.resource_group,
        context.name("profile"),
        context.name("endpoint"),
        *extra,
    )


def purge_content(context: SampleContext) -> None:
    paths = list(context.param("content_paths"))
    _endpoint_action(context, "begin_purge_content", {"content_paths": paths})
    logger.info(f"✓ purged content: {', '.join(paths)}")


def stop_endpoint(context: SampleContext) -> None:
    _endpoint_action(context, "begin_stop")
    logger.info("✓ endpoint stopped")


def start_endpoint(context: SampleContext) -> None:
    _endpoint_action(context, "begin_start")
    logger.info("✓ endpoint started")


def run(context: SampleContext) -> None:
    logger.info("Step 1/5: Creating CDN profile")
    create_cdn_profile(context)

    logger.info("Step 2/5: Creating CDN endpoint")
    create_endpoint(context)

    logger.info("Step 3/5: Purging endpoint content")
    purge_content(context)

    logger.info("Step 4/5: Stopping endpoint")
    stop_endpoint(context)

    logger.info("Step 5/5: Starting endpoint")
    start_endpoint(context)


SAMPLE = SampleDefinition(
    name="cdn-endpoint",
    description="Create a CDN endpoint, purge its content, stop and start it",
    workflow=run,
    location="westus",
    resource_group="sample-resource-group2",
    names={"profile": "sample2cdn2profile", "endpoint": "sample-endpoint"},
    parameters={
        "sku_name": "Premium_Verizon",
        "origin_name": "sample1",
        "origin_host_name": "sample2.azureedge.net",
        "content_paths": ("/sample",),
    },
)

SampleRegistry.register(SAMPLE)
