"""
CDN profile sample.

Creates a Premium Verizon CDN profile and generates a single sign-on URI
for the supplemental portal.
"""

import logging

from azure_samples.core.context import SampleContext, SampleDefinition
from azure_samples.core.registry import SampleRegistry

logger = logging.getLogger(__name__)

# CDN profiles are not regional
CDN_LOCATION = "Global"


def create_cdn_profile(context: SampleContext) -> dict:
    profile = context.provider.create_resource(
        "cdn_profile",
        context.resource_group,
        context.name("profile"),
        parameters={
            "location": CDN_LOCATION,
            "sku": {"name": context.param("sku_name")},
        },
    )
    return context.record("cdn profile", profile, key="profile")


def generate_sso_uri(context: SampleContext) -> str:
    sso = context.provider.invoke_action(
        "cdn_profile", "generate_sso_uri", context.resource_group, context.name("profile")
    )
    sso_uri = sso["sso_uri_value"]
    context.outputs["sso_uri"] = sso_uri
    logger.info(f"✓ Sso URI: {sso_uri}")
    return sso_uri


def run(context: SampleContext) -> None:
    logger.info("Step 1/2: Creating CDN profile")
    create_cdn_profile(context)

    logger.info("Step 2/2: Generating SSO URI")
    generate_sso_uri(context)


SAMPLE = SampleDefinition(
    name="cdn-profile",
    description="Create a CDN profile and generate its SSO URI",
    workflow=run,
    location="westus",
    resource_group="sample-resource-group2",
    names={"profile": "sample2cdn2profile"},
    parameters={"sku_name": "Premium_Verizon"},
)

SampleRegistry.register(SAMPLE)
