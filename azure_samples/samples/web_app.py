"""
App Service sample.

Creates an App Service plan, a web app on it, reads the app's
configuration and, when a repository token is available, a Static Web
App built from a GitHub repository.

Environment:
    AZURE_STATIC_SITE_REPOSITORY_TOKEN: GitHub token for the static site
        repository; the static site step is skipped when unset

Teardown:
    Disabled; the web app is meant to be inspected after the run.
"""

import logging

from azure_samples.core.context import EnvParameter, SampleContext, SampleDefinition, TeardownPolicy
from azure_samples.core.registry import SampleRegistry

logger = logging.getLogger(__name__)


def create_app_service_plan(context: SampleContext) -> dict:
    plan = context.provider.create_resource(
        "app_service_plan",
        context.resource_group,
        context.name("plan"),
        parameters={
            "location": context.location,
            "kind": "app",
            "sku": dict(context.param("plan_sku")),
            "per_site_scaling": False,
            "is_xenon": False,
        },
    )
    return context.record("app service plan", plan, key="plan")


def create_web_app(context: SampleContext) -> dict:
    web_app = context.provider.create_resource(
        "web_app",
        context.resource_group,
        context.name("web_app"),
        parameters={
            "location": context.location,
            "server_farm_id": context.outputs["plan"]["id"],
        },
    )
    return context.record("web app", web_app, key="web_app")


def get_app_configuration(context: SampleContext) -> dict:
    configuration = context.provider.invoke_action(
        "web_app", "get_configuration", context.resource_group, context.name("web_app")
    )
    return context.record("app configuration", configuration, key="app_configuration")


def create_static_site(context: SampleContext) -> dict:
    site = context.provider.create_resource(
        "static_site",
        context.resource_group,
        context.name("static_site"),
        parameters={
            "location": context.location,
            "sku": {"name": "Free"},
            "repository_url": context.param("repository_url"),
            "branch": context.param("branch"),
            "repository_token": context.param("repository_token"),
            "build_properties": {
                "app_location": "app",
                "api_location": "api",
            },
        },
    )
    return context.record("static site", site, key="static_site")


def run(context: SampleContext) -> None:
    logger.info("Step 1/4: Creating App Service plan")
    create_app_service_plan(context)

    logger.info("Step 2/4: Creating web app")
    create_web_app(context)

    logger.info("Step 3/4: Reading app configuration")
    get_app_configuration(context)

    if not context.param("repository_token"):
        logger.info("Step 4/4: Skipping static site, AZURE_STATIC_SITE_REPOSITORY_TOKEN is not set.")
        return

    logger.info("Step 4/4: Creating static site")
    create_static_site(context)


SAMPLE = SampleDefinition(
    name="web-app",
    description="Create an App Service plan, a web app and an optional static site",
    workflow=run,
    location="westus",
    resource_group="sample-resource-group",
    names={
        "plan": "sample-web-plan",
        "web_app": "sample-web-app",
        "static_site": "sample-static-site",
    },
    parameters={
        "plan_sku": {"name": "S1", "tier": "Standard", "capacity": 1},
        "repository_url": "https://github.com/colawwj/azure-rest-api-specs",
        "branch": "master",
    },
    env=(
        EnvParameter("AZURE_STATIC_SITE_REPOSITORY_TOKEN", "repository_token", default=""),
    ),
    teardown=TeardownPolicy.NEVER,
)

SampleRegistry.register(SAMPLE)
