"""
Azure Database for MySQL sample.

Creates a General Purpose Gen5 server in Default create mode and reads
it back.

Environment:
    AZURE_MYSQL_ADMIN_PASSWORD: Administrator password (required)
    AZURE_MYSQL_ADMIN_LOGIN: Administrator login (default "sampleadmin")
"""

import logging

from azure_samples.core.context import EnvParameter, SampleContext, SampleDefinition
from azure_samples.core.registry import SampleRegistry

logger = logging.getLogger(__name__)


def create_server(context: SampleContext) -> dict:
    server = context.provider.create_resource(
        "mysql_server",
        context.resource_group,
        context.name("server"),
        parameters={
            "location": context.location,
            "properties": {
                "create_mode": "Default",
                "administrator_login": context.param("admin_login"),
                "administrator_login_password": context.param("admin_password"),
            },
            "sku": dict(context.param("sku")),
        },
    )
    return context.record("server", server, key="server")


def get_server(context: SampleContext) -> dict:
    server = context.provider.get_resource("mysql_server", context.resource_group, context.name("server"))
    return context.record("get server", server, key="server_read")


def run(context: SampleContext) -> None:
    logger.info("Step 1/2: Creating MySQL server")
    create_server(context)

    logger.info("Step 2/2: Reading MySQL server")
    get_server(context)


SAMPLE = SampleDefinition(
    name="mysql-server",
    description="Create an Azure Database for MySQL server and read it back",
    workflow=run,
    location="eastus",
    resource_group="sample-resource-group",
    names={"server": "sample2server"},
    parameters={
        "sku": {
            "name": "GP_Gen5_2",
            "tier": "GeneralPurpose",
            "capacity": 2,
            "family": "Gen5",
        },
    },
    env=(
        EnvParameter("AZURE_MYSQL_ADMIN_LOGIN", "admin_login", default="sampleadmin"),
        EnvParameter("AZURE_MYSQL_ADMIN_PASSWORD", "admin_password", required=True),
    ),
)

SampleRegistry.register(SAMPLE)
