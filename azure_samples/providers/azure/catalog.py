"""
Azure client and resource-kind catalogs.

Samples address resources by kind; this module maps every kind to the
management client and operation group that serves it.

Client Catalog:
    Short client key -> (module, class). Clients are built lazily so a
    sample only constructs the clients it uses.

Resource Kinds:
    kind -> ResourceKind(client, operations, create, get). A create or get
    method whose name starts with "begin_" is a long-running operation.
"""

from dataclasses import dataclass
from typing import Optional


CLIENT_CATALOG = {
    "resource": ("azure.mgmt.resource", "ResourceManagementClient"),
    "apimanagement": ("azure.mgmt.apimanagement", "ApiManagementClient"),
    "cdn": ("azure.mgmt.cdn", "CdnManagementClient"),
    "containerregistry": ("azure.mgmt.containerregistry", "ContainerRegistryManagementClient"),
    "mysql": ("azure.mgmt.rdbms.mysql", "MySQLManagementClient"),
    "privatedns": ("azure.mgmt.privatedns", "PrivateDnsManagementClient"),
    "network": ("azure.mgmt.network", "NetworkManagementClient"),
    "servicebus": ("azure.mgmt.servicebus", "ServiceBusManagementClient"),
    "web": ("azure.mgmt.web", "WebSiteManagementClient"),
    "cognitiveservices": ("azure.mgmt.cognitiveservices", "CognitiveServicesManagementClient"),
}


@dataclass(frozen=True)
class ResourceKind:
    """
    How to reach one resource type through the management SDK.

    Attributes:
        client: Key in CLIENT_CATALOG
        operations: Operation group attribute on the client (e.g., "registries")
        create: Create method name, None for kinds that are only acted upon
        get: Read method name
        label: Human-readable name used in logs and errors
    """

    client: str
    operations: str
    create: Optional[str]
    get: str = "get"
    label: str = ""

    def display_name(self, kind: str) -> str:
        return self.label or kind.replace("_", " ")


RESOURCE_KINDS = {
    "deployment": ResourceKind("resource", "deployments", "begin_create_or_update", label="Deployment"),
    "api_management_service": ResourceKind(
        "apimanagement", "api_management_service", "begin_create_or_update", label="API Management service"
    ),
    "api_management_deleted_service": ResourceKind(
        "apimanagement", "deleted_services", None, get="get_by_name", label="deleted API Management service"
    ),
    "cdn_profile": ResourceKind("cdn", "profiles", "begin_create", label="CDN profile"),
    "cdn_endpoint": ResourceKind("cdn", "endpoints", "begin_create", label="CDN endpoint"),
    "container_registry": ResourceKind(
        "containerregistry", "registries", "begin_create", label="Container Registry"
    ),
    "container_registry_replication": ResourceKind(
        "containerregistry", "replications", "begin_create", label="registry replication"
    ),
    "mysql_server": ResourceKind("mysql", "servers", "begin_create", label="MySQL server"),
    "private_dns_zone": ResourceKind(
        "privatedns", "private_zones", "begin_create_or_update", label="private DNS zone"
    ),
    "virtual_network": ResourceKind(
        "network", "virtual_networks", "begin_create_or_update", label="Virtual Network"
    ),
    "subnet": ResourceKind("network", "subnets", "begin_create_or_update", label="Subnet"),
    "servicebus_namespace": ResourceKind(
        "servicebus", "namespaces", "begin_create_or_update", label="Service Bus namespace"
    ),
    "app_service_plan": ResourceKind(
        "web", "app_service_plans", "begin_create_or_update", label="App Service Plan"
    ),
    "web_app": ResourceKind("web", "web_apps", "begin_create_or_update", label="Web App"),
    "static_site": ResourceKind(
        "web", "static_sites", "begin_create_or_update_static_site", get="get_static_site", label="Static Site"
    ),
    "cognitive_account": ResourceKind(
        "cognitiveservices", "accounts", "begin_create", label="Cognitive Services account"
    ),
}


def is_long_running(method_name: str) -> bool:
    """Azure SDK long-running operations are named begin_*."""
    return method_name.startswith("begin_")
