"""
Runnable samples.

Importing this package registers every sample with SampleRegistry.

Samples:
    api-management        Purge and recreate an API Management service
    cdn-profile           CDN profile + SSO URI
    cdn-endpoint          CDN endpoint purge / stop / start
    container-registry    Premium registry with geo-replication
    resource-deployment   ARM template deploy + validate
    mysql-server          Azure Database for MySQL server
    private-dns           Private DNS zone
    servicebus-namespace  Namespace with authorization and network rules
    web-app               App Service plan, web app, static site
    custom-search         Bing Custom Search query
"""

from . import (  # noqa: F401
    api_management,
    cdn_endpoint,
    cdn_profile,
    container_registry,
    custom_search,
    mysql_server,
    private_dns,
    resource_deployment,
    servicebus_namespace,
    web_app,
)
