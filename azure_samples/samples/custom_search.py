"""
Bing Custom Search sample.

Reads the first access key of an existing Cognitive Services account and
queries a custom search instance with it. The sample creates nothing, so
it neither ensures nor deletes a resource group.

Environment:
    AZURE_COGNITIVE_ACCOUNT_NAME: Account that holds the search key (required)
    AZURE_COGNITIVE_RESOURCE_GROUP: Resource group of that account (required)
    BING_CUSTOM_CONFIG_ID: Custom configuration id from customsearch.ai
"""

import logging
from typing import Any, Dict

import requests

from azure_samples.core.context import EnvParameter, SampleContext, SampleDefinition, TeardownPolicy
from azure_samples.core.exceptions import RemoteOperationError
from azure_samples.core.registry import SampleRegistry

logger = logging.getLogger(__name__)

CUSTOM_SEARCH_ENDPOINT = "https://api.bing.microsoft.com/v7.0/custom/search"
REQUEST_TIMEOUT = 30


def get_first_key(context: SampleContext) -> str:
    keys = context.provider.invoke_action(
        "cognitive_account", "list_keys", context.param("account_group"), context.param("account_name")
    )
    logger.info(f"✓ account key retrieved for {context.param('account_name')}")
    return keys["key1"]


def custom_search(context: SampleContext, api_key: str) -> Dict[str, Any]:
    """
    Run the custom search query and return its web pages answer.

    Raises:
        RemoteOperationError: If the request fails or returns an error status
    """
    query = context.param("query")
    try:
        response = requests.get(
            CUSTOM_SEARCH_ENDPOINT,
            headers={"Ocp-Apim-Subscription-Key": api_key},
            params={
                "q": query,
                "customconfig": context.param("custom_config"),
                "safeSearch": "Strict",
                "textFormat": "Raw",
            },
            timeout=REQUEST_TIMEOUT,
        )
        response.raise_for_status()
        web_pages = response.json().get("webPages", {})
    except requests.RequestException as e:
        status_code = e.response.status_code if e.response is not None else None
        raise RemoteOperationError(
            f"run custom search '{query}'", status_code=status_code, reason=str(e), original_error=e
        ) from e

    results = web_pages.get("value", [])
    logger.info(f"✓ custom search returned {len(results)} web pages")
    for page in results[:5]:
        logger.info(f"  {page.get('name')}: {page.get('url')}")
    return web_pages


def run(context: SampleContext) -> None:
    logger.info("Step 1/2: Reading Cognitive Services account key")
    api_key = get_first_key(context)

    if context.config.dry_run:
        logger.info("Step 2/2: Dry run, skipping custom search request.")
        return

    logger.info("Step 2/2: Running custom search")
    context.outputs["web_pages"] = custom_search(context, api_key)


SAMPLE = SampleDefinition(
    name="custom-search",
    description="Query a Bing Custom Search instance with a Cognitive Services account key",
    workflow=run,
    parameters={"query": "Xbox"},
    env=(
        EnvParameter("AZURE_COGNITIVE_ACCOUNT_NAME", "account_name", required=True),
        EnvParameter("AZURE_COGNITIVE_RESOURCE_GROUP", "account_group", required=True),
        EnvParameter("BING_CUSTOM_CONFIG_ID", "custom_config", default=""),
    ),
    teardown=TeardownPolicy.NEVER,
    manages_group=False,
)

SampleRegistry.register(SAMPLE)
