"""
Resource Manager deployment sample.

Checks whether the deployment exists, deploys a local ARM template in
Incremental mode and validates the same template afterwards.

Inputs:
    testdata/template.json and testdata/parameters.json ship with the
    package; DEPLOYMENT_TEMPLATE_FILE and DEPLOYMENT_PARAMETERS_FILE
    point the sample at other files.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict

from azure_samples.core.config_loader import load_json_file
from azure_samples.core.context import EnvParameter, SampleContext, SampleDefinition
from azure_samples.core.registry import SampleRegistry

logger = logging.getLogger(__name__)

TESTDATA_DIR = Path(__file__).parent / "testdata"


def load_template(context: SampleContext) -> Dict[str, Any]:
    return load_json_file(context.param("template_file") or TESTDATA_DIR / "template.json")


def load_parameters(context: SampleContext) -> Dict[str, Any]:
    """
    Load deployment parameters.

    Accepts a full ARM parameters document ({"parameters": {...}}) or a
    bare parameter mapping.
    """
    document = load_json_file(context.param("parameters_file") or TESTDATA_DIR / "parameters.json")
    if isinstance(document.get("parameters"), dict):
        return document["parameters"]
    return document


def deployment_body(template: Dict[str, Any], parameters: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "properties": {
            "template": template,
            "parameters": parameters,
            "mode": "Incremental",
        }
    }


def check_existence(context: SampleContext) -> bool:
    exists = context.provider.invoke_action(
        "deployment", "check_existence", context.resource_group, context.name("deployment")
    )
    context.outputs["deployment_exists"] = exists
    logger.info(f"✓ deployment is exist: {exists}")
    return exists


def create_deployment(context: SampleContext, body: Dict[str, Any]) -> dict:
    deployment = context.provider.create_resource(
        "deployment",
        context.resource_group,
        context.name("deployment"),
        parameters=body,
    )
    return context.record("created deployment", deployment, key="deployment")


def validate_deployment(context: SampleContext, body: Dict[str, Any]) -> Any:
    result = context.provider.invoke_action(
        "deployment", "begin_validate", context.resource_group, context.name("deployment"), body
    )
    context.outputs["validation"] = result
    logger.info(f"✓ validate deployment: {json.dumps(result, default=str)}")
    return result


def run(context: SampleContext) -> None:
    logger.info("Step 1/4: Checking deployment existence")
    check_existence(context)

    logger.info("Step 2/4: Loading template and parameters")
    body = deployment_body(load_template(context), load_parameters(context))

    logger.info("Step 3/4: Creating deployment")
    create_deployment(context, body)

    logger.info("Step 4/4: Validating deployment")
    validate_deployment(context, body)


SAMPLE = SampleDefinition(
    name="resource-deployment",
    description="Deploy and validate a local ARM template",
    workflow=run,
    location="westus",
    resource_group="sample-resource-group",
    names={"deployment": "sample-deployment"},
    env=(
        EnvParameter("DEPLOYMENT_TEMPLATE_FILE", "template_file"),
        EnvParameter("DEPLOYMENT_PARAMETERS_FILE", "parameters_file"),
    ),
)

SampleRegistry.register(SAMPLE)
