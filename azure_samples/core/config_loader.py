"""
Configuration loading utilities.

Resolves a SampleDefinition plus the process environment into one
immutable SampleConfig, and loads local JSON inputs.

Resolution Order:
    1. AZURE_SUBSCRIPTION_ID (required unless the sample never touches ARM)
    2. AZURE_LOCATION / AZURE_RESOURCE_GROUP overrides
    3. Sample-specific environment parameters
    4. SAMPLES_POLL_INTERVAL / SAMPLES_MAX_WAIT
    5. KEEP_RESOURCE and SAMPLES_MODE flags

Usage:
    from azure_samples.core.config_loader import load_sample_config

    config = load_sample_config(SampleRegistry.get("mysql-server"), os.environ)
"""

import json
import math
from pathlib import Path
from typing import Any, Dict, Mapping, Union

from azure_samples import constants as CONSTANTS
from .context import SampleConfig, SampleDefinition
from .exceptions import ConfigurationError


def _get_env(environ: Mapping[str, str], name: str) -> str:
    """Return a stripped env value; unset and empty are both ''."""
    return (environ.get(name) or "").strip()


def _parse_seconds(environ: Mapping[str, str], name: str, default: float, sample: str) -> float:
    """
    Parse a finite positive number of seconds from the environment.

    Raises:
        ConfigurationError: If the value is not a finite positive number
    """
    raw = _get_env(environ, name)
    if not raw:
        return default

    try:
        value = float(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number of seconds, got '{raw}'.", sample=sample)

    if not math.isfinite(value) or value <= 0:
        raise ConfigurationError(f"{name} must be a finite positive number, got '{raw}'.", sample=sample)
    return value


def load_sample_config(
    definition: SampleDefinition,
    environ: Mapping[str, str],
    dry_run: bool = False,
    require_inputs: bool = True
) -> SampleConfig:
    """
    Build the immutable run configuration for a sample.

    Fails fast: every missing or invalid input raises before any provider
    is constructed or any remote call is made.

    Args:
        definition: The sample being run
        environ: Process environment (usually os.environ)
        dry_run: Mark the run as a dry run (in-memory provider)
        require_inputs: If False, missing required sample inputs are left unset
            (used by cleanup, which only needs the group name)

    Returns:
        SampleConfig for this run

    Raises:
        ConfigurationError: If a required variable is missing or a value is invalid
    """
    sample = definition.name

    subscription_id = _get_env(environ, CONSTANTS.ENV_SUBSCRIPTION_ID)
    if definition.requires_subscription and not subscription_id:
        raise ConfigurationError(f"{CONSTANTS.ENV_SUBSCRIPTION_ID} is not set.", sample=sample)

    location = _get_env(environ, CONSTANTS.ENV_LOCATION) or definition.location
    resource_group = _get_env(environ, CONSTANTS.ENV_RESOURCE_GROUP) or definition.resource_group

    parameters: Dict[str, Any] = dict(definition.parameters)
    for env_param in definition.env:
        value = _get_env(environ, env_param.env_var)
        if value:
            parameters[env_param.key] = value
        elif env_param.required and require_inputs:
            raise ConfigurationError(f"{env_param.env_var} is not set.", sample=sample)
        elif env_param.key not in parameters:
            parameters[env_param.key] = env_param.default

    poll_interval = _parse_seconds(
        environ, CONSTANTS.ENV_POLL_INTERVAL, CONSTANTS.DEFAULT_POLL_INTERVAL_SECONDS, sample
    )
    max_wait = _parse_seconds(
        environ, CONSTANTS.ENV_MAX_WAIT, CONSTANTS.DEFAULT_MAX_WAIT_SECONDS, sample
    )

    # Mere presence of a non-empty value suppresses teardown
    keep_resources = bool(_get_env(environ, CONSTANTS.ENV_KEEP_RESOURCE))
    debug = _get_env(environ, CONSTANTS.ENV_MODE).upper() == "DEBUG"

    return SampleConfig(
        sample_name=sample,
        subscription_id=subscription_id,
        location=location,
        resource_group=resource_group,
        names=dict(definition.names),
        parameters=parameters,
        keep_resources=keep_resources,
        teardown=definition.teardown,
        poll_interval=poll_interval,
        max_wait=max_wait,
        debug=debug,
        dry_run=dry_run,
    )


def load_json_file(file_path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load a JSON file and return its contents.

    The content is treated as opaque; only well-formedness is checked.

    Raises:
        ConfigurationError: If the file is missing, unreadable or invalid JSON
    """
    file_path = Path(file_path)
    if not file_path.exists():
        raise ConfigurationError(
            f"Required input file not found: {file_path.name}",
            config_file=str(file_path)
        )

    try:
        with open(file_path, "r", encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(
            f"Invalid JSON in input file: {e}",
            config_file=str(file_path)
        )
    except OSError as e:
        raise ConfigurationError(
            f"Could not read input file: {e}",
            config_file=str(file_path)
        )
