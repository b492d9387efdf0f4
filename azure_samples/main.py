"""
Azure Samples - CLI Entry Point.

Commands:
    list                      List registered samples
    run <sample> [options]    Run a sample end to end
    cleanup <sample>          Delete a sample's resource group

Exit Codes:
    0  success
    1  configuration, authentication or remote failure (cause is logged)
    2  command-line usage error
"""

import argparse
import dataclasses
import os
import sys
from typing import List, Optional

from azure_samples import constants as CONSTANTS
from azure_samples.logger import configure_logger, print_stack_trace
import azure_samples.logger as logger_module

from azure_samples.core.config_loader import load_sample_config
from azure_samples.core.context import SampleConfig, TeardownPolicy
from azure_samples.core.exceptions import SampleError
from azure_samples.core.registry import ProviderRegistry, SampleRegistry
from azure_samples.core.sequencer import SampleRunner
import azure_samples.providers  # noqa: F401
import azure_samples.samples  # noqa: F401


# ==========================================
# Argument Parsing
# ==========================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="azure-samples",
        description="Run Azure management samples: authenticate, ensure a resource group, "
                    "provision, then tear down unless KEEP_RESOURCE is set."
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list", help="List available samples")

    run_parser = subparsers.add_parser("run", help="Run a sample")
    run_parser.add_argument("sample", help="Sample name (see `list`)")
    run_parser.add_argument(
        "--provider", default=CONSTANTS.DEFAULT_PROVIDER,
        help=f"Provider to run against (default: {CONSTANTS.DEFAULT_PROVIDER})"
    )
    run_parser.add_argument(
        "--dry-run", action="store_true",
        help="Run against the in-memory provider; no Azure calls are made"
    )
    run_parser.add_argument("--debug", action="store_true", help="Enable debug and SDK HTTP logging")
    run_parser.add_argument(
        "--cleanup-on-failure", action="store_true",
        help="Delete the resource group if the workflow fails (unless KEEP_RESOURCE is set)"
    )
    run_parser.add_argument(
        "--force-teardown", action="store_true",
        help="Tear down samples whose cleanup is disabled by default"
    )

    cleanup_parser = subparsers.add_parser("cleanup", help="Delete a sample's resource group")
    cleanup_parser.add_argument("sample", help="Sample name (see `list`)")
    cleanup_parser.add_argument(
        "--provider", default=CONSTANTS.DEFAULT_PROVIDER,
        help=f"Provider to run against (default: {CONSTANTS.DEFAULT_PROVIDER})"
    )
    cleanup_parser.add_argument("--debug", action="store_true", help="Enable debug and SDK HTTP logging")

    return parser


# ==========================================
# Commands
# ==========================================

def _apply_debug(config: SampleConfig, debug_flag: bool) -> SampleConfig:
    if debug_flag and not config.debug:
        config = dataclasses.replace(config, debug=True)
    if config.debug:
        configure_logger(debug_mode=True)
    return config


def _build_provider(provider_name: str, config: SampleConfig):
    provider = ProviderRegistry.get(provider_name)
    provider.initialize_clients(config)
    return provider


def handle_list() -> int:
    definitions = SampleRegistry.definitions()
    width = max(len(d.name) for d in definitions)
    for definition in definitions:
        print(f"  {definition.name.ljust(width)}  {definition.description}")
    return CONSTANTS.EXIT_SUCCESS


def handle_run(args: argparse.Namespace) -> int:
    definition = SampleRegistry.get(args.sample)
    provider_name = CONSTANTS.DRY_RUN_PROVIDER if args.dry_run else args.provider

    # Configuration is resolved before any provider exists
    config = load_sample_config(definition, os.environ, dry_run=args.dry_run)
    if args.force_teardown and config.teardown == TeardownPolicy.NEVER:
        config = dataclasses.replace(config, teardown=TeardownPolicy.UNLESS_KEPT)
    config = _apply_debug(config, args.debug)

    provider = _build_provider(provider_name, config)
    runner = SampleRunner(definition, config, provider, cleanup_on_failure=args.cleanup_on_failure)
    context = runner.run()

    logger_module.logger.debug(f"Final state: {context.state.value}")
    return CONSTANTS.EXIT_SUCCESS


def handle_cleanup(args: argparse.Namespace) -> int:
    definition = SampleRegistry.get(args.sample)
    config = load_sample_config(definition, os.environ, require_inputs=False)
    config = _apply_debug(config, args.debug)

    provider = _build_provider(args.provider, config)
    SampleRunner(definition, config, provider).cleanup()
    return CONSTANTS.EXIT_SUCCESS


# ==========================================
# Entry Point
# ==========================================

def main(argv: Optional[List[str]] = None) -> int:
    """Parse arguments, dispatch the command and map failures to exit codes."""
    args = build_parser().parse_args(argv)
    configure_logger(debug_mode=getattr(args, "debug", False))

    try:
        if args.command == "list":
            return handle_list()
        if args.command == "run":
            return handle_run(args)
        return handle_cleanup(args)
    except SampleError as e:
        logger_module.logger.error(f"Error: {e}")
        print_stack_trace()
        return CONSTANTS.EXIT_FAILURE
    except Exception as e:
        logger_module.logger.error(f"Unexpected error: {type(e).__name__}: {e}")
        print_stack_trace()
        return CONSTANTS.EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
