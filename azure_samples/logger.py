import logging
import sys
import traceback

from colorlog import ColoredFormatter

LOGGER_NAME = "azure_samples"

# Azure SDK loggers that carry HTTP request/response details
AZURE_SDK_LOGGERS = ("azure.core.pipeline.policies.http_logging_policy", "azure.identity")


def setup_logger(debug_mode=False):
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if debug_mode else logging.INFO)

    # Create console handler
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(logging.DEBUG if debug_mode else logging.INFO)

    # Create colored formatter
    formatter = ColoredFormatter(
        "%(log_color)s[%(levelname)s] %(message)s",
        log_colors={
            "DEBUG":    "cyan",
            "INFO":     "green",
            "WARNING":  "yellow",
            "ERROR":    "red",
            "CRITICAL": "red,bg_white",
        }
    )
    handler.setFormatter(formatter)

    if not logger.handlers:
        logger.addHandler(handler)
    else:
        for existing in logger.handlers:
            existing.setLevel(logging.DEBUG if debug_mode else logging.INFO)

    # SDK wire logging is noisy; only surface it in debug mode
    for name in AZURE_SDK_LOGGERS:
        sdk_logger = logging.getLogger(name)
        sdk_logger.setLevel(logging.DEBUG if debug_mode else logging.WARNING)
        if debug_mode and not sdk_logger.handlers:
            sdk_logger.addHandler(handler)

    return logger


def get_debug_mode():
    return logger.isEnabledFor(logging.DEBUG)


def print_stack_trace():
    """
    Log the current exception's stack trace if debug mode is enabled.
    """
    if get_debug_mode():
        error_msg = traceback.format_exc()
        logger.error(error_msg)


# Logger defaults to INFO until the CLI reconfigures it.
logger = setup_logger(debug_mode=False)


def configure_logger(debug_mode: bool) -> logging.Logger:
    global logger
    logger = setup_logger(debug_mode=debug_mode)
    if debug_mode:
        logger.debug("Debug mode is active.")
    return logger
