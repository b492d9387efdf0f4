"""
Shared constants for the sample runner.

Environment variable names, polling defaults and exit codes live here so
that the CLI, the config loader and the tests agree on them.
"""

# ==========================================
# 1. Environment Variables
# ==========================================
ENV_SUBSCRIPTION_ID = "AZURE_SUBSCRIPTION_ID"
ENV_KEEP_RESOURCE = "KEEP_RESOURCE"
ENV_LOCATION = "AZURE_LOCATION"
ENV_RESOURCE_GROUP = "AZURE_RESOURCE_GROUP"
ENV_POLL_INTERVAL = "SAMPLES_POLL_INTERVAL"
ENV_MAX_WAIT = "SAMPLES_MAX_WAIT"
ENV_MODE = "SAMPLES_MODE"

# ==========================================
# 2. Long-Running Operation Polling
# ==========================================
DEFAULT_POLL_INTERVAL_SECONDS = 10.0
DEFAULT_MAX_WAIT_SECONDS = 1800.0

# Azure LRO status strings are compared case-insensitively
SUCCEEDED_STATES = {"succeeded"}
FAILED_STATES = {"failed", "canceled", "cancelled"}

# ==========================================
# 3. Authentication
# ==========================================
MANAGEMENT_SCOPE = "https://management.azure.com/.default"

# ==========================================
# 4. Providers
# ==========================================
DEFAULT_PROVIDER = "azure"
DRY_RUN_PROVIDER = "memory"

# ==========================================
# 5. Process Exit Codes
# ==========================================
EXIT_SUCCESS = 0
EXIT_FAILURE = 1
