"""
Custom exceptions for the sample runner.

Every failure a sample can hit is fatal: the exception propagates to the
CLI, which logs it and exits non-zero. The hierarchy exists so callers can
tell which stage failed and why.

Exception Hierarchy:
    SampleError (base)
    ├── ConfigurationError - Missing or invalid environment input / JSON file
    ├── SampleNotFoundError - Unknown sample name requested
    ├── ProviderNotFoundError - Unknown provider name requested
    ├── AuthenticationError - Credential chain failure
    └── RemoteOperationError - Provider rejected a call
        ├── ResourceNotFoundError - Remote resource does not exist
        ├── OperationFailedError - Long-running operation ended in failure
        └── OperationTimeoutError - Long-running operation exceeded max wait
"""

from typing import Optional


class SampleError(Exception):
    """
    Base exception for all sample-related errors.

    Attributes:
        message: Human-readable error description
        sample: Optional sample name where the error occurred
        stage: Optional stage name (e.g., "ensure_group", "workflow")
    """

    def __init__(
        self,
        message: str,
        sample: Optional[str] = None,
        stage: Optional[str] = None
    ):
        self.message = message
        self.sample = sample
        self.stage = stage

        details = []
        if sample:
            details.append(f"sample={sample}")
        if stage:
            details.append(f"stage={stage}")

        if details:
            full_message = f"{message} [{', '.join(details)}]"
        else:
            full_message = message

        super().__init__(full_message)


class ConfigurationError(SampleError):
    """
    Raised when required configuration is missing or invalid.

    This is always detected before any remote call is made:
    - Required environment variable is unset or empty
    - Numeric setting does not parse or is not positive
    - Local JSON input is missing or malformed

    Example:
        >>> load_sample_config(definition, {})
        ConfigurationError: AZURE_SUBSCRIPTION_ID is not set.
    """

    def __init__(self, message: str, config_file: Optional[str] = None, sample: Optional[str] = None):
        self.config_file = config_file
        if config_file:
            message = f"{message} (file: {config_file})"
        super().__init__(message, sample=sample, stage="configuration")


class SampleNotFoundError(SampleError):
    """Raised when an unregistered sample name is requested."""

    def __init__(self, sample_name: str, available_samples: list[str]):
        self.sample_name = sample_name
        self.available_samples = available_samples
        message = (
            f"Sample '{sample_name}' not found. "
            f"Available: {available_samples}"
        )
        super().__init__(message)


class ProviderNotFoundError(SampleError):
    """
    Raised when an unknown provider name is requested.

    Example:
        >>> ProviderRegistry.get("unknown")
        ProviderNotFoundError: Provider 'unknown' not found. Available: ['azure', 'memory']
    """

    def __init__(self, provider_name: str, available_providers: list[str]):
        self.provider_name = provider_name
        self.available_providers = available_providers
        message = (
            f"Provider '{provider_name}' not found. "
            f"Available: {available_providers}"
        )
        super().__init__(message)


class AuthenticationError(SampleError):
    """
    Raised when no credential in the default chain can issue a token,
    or when the provider rejects the token that was issued.
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        self.original_error = original_error
        super().__init__(message, stage="authenticate")


class RemoteOperationError(SampleError):
    """
    Raised when the provider rejects a call (validation, conflict, quota).

    The provider's message is kept verbatim.

    Attributes:
        operation: Description of the call that failed
        status_code: HTTP status code, when the provider returned one
        original_error: The underlying SDK exception
    """

    def __init__(
        self,
        operation: str,
        status_code: Optional[int] = None,
        reason: Optional[str] = None,
        original_error: Optional[Exception] = None
    ):
        self.operation = operation
        self.status_code = status_code
        self.reason = reason
        self.original_error = original_error

        message = f"Failed to {operation}"
        if status_code:
            message += f" (HTTP {status_code})"
        if reason:
            message += f": {reason}"

        super().__init__(message)


class ResourceNotFoundError(RemoteOperationError):
    """Raised when a remote resource addressed by (group, name) does not exist."""


class OperationFailedError(RemoteOperationError):
    """Raised when a long-running operation reaches a failed or canceled state."""

    def __init__(self, description: str, status: str):
        self.status = status
        super().__init__(description, reason=f"operation ended with status '{status}'")


class OperationTimeoutError(RemoteOperationError):
    """Raised when a long-running operation is still running after max_wait seconds."""

    def __init__(self, description: str, waited: float, max_wait: float):
        self.waited = waited
        self.max_wait = max_wait
        super().__init__(
            description,
            reason=f"still running after {waited:.0f}s (max wait {max_wait:.0f}s)"
        )
