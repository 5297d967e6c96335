# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Infrastructure-Specific Error Classes.

Error Hierarchy:
    RuntimeHostError (base infrastructure error)
    ├── ProtocolConfigurationError
    ├── SecretResolutionError
    ├── InfraConnectionError
    ├── InfraTimeoutError
    ├── InfraAuthenticationError
    ├── InfraUnavailableError
    └── ArtifactWriteError

All errors:
    - Carry a string error code for classification
    - Support proper error chaining with `raise ... from e`
    - Include structured context for debugging
    - Accept ModelInfraErrorContext for bundled context parameters
"""

from typing import ClassVar, Optional
from uuid import UUID

from mesh_infra.errors.model_infra_error_context import ModelInfraErrorContext


class RuntimeHostError(Exception):
    """Base error class for mesh infrastructure errors.

    Structured Fields (via ModelInfraErrorContext):
        transport_type: Type of transport (consul, vault, ecs, etc.)
        operation: Operation being performed
        correlation_id: Correlation ID for tracking
        target_name: Target resource/endpoint name

    Example:
        >>> context = ModelInfraErrorContext(
        ...     transport_type=EnumInfraTransportType.CONSUL,
        ...     operation="catalog_register",
        ... )
        >>> raise RuntimeHostError("Operation failed", context=context, retry_count=3)
    """

    error_code: ClassVar[str] = "OPERATION_FAILED"

    def __init__(
        self,
        message: str,
        context: Optional[ModelInfraErrorContext] = None,
        **extra_context: object,
    ) -> None:
        """Initialize RuntimeHostError with structured fields.

        Args:
            message: Human-readable error message
            context: Bundled infrastructure context (transport_type, operation, etc.)
            **extra_context: Additional context information
        """
        super().__init__(message)
        self.message = message
        self.correlation_id: Optional[UUID] = None
        structured_context: dict[str, object] = dict(extra_context)

        if context is not None:
            if context.transport_type is not None:
                structured_context["transport_type"] = context.transport_type.value
            if context.operation is not None:
                structured_context["operation"] = context.operation
            if context.target_name is not None:
                structured_context["target_name"] = context.target_name
            self.correlation_id = context.correlation_id

        self.context: dict[str, object] = structured_context

    def __str__(self) -> str:
        return self.message


class ProtocolConfigurationError(RuntimeHostError):
    """Raised when configuration validation fails.

    Used for configuration parsing errors, missing required fields and
    invalid values. Always detected before any network call.
    """

    error_code: ClassVar[str] = "INVALID_CONFIGURATION"


class SecretResolutionError(RuntimeHostError):
    """Raised when a secret store or metadata read fails.

    Example:
        >>> raise SecretResolutionError(
        ...     "Failed to update secret",
        ...     context=context,
        ...     secret_name="consul-ecs-web",
        ... )
    """

    error_code: ClassVar[str] = "RESOURCE_UNAVAILABLE"


class InfraConnectionError(RuntimeHostError):
    """Raised when infrastructure connection fails.

    Used for HTTP transport failures and unexpected responses from an
    infrastructure API.
    """

    error_code: ClassVar[str] = "CONNECTION_ERROR"


class InfraTimeoutError(RuntimeHostError):
    """Raised when infrastructure operation exceeds timeout."""

    error_code: ClassVar[str] = "TIMEOUT_ERROR"


class InfraAuthenticationError(RuntimeHostError):
    """Raised when infrastructure authentication or authorization fails.

    Used for invalid tokens, missing permissions and failed ACL logins.
    """

    error_code: ClassVar[str] = "AUTHENTICATION_ERROR"


class InfraUnavailableError(RuntimeHostError):
    """Raised when no healthy infrastructure endpoint is available.

    Used by server discovery when no Consul server answers in time.
    Not retried at this layer; the process supervisor restarts the task.
    """

    error_code: ClassVar[str] = "SERVICE_UNAVAILABLE"


class ArtifactWriteError(RuntimeHostError):
    """Raised when a bootstrap artifact cannot be written to the shared volume.

    Always fatal: the dataplane container cannot start without them.
    """

    error_code: ClassVar[str] = "ARTIFACT_WRITE_FAILED"


__all__ = [
    "RuntimeHostError",
    "ProtocolConfigurationError",
    "SecretResolutionError",
    "InfraConnectionError",
    "InfraTimeoutError",
    "InfraAuthenticationError",
    "InfraUnavailableError",
    "ArtifactWriteError",
]
