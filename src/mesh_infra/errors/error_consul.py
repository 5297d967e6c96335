# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Consul-Specific Infrastructure Error Classes.

This module defines the InfraConsulError class for Consul-related
infrastructure errors and the typed not-found variant raised when an ACL
token lookup misses. The not-found condition is translated once, at the
control-plane client boundary, so callers never inspect error text.
"""

from typing import ClassVar, Optional

from mesh_infra.errors.infra_errors import InfraConnectionError
from mesh_infra.errors.model_infra_error_context import ModelInfraErrorContext


class InfraConsulError(InfraConnectionError):
    """Error communicating with Consul.

    Common use cases:
        - Catalog registration failures
        - ACL token create/read/delete failures
        - ACL login/logout failures

    Example:
        >>> raise InfraConsulError(
        ...     "Failed to register service with Consul",
        ...     context=context,
        ...     service_name="web",
        ...     status_code=500,
        ... )
    """

    def __init__(
        self,
        message: str,
        context: Optional[ModelInfraErrorContext] = None,
        status_code: Optional[int] = None,
        service_name: Optional[str] = None,
        **extra_context: object,
    ) -> None:
        """Initialize InfraConsulError with Consul-specific context.

        Args:
            message: Human-readable error message
            context: Bundled infrastructure context (should use CONSUL transport_type)
            status_code: HTTP status returned by Consul, if any
            service_name: Optional service name for registration errors
            **extra_context: Additional context information
        """
        if status_code is not None:
            extra_context["status_code"] = status_code
        if service_name is not None:
            extra_context["service_name"] = service_name

        super().__init__(
            message=message,
            context=context,
            **extra_context,
        )
        self.status_code = status_code


class ConsulAclNotFoundError(InfraConsulError):
    """Raised when Consul reports that an ACL token does not exist.

    This is an expected control condition for the credential controller:
    a secret that references a missing token is stale and triggers issuance
    of a new token rather than a failure.
    """

    error_code: ClassVar[str] = "RESOURCE_NOT_FOUND"

    def __init__(
        self,
        message: str,
        accessor_id: str,
        context: Optional[ModelInfraErrorContext] = None,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(
            message=message,
            context=context,
            status_code=status_code,
            accessor_id=accessor_id,
        )
        self.accessor_id = accessor_id


__all__: list[str] = [
    "ConsulAclNotFoundError",
    "InfraConsulError",
]
