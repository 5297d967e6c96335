# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Infrastructure Error Context Configuration Model.

This module defines the configuration model for infrastructure error context,
encapsulating common structured fields to reduce __init__ parameter count
while keeping strong typing.
"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from mesh_infra.enums import EnumInfraTransportType


class ModelInfraErrorContext(BaseModel):
    """Configuration model for infrastructure error context.

    Attributes:
        transport_type: Type of infrastructure transport (CONSUL, VAULT, ECS, etc.)
        operation: Operation being performed (register, read_token, put_secret, etc.)
        target_name: Target resource or endpoint name
        correlation_id: Request correlation ID for tracing one run or pass

    Example:
        >>> context = ModelInfraErrorContext(
        ...     transport_type=EnumInfraTransportType.CONSUL,
        ...     operation="catalog_register",
        ...     target_name="consul_control_plane",
        ...     correlation_id=uuid4(),
        ... )
        >>> raise InfraConsulError("Catalog registration failed", context=context)
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    transport_type: Optional[EnumInfraTransportType] = Field(
        default=None,
        description="Type of infrastructure transport (CONSUL, VAULT, ECS, etc.)",
    )
    operation: Optional[str] = Field(
        default=None,
        description="Operation being performed",
    )
    target_name: Optional[str] = Field(
        default=None,
        description="Target resource or endpoint name",
    )
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="Request correlation ID for tracing",
    )


__all__ = ["ModelInfraErrorContext"]
