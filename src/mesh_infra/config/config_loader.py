# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Configuration loading helpers.

Validation failures are reported with the failing field locations only;
values are never echoed because the document may carry credentials.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Any, TypeVar
from uuid import UUID, uuid4

from pydantic import BaseModel, ValidationError

from mesh_infra.config.model_bootstrap_config import ModelBootstrapConfig
from mesh_infra.enums import EnumInfraTransportType
from mesh_infra.errors import ModelInfraErrorContext, ProtocolConfigurationError

CONFIG_ENV_VAR: str = "CONSUL_ECS_CONFIG_JSON"

ModelT = TypeVar("ModelT", bound=BaseModel)


def _field_locations(error: ValidationError) -> list[str]:
    return [".".join(str(part) for part in err.get("loc", ("unknown",))) for err in error.errors()]


def validate_config(
    model: type[ModelT],
    raw: str | bytes | Mapping[str, Any],
    correlation_id: UUID | None = None,
) -> ModelT:
    """Validate a raw document into ``model``.

    Raises:
        ProtocolConfigurationError: If validation fails.
    """
    try:
        if isinstance(raw, (str, bytes)):
            return model.model_validate_json(raw)
        return model.model_validate(raw)
    except ValidationError as e:
        ctx = ModelInfraErrorContext(
            transport_type=EnumInfraTransportType.RUNTIME,
            operation="validate_config",
            target_name=model.__name__,
            correlation_id=correlation_id or uuid4(),
        )
        raise ProtocolConfigurationError(
            f"Invalid configuration - validation failed for fields: {_field_locations(e)}",
            context=ctx,
        ) from e


def load_bootstrap_config_from_env(
    environ: Mapping[str, str] | None = None,
) -> ModelBootstrapConfig:
    """Load the task configuration from ``CONSUL_ECS_CONFIG_JSON``.

    Raises:
        ProtocolConfigurationError: If the variable is unset or invalid.
    """
    env = os.environ if environ is None else environ
    raw = env.get(CONFIG_ENV_VAR, "")
    if not raw.strip():
        raise ProtocolConfigurationError(
            f"{CONFIG_ENV_VAR} must be set",
            context=ModelInfraErrorContext(
                transport_type=EnumInfraTransportType.RUNTIME,
                operation="load_config",
            ),
        )
    return validate_config(ModelBootstrapConfig, raw)


__all__: list[str] = [
    "CONFIG_ENV_VAR",
    "load_bootstrap_config_from_env",
    "validate_config",
]
