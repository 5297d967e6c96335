# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Gateway registration settings."""

from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator

from mesh_infra.config.model_mesh_config_base import ModelMeshConfigBase
from mesh_infra.enums import EnumServiceKind

DEFAULT_GATEWAY_PORT: int = 8443


class ModelGatewayAddressConfig(ModelMeshConfigBase):
    address: str = ""
    port: int = Field(default=0, ge=0, le=65535)


class ModelGatewayProxyConfig(ModelMeshConfigBase):
    config: dict[str, Any] | None = None


class ModelGatewayConfig(ModelMeshConfigBase):
    """Gateway section; present only for gateway tasks.

    Attributes:
        kind: Gateway kind; must be one of the gateway service kinds
        lan_address: LAN address/port the gateway binds
        wan_address: WAN address/port advertised to other datacenters
    """

    kind: EnumServiceKind
    name: str = ""
    lan_address: ModelGatewayAddressConfig | None = None
    wan_address: ModelGatewayAddressConfig | None = None
    tags: list[str] = Field(default_factory=list)
    meta: dict[str, str] = Field(default_factory=dict)
    namespace: str | None = None
    partition: str | None = None
    health_check_port: int | None = Field(default=None, ge=1, le=65535)
    proxy: ModelGatewayProxyConfig | None = None

    @field_validator("kind")
    @classmethod
    def _require_gateway_kind(cls, value: EnumServiceKind) -> EnumServiceKind:
        if not value.is_gateway:
            raise ValueError(f"{value.value!r} is not a gateway kind")
        return value


__all__: list[str] = [
    "DEFAULT_GATEWAY_PORT",
    "ModelGatewayAddressConfig",
    "ModelGatewayConfig",
    "ModelGatewayProxyConfig",
]
