# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Sidecar proxy settings."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import Field

from mesh_infra.config.model_mesh_config_base import ModelMeshConfigBase

DEFAULT_PUBLIC_LISTENER_PORT: int = 20000
DEFAULT_PROXY_HEALTH_CHECK_PORT: int = 22000

MeshGatewayMode = Literal["", "none", "local", "remote"]


class ModelMeshGatewayModeConfig(ModelMeshConfigBase):
    mode: MeshGatewayMode = ""


class ModelUpstreamConfig(ModelMeshConfigBase):
    """An upstream the application reaches through the local proxy."""

    destination_type: Literal["service", "prepared_query"] = "service"
    destination_name: str = Field(min_length=1)
    destination_namespace: str | None = None
    destination_partition: str | None = None
    destination_peer: str | None = None
    datacenter: str | None = None
    local_bind_address: str | None = None
    local_bind_port: int = Field(ge=1, le=65535)
    config: dict[str, Any] | None = None
    mesh_gateway: ModelMeshGatewayModeConfig | None = None


class ModelProxyConfigSection(ModelMeshConfigBase):
    """Proxy section of the task configuration."""

    config: dict[str, Any] | None = None
    public_listener_port: int = Field(
        default=DEFAULT_PUBLIC_LISTENER_PORT, ge=1, le=65535
    )
    health_check_port: int | None = Field(default=None, ge=1, le=65535)
    upstreams: list[ModelUpstreamConfig] = Field(default_factory=list)
    mesh_gateway: ModelMeshGatewayModeConfig | None = None


def health_check_port(configured: int | None) -> int:
    """Return the configured dataplane readiness port or the default."""
    return configured if configured else DEFAULT_PROXY_HEALTH_CHECK_PORT


__all__: list[str] = [
    "DEFAULT_PROXY_HEALTH_CHECK_PORT",
    "DEFAULT_PUBLIC_LISTENER_PORT",
    "MeshGatewayMode",
    "ModelMeshGatewayModeConfig",
    "ModelProxyConfigSection",
    "ModelUpstreamConfig",
    "health_check_port",
]
