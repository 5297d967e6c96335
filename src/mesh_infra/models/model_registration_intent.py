# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Resolved registration identity of one task.

The intent is computed once from the task configuration and the workload
instance snapshot; catalog entries are rendered from it without consulting
either source again.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from mesh_infra.enums import EnumServiceKind
from mesh_infra.models.model_catalog_entry import (
    ModelLocality,
    ModelMeshGatewayConfig,
    ModelServiceAddress,
    ModelUpstream,
    ModelWeights,
)

SIDECAR_PROXY_SUFFIX: str = "-sidecar-proxy"


class ModelRegistrationIntent(BaseModel):
    """What mesh-init will register for this task.

    For a typical workload ``service_*`` describe the application service and
    the sidecar proxy identity is derived from them. For a gateway
    ``service_*`` describe the gateway itself and there is no separate
    application service.

    Attributes:
        kind: TYPICAL for application plus sidecar, otherwise the gateway kind
        node_name: Synthetic node name (the cluster ARN)
        node_address: Address shared by every entry of this task
        service_name: Application (or gateway) service name
        service_id: ``<service_name>-<instance_id>``
        port: Application port, or the gateway port
        address: Service address; the gateway LAN address when configured
        tagged_addresses: Gateway ``lan``/``wan`` addresses
        proxy_port: Sidecar public listener port
        health_check_port: Dataplane readiness port
        health_sync_containers: Containers mirrored as catalog checks
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: EnumServiceKind = EnumServiceKind.TYPICAL
    node_name: str
    node_address: str
    service_name: str
    service_id: str
    port: int = 0
    address: str = ""
    tags: tuple[str, ...] = Field(default_factory=tuple)
    meta: dict[str, str] = Field(default_factory=dict)
    namespace: str | None = None
    partition: str | None = None
    weights: ModelWeights | None = None
    enable_tag_override: bool = False
    locality: ModelLocality | None = None
    tagged_addresses: dict[str, ModelServiceAddress] = Field(default_factory=dict)
    proxy_port: int = 0
    proxy_config: dict[str, Any] | None = None
    upstreams: tuple[ModelUpstream, ...] = Field(default_factory=tuple)
    mesh_gateway: ModelMeshGatewayConfig | None = None
    health_check_port: int
    health_sync_containers: tuple[str, ...] = Field(default_factory=tuple)

    @property
    def is_gateway(self) -> bool:
        return self.kind.is_gateway

    @property
    def proxy_service_id(self) -> str:
        """ID of the entry the dataplane runs as: sidecar proxy or gateway."""
        if self.is_gateway:
            return self.service_id
        return f"{self.service_id}{SIDECAR_PROXY_SUFFIX}"

    @property
    def proxy_service_name(self) -> str:
        if self.is_gateway:
            return self.service_name
        return f"{self.service_name}{SIDECAR_PROXY_SUFFIX}"


__all__: list[str] = ["SIDECAR_PROXY_SUFFIX", "ModelRegistrationIntent"]
