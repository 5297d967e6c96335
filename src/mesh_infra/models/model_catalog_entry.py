# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Catalog registration models.

A ModelCatalogEntry is the unit sent to ``PUT /v1/catalog/register``: a
synthetic node (named after the ECS cluster) hosting exactly one service,
plus that service's health checks. Every entry produced for one task shares
the same node name and node address, so Consul sees the task as a single
logical node hosting both the application and its proxy.
"""

from __future__ import annotations

from typing import Any

from pydantic import Field

from mesh_infra.enums import EnumServiceKind
from mesh_infra.models.model_consul_payload import ModelConsulPayload

SYNTHETIC_NODE_META_KEY: str = "synthetic-node"
TAGGED_ADDRESS_LAN: str = "lan"
TAGGED_ADDRESS_WAN: str = "wan"


class ModelServiceAddress(ModelConsulPayload):
    """Address/port pair used for gateway tagged addresses."""

    address: str = ""
    port: int = 0


class ModelLocality(ModelConsulPayload):
    """Region/zone locality. Only built when the region is known."""

    region: str
    zone: str | None = None


class ModelWeights(ModelConsulPayload):
    passing: int = 1
    warning: int = 1


class ModelMeshGatewayConfig(ModelConsulPayload):
    mode: str = ""


class ModelUpstream(ModelConsulPayload):
    """Upstream service exposed to the application on a local port."""

    destination_type: str = "service"
    destination_name: str
    destination_namespace: str | None = None
    destination_partition: str | None = None
    destination_peer: str | None = None
    datacenter: str | None = None
    local_bind_address: str | None = None
    local_bind_port: int
    config: dict[str, Any] | None = None
    mesh_gateway: ModelMeshGatewayConfig | None = None


class ModelProxyConfig(ModelConsulPayload):
    """Connect proxy settings attached to a sidecar proxy service."""

    destination_service_name: str | None = None
    destination_service_id: str | None = None
    local_service_port: int | None = None
    upstreams: list[ModelUpstream] | None = None
    config: dict[str, Any] | None = None
    mesh_gateway: ModelMeshGatewayConfig | None = None


class ModelHealthCheck(ModelConsulPayload):
    """Catalog health check bound to one service."""

    check_id: str
    name: str
    service_id: str
    status: str = "critical"
    type: str = "consul-ecs-health-check-sync"
    notes: str | None = None
    namespace: str | None = None
    partition: str | None = None


class ModelAgentService(ModelConsulPayload):
    """Service definition registered on the synthetic node."""

    id: str
    service: str
    kind: EnumServiceKind = EnumServiceKind.TYPICAL
    port: int = 0
    address: str = ""
    tags: list[str] = Field(default_factory=list)
    meta: dict[str, str] = Field(default_factory=dict)
    tagged_addresses: dict[str, ModelServiceAddress] | None = None
    proxy: ModelProxyConfig | None = None
    weights: ModelWeights | None = None
    enable_tag_override: bool = False
    namespace: str | None = None
    partition: str | None = None
    locality: ModelLocality | None = None


class ModelCatalogEntry(ModelConsulPayload):
    """Body of a single catalog registration call."""

    node: str
    address: str
    service: ModelAgentService
    node_meta: dict[str, str] = Field(
        default_factory=lambda: {SYNTHETIC_NODE_META_KEY: "true"}
    )
    checks: list[ModelHealthCheck] = Field(default_factory=list)
    partition: str | None = None
    skip_node_update: bool = True


__all__: list[str] = [
    "SYNTHETIC_NODE_META_KEY",
    "TAGGED_ADDRESS_LAN",
    "TAGGED_ADDRESS_WAN",
    "ModelAgentService",
    "ModelCatalogEntry",
    "ModelHealthCheck",
    "ModelLocality",
    "ModelMeshGatewayConfig",
    "ModelProxyConfig",
    "ModelServiceAddress",
    "ModelUpstream",
    "ModelWeights",
]
