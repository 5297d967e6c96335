# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Registration payload construction for mesh-init.

Two steps, both pure:
    1. ``build_registration_intent`` resolves names, meta, ports and gateway
       addresses from the task configuration and the instance snapshot.
    2. ``build_service_entry`` / ``build_proxy_entry`` render catalog
       entries from the intent.

Service names must be lower case because ACL service identities are; a
configured name is validated by the config model and the task family is
lower-cased when used as the default.
"""

from __future__ import annotations

from mesh_infra.config import (
    DEFAULT_GATEWAY_PORT,
    ModelBootstrapConfig,
    ModelGatewayConfig,
)
from mesh_infra.config.model_proxy_config import (
    ModelMeshGatewayModeConfig,
    ModelUpstreamConfig,
)
from mesh_infra.enums import EnumServiceKind
from mesh_infra.models import (
    TAGGED_ADDRESS_LAN,
    TAGGED_ADDRESS_WAN,
    ModelAgentService,
    ModelCatalogEntry,
    ModelHealthCheck,
    ModelLocality,
    ModelMeshGatewayConfig,
    ModelProxyConfig,
    ModelRegistrationIntent,
    ModelServiceAddress,
    ModelUpstream,
    ModelWeights,
    ModelWorkloadInstance,
)

META_SOURCE_VALUE: str = "consul-ecs"
SYNCED_CHECK_NAME: str = "consul ecs synced"
DATAPLANE_CONTAINER_NAME: str = "consul-dataplane"


def service_name_for(configured: str, family: str) -> str:
    return configured or family.lower()


def service_id_for(service_name: str, instance_id: str) -> str:
    return f"{service_name}-{instance_id}"


def merge_meta(base: dict[str, str], overrides: dict[str, str]) -> dict[str, str]:
    """Merge two meta maps; keys in ``overrides`` win."""
    return {**base, **overrides}


def _task_meta(instance: ModelWorkloadInstance) -> dict[str, str]:
    return {
        "task-id": instance.instance_id,
        "task-arn": instance.task_arn,
        "source": META_SOURCE_VALUE,
    }


def _locality(instance: ModelWorkloadInstance) -> ModelLocality | None:
    if not instance.region:
        return None
    return ModelLocality(region=instance.region, zone=instance.availability_zone)


def _mesh_gateway(config: ModelMeshGatewayModeConfig | None) -> ModelMeshGatewayConfig | None:
    if config is None:
        return None
    return ModelMeshGatewayConfig(mode=config.mode)


def _upstream(config: ModelUpstreamConfig) -> ModelUpstream:
    return ModelUpstream(
        destination_type=config.destination_type,
        destination_name=config.destination_name,
        destination_namespace=config.destination_namespace,
        destination_partition=config.destination_partition,
        destination_peer=config.destination_peer,
        datacenter=config.datacenter,
        local_bind_address=config.local_bind_address,
        local_bind_port=config.local_bind_port,
        config=config.config,
        mesh_gateway=_mesh_gateway(config.mesh_gateway),
    )


def build_registration_intent(
    config: ModelBootstrapConfig,
    instance: ModelWorkloadInstance,
) -> ModelRegistrationIntent:
    """Resolve what this task registers."""
    if config.gateway is not None:
        return _gateway_intent(config, config.gateway, instance)

    service = config.service
    name = service_name_for(service.name, instance.family)
    weights = None
    if service.weights is not None:
        weights = ModelWeights(
            passing=service.weights.passing, warning=service.weights.warning
        )
    return ModelRegistrationIntent(
        kind=EnumServiceKind.TYPICAL,
        node_name=instance.cluster_arn,
        node_address=instance.node_address,
        service_name=name,
        service_id=service_id_for(name, instance.instance_id),
        port=service.port,
        address=instance.node_address,
        tags=tuple(service.tags),
        meta=merge_meta(_task_meta(instance), service.meta),
        namespace=service.namespace,
        partition=service.partition,
        weights=weights,
        enable_tag_override=service.enable_tag_override,
        locality=_locality(instance),
        proxy_port=config.proxy.public_listener_port,
        proxy_config=config.proxy.config,
        upstreams=tuple(_upstream(u) for u in config.proxy.upstreams),
        mesh_gateway=_mesh_gateway(config.proxy.mesh_gateway),
        health_check_port=config.proxy_health_check_port,
        health_sync_containers=tuple(config.health_sync_containers),
    )


def _gateway_intent(
    config: ModelBootstrapConfig,
    gateway: ModelGatewayConfig,
    instance: ModelWorkloadInstance,
) -> ModelRegistrationIntent:
    name = service_name_for(gateway.name, instance.family)
    address = instance.node_address
    port = 0
    tagged: dict[str, ModelServiceAddress] = {}

    if gateway.kind is EnumServiceKind.MESH_GATEWAY:
        port = DEFAULT_GATEWAY_PORT
        lan = gateway.lan_address
        if lan is not None:
            if lan.port > 0:
                port = lan.port
            if lan.address:
                address = lan.address
                tagged[TAGGED_ADDRESS_LAN] = ModelServiceAddress(
                    address=lan.address, port=port
                )
        wan = gateway.wan_address
        if wan is not None and wan.address:
            tagged[TAGGED_ADDRESS_WAN] = ModelServiceAddress(
                address=wan.address, port=wan.port or port
            )

    return ModelRegistrationIntent(
        kind=gateway.kind,
        node_name=instance.cluster_arn,
        node_address=instance.node_address,
        service_name=name,
        service_id=service_id_for(name, instance.instance_id),
        port=port,
        address=address,
        tags=tuple(gateway.tags),
        meta=merge_meta(_task_meta(instance), gateway.meta),
        namespace=gateway.namespace,
        partition=gateway.partition,
        locality=_locality(instance),
        tagged_addresses=tagged,
        proxy_config=gateway.proxy.config if gateway.proxy else None,
        health_check_port=config.proxy_health_check_port,
    )


def _synced_check(
    check_id: str,
    service_id: str,
    container: str,
    intent: ModelRegistrationIntent,
) -> ModelHealthCheck:
    return ModelHealthCheck(
        check_id=check_id,
        name=SYNCED_CHECK_NAME,
        service_id=service_id,
        notes=(
            f"consul-ecs created and updates this check because the {container} "
            "container is essential and has an ECS health check."
        ),
        namespace=intent.namespace,
        partition=intent.partition,
    )


def _entry(
    intent: ModelRegistrationIntent,
    service: ModelAgentService,
    checks: list[ModelHealthCheck],
) -> ModelCatalogEntry:
    return ModelCatalogEntry(
        node=intent.node_name,
        address=intent.node_address,
        service=service,
        checks=checks,
        partition=intent.partition,
    )


def build_service_entry(intent: ModelRegistrationIntent) -> ModelCatalogEntry | None:
    """Render the application service entry; gateways have none."""
    if intent.is_gateway:
        return None
    service = ModelAgentService(
        id=intent.service_id,
        service=intent.service_name,
        kind=EnumServiceKind.TYPICAL,
        port=intent.port,
        address=intent.address,
        tags=list(intent.tags),
        meta=dict(intent.meta),
        weights=intent.weights,
        enable_tag_override=intent.enable_tag_override,
        namespace=intent.namespace,
        partition=intent.partition,
        locality=intent.locality,
    )
    checks = [
        _synced_check(f"{intent.service_id}-{container}", intent.service_id, container, intent)
        for container in intent.health_sync_containers
    ]
    return _entry(intent, service, checks)


def build_proxy_entry(intent: ModelRegistrationIntent) -> ModelCatalogEntry:
    """Render the sidecar proxy entry, or the gateway entry for gateways."""
    if intent.is_gateway:
        proxy = None
        if intent.proxy_config is not None:
            proxy = ModelProxyConfig(config=intent.proxy_config)
        service = ModelAgentService(
            id=intent.service_id,
            service=intent.service_name,
            kind=intent.kind,
            port=intent.port,
            address=intent.address,
            tags=list(intent.tags),
            meta=dict(intent.meta),
            tagged_addresses=dict(intent.tagged_addresses) or None,
            proxy=proxy,
            namespace=intent.namespace,
            partition=intent.partition,
            locality=intent.locality,
        )
    else:
        service = ModelAgentService(
            id=intent.proxy_service_id,
            service=intent.proxy_service_name,
            kind=EnumServiceKind.CONNECT_PROXY,
            port=intent.proxy_port,
            address=intent.node_address,
            tags=list(intent.tags),
            meta=dict(intent.meta),
            proxy=ModelProxyConfig(
                destination_service_name=intent.service_name,
                destination_service_id=intent.service_id,
                local_service_port=intent.port,
                upstreams=list(intent.upstreams) or None,
                config=intent.proxy_config,
                mesh_gateway=intent.mesh_gateway,
            ),
            weights=intent.weights,
            enable_tag_override=intent.enable_tag_override,
            namespace=intent.namespace,
            partition=intent.partition,
            locality=intent.locality,
        )

    check = _synced_check(
        f"{intent.proxy_service_id}-{DATAPLANE_CONTAINER_NAME}",
        intent.proxy_service_id,
        DATAPLANE_CONTAINER_NAME,
        intent,
    )
    return _entry(intent, service, [check])


__all__: list[str] = [
    "build_proxy_entry",
    "build_registration_intent",
    "build_service_entry",
    "merge_meta",
    "service_id_for",
    "service_name_for",
]
