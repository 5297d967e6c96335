# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Domain models for mesh bootstrap and credential reconciliation.

All models are frozen pydantic models and are passed explicitly through the
call chain; nothing here holds process-wide state.
"""

from mesh_infra.models.model_catalog_entry import (
    SYNTHETIC_NODE_META_KEY,
    TAGGED_ADDRESS_LAN,
    TAGGED_ADDRESS_WAN,
    ModelAgentService,
    ModelCatalogEntry,
    ModelHealthCheck,
    ModelLocality,
    ModelMeshGatewayConfig,
    ModelProxyConfig,
    ModelServiceAddress,
    ModelUpstream,
    ModelWeights,
)
from mesh_infra.models.model_consul_payload import ModelConsulPayload, consul_alias
from mesh_infra.models.model_credential import ModelCredential
from mesh_infra.models.model_inventory_page import (
    MESH_TAG,
    ModelClusterTask,
    ModelInventoryPage,
)
from mesh_infra.models.model_registration_intent import (
    SIDECAR_PROXY_SUFFIX,
    ModelRegistrationIntent,
)
from mesh_infra.models.model_secret_record import (
    EMPTY_SECRET_RECORD,
    ModelSecretRecord,
    secret_name,
)
from mesh_infra.models.model_server_state import ModelServerState
from mesh_infra.models.model_workload_instance import (
    DEFAULT_NODE_ADDRESS,
    ModelWorkloadInstance,
)

__all__: list[str] = [
    "DEFAULT_NODE_ADDRESS",
    "EMPTY_SECRET_RECORD",
    "MESH_TAG",
    "SIDECAR_PROXY_SUFFIX",
    "SYNTHETIC_NODE_META_KEY",
    "TAGGED_ADDRESS_LAN",
    "TAGGED_ADDRESS_WAN",
    "ModelAgentService",
    "ModelCatalogEntry",
    "ModelClusterTask",
    "ModelConsulPayload",
    "ModelCredential",
    "ModelHealthCheck",
    "ModelInventoryPage",
    "ModelLocality",
    "ModelMeshGatewayConfig",
    "ModelProxyConfig",
    "ModelRegistrationIntent",
    "ModelSecretRecord",
    "ModelServerState",
    "ModelServiceAddress",
    "ModelUpstream",
    "ModelWeights",
    "ModelWorkloadInstance",
    "consul_alias",
    "secret_name",
]
