# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Clients for the external systems used by mesh-init and the controller.

Exports:
    ConsulControlPlaneClient: Consul catalog and ACL HTTP API (httpx)
    EcsClusterInventory: ECS task listing (boto3)
    SecretsManagerSecretStore: AWS Secrets Manager records (boto3)
    TaskMetadataClient: ECS task metadata endpoint v4 (httpx)
    VaultSecretStore: Vault KV v2 records (hvac)
"""

from mesh_infra.handlers.handler_consul import (
    ConsulControlPlaneClient,
    credential_description,
)
from mesh_infra.handlers.handler_ecs_inventory import (
    EcsClusterInventory,
    family_from_task_definition_arn,
)
from mesh_infra.handlers.handler_secrets_manager import SecretsManagerSecretStore
from mesh_infra.handlers.handler_task_metadata import (
    METADATA_URI_ENV_VAR,
    TaskMetadataClient,
)
from mesh_infra.handlers.handler_vault import VaultSecretStore

__all__: list[str] = [
    "METADATA_URI_ENV_VAR",
    "ConsulControlPlaneClient",
    "EcsClusterInventory",
    "SecretsManagerSecretStore",
    "TaskMetadataClient",
    "VaultSecretStore",
    "credential_description",
    "family_from_task_definition_arn",
]
