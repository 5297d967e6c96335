# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Infrastructure Transport Type Enumeration.

Defines the canonical transport types for infrastructure components.
Used for error context and transport identification.
"""

from enum import Enum


class EnumInfraTransportType(str, Enum):
    """Infrastructure transport types for mesh infrastructure components.

    Attributes:
        CONSUL: Consul HTTP API (catalog, ACL)
        VAULT: HashiCorp Vault KV secret transport
        SECRETS_MANAGER: AWS Secrets Manager secret transport
        ECS: AWS ECS control plane (task listing)
        METADATA: ECS task metadata endpoint
        FILESYSTEM: Local shared volume used for bootstrap artifacts
        RUNTIME: Process-internal operations
    """

    CONSUL = "consul"
    VAULT = "vault"
    SECRETS_MANAGER = "secrets_manager"
    ECS = "ecs"
    METADATA = "metadata"
    FILESYSTEM = "filesystem"
    RUNTIME = "runtime"


__all__ = ["EnumInfraTransportType"]
