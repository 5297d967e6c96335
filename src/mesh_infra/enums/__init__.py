# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Mesh Infrastructure Enumerations Module.

Exports:
    EnumBootstrapPhase: Phases of the mesh-init state machine
    EnumInfraTransportType: Infrastructure transport type enumeration
    EnumResourceKind: Reconcile resource variants (upsert vs revoke)
    EnumServiceKind: Consul service kinds (typical, proxy, gateways)
"""

from mesh_infra.enums.enum_bootstrap_phase import EnumBootstrapPhase
from mesh_infra.enums.enum_infra_transport_type import EnumInfraTransportType
from mesh_infra.enums.enum_resource_kind import EnumResourceKind
from mesh_infra.enums.enum_service_kind import EnumServiceKind

__all__: list[str] = [
    "EnumBootstrapPhase",
    "EnumInfraTransportType",
    "EnumResourceKind",
    "EnumServiceKind",
]
