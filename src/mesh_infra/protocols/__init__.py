# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Protocols for the external systems mesh-infra talks to."""

from mesh_infra.protocols.protocol_cluster_inventory import ProtocolClusterInventory
from mesh_infra.protocols.protocol_control_plane import ProtocolControlPlane
from mesh_infra.protocols.protocol_instance_metadata import ProtocolInstanceMetadata
from mesh_infra.protocols.protocol_secret_store import ProtocolSecretStore

__all__: list[str] = [
    "ProtocolClusterInventory",
    "ProtocolControlPlane",
    "ProtocolInstanceMetadata",
    "ProtocolSecretStore",
]
