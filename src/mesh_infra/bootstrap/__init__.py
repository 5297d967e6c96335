# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""mesh-init bootstrap: registration payloads, artifacts and the command."""

from mesh_infra.bootstrap.dataplane_config import (
    ModelDataplaneConfig,
    build_dataplane_config,
)
from mesh_infra.bootstrap.mesh_init import (
    DEFAULT_RETRY_INTERVAL_SECONDS,
    MeshInitCommand,
)
from mesh_infra.bootstrap.registration import (
    build_proxy_entry,
    build_registration_intent,
    build_service_entry,
)

__all__: list[str] = [
    "DEFAULT_RETRY_INTERVAL_SECONDS",
    "MeshInitCommand",
    "ModelDataplaneConfig",
    "build_dataplane_config",
    "build_proxy_entry",
    "build_registration_intent",
    "build_service_entry",
]
