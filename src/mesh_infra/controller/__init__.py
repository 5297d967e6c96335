# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Credential reconciliation controller."""

from mesh_infra.controller.controller import (
    DEFAULT_MAX_CONCURRENCY,
    DEFAULT_RECONCILE_INTERVAL_SECONDS,
    CredentialController,
)
from mesh_infra.controller.listing import (
    list_existing_credentials,
    list_wanted_families,
)
from mesh_infra.controller.resource import (
    InstanceFamilyResource,
    OrphanedCredentialResource,
    ReconcileResource,
)

__all__: list[str] = [
    "DEFAULT_MAX_CONCURRENCY",
    "DEFAULT_RECONCILE_INTERVAL_SECONDS",
    "CredentialController",
    "InstanceFamilyResource",
    "OrphanedCredentialResource",
    "ReconcileResource",
    "list_existing_credentials",
    "list_wanted_families",
]
