# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Test helpers for mesh_infra unit tests.

Available Utilities:
    In-memory fakes (fakes.py):
        - FakeClusterInventory: Paged task listing
        - FakeControlPlane: Catalog and ACL token store with failure injection
        - FakeSecretStore: Dict-backed secret store with failure injection
        - FakeInstanceMetadata: Fixed workload instance
        - FakeServerWatcher: Pre-published server state
        - RecordingSleep: Sleep replacement that records requested delays
"""

from tests.helpers.fakes import (
    FakeClusterInventory,
    FakeControlPlane,
    FakeInstanceMetadata,
    FakeSecretStore,
    FakeServerWatcher,
    RecordingSleep,
    make_task,
)

__all__: list[str] = [
    "FakeClusterInventory",
    "FakeControlPlane",
    "FakeInstanceMetadata",
    "FakeSecretStore",
    "FakeServerWatcher",
    "RecordingSleep",
    "make_task",
]
