# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Desired and actual state listings for credential reconciliation.

``want`` is the ordered set of families running mesh-enabled tasks;
``have`` maps families to the controller-owned credentials that exist.
Listing failures propagate to the caller unchanged: a partial listing must
never be mistaken for the full state of the cluster.
"""

from __future__ import annotations

import logging

from mesh_infra.models import ModelCredential
from mesh_infra.protocols import ProtocolClusterInventory, ProtocolControlPlane

logger = logging.getLogger(__name__)


async def list_wanted_families(inventory: ProtocolClusterInventory) -> list[str]:
    """Return the distinct families of mesh-tagged tasks, first occurrence first.

    Pages are requested until the inventory returns no cursor.
    """
    families: dict[str, None] = {}
    cursor: str | None = None
    pages = 0
    while True:
        page = await inventory.list_tagged_instances(cursor)
        pages += 1
        for task in page.instances:
            if task.is_mesh_enabled:
                families.setdefault(task.family, None)
        cursor = page.next_cursor
        if not cursor:
            break
    logger.debug(
        "Found %d mesh-enabled families",
        len(families),
        extra={"family_count": len(families), "page_count": pages},
    )
    return list(families)


async def list_existing_credentials(
    control_plane: ProtocolControlPlane,
) -> dict[str, list[ModelCredential]]:
    """Group controller-owned credentials by family.

    Credentials with zero or several service identities are not owned by
    the controller and are skipped. Duplicates for one family accumulate
    under the same key.
    """
    owned: dict[str, list[ModelCredential]] = {}
    for credential in await control_plane.list_credentials():
        family = credential.owned_family
        if family is None:
            continue
        owned.setdefault(family, []).append(credential)
    return owned


__all__: list[str] = ["list_existing_credentials", "list_wanted_families"]
