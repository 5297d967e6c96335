# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Protocol definition for listing running workload instances."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from mesh_infra.models import ModelInventoryPage


@runtime_checkable
class ProtocolClusterInventory(Protocol):
    """Paginated listing of the tasks running in one cluster.

    Implementations:
        - EcsClusterInventory: ECS ListTasks/DescribeTasks via boto3
    """

    async def list_tagged_instances(self, cursor: str | None) -> ModelInventoryPage:
        """Return one page of tasks with their tags.

        Args:
            cursor: ``None`` for the first page, then the previous page's
                ``next_cursor``

        Raises:
            ValueError: If a task's family cannot be derived.
        """
        ...


__all__: list[str] = ["ProtocolClusterInventory"]
