# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Protocol definition for the local workload instance metadata source."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from mesh_infra.models import ModelWorkloadInstance


@runtime_checkable
class ProtocolInstanceMetadata(Protocol):
    """Source of the running task's identity.

    Implementations:
        - TaskMetadataClient: ECS task metadata endpoint v4 via httpx
    """

    async def fetch(self) -> ModelWorkloadInstance:
        """Read the instance snapshot once."""
        ...


__all__: list[str] = ["ProtocolInstanceMetadata"]
