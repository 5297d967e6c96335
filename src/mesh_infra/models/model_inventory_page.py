# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Cluster inventory listing models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

MESH_TAG: str = "consul.hashicorp.com/mesh"


class ModelClusterTask(BaseModel):
    """One running task as reported by the cluster inventory."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    task_arn: str
    family: str
    tags: dict[str, str] = Field(default_factory=dict)

    @property
    def is_mesh_enabled(self) -> bool:
        return self.tags.get(MESH_TAG) == "true"


class ModelInventoryPage(BaseModel):
    """One page of tasks; ``next_cursor`` is ``None`` on the last page."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    instances: tuple[ModelClusterTask, ...] = Field(default_factory=tuple)
    next_cursor: str | None = None


__all__: list[str] = ["MESH_TAG", "ModelClusterTask", "ModelInventoryPage"]
