# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Application service registration settings."""

from __future__ import annotations

from pydantic import Field

from mesh_infra.config.model_mesh_config_base import ModelMeshConfigBase


class ModelWeightsConfig(ModelMeshConfigBase):
    passing: int = Field(ge=1)
    warning: int = Field(ge=1)


class ModelServiceConfig(ModelMeshConfigBase):
    """Service section; every field is optional.

    ``name`` must be lower case because service identities are; when unset
    the lower-cased task family is used.
    """

    name: str = Field(default="", pattern=r"^([a-z0-9]([a-z0-9\-_]*[a-z0-9])?)?$")
    tags: list[str] = Field(default_factory=list)
    port: int = Field(default=0, ge=0, le=65535)
    enable_tag_override: bool = False
    meta: dict[str, str] = Field(default_factory=dict)
    weights: ModelWeightsConfig | None = None
    namespace: str | None = None
    partition: str | None = None


__all__: list[str] = ["ModelServiceConfig", "ModelWeightsConfig"]
