# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Base model for the task configuration document.

The document is camelCase JSON (``bootstrapDir``, ``consulServers`` ...);
fields are declared in snake_case and accepted under either name.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ModelMeshConfigBase(BaseModel):
    """Frozen, strict base for every section of the task configuration."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )


__all__: list[str] = ["ModelMeshConfigBase"]
