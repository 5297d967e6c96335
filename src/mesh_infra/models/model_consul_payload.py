# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Base model for documents sent to the Consul HTTP API.

Consul expects PascalCase JSON with a few fully upper-cased acronyms
(``ID``, ``CheckID``, ``ServiceID``). Fields are declared in snake_case and
only renamed on serialization.
"""

from __future__ import annotations

from typing import Any

from pydantic import AliasGenerator, BaseModel, ConfigDict
from pydantic.alias_generators import to_pascal

_CONSUL_ALIAS_OVERRIDES: dict[str, str] = {
    "id": "ID",
    "check_id": "CheckID",
    "service_id": "ServiceID",
    "destination_service_id": "DestinationServiceID",
}


def consul_alias(field_name: str) -> str:
    """Return the Consul JSON key for a snake_case field name."""
    return _CONSUL_ALIAS_OVERRIDES.get(field_name) or to_pascal(field_name)


class ModelConsulPayload(BaseModel):
    """Frozen base for Consul request bodies."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=AliasGenerator(serialization_alias=consul_alias),
    )

    def to_consul_payload(self) -> dict[str, Any]:
        """Render the model as a Consul API JSON object, omitting unset fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


__all__: list[str] = ["ModelConsulPayload", "consul_alias"]
