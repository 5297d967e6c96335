# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""ACL token (credential) model.

Credentials are created, read and deleted by the controller but never
mutated in place.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, SecretStr


class ModelCredential(BaseModel):
    """A Consul ACL token bound to workload families by service identities.

    Attributes:
        accessor_id: Stable public handle of the token
        secret_id: Bearer value; ``None`` when Consul redacted it
        description: Free-form description
        service_identities: Service names the token is bound to
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    accessor_id: str
    secret_id: SecretStr | None = None
    description: str = ""
    service_identities: tuple[str, ...] = Field(default_factory=tuple)

    @property
    def owned_family(self) -> str | None:
        """Family this token belongs to when the controller owns it.

        Only tokens with exactly one service identity are controller-owned;
        tokens with zero or several identities are left untouched.
        """
        if len(self.service_identities) == 1:
            return self.service_identities[0]
        return None

    @classmethod
    def from_consul(cls, data: Mapping[str, Any]) -> ModelCredential:
        """Parse a Consul ``ACLToken`` JSON object."""
        identities = tuple(
            str(identity.get("ServiceName", ""))
            for identity in data.get("ServiceIdentities") or []
        )
        secret = data.get("SecretID")
        return cls(
            accessor_id=str(data.get("AccessorID", "")),
            secret_id=SecretStr(secret) if secret else None,
            description=str(data.get("Description") or ""),
            service_identities=identities,
        )


__all__: list[str] = ["ModelCredential"]
