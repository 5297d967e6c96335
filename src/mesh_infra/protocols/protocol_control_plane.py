# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Protocol definition for the mesh control plane.

Design Decisions:
    - runtime_checkable: Enables isinstance() checks for duck typing
    - Async methods: Callers are asyncio coroutines
    - Typed not-found: ``read_credential`` raises ConsulAclNotFoundError so
      callers never inspect error text
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from pydantic import SecretStr

    from mesh_infra.models import ModelCatalogEntry, ModelCredential


@runtime_checkable
class ProtocolControlPlane(Protocol):
    """Catalog registration and ACL token operations.

    Implementations:
        - ConsulControlPlaneClient: Consul HTTP API over httpx
    """

    async def register_catalog_entry(self, entry: ModelCatalogEntry) -> None:
        """Register (or re-register) one service on its synthetic node.

        Registration is idempotent: sending the same entry twice leaves the
        catalog unchanged.
        """
        ...

    async def list_credentials(self) -> Sequence[ModelCredential]:
        """Return every ACL token, with service identities populated."""
        ...

    async def create_credential(self, family: str) -> ModelCredential:
        """Create a token with exactly one service identity for ``family``."""
        ...

    async def read_credential(self, accessor_id: str) -> ModelCredential:
        """Read one token.

        Raises:
            ConsulAclNotFoundError: If the token does not exist.
        """
        ...

    async def delete_credential(self, accessor_id: str) -> None:
        """Delete one token."""
        ...

    async def login(
        self,
        auth_method: str,
        bearer_token: str,
        meta: Mapping[str, str] | None = None,
        datacenter: str | None = None,
    ) -> ModelCredential:
        """Exchange an auth method bearer token for an ACL token."""
        ...

    async def logout(self, token: SecretStr) -> None:
        """Destroy a token obtained by ``login``."""
        ...


__all__: list[str] = ["ProtocolControlPlane"]
