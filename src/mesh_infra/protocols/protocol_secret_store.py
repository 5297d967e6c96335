# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Protocol definition for the durable per-family secret record store."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ProtocolSecretStore(Protocol):
    """Named opaque secret values.

    Implementations:
        - SecretsManagerSecretStore: AWS Secrets Manager via boto3
        - VaultSecretStore: HashiCorp Vault KV v2 via hvac
    """

    async def get(self, name: str) -> bytes | None:
        """Return the stored payload, or ``None`` when the secret has no value."""
        ...

    async def put(self, name: str, payload: bytes) -> None:
        """Replace the stored payload."""
        ...


__all__: list[str] = ["ProtocolSecretStore"]
