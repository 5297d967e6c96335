# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Vault Secret Store Configuration Model.

Security Note:
    The token field uses SecretStr to prevent accidental logging of
    sensitive credentials. Tokens should come from environment variables,
    never from configuration files.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, SecretStr


class ModelVaultConfig(BaseModel):
    """Configuration for the HashiCorp Vault KV v2 secret store.

    Attributes:
        url: Vault server URL (e.g., "https://vault.example.com:8200")
        token: Vault authentication token
        namespace: Vault namespace for Vault Enterprise
        mount_point: KV v2 mount holding the credential records
        path_prefix: Path under the mount where records are stored
        timeout_seconds: Operation timeout in seconds
        verify_ssl: Whether to verify SSL certificates
        max_concurrent_operations: Thread pool size for hvac calls

    Example:
        >>> config = ModelVaultConfig(
        ...     url="https://vault.example.com:8200",
        ...     token=SecretStr("s.1234567890abcdefghijklmnopqrstuv"),
        ... )
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    url: str = Field(
        description="Vault server URL (e.g., 'https://vault.example.com:8200')",
    )
    token: SecretStr | None = Field(
        default=None,
        description="Vault authentication token (use SecretStr for security)",
    )
    namespace: str | None = Field(
        default=None,
        description="Vault namespace for Vault Enterprise",
    )
    mount_point: str = Field(
        default="secret",
        description="KV v2 secrets engine mount point",
    )
    path_prefix: str = Field(
        default="",
        description="Path under the mount where records are stored",
    )
    timeout_seconds: float = Field(
        default=30.0,
        ge=1.0,
        le=300.0,
        description="Operation timeout in seconds",
    )
    verify_ssl: bool = Field(
        default=True,
        description="Whether to verify SSL certificates",
    )
    max_concurrent_operations: int = Field(
        default=4,
        ge=1,
        le=100,
        description="Maximum concurrent Vault operations (thread pool size)",
    )


__all__: list[str] = ["ModelVaultConfig"]
