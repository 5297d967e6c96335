# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Consul HTTP client configuration model.

Security Note:
    The token field uses SecretStr to prevent accidental logging of
    sensitive credentials. Tokens come from the environment or from an ACL
    login, never from configuration files.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, SecretStr


class ModelConsulClientConfig(BaseModel):
    """Configuration for the Consul control-plane client.

    Attributes:
        address: Base URL of the Consul HTTP API (e.g., "https://10.0.0.4:8501")
        token: ACL token sent as ``X-Consul-Token``
        ca_file: CA bundle used to verify the server certificate
        verify_ssl: Whether to verify TLS certificates
        timeout_seconds: Per-request timeout
        partition: Admin partition for ACL and catalog calls (Enterprise)

    Example:
        >>> config = ModelConsulClientConfig(
        ...     address="https://consul.example.com:8501",
        ...     token=SecretStr("b1gs33cr3t"),
        ... )
        >>> print(config.token)
        **********
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    address: str = Field(
        default="http://127.0.0.1:8500",
        description="Base URL of the Consul HTTP API",
    )
    token: SecretStr | None = Field(
        default=None,
        description="ACL token (use SecretStr for security)",
    )
    ca_file: str | None = Field(
        default=None,
        description="CA bundle path used to verify the Consul server",
    )
    verify_ssl: bool = Field(
        default=True,
        description="Whether to verify TLS certificates",
    )
    timeout_seconds: float = Field(
        default=30.0,
        ge=1.0,
        le=300.0,
        description="Per-request timeout in seconds",
    )
    partition: str | None = Field(
        default=None,
        description="Admin partition (Consul Enterprise)",
    )


__all__: list[str] = ["ModelConsulClientConfig"]
