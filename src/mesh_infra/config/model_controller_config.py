# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Credential controller configuration model."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from mesh_infra.config.model_consul_client_config import ModelConsulClientConfig
from mesh_infra.config.model_vault_config import ModelVaultConfig

SecretBackend = Literal["secrets-manager", "vault"]


class ModelControllerConfig(BaseModel):
    """Settings for one controller process.

    Attributes:
        cluster: ECS cluster name or ARN whose tasks are reconciled
        secret_prefix: Prefix of secret names (``<prefix>-<family>``)
        reconcile_interval_seconds: Pause between reconcile passes
        max_concurrency: Families converged in parallel
        secret_backend: Which secret store holds the records
        aws_region: Region for ECS and Secrets Manager clients
        consul: Consul control-plane client settings
        vault: Vault settings, required when ``secret_backend`` is ``vault``
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    cluster: str = Field(min_length=1)
    secret_prefix: str = Field(min_length=1)
    reconcile_interval_seconds: float = Field(default=10.0, gt=0.0, le=3600.0)
    max_concurrency: int = Field(default=4, ge=1, le=64)
    secret_backend: SecretBackend = "secrets-manager"
    aws_region: str | None = None
    consul: ModelConsulClientConfig = Field(default_factory=ModelConsulClientConfig)
    vault: ModelVaultConfig | None = None

    @model_validator(mode="after")
    def _vault_settings_present(self) -> ModelControllerConfig:
        if self.secret_backend == "vault" and self.vault is None:
            raise ValueError("vault settings are required for the vault backend")
        return self


__all__: list[str] = ["ModelControllerConfig", "SecretBackend"]
