# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""HashiCorp Vault Secret Store - KV v2 backend for credential records.

Each record is stored as the fields of one KV v2 secret at
``<path_prefix>/<name>`` under the configured mount.

Thread Pool Execution:
    hvac is synchronous; every call runs in a bounded ThreadPoolExecutor via
    loop.run_in_executor() so the controller's event loop is never blocked.

Security Features:
    - SecretStr protection for the Vault token
    - Error messages never include secret data
"""

from __future__ import annotations

import json
import logging
from typing import Any
from uuid import uuid4

import hvac
import hvac.exceptions

from mesh_infra.config import ModelVaultConfig
from mesh_infra.enums import EnumInfraTransportType
from mesh_infra.errors import (
    InfraAuthenticationError,
    InfraTimeoutError,
    InfraUnavailableError,
    ModelInfraErrorContext,
    SecretResolutionError,
)
from mesh_infra.mixins import MixinBlockingExecutor

logger = logging.getLogger(__name__)


class VaultSecretStore(MixinBlockingExecutor):
    """ProtocolSecretStore backed by Vault KV v2.

    Example:
        >>> store = VaultSecretStore(ModelVaultConfig(url="https://vault:8200"))
        >>> await store.put("consul-ecs-web", b"{}")
    """

    def __init__(
        self,
        config: ModelVaultConfig,
        client: hvac.Client | None = None,
    ) -> None:
        self._config = config
        self._client = client if client is not None else self._create_hvac_client(config)
        self._init_executor(
            config.max_concurrent_operations,
            "vault",
            timeout_seconds=config.timeout_seconds,
        )

    @staticmethod
    def _create_hvac_client(config: ModelVaultConfig) -> hvac.Client:
        return hvac.Client(
            url=config.url,
            token=config.token.get_secret_value() if config.token else None,
            namespace=config.namespace,
            timeout=config.timeout_seconds,
            verify=config.verify_ssl,
        )

    def close(self) -> None:
        self._shutdown_executor()

    def _path(self, name: str) -> str:
        prefix = self._config.path_prefix.strip("/")
        return f"{prefix}/{name}" if prefix else name

    def _error_context(self, operation: str, name: str) -> ModelInfraErrorContext:
        return ModelInfraErrorContext(
            transport_type=EnumInfraTransportType.VAULT,
            operation=operation,
            target_name=name,
            correlation_id=uuid4(),
        )

    def _translate(self, error: Exception, operation: str, name: str) -> Exception:
        ctx = self._error_context(operation, name)
        if isinstance(error, TimeoutError):
            return InfraTimeoutError(
                f"Vault {operation} timed out after {self._config.timeout_seconds}s",
                context=ctx,
                timeout_seconds=self._config.timeout_seconds,
            )
        if isinstance(error, (hvac.exceptions.Forbidden, hvac.exceptions.Unauthorized)):
            return InfraAuthenticationError(
                f"Vault denied {operation} for {name}",
                context=ctx,
            )
        if isinstance(error, hvac.exceptions.VaultDown):
            return InfraUnavailableError(
                f"Vault is unavailable for {operation}: {type(error).__name__}",
                context=ctx,
            )
        return SecretResolutionError(
            f"Vault {operation} failed for {name}: {type(error).__name__}",
            context=ctx,
            secret_name=name,
        )

    async def get(self, name: str) -> bytes | None:
        path = self._path(name)

        def read_func() -> dict[str, Any] | None:
            try:
                result = self._client.secrets.kv.v2.read_secret_version(
                    path=path,
                    mount_point=self._config.mount_point,
                    raise_on_deleted_version=True,
                )
            except hvac.exceptions.InvalidPath:
                return None
            data = (result or {}).get("data") or {}
            secret_data = data.get("data")
            return secret_data if isinstance(secret_data, dict) else {}

        try:
            secret_data = await self._run_blocking(read_func)
        except Exception as e:
            raise self._translate(e, "read_secret", name) from e

        if secret_data is None:
            logger.debug("Vault secret %s does not exist", name, extra={"secret_name": name})
            return None
        return json.dumps(secret_data).encode("utf-8")

    async def put(self, name: str, payload: bytes) -> None:
        try:
            document = json.loads(payload) if payload.strip() else {}
        except ValueError as e:
            raise SecretResolutionError(
                f"Refusing to store non-JSON record in Vault secret {name}",
                context=self._error_context("write_secret", name),
                secret_name=name,
            ) from e
        if not isinstance(document, dict):
            raise SecretResolutionError(
                f"Vault secret {name} payload must be a JSON object",
                context=self._error_context("write_secret", name),
                secret_name=name,
            )

        path = self._path(name)

        def write_func() -> None:
            self._client.secrets.kv.v2.create_or_update_secret(
                path=path,
                secret=document,
                mount_point=self._config.mount_point,
            )

        try:
            await self._run_blocking(write_func)
        except Exception as e:
            raise self._translate(e, "write_secret", name) from e


__all__: list[str] = ["VaultSecretStore"]
