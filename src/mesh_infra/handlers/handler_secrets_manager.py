# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""AWS Secrets Manager Secret Store.

Records are stored as the ``SecretString`` of one secret per family. Secrets
are normally provisioned ahead of time with an empty ``{}`` value; a missing
secret is created on first write.
"""

from __future__ import annotations

import logging
from typing import Any
from uuid import uuid4

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from mesh_infra.enums import EnumInfraTransportType
from mesh_infra.errors import (
    InfraAuthenticationError,
    InfraTimeoutError,
    ModelInfraErrorContext,
    SecretResolutionError,
)
from mesh_infra.mixins import MixinBlockingExecutor

logger = logging.getLogger(__name__)

_NOT_FOUND_CODES: frozenset[str] = frozenset({"ResourceNotFoundException"})
_AUTH_CODES: frozenset[str] = frozenset(
    {"AccessDeniedException", "UnrecognizedClientException", "ExpiredTokenException"}
)


def _error_code(error: ClientError) -> str:
    return str(error.response.get("Error", {}).get("Code", ""))


class SecretsManagerSecretStore(MixinBlockingExecutor):
    """ProtocolSecretStore backed by AWS Secrets Manager."""

    def __init__(
        self,
        client: Any | None = None,
        region: str | None = None,
        max_workers: int = 4,
        timeout_seconds: float = 30.0,
    ) -> None:
        self._client = client if client is not None else boto3.client(
            "secretsmanager", region_name=region
        )
        self._timeout_seconds = timeout_seconds
        self._init_executor(max_workers, "secretsmanager", timeout_seconds=timeout_seconds)

    def close(self) -> None:
        self._shutdown_executor()

    def _translate(self, error: Exception, operation: str, name: str) -> Exception:
        ctx = ModelInfraErrorContext(
            transport_type=EnumInfraTransportType.SECRETS_MANAGER,
            operation=operation,
            target_name=name,
            correlation_id=uuid4(),
        )
        if isinstance(error, TimeoutError):
            return InfraTimeoutError(
                f"Secrets Manager {operation} timed out after {self._timeout_seconds}s",
                context=ctx,
                timeout_seconds=self._timeout_seconds,
            )
        if isinstance(error, ClientError) and _error_code(error) in _AUTH_CODES:
            return InfraAuthenticationError(
                f"Secrets Manager denied {operation} for {name}",
                context=ctx,
            )
        code = _error_code(error) if isinstance(error, ClientError) else type(error).__name__
        return SecretResolutionError(
            f"Secrets Manager {operation} failed for {name}: {code}",
            context=ctx,
            secret_name=name,
        )

    async def get(self, name: str) -> bytes | None:
        def read_func() -> bytes | None:
            try:
                response = self._client.get_secret_value(SecretId=name)
            except ClientError as e:
                if _error_code(e) in _NOT_FOUND_CODES:
                    return None
                raise
            value = response.get("SecretString")
            if value is None:
                binary = response.get("SecretBinary")
                return bytes(binary) if binary is not None else None
            return str(value).encode("utf-8")

        try:
            return await self._run_blocking(read_func)
        except (ClientError, BotoCoreError, TimeoutError) as e:
            raise self._translate(e, "get_secret_value", name) from e

    async def put(self, name: str, payload: bytes) -> None:
        value = payload.decode("utf-8")

        def write_func() -> None:
            try:
                self._client.update_secret(SecretId=name, SecretString=value)
            except ClientError as e:
                if _error_code(e) not in _NOT_FOUND_CODES:
                    raise
                logger.info(
                    "Secret %s does not exist, creating it",
                    name,
                    extra={"secret_name": name},
                )
                self._client.create_secret(Name=name, SecretString=value)

        try:
            await self._run_blocking(write_func)
        except (ClientError, BotoCoreError, TimeoutError) as e:
            raise self._translate(e, "update_secret", name) from e


__all__: list[str] = ["SecretsManagerSecretStore"]
