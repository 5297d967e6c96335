# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""ECS task metadata endpoint (v4) client."""

from __future__ import annotations

import os
from collections.abc import Mapping
from uuid import uuid4

import httpx

from mesh_infra.enums import EnumInfraTransportType
from mesh_infra.errors import (
    InfraConnectionError,
    InfraTimeoutError,
    ModelInfraErrorContext,
    ProtocolConfigurationError,
    SecretResolutionError,
)
from mesh_infra.models import ModelWorkloadInstance

METADATA_URI_ENV_VAR: str = "ECS_CONTAINER_METADATA_URI_V4"


class TaskMetadataClient:
    """ProtocolInstanceMetadata reading ``$ECS_CONTAINER_METADATA_URI_V4/task``."""

    def __init__(
        self,
        base_url: str | None = None,
        environ: Mapping[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout_seconds: float = 10.0,
    ) -> None:
        self._environ = os.environ if environ is None else environ
        self._base_url = base_url or self._environ.get(METADATA_URI_ENV_VAR, "")
        self._transport = transport
        self._timeout_seconds = timeout_seconds

    async def fetch(self) -> ModelWorkloadInstance:
        """Read and parse the task metadata document.

        Raises:
            ProtocolConfigurationError: If the metadata URI is not set.
            InfraTimeoutError: If the endpoint does not answer in time.
            InfraConnectionError: If the endpoint cannot be reached.
            SecretResolutionError: If the document is not usable.
        """
        ctx = ModelInfraErrorContext(
            transport_type=EnumInfraTransportType.METADATA,
            operation="fetch_task_metadata",
            target_name=self._base_url or METADATA_URI_ENV_VAR,
            correlation_id=uuid4(),
        )
        if not self._base_url:
            raise ProtocolConfigurationError(
                f"{METADATA_URI_ENV_VAR} is not set; not running in ECS?",
                context=ctx,
            )

        url = f"{self._base_url.rstrip('/')}/task"
        try:
            async with httpx.AsyncClient(
                timeout=httpx.Timeout(self._timeout_seconds),
                transport=self._transport,
            ) as client:
                response = await client.get(url)
                response.raise_for_status()
                document = response.json()
        except httpx.TimeoutException as e:
            raise InfraTimeoutError(
                f"Task metadata request timed out after {self._timeout_seconds}s",
                context=ctx,
                timeout_seconds=self._timeout_seconds,
            ) from e
        except httpx.HTTPStatusError as e:
            raise InfraConnectionError(
                f"Task metadata endpoint returned HTTP {e.response.status_code}",
                context=ctx,
            ) from e
        except httpx.HTTPError as e:
            raise InfraConnectionError(
                f"Failed to reach task metadata endpoint: {type(e).__name__}",
                context=ctx,
            ) from e
        except ValueError as e:
            raise SecretResolutionError(
                "Task metadata response is not valid JSON",
                context=ctx,
            ) from e

        if not isinstance(document, dict):
            raise SecretResolutionError("Task metadata must be a JSON object", context=ctx)
        try:
            return ModelWorkloadInstance.from_task_metadata(document, self._environ)
        except ValueError as e:
            raise SecretResolutionError(
                f"Unusable task metadata: {e}",
                context=ctx,
            ) from e


__all__: list[str] = ["METADATA_URI_ENV_VAR", "TaskMetadataClient"]
