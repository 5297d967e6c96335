# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Consul Control-Plane Client over the HTTP API.

python-consul predates ACL service identities and auth method login, so the
catalog and ACL endpoints are called directly with httpx.

Security Features:
    - SecretStr protection for ACL tokens (prevents accidental logging)
    - Sanitized error messages (never expose tokens in logs)
    - Response bodies are only inspected for the ACL not-found marker

Supported Operations:
    - register_catalog_entry: PUT /v1/catalog/register
    - list_credentials: GET /v1/acl/tokens
    - create_credential: PUT /v1/acl/token
    - read_credential: GET /v1/acl/token/<accessor>
    - delete_credential: DELETE /v1/acl/token/<accessor>
    - login / logout: POST /v1/acl/login, POST /v1/acl/logout
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any
from uuid import UUID, uuid4

import httpx
from pydantic import SecretStr

from mesh_infra.config import ModelConsulClientConfig
from mesh_infra.enums import EnumInfraTransportType
from mesh_infra.errors import (
    ConsulAclNotFoundError,
    InfraAuthenticationError,
    InfraConnectionError,
    InfraConsulError,
    InfraTimeoutError,
    ModelInfraErrorContext,
)
from mesh_infra.models import ModelCatalogEntry, ModelCredential

logger = logging.getLogger(__name__)

TOKEN_HEADER: str = "X-Consul-Token"
ACL_NOT_FOUND_MARKER: str = "acl not found"


def credential_description(family: str) -> str:
    return f"Token for {family} service"


class ConsulControlPlaneClient:
    """Async Consul HTTP client implementing ProtocolControlPlane.

    Example:
        >>> config = ModelConsulClientConfig(address="https://10.0.0.4:8501")
        >>> async with ConsulControlPlaneClient(config) as client:
        ...     await client.register_catalog_entry(entry)
    """

    def __init__(
        self,
        config: ModelConsulClientConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Create the client.

        Args:
            config: Address, token and TLS settings
            transport: Optional transport override (used by tests)
        """
        self._config = config
        verify: bool | str = config.verify_ssl
        if config.verify_ssl and config.ca_file:
            verify = config.ca_file
        self._client = httpx.AsyncClient(
            base_url=config.address,
            timeout=httpx.Timeout(config.timeout_seconds),
            verify=verify,
            transport=transport,
        )

    async def __aenter__(self) -> ConsulControlPlaneClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    def _error_context(
        self,
        operation: str,
        target_name: str | None,
        correlation_id: UUID,
    ) -> ModelInfraErrorContext:
        return ModelInfraErrorContext(
            transport_type=EnumInfraTransportType.CONSUL,
            operation=operation,
            target_name=target_name or self._config.address,
            correlation_id=correlation_id,
        )

    def _params(self) -> dict[str, str]:
        if self._config.partition:
            return {"partition": self._config.partition}
        return {}

    async def _request(
        self,
        method: str,
        path: str,
        operation: str,
        *,
        json: Any = None,
        params: Mapping[str, str] | None = None,
        token: SecretStr | None = None,
        accessor_id: str | None = None,
    ) -> httpx.Response:
        correlation_id = uuid4()
        ctx = self._error_context(operation, accessor_id, correlation_id)
        headers: dict[str, str] = {}
        auth = token if token is not None else self._config.token
        if auth is not None:
            headers[TOKEN_HEADER] = auth.get_secret_value()

        try:
            response = await self._client.request(
                method,
                path,
                json=json,
                params={**self._params(), **(params or {})},
                headers=headers,
            )
        except httpx.TimeoutException as e:
            raise InfraTimeoutError(
                f"Consul {operation} timed out after {self._config.timeout_seconds}s",
                context=ctx,
                timeout_seconds=self._config.timeout_seconds,
            ) from e
        except httpx.ConnectError as e:
            raise InfraConnectionError(
                f"Failed to connect to Consul at {self._config.address}",
                context=ctx,
            ) from e
        except httpx.HTTPError as e:
            raise InfraConnectionError(
                f"HTTP error during Consul {operation}: {type(e).__name__}",
                context=ctx,
            ) from e

        if response.status_code >= 400:
            self._raise_for_status(response, ctx, operation, accessor_id)
        return response

    def _raise_for_status(
        self,
        response: httpx.Response,
        ctx: ModelInfraErrorContext,
        operation: str,
        accessor_id: str | None,
    ) -> None:
        status = response.status_code
        body = response.text.lower()
        if accessor_id is not None and (
            status == 404 or (status == 403 and ACL_NOT_FOUND_MARKER in body)
        ):
            raise ConsulAclNotFoundError(
                f"ACL token {accessor_id} not found",
                accessor_id=accessor_id,
                context=ctx,
                status_code=status,
            )
        if status in (401, 403):
            raise InfraAuthenticationError(
                f"Consul rejected {operation}: permission denied",
                context=ctx,
                status_code=status,
            )
        raise InfraConsulError(
            f"Consul {operation} failed with HTTP {status}",
            context=ctx,
            status_code=status,
        )

    async def register_catalog_entry(self, entry: ModelCatalogEntry) -> None:
        await self._request(
            "PUT",
            "/v1/catalog/register",
            "catalog_register",
            json=entry.to_consul_payload(),
        )
        logger.debug(
            "Registered catalog entry",
            extra={
                "service_id": entry.service.id,
                "service_kind": entry.service.kind.value,
                "node": entry.node,
            },
        )

    async def list_credentials(self) -> Sequence[ModelCredential]:
        response = await self._request("GET", "/v1/acl/tokens", "acl_token_list")
        return [ModelCredential.from_consul(item) for item in response.json() or []]

    async def create_credential(self, family: str) -> ModelCredential:
        response = await self._request(
            "PUT",
            "/v1/acl/token",
            "acl_token_create",
            json={
                "Description": credential_description(family),
                "ServiceIdentities": [{"ServiceName": family}],
            },
        )
        credential = ModelCredential.from_consul(response.json())
        logger.info(
            "Created ACL token for %s",
            family,
            extra={"family": family, "accessor_id": credential.accessor_id},
        )
        return credential

    async def read_credential(self, accessor_id: str) -> ModelCredential:
        response = await self._request(
            "GET",
            f"/v1/acl/token/{accessor_id}",
            "acl_token_read",
            accessor_id=accessor_id,
        )
        return ModelCredential.from_consul(response.json())

    async def delete_credential(self, accessor_id: str) -> None:
        await self._request(
            "DELETE",
            f"/v1/acl/token/{accessor_id}",
            "acl_token_delete",
            accessor_id=accessor_id,
        )
        logger.info("Deleted ACL token", extra={"accessor_id": accessor_id})

    async def login(
        self,
        auth_method: str,
        bearer_token: str,
        meta: Mapping[str, str] | None = None,
        datacenter: str | None = None,
    ) -> ModelCredential:
        params = {"dc": datacenter} if datacenter else None
        response = await self._request(
            "POST",
            "/v1/acl/login",
            "acl_login",
            json={
                "AuthMethod": auth_method,
                "BearerToken": bearer_token,
                "Meta": dict(meta or {}),
            },
            params=params,
        )
        credential = ModelCredential.from_consul(response.json())
        logger.info(
            "Logged in to Consul with auth method %s",
            auth_method,
            extra={"auth_method": auth_method, "accessor_id": credential.accessor_id},
        )
        return credential

    async def logout(self, token: SecretStr) -> None:
        await self._request("POST", "/v1/acl/logout", "acl_logout", token=token)


__all__: list[str] = [
    "ACL_NOT_FOUND_MARKER",
    "TOKEN_HEADER",
    "ConsulControlPlaneClient",
    "credential_description",
]
