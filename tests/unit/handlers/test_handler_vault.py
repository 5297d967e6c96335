# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Unit tests for VaultSecretStore using a mocked hvac client."""

from __future__ import annotations

import json
from collections.abc import Iterator
from unittest.mock import MagicMock

import hvac.exceptions
import pytest
from pydantic import SecretStr

from mesh_infra.config import ModelVaultConfig
from mesh_infra.errors import (
    InfraAuthenticationError,
    InfraUnavailableError,
    SecretResolutionError,
)
from mesh_infra.handlers import VaultSecretStore


@pytest.fixture
def vault_config() -> ModelVaultConfig:
    return ModelVaultConfig(
        url="https://vault.example.com:8200",
        token=SecretStr("s.test-token"),
        mount_point="kv",
        path_prefix="consul-ecs/",
    )


@pytest.fixture
def mock_hvac_client() -> MagicMock:
    client = MagicMock()
    client.secrets.kv.v2.read_secret_version.return_value = {
        "data": {"data": {"accessor_id": "a1", "token": "s1"}, "metadata": {"version": 3}}
    }
    return client


@pytest.fixture
def store(
    vault_config: ModelVaultConfig, mock_hvac_client: MagicMock
) -> Iterator[VaultSecretStore]:
    store = VaultSecretStore(vault_config, client=mock_hvac_client)
    yield store
    store.close()


class TestVaultGet:
    @pytest.mark.asyncio
    async def test_get_returns_record_fields_as_json(
        self, store: VaultSecretStore, mock_hvac_client: MagicMock
    ) -> None:
        payload = await store.get("web")

        assert json.loads(payload or b"") == {"accessor_id": "a1", "token": "s1"}
        mock_hvac_client.secrets.kv.v2.read_secret_version.assert_called_once_with(
            path="consul-ecs/web",
            mount_point="kv",
            raise_on_deleted_version=True,
        )

    @pytest.mark.asyncio
    async def test_missing_path_returns_none(
        self, store: VaultSecretStore, mock_hvac_client: MagicMock
    ) -> None:
        mock_hvac_client.secrets.kv.v2.read_secret_version.side_effect = (
            hvac.exceptions.InvalidPath("not found")
        )

        assert await store.get("web") is None

    @pytest.mark.asyncio
    async def test_forbidden_is_authentication_error(
        self, store: VaultSecretStore, mock_hvac_client: MagicMock
    ) -> None:
        mock_hvac_client.secrets.kv.v2.read_secret_version.side_effect = (
            hvac.exceptions.Forbidden("permission denied")
        )

        with pytest.raises(InfraAuthenticationError):
            await store.get("web")

    @pytest.mark.asyncio
    async def test_sealed_vault_is_unavailable(
        self, store: VaultSecretStore, mock_hvac_client: MagicMock
    ) -> None:
        mock_hvac_client.secrets.kv.v2.read_secret_version.side_effect = (
            hvac.exceptions.VaultDown("sealed")
        )

        with pytest.raises(InfraUnavailableError):
            await store.get("web")


class TestVaultPut:
    @pytest.mark.asyncio
    async def test_put_writes_record_fields(
        self, store: VaultSecretStore, mock_hvac_client: MagicMock
    ) -> None:
        await store.put("web", b'{"accessor_id": "a2", "token": "s2"}')

        mock_hvac_client.secrets.kv.v2.create_or_update_secret.assert_called_once_with(
            path="consul-ecs/web",
            secret={"accessor_id": "a2", "token": "s2"},
            mount_point="kv",
        )

    @pytest.mark.asyncio
    async def test_put_empty_record(
        self, store: VaultSecretStore, mock_hvac_client: MagicMock
    ) -> None:
        await store.put("web", b"{}")

        kwargs = mock_hvac_client.secrets.kv.v2.create_or_update_secret.call_args.kwargs
        assert kwargs["secret"] == {}

    @pytest.mark.asyncio
    async def test_put_rejects_non_object(
        self, store: VaultSecretStore, mock_hvac_client: MagicMock
    ) -> None:
        with pytest.raises(SecretResolutionError):
            await store.put("web", b"[1, 2]")

        mock_hvac_client.secrets.kv.v2.create_or_update_secret.assert_not_called()

    @pytest.mark.asyncio
    async def test_unexpected_error_does_not_leak_token(
        self, store: VaultSecretStore, mock_hvac_client: MagicMock
    ) -> None:
        mock_hvac_client.secrets.kv.v2.create_or_update_secret.side_effect = (
            hvac.exceptions.InternalServerError("boom s.test-token")
        )

        with pytest.raises(SecretResolutionError) as exc_info:
            await store.put("web", b"{}")

        assert "s.test-token" not in str(exc_info.value)
