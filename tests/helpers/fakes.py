# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""In-memory implementations of the mesh_infra protocols."""

from __future__ import annotations

import itertools
from collections.abc import Mapping, Sequence

from pydantic import SecretStr

from mesh_infra.errors import (
    ConsulAclNotFoundError,
    InfraConsulError,
    SecretResolutionError,
)
from mesh_infra.handlers import credential_description
from mesh_infra.models import (
    MESH_TAG,
    ModelCatalogEntry,
    ModelClusterTask,
    ModelCredential,
    ModelInventoryPage,
    ModelServerState,
    ModelWorkloadInstance,
)


def make_task(family: str, index: int = 0, mesh: bool = True) -> ModelClusterTask:
    tags = {MESH_TAG: "true"} if mesh else {}
    return ModelClusterTask(
        task_arn=f"arn:aws:ecs:us-east-1:123456789012:task/test/{family}-{index}",
        family=family,
        tags=tags,
    )


class FakeClusterInventory:
    """Serves pre-built pages; cursors are page indexes."""

    def __init__(self, pages: Sequence[Sequence[ModelClusterTask]]) -> None:
        self.pages = [tuple(page) for page in pages]
        self.requested_cursors: list[str | None] = []

    async def list_tagged_instances(self, cursor: str | None) -> ModelInventoryPage:
        self.requested_cursors.append(cursor)
        index = int(cursor) if cursor else 0
        next_cursor = str(index + 1) if index + 1 < len(self.pages) else None
        return ModelInventoryPage(instances=self.pages[index], next_cursor=next_cursor)


class FakeControlPlane:
    """Token store keyed by accessor ID, plus a log of catalog registrations."""

    def __init__(self) -> None:
        self.tokens: dict[str, ModelCredential] = {}
        self.registered: list[ModelCatalogEntry] = []
        self.register_failures = 0
        self.fail_reads: set[str] = set()
        self.fail_deletes: set[str] = set()
        self.calls: list[tuple[str, str]] = []
        self.logged_out: list[str] = []
        self._ids = itertools.count(1)

    def add_token(self, family: str | None, *identities: str) -> ModelCredential:
        n = next(self._ids)
        names = identities or ((family,) if family else ())
        credential = ModelCredential(
            accessor_id=f"accessor-{n}",
            secret_id=SecretStr(f"secret-{n}"),
            description=credential_description(family or "other"),
            service_identities=tuple(names),
        )
        self.tokens[credential.accessor_id] = credential
        return credential

    def live_for(self, family: str) -> list[ModelCredential]:
        return [t for t in self.tokens.values() if t.owned_family == family]

    async def register_catalog_entry(self, entry: ModelCatalogEntry) -> None:
        self.calls.append(("register", entry.service.id))
        if self.register_failures > 0:
            self.register_failures -= 1
            raise InfraConsulError("Consul catalog_register failed with HTTP 500", status_code=500)
        self.registered.append(entry)

    async def list_credentials(self) -> Sequence[ModelCredential]:
        self.calls.append(("list", ""))
        # Listing redacts secrets, like a token list without acl:write.
        return [t.model_copy(update={"secret_id": None}) for t in self.tokens.values()]

    async def create_credential(self, family: str) -> ModelCredential:
        self.calls.append(("create", family))
        return self.add_token(family)

    async def read_credential(self, accessor_id: str) -> ModelCredential:
        self.calls.append(("read", accessor_id))
        if accessor_id in self.fail_reads:
            raise InfraConsulError("Consul acl_token_read failed with HTTP 500", status_code=500)
        if accessor_id not in self.tokens:
            raise ConsulAclNotFoundError("ACL not found", accessor_id=accessor_id, status_code=403)
        return self.tokens[accessor_id]

    async def delete_credential(self, accessor_id: str) -> None:
        self.calls.append(("delete", accessor_id))
        if accessor_id in self.fail_deletes:
            raise InfraConsulError("Consul acl_token_delete failed with HTTP 500", status_code=500)
        if self.tokens.pop(accessor_id, None) is None:
            raise ConsulAclNotFoundError("ACL not found", accessor_id=accessor_id, status_code=403)

    async def login(
        self,
        auth_method: str,
        bearer_token: str,
        meta: Mapping[str, str] | None = None,
        datacenter: str | None = None,
    ) -> ModelCredential:
        self.calls.append(("login", auth_method))
        return self.add_token(None)

    async def logout(self, token: SecretStr) -> None:
        self.logged_out.append(token.get_secret_value())


class FakeSecretStore:
    """Dict-backed secret store."""

    def __init__(self, initial: Mapping[str, bytes] | None = None) -> None:
        self.values: dict[str, bytes] = dict(initial or {})
        self.fail_puts: set[str] = set()
        self.fail_gets: set[str] = set()
        self.puts: list[tuple[str, bytes]] = []

    async def get(self, name: str) -> bytes | None:
        if name in self.fail_gets:
            raise SecretResolutionError(f"Secrets Manager get_secret_value failed for {name}")
        return self.values.get(name)

    async def put(self, name: str, payload: bytes) -> None:
        if name in self.fail_puts:
            raise SecretResolutionError(f"Secrets Manager update_secret failed for {name}")
        self.puts.append((name, payload))
        self.values[name] = payload


class FakeInstanceMetadata:
    def __init__(self, instance: ModelWorkloadInstance) -> None:
        self.instance = instance

    async def fetch(self) -> ModelWorkloadInstance:
        return self.instance


class FakeServerWatcher:
    """Async context manager exposing a fixed state."""

    def __init__(
        self,
        state: ModelServerState | None = None,
        bearer_token: str | None = None,
        error: Exception | None = None,
    ) -> None:
        self._state = state or ModelServerState(address="10.0.0.2")
        self._error = error
        self.bearer_token = bearer_token
        self.entered = False
        self.exited = False

    async def __aenter__(self) -> FakeServerWatcher:
        self.entered = True
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        self.exited = True

    async def state(self) -> ModelServerState:
        if self._error is not None:
            raise self._error
        return self._state


class RecordingSleep:
    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)
