# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Reconcile resources: one per workload family per pass.

``ReconcileResource`` is a closed union of two variants:

    InstanceFamilyResource      family has running mesh tasks; converge by
                                making sure exactly one live credential
                                exists and is recorded in the secret store
    OrphanedCredentialResource  family has credentials but no tasks;
                                converge by revoking them and clearing the
                                record

Within a family every write is preceded by the read it depends on, and
credential deletion always happens before the record is cleared.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import ClassVar, Union

from pydantic import SecretStr

from mesh_infra.enums import EnumResourceKind
from mesh_infra.errors import ConsulAclNotFoundError, RuntimeHostError
from mesh_infra.models import (
    EMPTY_SECRET_RECORD,
    ModelCredential,
    ModelSecretRecord,
    secret_name,
)
from mesh_infra.protocols import ProtocolControlPlane, ProtocolSecretStore
from mesh_infra.utils import sanitize_error_message

logger = logging.getLogger(__name__)


async def _read_record(store: ProtocolSecretStore, name: str) -> ModelSecretRecord:
    return ModelSecretRecord.from_payload(await store.get(name))


async def _write_record(
    store: ProtocolSecretStore, name: str, record: ModelSecretRecord
) -> None:
    await store.put(name, record.to_payload())


def _record_for(credential: ModelCredential) -> ModelSecretRecord:
    return ModelSecretRecord(
        accessor_id=credential.accessor_id,
        token=credential.secret_id or SecretStr(""),
    )


@dataclass(frozen=True)
class InstanceFamilyResource:
    """A family that should hold exactly one live credential."""

    kind: ClassVar[EnumResourceKind] = EnumResourceKind.INSTANCE_FAMILY

    family: str
    secret_prefix: str
    control_plane: ProtocolControlPlane
    secret_store: ProtocolSecretStore
    existing: tuple[ModelCredential, ...] = field(default_factory=tuple)

    @property
    def secret_name(self) -> str:
        return secret_name(self.secret_prefix, self.family)

    async def converge(self) -> None:
        """Ensure the family's record points at a live credential.

        Raises:
            RuntimeHostError: If any read or write fails; the failure is
                limited to this family.
        """
        record = await _read_record(self.secret_store, self.secret_name)

        live = await self._live_credential(record)
        if live is not None:
            await self._revoke_others(keep=live.accessor_id)
            logger.debug(
                "Credential for %s is live, nothing to do",
                self.family,
                extra={"family": self.family, "accessor_id": live.accessor_id},
            )
            return

        adopted = await self._adopt_existing()
        if adopted is not None:
            await _write_record(self.secret_store, self.secret_name, _record_for(adopted))
            await self._revoke_others(keep=adopted.accessor_id)
            logger.info(
                "Adopted existing credential for %s",
                self.family,
                extra={"family": self.family, "accessor_id": adopted.accessor_id},
            )
            return

        credential = await self.control_plane.create_credential(self.family)
        await _write_record(self.secret_store, self.secret_name, _record_for(credential))
        logger.info(
            "Issued credential for %s",
            self.family,
            extra={"family": self.family, "accessor_id": credential.accessor_id},
        )

    async def _live_credential(self, record: ModelSecretRecord) -> ModelCredential | None:
        if record.is_empty:
            return None
        try:
            credential = await self.control_plane.read_credential(record.accessor_id)
        except ConsulAclNotFoundError:
            logger.info(
                "Recorded credential for %s no longer exists",
                self.family,
                extra={"family": self.family, "accessor_id": record.accessor_id},
            )
            return None
        if credential.owned_family != self.family:
            logger.warning(
                "Recorded credential for %s belongs to %s, replacing it",
                self.family,
                credential.owned_family,
                extra={"family": self.family, "accessor_id": record.accessor_id},
            )
            return None
        return credential

    async def _adopt_existing(self) -> ModelCredential | None:
        for candidate in self.existing:
            try:
                credential = await self.control_plane.read_credential(candidate.accessor_id)
            except ConsulAclNotFoundError:
                continue
            if credential.secret_id is not None:
                return credential
        return None

    async def _revoke_others(self, keep: str) -> None:
        for credential in self.existing:
            if credential.accessor_id == keep:
                continue
            try:
                await self.control_plane.delete_credential(credential.accessor_id)
            except ConsulAclNotFoundError:
                continue
            logger.info(
                "Revoked duplicate credential for %s",
                self.family,
                extra={"family": self.family, "accessor_id": credential.accessor_id},
            )


@dataclass(frozen=True)
class OrphanedCredentialResource:
    """A family whose credentials outlived its tasks."""

    kind: ClassVar[EnumResourceKind] = EnumResourceKind.ORPHANED_CREDENTIAL

    family: str
    secret_prefix: str
    control_plane: ProtocolControlPlane
    secret_store: ProtocolSecretStore
    credentials: tuple[ModelCredential, ...] = field(default_factory=tuple)

    @property
    def secret_name(self) -> str:
        return secret_name(self.secret_prefix, self.family)

    async def converge(self) -> None:
        """Delete every credential, then clear the record.

        A failure to clear the record after the credentials are gone is
        logged and left for the next pass: the stale record then points at
        a missing credential, which the family's next upsert treats as empty.

        Raises:
            RuntimeHostError: If a credential cannot be deleted.
        """
        for credential in self.credentials:
            try:
                await self.control_plane.delete_credential(credential.accessor_id)
            except ConsulAclNotFoundError:
                logger.debug(
                    "Credential already gone",
                    extra={"family": self.family, "accessor_id": credential.accessor_id},
                )
        logger.info(
            "Revoked %d orphaned credentials for %s",
            len(self.credentials),
            self.family,
            extra={"family": self.family},
        )

        try:
            await _write_record(self.secret_store, self.secret_name, EMPTY_SECRET_RECORD)
        except RuntimeHostError as e:
            logger.warning(
                "Credentials for %s were revoked but clearing secret %s failed; "
                "it will be cleaned up on the next pass: %s",
                self.family,
                self.secret_name,
                sanitize_error_message(e),
                extra={"family": self.family, "secret_name": self.secret_name},
            )


ReconcileResource = Union[InstanceFamilyResource, OrphanedCredentialResource]

__all__: list[str] = [
    "InstanceFamilyResource",
    "OrphanedCredentialResource",
    "ReconcileResource",
]
