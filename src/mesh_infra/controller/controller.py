# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Credential reconciliation controller.

Each pass lists the families that should hold a mesh credential, lists the
controller-owned credentials that exist, and converges every family:

    want            -> InstanceFamilyResource (upsert)
    have \\ want     -> OrphanedCredentialResource (revoke)

Families converge concurrently up to ``max_concurrency``. A family's failure
does not stop the others; all failures of a pass are raised together as a
ReconcileAggregateError once every family was attempted.

Concurrency Safety:
    Passes of one controller are serialized by an asyncio.Lock. Running two
    controllers against the same cluster is not supported.
"""

from __future__ import annotations

import asyncio
import logging
from uuid import uuid4

from mesh_infra.controller.listing import (
    list_existing_credentials,
    list_wanted_families,
)
from mesh_infra.controller.resource import (
    InstanceFamilyResource,
    OrphanedCredentialResource,
    ReconcileResource,
)
from mesh_infra.enums import EnumInfraTransportType
from mesh_infra.errors import (
    ModelInfraErrorContext,
    ReconcileAggregateError,
    ReconcileFamilyError,
)
from mesh_infra.protocols import (
    ProtocolClusterInventory,
    ProtocolControlPlane,
    ProtocolSecretStore,
)
from mesh_infra.utils import sanitize_error_message

logger = logging.getLogger(__name__)

DEFAULT_RECONCILE_INTERVAL_SECONDS: float = 10.0
DEFAULT_MAX_CONCURRENCY: int = 4


class CredentialController:
    """Keeps exactly one live credential per mesh-enabled family."""

    def __init__(
        self,
        inventory: ProtocolClusterInventory,
        control_plane: ProtocolControlPlane,
        secret_store: ProtocolSecretStore,
        secret_prefix: str,
        *,
        max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
        reconcile_interval_seconds: float = DEFAULT_RECONCILE_INTERVAL_SECONDS,
    ) -> None:
        self._inventory = inventory
        self._control_plane = control_plane
        self._secret_store = secret_store
        self._secret_prefix = secret_prefix
        self._max_concurrency = max_concurrency
        self._interval = reconcile_interval_seconds
        self._lock = asyncio.Lock()

    async def build_resources(self) -> list[ReconcileResource]:
        """List desired and actual state and pair them into resources.

        Raises:
            Any listing error, unchanged.
        """
        wanted = await list_wanted_families(self._inventory)
        existing = await list_existing_credentials(self._control_plane)

        resources: list[ReconcileResource] = [
            InstanceFamilyResource(
                family=family,
                secret_prefix=self._secret_prefix,
                control_plane=self._control_plane,
                secret_store=self._secret_store,
                existing=tuple(existing.get(family, ())),
            )
            for family in wanted
        ]
        wanted_set = set(wanted)
        resources.extend(
            OrphanedCredentialResource(
                family=family,
                secret_prefix=self._secret_prefix,
                control_plane=self._control_plane,
                secret_store=self._secret_store,
                credentials=tuple(credentials),
            )
            for family, credentials in existing.items()
            if family not in wanted_set
        )
        return resources

    async def reconcile(self) -> None:
        """Run one reconcile pass.

        Raises:
            ReconcileAggregateError: If one or more families failed.
            Listing errors propagate before any family is touched.
        """
        async with self._lock:
            resources = await self.build_resources()
            errors: list[ReconcileFamilyError] = []
            semaphore = asyncio.Semaphore(self._max_concurrency)

            async def converge(resource: ReconcileResource) -> None:
                async with semaphore:
                    try:
                        await resource.converge()
                    except Exception as e:
                        logger.warning(
                            "Failed to converge %s (%s): %s",
                            resource.family,
                            resource.kind.value,
                            sanitize_error_message(e),
                            extra={"family": resource.family, "kind": resource.kind.value},
                        )
                        errors.append(
                            ReconcileFamilyError(
                                sanitize_error_message(e),
                                family=resource.family,
                                kind=resource.kind,
                                context=ModelInfraErrorContext(
                                    transport_type=EnumInfraTransportType.RUNTIME,
                                    operation=f"converge_{resource.kind.value}",
                                    target_name=resource.family,
                                ),
                            )
                        )

            await asyncio.gather(*(converge(resource) for resource in resources))

            logger.info(
                "Reconciled %d families",
                len(resources),
                extra={"family_count": len(resources), "failed_count": len(errors)},
            )
            if errors:
                raise ReconcileAggregateError(
                    errors,
                    context=ModelInfraErrorContext(
                        transport_type=EnumInfraTransportType.RUNTIME,
                        operation="reconcile",
                        correlation_id=uuid4(),
                    ),
                )

    async def run(self, stop_event: asyncio.Event) -> None:
        """Reconcile every interval until ``stop_event`` is set.

        Pass failures are logged and the loop continues.
        """
        logger.info(
            "Credential controller started",
            extra={"reconcile_interval_seconds": self._interval},
        )
        while not stop_event.is_set():
            try:
                await self.reconcile()
            except asyncio.CancelledError:
                raise
            except Exception as e:
                logger.error(
                    "Reconcile pass failed: %s",
                    sanitize_error_message(e),
                    extra={"error_type": type(e).__name__},
                )
            try:
                await asyncio.wait_for(stop_event.wait(), timeout=self._interval)
            except TimeoutError:
                continue
        logger.info("Credential controller stopped")


__all__: list[str] = [
    "DEFAULT_MAX_CONCURRENCY",
    "DEFAULT_RECONCILE_INTERVAL_SECONDS",
    "CredentialController",
]
