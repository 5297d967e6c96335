# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Unit tests for the infrastructure error hierarchy."""

from __future__ import annotations

from uuid import uuid4

from mesh_infra.enums import EnumInfraTransportType, EnumResourceKind
from mesh_infra.errors import (
    ConsulAclNotFoundError,
    InfraConnectionError,
    InfraConsulError,
    ModelInfraErrorContext,
    ReconcileAggregateError,
    ReconcileFamilyError,
    RuntimeHostError,
)


class TestRuntimeHostError:
    def test_context_is_flattened(self) -> None:
        correlation_id = uuid4()
        error = RuntimeHostError(
            "Operation failed",
            context=ModelInfraErrorContext(
                transport_type=EnumInfraTransportType.CONSUL,
                operation="catalog_register",
                target_name="consul",
                correlation_id=correlation_id,
            ),
            retry_count=3,
        )

        assert str(error) == "Operation failed"
        assert error.correlation_id == correlation_id
        assert error.context == {
            "retry_count": 3,
            "transport_type": "consul",
            "operation": "catalog_register",
            "target_name": "consul",
        }

    def test_without_context(self) -> None:
        error = RuntimeHostError("plain")

        assert error.context == {}
        assert error.correlation_id is None


class TestConsulErrors:
    def test_not_found_is_a_consul_error(self) -> None:
        error = ConsulAclNotFoundError("ACL not found", accessor_id="abc", status_code=403)

        assert isinstance(error, InfraConsulError)
        assert isinstance(error, InfraConnectionError)
        assert error.accessor_id == "abc"
        assert error.status_code == 403
        assert error.error_code == "RESOURCE_NOT_FOUND"

    def test_status_code_recorded_in_context(self) -> None:
        error = InfraConsulError("failed", status_code=500)

        assert error.context["status_code"] == 500


class TestReconcileErrors:
    def test_aggregate_lists_families(self) -> None:
        errors = [
            ReconcileFamilyError("boom", family="web", kind=EnumResourceKind.INSTANCE_FAMILY),
            ReconcileFamilyError(
                "gone", family="old", kind=EnumResourceKind.ORPHANED_CREDENTIAL
            ),
        ]

        aggregate = ReconcileAggregateError(errors)

        assert aggregate.families == ["web", "old"]
        assert aggregate.errors == tuple(errors)
        assert str(aggregate) == "2 families failed to converge: web: boom; old: gone"
        assert aggregate.context["failed_families"] == ["web", "old"]

    def test_family_error_carries_kind(self) -> None:
        error = ReconcileFamilyError(
            "boom", family="web", kind=EnumResourceKind.INSTANCE_FAMILY
        )

        assert error.context["resource_kind"] == "instance_family"
        assert error.kind is EnumResourceKind.INSTANCE_FAMILY
