# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Credential Reconciliation Error Classes.

Per-family failures are isolated: each one is wrapped in a
ReconcileFamilyError, and a pass that had any of them raises a single
ReconcileAggregateError once every family has been attempted.
"""

from collections.abc import Sequence
from typing import ClassVar, Optional

from mesh_infra.enums import EnumResourceKind
from mesh_infra.errors.infra_errors import RuntimeHostError
from mesh_infra.errors.model_infra_error_context import ModelInfraErrorContext


class ReconcileFamilyError(RuntimeHostError):
    """Convergence of a single workload family failed."""

    error_code: ClassVar[str] = "RECONCILE_FAMILY_FAILED"

    def __init__(
        self,
        message: str,
        family: str,
        kind: EnumResourceKind,
        context: Optional[ModelInfraErrorContext] = None,
    ) -> None:
        super().__init__(
            message=message,
            context=context,
            family=family,
            resource_kind=kind.value,
        )
        self.family = family
        self.kind = kind


class ReconcileAggregateError(RuntimeHostError):
    """One or more families failed to converge during a reconcile pass.

    Attributes:
        errors: Per-family failures, in the order they were collected
    """

    error_code: ClassVar[str] = "RECONCILE_PARTIAL_FAILURE"

    def __init__(
        self,
        errors: Sequence[ReconcileFamilyError],
        context: Optional[ModelInfraErrorContext] = None,
    ) -> None:
        self.errors: tuple[ReconcileFamilyError, ...] = tuple(errors)
        details = "; ".join(f"{e.family}: {e.message}" for e in self.errors)
        super().__init__(
            message=f"{len(self.errors)} families failed to converge: {details}",
            context=context,
            failed_families=[e.family for e in self.errors],
        )

    @property
    def families(self) -> list[str]:
        return [e.family for e in self.errors]


__all__: list[str] = [
    "ReconcileAggregateError",
    "ReconcileFamilyError",
]
