# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Mesh Infrastructure Errors Module.

Exports:
    ModelInfraErrorContext: Configuration model for bundled error context
    RuntimeHostError: Base infrastructure error class
    ProtocolConfigurationError: Configuration validation errors
    SecretResolutionError: Secret store and metadata errors
    InfraConnectionError: Infrastructure connection errors
    InfraTimeoutError: Infrastructure timeout errors
    InfraAuthenticationError: Infrastructure authentication errors
    InfraUnavailableError: No healthy endpoint available
    ArtifactWriteError: Bootstrap artifact I/O errors
    InfraConsulError: Consul API errors
    ConsulAclNotFoundError: Typed ACL token not-found condition
    ReconcileFamilyError: One family failed to converge
    ReconcileAggregateError: Combined per-family failures of one pass

Error Sanitization Guidelines:
    NEVER include in error messages or context:
        - ACL token secret IDs, Vault tokens, AWS credentials
        - IAM bearer tokens used for ACL login
        - CA certificate contents

    SAFE to include:
        - Family and service names
        - Secret names (never their values)
        - ACL token accessor IDs
        - Operation names and correlation IDs
"""

from mesh_infra.errors.error_consul import ConsulAclNotFoundError, InfraConsulError
from mesh_infra.errors.error_reconcile import (
    ReconcileAggregateError,
    ReconcileFamilyError,
)
from mesh_infra.errors.infra_errors import (
    ArtifactWriteError,
    InfraAuthenticationError,
    InfraConnectionError,
    InfraTimeoutError,
    InfraUnavailableError,
    ProtocolConfigurationError,
    RuntimeHostError,
    SecretResolutionError,
)
from mesh_infra.errors.model_infra_error_context import ModelInfraErrorContext

__all__: list[str] = [
    "ArtifactWriteError",
    "ConsulAclNotFoundError",
    "InfraAuthenticationError",
    "InfraConnectionError",
    "InfraConsulError",
    "InfraTimeoutError",
    "InfraUnavailableError",
    "ModelInfraErrorContext",
    "ProtocolConfigurationError",
    "ReconcileAggregateError",
    "ReconcileFamilyError",
    "RuntimeHostError",
    "SecretResolutionError",
]
