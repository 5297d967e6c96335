# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Mesh Infrastructure Layer - workload bootstrap and credential reconciliation.

This package joins ECS workloads to a Consul service mesh and keeps their
ACL credentials consistent with the tasks running in a cluster:

- mesh-init: one-shot bootstrap that registers a task's service and sidecar
  proxy (or gateway) and writes the dataplane configuration artifacts
- controller: periodic reconciliation of per-family ACL tokens against a
  secret store (AWS Secrets Manager or Vault KV v2)

Key Components:
    - MeshInitCommand: bootstrap orchestrator (mesh_infra.bootstrap)
    - CredentialController: reconciliation controller (mesh_infra.controller)
    - ServerWatcher: background Consul server discovery (mesh_infra.discovery)
    - Transport-aware error handling with ModelInfraErrorContext
"""

__version__: str = "0.4.0"

__all__: list[str] = ["__version__"]
