# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Bootstrap Phase Enumeration.

Linear phases of a mesh-init run. Every phase can only move forward; a
failure in any phase moves the run to FAILED and aborts the remaining
phases.
"""

from enum import Enum


class EnumBootstrapPhase(str, Enum):
    """Phases of the mesh-init state machine.

    Attributes:
        START: Run created, nothing attempted yet
        DISCOVER_ENDPOINT: Waiting for the first healthy Consul server
        BUILD_PAYLOAD: Building catalog registration entries
        REGISTER_SERVICE: Registering the application service (skipped for gateways)
        REGISTER_PROXY: Registering the sidecar proxy or gateway
        WRITE_ARTIFACTS: Writing files to the shared bootstrap volume
        DONE: Run completed successfully
        FAILED: Run aborted
    """

    START = "start"
    DISCOVER_ENDPOINT = "discover_endpoint"
    BUILD_PAYLOAD = "build_payload"
    REGISTER_SERVICE = "register_service"
    REGISTER_PROXY = "register_proxy"
    WRITE_ARTIFACTS = "write_artifacts"
    DONE = "done"
    FAILED = "failed"


__all__ = ["EnumBootstrapPhase"]
