# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Consul server discovery and ACL login."""

from mesh_infra.discovery.iam_login import build_iam_bearer_token, sts_endpoint
from mesh_infra.discovery.server_watcher import (
    DEFAULT_DISCOVERY_TIMEOUT_SECONDS,
    DEFAULT_REFRESH_INTERVAL_SECONDS,
    ServerWatcher,
)

__all__: list[str] = [
    "DEFAULT_DISCOVERY_TIMEOUT_SECONDS",
    "DEFAULT_REFRESH_INTERVAL_SECONDS",
    "ServerWatcher",
    "build_iam_bearer_token",
    "sts_endpoint",
]
