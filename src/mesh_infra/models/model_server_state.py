# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Snapshot published by the Consul server watcher."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, SecretStr


class ModelServerState(BaseModel):
    """A healthy Consul server and the ACL token to use with it.

    Attributes:
        address: IP address or hostname of the healthy server
        token: ACL token obtained by login, or the static token; ``None``
            when ACLs are not in use
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    address: str
    token: SecretStr | None = None


__all__: list[str] = ["ModelServerState"]
