# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Consul ACL login settings (AWS IAM auth method)."""

from __future__ import annotations

from pydantic import Field

from mesh_infra.config.model_mesh_config_base import ModelMeshConfigBase

DEFAULT_AUTH_METHOD: str = "iam-ecs-service-token"


class ModelConsulLoginConfig(ModelMeshConfigBase):
    """How mesh-init and the dataplane obtain an ACL token.

    Attributes:
        enabled: Log in through the auth method instead of using no token
        method: Name of the Consul auth method
        datacenter: Datacenter of the auth method
        meta: Extra metadata attached to the login token
        region: Region of the STS endpoint; defaults to the task region
        sts_endpoint: Override for the STS endpoint URL
        server_id_header_value: Value of ``X-Consul-IAM-ServerID`` the auth
            method requires, if any
    """

    enabled: bool = False
    method: str = DEFAULT_AUTH_METHOD
    datacenter: str | None = None
    meta: dict[str, str] = Field(default_factory=dict)
    region: str | None = None
    sts_endpoint: str | None = None
    server_id_header_value: str | None = None


__all__: list[str] = ["DEFAULT_AUTH_METHOD", "ModelConsulLoginConfig"]
