# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Task configuration consumed by mesh-init.

The document is produced by the task definition (usually through the
``CONSUL_ECS_CONFIG_JSON`` environment variable) and is treated as
pre-validated input: this model only enforces its shape.
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field, model_validator

from mesh_infra.config.model_consul_login_config import ModelConsulLoginConfig
from mesh_infra.config.model_consul_servers_config import ModelConsulServersConfig
from mesh_infra.config.model_gateway_config import ModelGatewayConfig
from mesh_infra.config.model_mesh_config_base import ModelMeshConfigBase
from mesh_infra.config.model_proxy_config import (
    ModelProxyConfigSection,
    health_check_port,
)
from mesh_infra.config.model_service_config import ModelServiceConfig

LogLevel = Literal["TRACE", "DEBUG", "INFO", "WARN", "ERROR"]


class ModelBootstrapConfig(ModelMeshConfigBase):
    """Root of the task configuration document.

    Attributes:
        bootstrap_dir: Shared volume where artifacts are written
        consul_servers: How to find and reach the Consul servers
        consul_login: ACL auth method login settings
        service: Application service settings (ignored for gateways)
        proxy: Sidecar proxy settings (ignored for gateways)
        gateway: Gateway settings; presence selects the gateway shape
        health_sync_containers: Containers whose ECS health is synced into
            Consul checks
        log_level: Log level for mesh-init and the dataplane
    """

    bootstrap_dir: str = Field(min_length=1)
    consul_servers: ModelConsulServersConfig
    consul_login: ModelConsulLoginConfig = Field(default_factory=ModelConsulLoginConfig)
    service: ModelServiceConfig = Field(default_factory=ModelServiceConfig)
    proxy: ModelProxyConfigSection = Field(default_factory=ModelProxyConfigSection)
    gateway: ModelGatewayConfig | None = None
    health_sync_containers: list[str] = Field(default_factory=list)
    log_level: LogLevel = "INFO"

    @model_validator(mode="after")
    def _gateway_name_is_lower_case(self) -> ModelBootstrapConfig:
        if self.gateway is not None and self.gateway.name != self.gateway.name.lower():
            raise ValueError("gateway.name must be lower case")
        return self

    @property
    def is_gateway(self) -> bool:
        return self.gateway is not None

    @property
    def proxy_health_check_port(self) -> int:
        if self.gateway is not None:
            return health_check_port(self.gateway.health_check_port)
        return health_check_port(self.proxy.health_check_port)


__all__: list[str] = ["LogLevel", "ModelBootstrapConfig"]
