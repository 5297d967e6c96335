# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Configuration models for mesh-init and the credential controller."""

from mesh_infra.config.config_loader import (
    CONFIG_ENV_VAR,
    load_bootstrap_config_from_env,
    validate_config,
)
from mesh_infra.config.model_bootstrap_config import LogLevel, ModelBootstrapConfig
from mesh_infra.config.model_consul_client_config import ModelConsulClientConfig
from mesh_infra.config.model_consul_login_config import (
    DEFAULT_AUTH_METHOD,
    ModelConsulLoginConfig,
)
from mesh_infra.config.model_consul_servers_config import (
    ModelConsulServersConfig,
    ModelTlsSettings,
)
from mesh_infra.config.model_controller_config import (
    ModelControllerConfig,
    SecretBackend,
)
from mesh_infra.config.model_gateway_config import (
    DEFAULT_GATEWAY_PORT,
    ModelGatewayAddressConfig,
    ModelGatewayConfig,
)
from mesh_infra.config.model_proxy_config import (
    DEFAULT_PROXY_HEALTH_CHECK_PORT,
    DEFAULT_PUBLIC_LISTENER_PORT,
    ModelProxyConfigSection,
    ModelUpstreamConfig,
)
from mesh_infra.config.model_service_config import ModelServiceConfig
from mesh_infra.config.model_vault_config import ModelVaultConfig

__all__: list[str] = [
    "CONFIG_ENV_VAR",
    "DEFAULT_AUTH_METHOD",
    "DEFAULT_GATEWAY_PORT",
    "DEFAULT_PROXY_HEALTH_CHECK_PORT",
    "DEFAULT_PUBLIC_LISTENER_PORT",
    "LogLevel",
    "ModelBootstrapConfig",
    "ModelConsulClientConfig",
    "ModelConsulLoginConfig",
    "ModelConsulServersConfig",
    "ModelControllerConfig",
    "ModelGatewayAddressConfig",
    "ModelGatewayConfig",
    "ModelProxyConfigSection",
    "ModelServiceConfig",
    "ModelTlsSettings",
    "ModelUpstreamConfig",
    "ModelVaultConfig",
    "SecretBackend",
    "load_bootstrap_config_from_env",
    "validate_config",
]
