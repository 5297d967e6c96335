# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""consul-dataplane configuration document.

mesh-init writes this document to the shared volume; the dataplane
container reads it at startup to find Consul, authenticate and run Envoy
for the registered proxy.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from mesh_infra.config import ModelBootstrapConfig
from mesh_infra.models import ModelRegistrationIntent

XDS_BIND_ADDRESS: str = "127.0.0.1"


class ModelDataplaneDocument(BaseModel):
    """Base for dataplane config sections: camelCase JSON, unset fields omitted."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )


class ModelDataplaneTls(ModelDataplaneDocument):
    disabled: bool
    ca_certs_path: str | None = None
    tls_server_name: str | None = None


class ModelDataplaneLogin(ModelDataplaneDocument):
    auth_method: str
    namespace: str | None = None
    partition: str | None = None
    datacenter: str | None = None
    bearer_token: str = Field(repr=False)
    meta: dict[str, str] = Field(default_factory=dict)


class ModelDataplaneCredentials(ModelDataplaneDocument):
    type: str = "login"
    login: ModelDataplaneLogin


class ModelDataplaneConsul(ModelDataplaneDocument):
    addresses: str
    grpc_port: int
    server_watch_disabled: bool
    tls: ModelDataplaneTls
    credentials: ModelDataplaneCredentials | None = None


class ModelDataplaneProxy(ModelDataplaneDocument):
    node_name: str
    id: str
    namespace: str | None = None
    partition: str | None = None


class ModelDataplaneXdsServer(ModelDataplaneDocument):
    bind_address: str = XDS_BIND_ADDRESS


class ModelDataplaneEnvoy(ModelDataplaneDocument):
    ready_bind_port: int


class ModelDataplaneLogging(ModelDataplaneDocument):
    log_level: str


class ModelDataplaneConfig(ModelDataplaneDocument):
    """Root of ``consul-dataplane.json``."""

    consul: ModelDataplaneConsul
    proxy: ModelDataplaneProxy
    xds_server: ModelDataplaneXdsServer = Field(default_factory=ModelDataplaneXdsServer)
    envoy: ModelDataplaneEnvoy
    logging: ModelDataplaneLogging

    def to_json_bytes(self) -> bytes:
        return self.model_dump_json(by_alias=True, exclude_none=True, indent=2).encode(
            "utf-8"
        )


def build_dataplane_config(
    config: ModelBootstrapConfig,
    intent: ModelRegistrationIntent,
    ca_cert_path: str | None,
    bearer_token: str | None = None,
) -> ModelDataplaneConfig:
    """Build the dataplane config for the registered proxy or gateway.

    Login credentials are included only when ACL login is enabled and a
    bearer token is available.
    """
    servers = config.consul_servers
    grpc_tls = servers.grpc_tls_settings()

    credentials = None
    if config.consul_login.enabled and bearer_token:
        credentials = ModelDataplaneCredentials(
            login=ModelDataplaneLogin(
                auth_method=config.consul_login.method,
                namespace=intent.namespace,
                partition=intent.partition,
                datacenter=config.consul_login.datacenter,
                bearer_token=bearer_token,
                meta=dict(config.consul_login.meta),
            )
        )

    return ModelDataplaneConfig(
        consul=ModelDataplaneConsul(
            addresses=servers.hosts,
            grpc_port=servers.grpc_port,
            server_watch_disabled=servers.skip_server_watch,
            tls=ModelDataplaneTls(
                disabled=not grpc_tls.enabled,
                ca_certs_path=ca_cert_path or None,
                tls_server_name=grpc_tls.tls_server_name,
            ),
            credentials=credentials,
        ),
        proxy=ModelDataplaneProxy(
            node_name=intent.node_name,
            id=intent.proxy_service_id,
            namespace=intent.namespace,
            partition=intent.partition,
        ),
        envoy=ModelDataplaneEnvoy(ready_bind_port=intent.health_check_port),
        logging=ModelDataplaneLogging(log_level=config.log_level.lower()),
    )


__all__: list[str] = [
    "XDS_BIND_ADDRESS",
    "ModelDataplaneConfig",
    "build_dataplane_config",
]
