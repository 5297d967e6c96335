# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Consul server connection settings.

``defaults`` apply to both the gRPC and HTTP interfaces; per-interface
sections override them field by field.
"""

from __future__ import annotations

from pydantic import Field, field_validator

from mesh_infra.config.model_mesh_config_base import ModelMeshConfigBase

DEFAULT_GRPC_PORT: int = 8502
DEFAULT_GRPC_TLS_PORT: int = 8503
DEFAULT_HTTP_PORT: int = 8500
DEFAULT_HTTPS_PORT: int = 8501


class ModelTlsSettings(ModelMeshConfigBase):
    """Effective TLS settings for one interface after applying defaults."""

    enabled: bool = False
    ca_cert_file: str | None = None
    tls_server_name: str | None = None


class ModelConsulServerDefaults(ModelMeshConfigBase):
    ca_cert_file: str | None = None
    tls_server_name: str | None = None
    tls: bool = False


class ModelConsulGrpcSettings(ModelMeshConfigBase):
    port: int | None = Field(default=None, ge=1, le=65535)
    ca_cert_file: str | None = None
    tls_server_name: str | None = None
    tls: bool | None = None


class ModelConsulHttpSettings(ModelMeshConfigBase):
    https: bool = False
    port: int | None = Field(default=None, ge=1, le=65535)
    ca_cert_file: str | None = None
    tls_server_name: str | None = None
    tls: bool | None = None


class ModelConsulServersConfig(ModelMeshConfigBase):
    """Where the Consul servers are and how to talk to them.

    Attributes:
        hosts: DNS name, comma separated addresses, or ``exec=<command>``
            whose output lists addresses
        skip_server_watch: Use the first healthy server without watching it
        defaults: TLS settings shared by gRPC and HTTP
        grpc: gRPC overrides (used by the dataplane)
        http: HTTP overrides (used for catalog registration and ACL calls)
    """

    hosts: str = Field(min_length=1)
    skip_server_watch: bool = False
    defaults: ModelConsulServerDefaults = Field(
        default_factory=ModelConsulServerDefaults
    )
    grpc: ModelConsulGrpcSettings = Field(default_factory=ModelConsulGrpcSettings)
    http: ModelConsulHttpSettings = Field(default_factory=ModelConsulHttpSettings)

    @field_validator("hosts")
    @classmethod
    def _require_host(cls, value: str) -> str:
        if not any(part.strip() for part in value.split(",")):
            raise ValueError("at least one server host is required")
        return value

    def grpc_tls_settings(self) -> ModelTlsSettings:
        return ModelTlsSettings(
            enabled=self.defaults.tls if self.grpc.tls is None else self.grpc.tls,
            ca_cert_file=self.grpc.ca_cert_file or self.defaults.ca_cert_file,
            tls_server_name=self.grpc.tls_server_name or self.defaults.tls_server_name,
        )

    def http_tls_settings(self) -> ModelTlsSettings:
        enabled = self.defaults.tls if self.http.tls is None else self.http.tls
        return ModelTlsSettings(
            enabled=enabled or self.http.https,
            ca_cert_file=self.http.ca_cert_file or self.defaults.ca_cert_file,
            tls_server_name=self.http.tls_server_name or self.defaults.tls_server_name,
        )

    @property
    def grpc_port(self) -> int:
        if self.grpc.port is not None:
            return self.grpc.port
        return DEFAULT_GRPC_TLS_PORT if self.grpc_tls_settings().enabled else DEFAULT_GRPC_PORT

    @property
    def http_port(self) -> int:
        if self.http.port is not None:
            return self.http.port
        return DEFAULT_HTTPS_PORT if self.http.https else DEFAULT_HTTP_PORT

    @property
    def http_scheme(self) -> str:
        return "https" if self.http.https else "http"


__all__: list[str] = [
    "DEFAULT_GRPC_PORT",
    "DEFAULT_GRPC_TLS_PORT",
    "DEFAULT_HTTPS_PORT",
    "DEFAULT_HTTP_PORT",
    "ModelConsulGrpcSettings",
    "ModelConsulHttpSettings",
    "ModelConsulServerDefaults",
    "ModelConsulServersConfig",
    "ModelTlsSettings",
]
