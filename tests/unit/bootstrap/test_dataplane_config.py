# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Unit tests for the consul-dataplane configuration document."""

from __future__ import annotations

import json
from typing import Any

from mesh_infra.bootstrap.dataplane_config import build_dataplane_config
from mesh_infra.bootstrap.registration import build_registration_intent
from mesh_infra.config import ModelBootstrapConfig
from mesh_infra.models import ModelWorkloadInstance


def _document(
    raw: dict[str, Any],
    instance: ModelWorkloadInstance,
    ca_cert_path: str | None = None,
    bearer_token: str | None = None,
) -> dict[str, Any]:
    config = ModelBootstrapConfig.model_validate(raw)
    intent = build_registration_intent(config, instance)
    document = build_dataplane_config(config, intent, ca_cert_path, bearer_token)
    return json.loads(document.to_json_bytes())


class TestDataplaneConfig:
    def test_plaintext_sidecar(
        self, bootstrap_raw: dict[str, Any], instance: ModelWorkloadInstance
    ) -> None:
        document = _document(bootstrap_raw, instance)

        assert document["consul"] == {
            "addresses": "10.0.0.2",
            "grpcPort": 8502,
            "serverWatchDisabled": False,
            "tls": {"disabled": True},
        }
        assert document["proxy"] == {
            "nodeName": instance.cluster_arn,
            "id": "web-abcdef0123456789-sidecar-proxy",
        }
        assert document["xdsServer"] == {"bindAddress": "127.0.0.1"}
        assert document["envoy"] == {"readyBindPort": 22000}
        assert document["logging"] == {"logLevel": "info"}

    def test_tls_uses_tls_port_and_ca_path(
        self, bootstrap_raw: dict[str, Any], instance: ModelWorkloadInstance
    ) -> None:
        raw = dict(
            bootstrap_raw,
            consulServers={
                "hosts": "consul.example.com",
                "defaults": {"tls": True, "tlsServerName": "server.dc1.consul"},
            },
        )
        document = _document(raw, instance, ca_cert_path="/consul/ca.pem")

        assert document["consul"]["grpcPort"] == 8503
        assert document["consul"]["tls"] == {
            "disabled": False,
            "caCertsPath": "/consul/ca.pem",
            "tlsServerName": "server.dc1.consul",
        }

    def test_login_credentials_when_enabled(
        self, bootstrap_raw: dict[str, Any], instance: ModelWorkloadInstance
    ) -> None:
        raw = dict(
            bootstrap_raw,
            consulLogin={"enabled": True, "datacenter": "dc1", "meta": {"k": "v"}},
        )
        document = _document(raw, instance, bearer_token="signed-request")

        assert document["consul"]["credentials"] == {
            "type": "login",
            "login": {
                "authMethod": "iam-ecs-service-token",
                "datacenter": "dc1",
                "bearerToken": "signed-request",
                "meta": {"k": "v"},
            },
        }

    def test_no_credentials_without_bearer_token(
        self, bootstrap_raw: dict[str, Any], instance: ModelWorkloadInstance
    ) -> None:
        raw = dict(bootstrap_raw, consulLogin={"enabled": True})

        assert "credentials" not in _document(raw, instance)["consul"]

    def test_gateway_proxy_id_and_health_port(
        self, bootstrap_raw: dict[str, Any], instance: ModelWorkloadInstance
    ) -> None:
        raw = dict(
            bootstrap_raw,
            gateway={"kind": "mesh-gateway", "healthCheckPort": 21000},
            logLevel="DEBUG",
        )
        document = _document(raw, instance)

        assert document["proxy"]["id"] == "web-abcdef0123456789"
        assert document["envoy"]["readyBindPort"] == 21000
        assert document["logging"]["logLevel"] == "debug"
