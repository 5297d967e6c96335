# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Unit tests for bootstrap volume artifacts."""

from __future__ import annotations

import stat
from pathlib import Path

import pytest

from mesh_infra.bootstrap.artifacts import (
    CA_CERT_FILE_NAME,
    DATAPLANE_CONFIG_FILE_NAME,
    EXECUTABLE_FILE_NAME,
    GRPC_CA_CERT_PEM_ENV_VAR,
    copy_executable,
    write_dataplane_config,
    write_grpc_ca_cert,
)
from mesh_infra.config import ModelConsulServersConfig
from mesh_infra.errors import ArtifactWriteError


def _mode(path: Path) -> int:
    return stat.S_IMODE(path.stat().st_mode)


class TestCopyExecutable:
    def test_copies_with_executable_mode(self, tmp_path: Path) -> None:
        source = tmp_path / "source-binary"
        source.write_bytes(b"#!/bin/sh\n")
        target_dir = tmp_path / "bootstrap"
        target_dir.mkdir()

        target = copy_executable(target_dir, source)

        assert target == target_dir / EXECUTABLE_FILE_NAME
        assert target.read_bytes() == b"#!/bin/sh\n"
        assert _mode(target) == 0o755

    def test_missing_source_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ArtifactWriteError):
            copy_executable(tmp_path, tmp_path / "does-not-exist")


class TestDataplaneConfigFile:
    def test_overwrites_read_only_file(self, tmp_path: Path) -> None:
        first = write_dataplane_config(tmp_path, b"{}")
        assert _mode(first) == 0o444

        second = write_dataplane_config(tmp_path, b'{"a": 1}')

        assert second == tmp_path / DATAPLANE_CONFIG_FILE_NAME
        assert second.read_bytes() == b'{"a": 1}'

    def test_missing_directory_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ArtifactWriteError) as exc_info:
            write_dataplane_config(tmp_path / "missing", b"{}")

        assert exc_info.value.context["operation"] == "write_dataplane_config"


class TestGrpcCaCert:
    def test_tls_disabled_writes_nothing(self, tmp_path: Path) -> None:
        servers = ModelConsulServersConfig(hosts="consul")

        assert write_grpc_ca_cert(tmp_path, servers, {GRPC_CA_CERT_PEM_ENV_VAR: "pem"}) is None
        assert not (tmp_path / CA_CERT_FILE_NAME).exists()

    def test_pem_from_environment_is_written(self, tmp_path: Path) -> None:
        servers = ModelConsulServersConfig.model_validate(
            {"hosts": "consul", "grpc": {"tls": True}}
        )

        path = write_grpc_ca_cert(tmp_path, servers, {GRPC_CA_CERT_PEM_ENV_VAR: "PEM DATA"})

        assert path == str(tmp_path / CA_CERT_FILE_NAME)
        assert Path(path).read_text() == "PEM DATA"

    def test_configured_file_used_without_pem(self, tmp_path: Path) -> None:
        servers = ModelConsulServersConfig.model_validate(
            {"hosts": "consul", "defaults": {"tls": True, "caCertFile": "/etc/ca.pem"}}
        )

        assert write_grpc_ca_cert(tmp_path, servers, {}) == "/etc/ca.pem"
