# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Files mesh-init leaves on the shared bootstrap volume.

Existing files are removed before writing so a restarted task never sees a
mix of old and new content, and so read-only files from a previous run do
not block the write.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

from mesh_infra.config import ModelConsulServersConfig
from mesh_infra.enums import EnumInfraTransportType
from mesh_infra.errors import ArtifactWriteError, ModelInfraErrorContext

logger = logging.getLogger(__name__)

EXECUTABLE_FILE_NAME: str = "mesh-infra"
CA_CERT_FILE_NAME: str = "consul-grpc-ca-cert.pem"
DATAPLANE_CONFIG_FILE_NAME: str = "consul-dataplane.json"
GRPC_CA_CERT_PEM_ENV_VAR: str = "CONSUL_GRPC_CACERT_PEM"

EXECUTABLE_MODE: int = 0o755
READ_ONLY_MODE: int = 0o444


def _replace_file(path: Path, data: bytes, mode: int, operation: str) -> Path:
    try:
        path.unlink(missing_ok=True)
        path.write_bytes(data)
        path.chmod(mode)
    except OSError as e:
        raise ArtifactWriteError(
            f"Failed to write {path}: {e.strerror or type(e).__name__}",
            context=ModelInfraErrorContext(
                transport_type=EnumInfraTransportType.FILESYSTEM,
                operation=operation,
                target_name=str(path),
            ),
        ) from e
    logger.info("Wrote %s", path, extra={"path": str(path), "mode": oct(mode)})
    return path


def copy_executable(bootstrap_dir: str | Path, source: str | Path) -> Path:
    """Copy the running executable to the volume for sibling containers.

    Raises:
        ArtifactWriteError: If the source cannot be read or the copy written.
    """
    source_path = Path(source)
    try:
        data = source_path.read_bytes()
    except OSError as e:
        raise ArtifactWriteError(
            f"Failed to read executable {source_path}: {e.strerror or type(e).__name__}",
            context=ModelInfraErrorContext(
                transport_type=EnumInfraTransportType.FILESYSTEM,
                operation="copy_executable",
                target_name=str(source_path),
            ),
        ) from e
    return _replace_file(
        Path(bootstrap_dir) / EXECUTABLE_FILE_NAME, data, EXECUTABLE_MODE, "copy_executable"
    )


def write_grpc_ca_cert(
    bootstrap_dir: str | Path,
    servers: ModelConsulServersConfig,
    environ: Mapping[str, str] | None = None,
) -> str | None:
    """Make the gRPC CA certificate available to the dataplane.

    Returns:
        Path of the CA file the dataplane should use, or ``None`` when gRPC
        TLS is disabled. When ``CONSUL_GRPC_CACERT_PEM`` is unset the
        configured CA file is returned unchanged.

    Raises:
        ArtifactWriteError: If the PEM cannot be written.
    """
    tls = servers.grpc_tls_settings()
    if not tls.enabled:
        return None
    env = os.environ if environ is None else environ
    pem = env.get(GRPC_CA_CERT_PEM_ENV_VAR, "")
    if not pem:
        return tls.ca_cert_file
    path = _replace_file(
        Path(bootstrap_dir) / CA_CERT_FILE_NAME,
        pem.encode("utf-8"),
        READ_ONLY_MODE,
        "write_ca_cert",
    )
    return str(path)


def write_dataplane_config(bootstrap_dir: str | Path, document: bytes) -> Path:
    """Write ``consul-dataplane.json``.

    Raises:
        ArtifactWriteError: If the file cannot be written.
    """
    return _replace_file(
        Path(bootstrap_dir) / DATAPLANE_CONFIG_FILE_NAME,
        document,
        READ_ONLY_MODE,
        "write_dataplane_config",
    )


__all__: list[str] = [
    "CA_CERT_FILE_NAME",
    "DATAPLANE_CONFIG_FILE_NAME",
    "EXECUTABLE_FILE_NAME",
    "GRPC_CA_CERT_PEM_ENV_VAR",
    "copy_executable",
    "write_dataplane_config",
    "write_grpc_ca_cert",
]
