# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""mesh-init: one-shot bootstrap of a task into the service mesh.

Phases run strictly in order::

    START -> DISCOVER_ENDPOINT -> BUILD_PAYLOAD -> REGISTER_SERVICE
          -> REGISTER_PROXY -> WRITE_ARTIFACTS -> DONE

REGISTER_SERVICE is skipped for gateways. A failure in any phase moves the
command to FAILED, is logged once and yields exit status 1. Catalog
registration is idempotent and retried indefinitely at a constant interval,
so a task started before its Consul servers simply waits for them.
"""

from __future__ import annotations

import asyncio
import logging
import os
import sys
from collections.abc import Callable, Mapping
from pathlib import Path

from pydantic import SecretStr

from mesh_infra.bootstrap.artifacts import (
    copy_executable,
    write_dataplane_config,
    write_grpc_ca_cert,
)
from mesh_infra.bootstrap.dataplane_config import build_dataplane_config
from mesh_infra.bootstrap.registration import (
    build_proxy_entry,
    build_registration_intent,
    build_service_entry,
)
from mesh_infra.config import ModelBootstrapConfig, ModelConsulClientConfig
from mesh_infra.discovery import (
    DEFAULT_DISCOVERY_TIMEOUT_SECONDS,
    DEFAULT_REFRESH_INTERVAL_SECONDS,
    ServerWatcher,
)
from mesh_infra.enums import EnumBootstrapPhase
from mesh_infra.handlers import ConsulControlPlaneClient
from mesh_infra.models import (
    ModelCatalogEntry,
    ModelServerState,
    ModelWorkloadInstance,
)
from mesh_infra.protocols import ProtocolControlPlane, ProtocolInstanceMetadata
from mesh_infra.utils import retry_with_constant_backoff, sanitize_error_message
from mesh_infra.utils.util_retry import SleepFunc

logger = logging.getLogger(__name__)

DEFAULT_RETRY_INTERVAL_SECONDS: float = 1.0
CONSUL_TOKEN_ENV_VAR: str = "CONSUL_HTTP_TOKEN"

ControlPlaneFactory = Callable[[ModelServerState], ProtocolControlPlane]
WatcherFactory = Callable[[ModelWorkloadInstance], ServerWatcher]


class MeshInitCommand:
    """Runs the bootstrap phases for one task.

    Collaborators are injected so the command can run against in-memory
    fakes; the defaults talk to ECS and Consul.

    Attributes:
        phase: Current (or final) phase of the run
    """

    def __init__(
        self,
        config: ModelBootstrapConfig,
        metadata: ProtocolInstanceMetadata,
        *,
        watcher_factory: WatcherFactory | None = None,
        control_plane_factory: ControlPlaneFactory | None = None,
        executable_path: str | Path | None = None,
        environ: Mapping[str, str] | None = None,
        discovery_timeout_seconds: float = DEFAULT_DISCOVERY_TIMEOUT_SECONDS,
        refresh_interval_seconds: float = DEFAULT_REFRESH_INTERVAL_SECONDS,
        retry_interval_seconds: float = DEFAULT_RETRY_INTERVAL_SECONDS,
        sleep: SleepFunc = asyncio.sleep,
    ) -> None:
        self._config = config
        self._metadata = metadata
        self._watcher_factory = watcher_factory or self._default_watcher
        self._control_plane_factory = control_plane_factory or self._default_control_plane
        self._executable_path = executable_path
        self._environ = os.environ if environ is None else environ
        self._discovery_timeout = discovery_timeout_seconds
        self._refresh_interval = refresh_interval_seconds
        self._retry_interval = retry_interval_seconds
        self._sleep = sleep
        self.phase = EnumBootstrapPhase.START

    async def run(self) -> int:
        """Run every phase; return the process exit status."""
        try:
            await self._run_phases()
        except Exception as e:
            failed_phase = self.phase
            self.phase = EnumBootstrapPhase.FAILED
            logger.error(
                "mesh-init failed during %s: %s",
                failed_phase.value,
                sanitize_error_message(e),
                extra={"phase": failed_phase.value, "error_type": type(e).__name__},
            )
            return 1
        self.phase = EnumBootstrapPhase.DONE
        logger.info("Successfully initialized the task to operate as part of the mesh")
        return 0

    async def _run_phases(self) -> None:
        self.phase = EnumBootstrapPhase.DISCOVER_ENDPOINT
        instance = await self._metadata.fetch()

        async with self._watcher_factory(instance) as watcher:
            state = await watcher.state()

            self.phase = EnumBootstrapPhase.BUILD_PAYLOAD
            intent = build_registration_intent(self._config, instance)
            service_entry = build_service_entry(intent)
            proxy_entry = build_proxy_entry(intent)

            client = self._control_plane_factory(state)
            try:
                if service_entry is not None:
                    self.phase = EnumBootstrapPhase.REGISTER_SERVICE
                    await self._register(client, service_entry, "register service")

                self.phase = EnumBootstrapPhase.REGISTER_PROXY
                await self._register(client, proxy_entry, "register proxy")
            finally:
                close = getattr(client, "close", None)
                if close is not None:
                    await close()

            self.phase = EnumBootstrapPhase.WRITE_ARTIFACTS
            bootstrap_dir = self._config.bootstrap_dir
            copy_executable(bootstrap_dir, self._resolve_executable())
            ca_cert_path = write_grpc_ca_cert(
                bootstrap_dir, self._config.consul_servers, self._environ
            )
            document = build_dataplane_config(
                self._config, intent, ca_cert_path, bearer_token=watcher.bearer_token
            )
            write_dataplane_config(bootstrap_dir, document.to_json_bytes())

    async def _register(
        self,
        client: ProtocolControlPlane,
        entry: ModelCatalogEntry,
        operation_name: str,
    ) -> None:
        logger.info(
            "Registering %s",
            entry.service.id,
            extra={"service_id": entry.service.id, "kind": entry.service.kind.value},
        )
        await retry_with_constant_backoff(
            lambda: client.register_catalog_entry(entry),
            self._retry_interval,
            operation_name=operation_name,
            sleep=self._sleep,
        )
        logger.info(
            "Registered %s successfully",
            entry.service.service,
            extra={"name": entry.service.service, "id": entry.service.id},
        )

    def _default_watcher(self, instance: ModelWorkloadInstance) -> ServerWatcher:
        return ServerWatcher(
            self._config.consul_servers,
            self._config.consul_login,
            instance,
            discovery_timeout_seconds=self._discovery_timeout,
            static_token=self._static_token(),
            refresh_interval_seconds=self._refresh_interval,
        )

    def _static_token(self) -> SecretStr | None:
        token = self._environ.get(CONSUL_TOKEN_ENV_VAR, "")
        return SecretStr(token) if token else None

    def _resolve_executable(self) -> Path:
        if self._executable_path is not None:
            return Path(self._executable_path)
        return Path(sys.argv[0]).resolve()

    def _default_control_plane(self, state: ModelServerState) -> ProtocolControlPlane:
        servers = self._config.consul_servers
        tls = servers.http_tls_settings()
        return ConsulControlPlaneClient(
            ModelConsulClientConfig(
                address=f"{servers.http_scheme}://{state.address}:{servers.http_port}",
                token=state.token,
                ca_file=tls.ca_cert_file,
                partition=self._config.service.partition
                if self._config.gateway is None
                else self._config.gateway.partition,
            )
        )


__all__: list[str] = [
    "CONSUL_TOKEN_ENV_VAR",
    "DEFAULT_RETRY_INTERVAL_SECONDS",
    "MeshInitCommand",
]
