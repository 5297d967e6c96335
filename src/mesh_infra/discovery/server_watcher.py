# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Background discovery of a healthy Consul server.

The watcher resolves the configured server hosts, probes them through the
Consul status API and publishes the first healthy one as a
``ModelServerState``. Consumers read the latest snapshot with ``state()``,
which blocks until the first publication or the discovery timeout.

Usage::

    async with ServerWatcher(servers, login, instance) as watcher:
        state = await watcher.state()

Entering the context starts the background task; leaving it cancels the
task and logs out of Consul when a login token was obtained.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

import consul
from pydantic import SecretStr

from mesh_infra.config import (
    ModelConsulClientConfig,
    ModelConsulLoginConfig,
    ModelConsulServersConfig,
)
from mesh_infra.discovery.iam_login import (
    CLUSTER_META_KEY,
    TASK_ID_META_KEY,
    build_iam_bearer_token,
)
from mesh_infra.enums import EnumInfraTransportType
from mesh_infra.errors import (
    InfraUnavailableError,
    ModelInfraErrorContext,
    ProtocolConfigurationError,
    RuntimeHostError,
)
from mesh_infra.handlers import ConsulControlPlaneClient
from mesh_infra.mixins import MixinBlockingExecutor
from mesh_infra.models import ModelServerState, ModelWorkloadInstance
from mesh_infra.protocols import ProtocolControlPlane
from mesh_infra.utils import sanitize_error_message

logger = logging.getLogger(__name__)

EXEC_PREFIX: str = "exec="

DEFAULT_DISCOVERY_TIMEOUT_SECONDS: float = 120.0
DEFAULT_REFRESH_INTERVAL_SECONDS: float = 30.0
DEFAULT_PROBE_TIMEOUT_SECONDS: float = 5.0

ControlPlaneFactory = Callable[[str], ProtocolControlPlane]
BearerTokenFactory = Callable[[], str]


class ServerWatcher(MixinBlockingExecutor):
    """Watches Consul servers and publishes the healthy one.

    The published snapshot is a single slot: every publication replaces the
    previous one, and readers always see the latest.
    """

    def __init__(
        self,
        servers: ModelConsulServersConfig,
        login: ModelConsulLoginConfig | None = None,
        instance: ModelWorkloadInstance | None = None,
        *,
        static_token: SecretStr | None = None,
        discovery_timeout_seconds: float = DEFAULT_DISCOVERY_TIMEOUT_SECONDS,
        refresh_interval_seconds: float = DEFAULT_REFRESH_INTERVAL_SECONDS,
        probe_timeout_seconds: float = DEFAULT_PROBE_TIMEOUT_SECONDS,
        control_plane_factory: ControlPlaneFactory | None = None,
        bearer_token_factory: BearerTokenFactory | None = None,
        probe: Callable[[str], Awaitable[bool]] | None = None,
    ) -> None:
        """Initialize the watcher.

        Args:
            servers: Server hosts and HTTP/TLS settings
            login: ACL login settings; login happens only when enabled
            instance: Task identity, used for login metadata and region
            static_token: Token to publish when login is disabled
            discovery_timeout_seconds: How long ``state()`` waits
            refresh_interval_seconds: Pause between probe rounds
            probe_timeout_seconds: Per-server probe timeout
            control_plane_factory: Builds a client for a server address
            bearer_token_factory: Produces the IAM login bearer token
            probe: Replaces the status-leader health probe
        """
        self._servers = servers
        self._login = login or ModelConsulLoginConfig()
        self._instance = instance
        self._static_token = static_token
        self._discovery_timeout = discovery_timeout_seconds
        self._refresh_interval = refresh_interval_seconds
        self._control_plane_factory = control_plane_factory or self._default_control_plane
        self._bearer_token_factory = bearer_token_factory or self._default_bearer_token
        self._probe = probe or self._probe_leader
        self._init_executor(4, "consul-probe", timeout_seconds=probe_timeout_seconds)

        self._current: ModelServerState | None = None
        self._published = asyncio.Event()
        self._bearer_token: str | None = None
        self._login_token: SecretStr | None = None
        self._login_address: str | None = None
        self._watch_task: asyncio.Task[None] | None = None
        self._running = False

    async def __aenter__(self) -> ServerWatcher:
        await self.start()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        await self.stop()

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def bearer_token(self) -> str | None:
        """Bearer token used for the ACL login, if one was made."""
        return self._bearer_token

    async def start(self) -> None:
        """Start the background watch task. Idempotent."""
        if self._running:
            return
        self._running = True
        self._watch_task = asyncio.create_task(self._watch_loop(), name="consul-server-watcher")
        logger.info(
            "Consul server watcher started",
            extra={
                "hosts": self._servers.hosts,
                "skip_server_watch": self._servers.skip_server_watch,
                "login_enabled": self._login.enabled,
            },
        )

    async def stop(self) -> None:
        """Cancel the watch task and log out. Idempotent."""
        if self._running:
            self._running = False
            if self._watch_task is not None:
                self._watch_task.cancel()
                try:
                    await self._watch_task
                except asyncio.CancelledError:
                    pass
                except Exception as e:
                    logger.warning(
                        "Consul server watcher ended with an error: %s",
                        sanitize_error_message(e),
                        extra={"error_type": type(e).__name__},
                    )
                self._watch_task = None

        if self._login_token is not None and self._login_address is not None:
            await self._logout(self._login_address, self._login_token)
            self._login_token = None

        self._shutdown_executor()
        logger.info("Consul server watcher stopped")

    async def state(self) -> ModelServerState:
        """Return the latest snapshot, waiting for the first one.

        Raises:
            InfraUnavailableError: If no healthy server was found within the
                discovery timeout, or the watch task ended.
        """
        if self._current is not None:
            return self._current

        waiter = asyncio.ensure_future(self._published.wait())
        pending: set[asyncio.Future[Any]] = {waiter}
        if self._watch_task is not None:
            pending.add(self._watch_task)
        try:
            await asyncio.wait(
                pending,
                timeout=self._discovery_timeout,
                return_when=asyncio.FIRST_COMPLETED,
            )
        finally:
            waiter.cancel()

        if self._current is not None:
            return self._current
        raise InfraUnavailableError(
            f"No healthy Consul server found within {self._discovery_timeout}s",
            context=ModelInfraErrorContext(
                transport_type=EnumInfraTransportType.CONSUL,
                operation="discover_server",
                target_name=self._servers.hosts,
            ),
        )

    def _publish(self, state: ModelServerState) -> None:
        if self._current is None or self._current.address != state.address:
            logger.info(
                "Using Consul server %s",
                state.address,
                extra={"address": state.address},
            )
        self._current = state
        self._published.set()

    async def _watch_loop(self) -> None:
        while self._running:
            try:
                await self._probe_round()
            except asyncio.CancelledError:
                raise
            except ProtocolConfigurationError:
                logger.exception("Invalid Consul server configuration")
                return
            except (RuntimeHostError, OSError) as e:
                logger.warning(
                    "Consul server discovery round failed: %s",
                    sanitize_error_message(e),
                    extra={"error_type": type(e).__name__},
                )

            if self._servers.skip_server_watch and self._published.is_set():
                logger.debug("Server watch disabled, stopping after first discovery")
                return
            await asyncio.sleep(self._refresh_interval)

    async def _probe_round(self) -> None:
        addresses = await self.resolve_addresses()
        if self._current is not None and self._current.address in addresses:
            addresses.remove(self._current.address)
            addresses.insert(0, self._current.address)

        for address in addresses:
            if not await self._probe(address):
                continue
            token = await self._token_for(address)
            self._publish(ModelServerState(address=address, token=token))
            return

        logger.warning(
            "No healthy Consul server among %d candidates",
            len(addresses),
            extra={"hosts": self._servers.hosts},
        )

    async def resolve_addresses(self) -> list[str]:
        """Expand the configured hosts into candidate server addresses.

        Supports ``exec=<command>`` (whitespace separated output), comma
        separated lists and DNS names, resolved to their IP addresses.

        Raises:
            ProtocolConfigurationError: If the exec command fails or no
                hosts are configured.
        """
        hosts = self._servers.hosts.strip()
        if hosts.startswith(EXEC_PREFIX):
            return await self._exec_addresses(hosts[len(EXEC_PREFIX):])

        candidates = [h.strip() for h in hosts.split(",") if h.strip()]
        if not candidates:
            raise ProtocolConfigurationError(
                "No Consul server hosts configured",
                context=ModelInfraErrorContext(
                    transport_type=EnumInfraTransportType.CONSUL,
                    operation="resolve_addresses",
                ),
            )
        if len(candidates) > 1:
            return candidates

        loop = asyncio.get_running_loop()
        infos = await loop.getaddrinfo(candidates[0], self._servers.http_port)
        resolved: list[str] = []
        for info in infos:
            address = str(info[4][0])
            if address not in resolved:
                resolved.append(address)
        return resolved

    async def _exec_addresses(self, command: str) -> list[str]:
        process = await asyncio.create_subprocess_shell(
            command,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        stdout, _ = await process.communicate()
        if process.returncode != 0:
            raise ProtocolConfigurationError(
                f"Server discovery command exited with status {process.returncode}",
                context=ModelInfraErrorContext(
                    transport_type=EnumInfraTransportType.CONSUL,
                    operation="exec_discovery",
                ),
            )
        return stdout.decode("utf-8").split()

    async def _probe_leader(self, address: str) -> bool:
        tls = self._servers.http_tls_settings()
        verify: bool | str = tls.ca_cert_file or True

        def leader() -> str:
            client = consul.Consul(
                host=address,
                port=self._servers.http_port,
                scheme=self._servers.http_scheme,
                verify=verify,
            )
            return str(client.status.leader() or "")

        try:
            return bool(await self._run_blocking(leader))
        except (consul.ConsulException, OSError, TimeoutError) as e:
            logger.debug(
                "Consul server %s failed health probe: %s",
                address,
                sanitize_error_message(e),
                extra={"address": address},
            )
            return False

    async def _token_for(self, address: str) -> SecretStr | None:
        if not self._login.enabled:
            return self._static_token
        if self._login_token is None:
            self._login_token = await self._do_login(address)
            self._login_address = address
        return self._login_token

    def _login_meta(self) -> dict[str, str]:
        meta = dict(self._login.meta)
        if self._instance is not None:
            meta[TASK_ID_META_KEY] = self._instance.instance_id
            meta[CLUSTER_META_KEY] = self._instance.cluster_arn
        return meta

    async def _do_login(self, address: str) -> SecretStr:
        loop = asyncio.get_running_loop()
        self._bearer_token = await loop.run_in_executor(self._executor, self._bearer_token_factory)
        client = self._control_plane_factory(address)
        try:
            credential = await client.login(
                self._login.method,
                self._bearer_token,
                meta=self._login_meta(),
                datacenter=self._login.datacenter,
            )
        finally:
            await _close(client)
        if credential.secret_id is None:
            raise InfraUnavailableError(
                "Consul login returned no token",
                context=ModelInfraErrorContext(
                    transport_type=EnumInfraTransportType.CONSUL,
                    operation="acl_login",
                    target_name=address,
                ),
            )
        return credential.secret_id

    async def _logout(self, address: str, token: SecretStr) -> None:
        client = self._control_plane_factory(address)
        try:
            await client.logout(token)
            logger.info("Logged out of Consul", extra={"address": address})
        except RuntimeHostError as e:
            logger.warning(
                "Consul logout failed: %s",
                sanitize_error_message(e),
                extra={"address": address},
            )
        finally:
            await _close(client)

    def _default_bearer_token(self) -> str:
        region = self._login.region or (self._instance.region if self._instance else None)
        return build_iam_bearer_token(
            region=region,
            endpoint=self._login.sts_endpoint,
            server_id_header_value=self._login.server_id_header_value,
        )

    def _default_control_plane(self, address: str) -> ProtocolControlPlane:
        tls = self._servers.http_tls_settings()
        return ConsulControlPlaneClient(
            ModelConsulClientConfig(
                address=f"{self._servers.http_scheme}://{address}:{self._servers.http_port}",
                ca_file=tls.ca_cert_file,
            )
        )


async def _close(client: ProtocolControlPlane) -> None:
    close = getattr(client, "close", None)
    if close is not None:
        await close()


__all__: list[str] = [
    "DEFAULT_DISCOVERY_TIMEOUT_SECONDS",
    "DEFAULT_REFRESH_INTERVAL_SECONDS",
    "EXEC_PREFIX",
    "ServerWatcher",
]
