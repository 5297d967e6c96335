# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Unit tests for ServerWatcher.

The status-leader probe and the control plane are replaced with fakes, so
discovery runs entirely in-process.
"""

from __future__ import annotations

import asyncio

import pytest
from pydantic import SecretStr

from mesh_infra.config import ModelConsulLoginConfig, ModelConsulServersConfig
from mesh_infra.discovery import ServerWatcher
from mesh_infra.errors import InfraUnavailableError
from mesh_infra.models import ModelWorkloadInstance
from tests.helpers import FakeControlPlane


class _Probe:
    def __init__(self, healthy: set[str]) -> None:
        self.healthy = healthy
        self.calls: list[str] = []

    async def __call__(self, address: str) -> bool:
        self.calls.append(address)
        return address in self.healthy


def _watcher(
    hosts: str,
    probe: _Probe,
    *,
    skip_server_watch: bool = False,
    login: ModelConsulLoginConfig | None = None,
    instance: ModelWorkloadInstance | None = None,
    control_plane: FakeControlPlane | None = None,
    discovery_timeout_seconds: float = 1.0,
) -> ServerWatcher:
    servers = ModelConsulServersConfig(hosts=hosts, skip_server_watch=skip_server_watch)
    plane = control_plane or FakeControlPlane()
    return ServerWatcher(
        servers,
        login,
        instance,
        static_token=SecretStr("static"),
        discovery_timeout_seconds=discovery_timeout_seconds,
        refresh_interval_seconds=0.01,
        control_plane_factory=lambda _address: plane,
        bearer_token_factory=lambda: "signed-sts-request",
        probe=probe,
    )


class TestDiscovery:
    @pytest.mark.asyncio
    async def test_publishes_first_healthy_server(self) -> None:
        probe = _Probe({"10.0.0.2"})

        async with _watcher("10.0.0.1,10.0.0.2", probe) as watcher:
            state = await watcher.state()

        assert state.address == "10.0.0.2"
        assert state.token is not None
        assert state.token.get_secret_value() == "static"
        assert probe.calls[:2] == ["10.0.0.1", "10.0.0.2"]

    @pytest.mark.asyncio
    async def test_times_out_without_healthy_server(self) -> None:
        probe = _Probe(set())

        async with _watcher(
            "10.0.0.1,10.0.0.2", probe, discovery_timeout_seconds=0.05
        ) as watcher:
            with pytest.raises(InfraUnavailableError):
                await watcher.state()

    @pytest.mark.asyncio
    async def test_skip_server_watch_stops_after_first_discovery(self) -> None:
        probe = _Probe({"10.0.0.1"})
        watcher = _watcher("10.0.0.1,10.0.0.2", probe, skip_server_watch=True)

        async with watcher:
            await watcher.state()
            calls_after_discovery = len(probe.calls)
            await asyncio.sleep(0.05)

        assert calls_after_discovery == 1
        assert len(probe.calls) == 1

    @pytest.mark.asyncio
    async def test_exec_discovery_failure_ends_watch(self) -> None:
        probe = _Probe({"10.0.0.1"})

        async with _watcher("exec=exit 3", probe, discovery_timeout_seconds=5.0) as watcher:
            with pytest.raises(InfraUnavailableError):
                await watcher.state()

        assert probe.calls == []

    @pytest.mark.asyncio
    async def test_blank_host_list_ends_watch_with_unavailable(self) -> None:
        probe = _Probe({"10.0.0.1"})
        servers = ModelConsulServersConfig.model_construct(hosts=" , ")
        watcher = ServerWatcher(servers, probe=probe, discovery_timeout_seconds=5.0)

        with pytest.raises(InfraUnavailableError):
            async with watcher:
                await watcher.state()

        assert probe.calls == []
        assert not watcher.is_running

    @pytest.mark.asyncio
    async def test_unexpected_watch_error_does_not_escape_stop(self) -> None:
        async def broken_probe(address: str) -> bool:
            raise ValueError("unexpected")

        watcher = ServerWatcher(
            ModelConsulServersConfig(hosts="10.0.0.1,10.0.0.2"),
            probe=broken_probe,
            discovery_timeout_seconds=5.0,
        )

        with pytest.raises(InfraUnavailableError):
            async with watcher:
                await watcher.state()

        assert watcher._executor is None


class TestResolveAddresses:
    @pytest.mark.asyncio
    async def test_exec_output_is_split(self) -> None:
        watcher = _watcher("exec=echo 10.0.0.7 10.0.0.8", _Probe(set()))

        assert await watcher.resolve_addresses() == ["10.0.0.7", "10.0.0.8"]
        await watcher.stop()

    @pytest.mark.asyncio
    async def test_comma_list_is_kept_in_order(self) -> None:
        watcher = _watcher(" 10.0.0.3 , 10.0.0.1", _Probe(set()))

        assert await watcher.resolve_addresses() == ["10.0.0.3", "10.0.0.1"]
        await watcher.stop()

    @pytest.mark.asyncio
    async def test_single_ip_resolves_to_itself(self) -> None:
        watcher = _watcher("127.0.0.1", _Probe(set()))

        assert await watcher.resolve_addresses() == ["127.0.0.1"]
        await watcher.stop()


class TestLogin:
    @pytest.mark.asyncio
    async def test_login_token_is_published_and_logged_out(
        self, instance: ModelWorkloadInstance
    ) -> None:
        plane = FakeControlPlane()
        login = ModelConsulLoginConfig(enabled=True, datacenter="dc1")

        async with _watcher(
            "10.0.0.1",
            _Probe({"10.0.0.1"}),
            login=login,
            instance=instance,
            control_plane=plane,
        ) as watcher:
            state = await watcher.state()
            assert watcher.bearer_token == "signed-sts-request"

        assert state.token is not None
        assert state.token.get_secret_value() == "secret-1"
        assert ("login", "iam-ecs-service-token") in plane.calls
        assert plane.logged_out == ["secret-1"]

    @pytest.mark.asyncio
    async def test_login_happens_once_across_rounds(self) -> None:
        plane = FakeControlPlane()
        login = ModelConsulLoginConfig(enabled=True)
        watcher = _watcher(
            "10.0.0.1", _Probe({"10.0.0.1"}), login=login, control_plane=plane
        )

        async with watcher:
            await watcher.state()
            await asyncio.sleep(0.05)

        assert [c for c in plane.calls if c[0] == "login"] == [
            ("login", "iam-ecs-service-token")
        ]
