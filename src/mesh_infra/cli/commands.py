# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""
Mesh Infrastructure CLI Commands.

Provides the ``mesh-infra`` command with the mesh-init bootstrap, the
credential controller and the net-dial health probe used by sibling
containers.
"""

from __future__ import annotations

import asyncio
import signal
import socket

import click
from rich.console import Console

from mesh_infra import __version__
from mesh_infra.config import (
    ModelControllerConfig,
    load_bootstrap_config_from_env,
    validate_config,
)
from mesh_infra.controller import CredentialController
from mesh_infra.errors import RuntimeHostError
from mesh_infra.handlers import (
    ConsulControlPlaneClient,
    EcsClusterInventory,
    SecretsManagerSecretStore,
    TaskMetadataClient,
    VaultSecretStore,
)
from mesh_infra.protocols import ProtocolSecretStore
from mesh_infra.utils import configure_logging, sanitize_error_message

console = Console()
err_console = Console(stderr=True)


@click.group()
@click.version_option(__version__, prog_name="mesh-infra")
def cli() -> None:
    """Service mesh bootstrap and credential management for ECS tasks."""


@cli.command("mesh-init")
@click.option(
    "--discovery-timeout",
    type=float,
    default=120.0,
    show_default=True,
    help="Seconds to wait for a healthy Consul server",
)
@click.option(
    "--retry-interval",
    type=float,
    default=1.0,
    show_default=True,
    help="Seconds between catalog registration attempts",
)
def mesh_init_cmd(discovery_timeout: float, retry_interval: float) -> None:
    """Register this task with Consul and prepare the dataplane.

    Reads the task configuration from CONSUL_ECS_CONFIG_JSON.
    """
    from mesh_infra.bootstrap import MeshInitCommand

    try:
        config = load_bootstrap_config_from_env()
    except RuntimeHostError as e:
        err_console.print(f"[red]invalid config: {e}[/red]")
        raise SystemExit(1) from e

    configure_logging(config.log_level)
    command = MeshInitCommand(
        config,
        TaskMetadataClient(),
        discovery_timeout_seconds=discovery_timeout,
        retry_interval_seconds=retry_interval,
    )
    raise SystemExit(asyncio.run(command.run()))


@cli.command("controller")
@click.option("--cluster", envvar="ECS_CLUSTER", required=True, help="ECS cluster name or ARN")
@click.option("--secret-prefix", required=True, help="Prefix of per-family secret names")
@click.option(
    "--interval",
    type=float,
    default=10.0,
    show_default=True,
    help="Seconds between reconcile passes",
)
@click.option("--max-concurrency", type=int, default=4, show_default=True)
@click.option(
    "--secret-backend",
    type=click.Choice(["secrets-manager", "vault"]),
    default="secrets-manager",
    show_default=True,
)
@click.option("--region", envvar="AWS_REGION", default=None, help="AWS region")
@click.option("--consul-addr", envvar="CONSUL_HTTP_ADDR", default="http://127.0.0.1:8500")
@click.option("--consul-token", envvar="CONSUL_HTTP_TOKEN", default=None)
@click.option("--consul-cacert", envvar="CONSUL_CACERT", default=None)
@click.option("--partition", envvar="CONSUL_PARTITION", default=None)
@click.option("--vault-addr", envvar="VAULT_ADDR", default=None)
@click.option("--vault-token", envvar="VAULT_TOKEN", default=None)
@click.option("--vault-mount", default="secret", show_default=True)
@click.option("--vault-path-prefix", default="", show_default=True)
@click.option("--log-level", envvar="MESH_INFRA_LOG_LEVEL", default="INFO", show_default=True)
@click.option("--once", is_flag=True, help="Run a single reconcile pass and exit")
def controller_cmd(
    cluster: str,
    secret_prefix: str,
    interval: float,
    max_concurrency: int,
    secret_backend: str,
    region: str | None,
    consul_addr: str,
    consul_token: str | None,
    consul_cacert: str | None,
    partition: str | None,
    vault_addr: str | None,
    vault_token: str | None,
    vault_mount: str,
    vault_path_prefix: str,
    log_level: str,
    once: bool,
) -> None:
    """Reconcile Consul ACL tokens for the families running in a cluster."""
    raw: dict[str, object] = {
        "cluster": cluster,
        "secret_prefix": secret_prefix,
        "reconcile_interval_seconds": interval,
        "max_concurrency": max_concurrency,
        "secret_backend": secret_backend,
        "aws_region": region,
        "consul": {
            "address": consul_addr,
            "token": consul_token,
            "ca_file": consul_cacert,
            "partition": partition,
        },
    }
    if vault_addr:
        raw["vault"] = {
            "url": vault_addr,
            "token": vault_token,
            "mount_point": vault_mount,
            "path_prefix": vault_path_prefix,
        }

    try:
        config = validate_config(ModelControllerConfig, raw)
    except RuntimeHostError as e:
        err_console.print(f"[red]invalid config: {e}[/red]")
        raise SystemExit(1) from e

    configure_logging(log_level)
    raise SystemExit(asyncio.run(_run_controller(config, once)))


def _secret_store(config: ModelControllerConfig) -> ProtocolSecretStore:
    if config.secret_backend == "vault" and config.vault is not None:
        return VaultSecretStore(config.vault)
    return SecretsManagerSecretStore(region=config.aws_region)


async def _run_controller(config: ModelControllerConfig, once: bool) -> int:
    inventory = EcsClusterInventory(config.cluster, region=config.aws_region)
    secret_store = _secret_store(config)
    async with ConsulControlPlaneClient(config.consul) as control_plane:
        controller = CredentialController(
            inventory,
            control_plane,
            secret_store,
            config.secret_prefix,
            max_concurrency=config.max_concurrency,
            reconcile_interval_seconds=config.reconcile_interval_seconds,
        )
        try:
            if once:
                try:
                    await controller.reconcile()
                except Exception as e:
                    err_console.print(f"[red]{sanitize_error_message(e)}[/red]")
                    return 1
                console.print("[green]Reconcile pass completed[/green]")
                return 0

            stop_event = asyncio.Event()
            loop = asyncio.get_running_loop()
            for sig in (signal.SIGINT, signal.SIGTERM):
                loop.add_signal_handler(sig, stop_event.set)
            await controller.run(stop_event)
            return 0
        finally:
            inventory.close()
            secret_store_close = getattr(secret_store, "close", None)
            if secret_store_close is not None:
                secret_store_close()


def _split_host_port(address: str) -> tuple[str, int]:
    host, sep, port = address.rpartition(":")
    if not sep or not host or not port.isdigit():
        raise click.BadParameter(f"expected host:port, got {address!r}")
    return host.strip("[]"), int(port)


@cli.command("net-dial")
@click.argument("address")
@click.option("--timeout", type=float, default=2.0, show_default=True)
def net_dial_cmd(address: str, timeout: float) -> None:
    """Exit 0 if a TCP connection to HOST:PORT succeeds, 1 otherwise."""
    host, port = _split_host_port(address)
    try:
        with socket.create_connection((host, port), timeout=timeout):
            pass
    except OSError as e:
        err_console.print(f"failed to dial {address}: {e}")
        raise SystemExit(1) from e
    raise SystemExit(0)


def main() -> None:
    """Console script entry point."""
    cli()


__all__: list[str] = ["cli", "main"]
