# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Workload instance snapshot.

Read once from the ECS task metadata endpoint at process start and passed
explicitly through the bootstrap call chain. Never refreshed.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict

DEFAULT_NODE_ADDRESS: str = "127.0.0.1"


def _arn_region(arn: str) -> str:
    # arn:aws:ecs:<region>:<account>:task/<cluster>/<id>
    parts = arn.split(":")
    return parts[3] if len(parts) > 5 else ""


def _node_address(containers: list[Mapping[str, Any]]) -> str:
    for container in containers:
        for network in container.get("Networks") or []:
            addresses = network.get("IPv4Addresses") or []
            if addresses:
                return str(addresses[0])
    return DEFAULT_NODE_ADDRESS


class ModelWorkloadInstance(BaseModel):
    """Immutable identity of the running task.

    Attributes:
        task_arn: Full task ARN
        instance_id: Task ID (last segment of the task ARN)
        family: Task definition family; the credential issuance unit
        cluster_arn: Cluster ARN; used as the synthetic Consul node name
        node_address: Task IPv4 address used for every registration
        availability_zone: Task availability zone, if reported
        region: AWS region, if resolvable
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    task_arn: str
    instance_id: str
    family: str
    cluster_arn: str
    node_address: str = DEFAULT_NODE_ADDRESS
    availability_zone: str | None = None
    region: str | None = None

    @classmethod
    def from_task_metadata(
        cls,
        document: Mapping[str, Any],
        environ: Mapping[str, str] | None = None,
    ) -> ModelWorkloadInstance:
        """Build the snapshot from an ECS ``/task`` metadata document.

        The region comes from ``AWS_REGION``, then ``AWS_DEFAULT_REGION``,
        then the task ARN.

        Raises:
            ValueError: If the task ARN or family is missing.
        """
        env = os.environ if environ is None else environ
        task_arn = str(document.get("TaskARN") or "")
        family = str(document.get("Family") or "")
        if not task_arn or not family:
            raise ValueError("task metadata is missing TaskARN or Family")

        cluster = str(document.get("Cluster") or "")
        if cluster and not cluster.startswith("arn:"):
            # Bare cluster name: rebuild the ARN from the task ARN prefix.
            prefix = task_arn.split(":task/", 1)[0]
            cluster = f"{prefix}:cluster/{cluster}"

        region = (
            env.get("AWS_REGION") or env.get("AWS_DEFAULT_REGION") or _arn_region(task_arn)
        )

        return cls(
            task_arn=task_arn,
            instance_id=task_arn.rsplit("/", 1)[-1],
            family=family,
            cluster_arn=cluster,
            node_address=_node_address(list(document.get("Containers") or [])),
            availability_zone=document.get("AvailabilityZone") or None,
            region=region or None,
        )


__all__: list[str] = ["DEFAULT_NODE_ADDRESS", "ModelWorkloadInstance"]
