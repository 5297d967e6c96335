# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""ECS Cluster Inventory - running tasks with their tags.

One inventory page maps to one ``ListTasks`` page followed by a
``DescribeTasks`` call (with ``include=["TAGS"]``) for the listed tasks.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any
from uuid import uuid4

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from mesh_infra.enums import EnumInfraTransportType
from mesh_infra.errors import (
    InfraAuthenticationError,
    InfraConnectionError,
    InfraTimeoutError,
    ModelInfraErrorContext,
)
from mesh_infra.mixins import MixinBlockingExecutor
from mesh_infra.models import ModelClusterTask, ModelInventoryPage

logger = logging.getLogger(__name__)

# DescribeTasks accepts at most 100 task ARNs per call.
MAX_PAGE_SIZE: int = 100


def family_from_task_definition_arn(arn: str) -> str:
    """Extract the family from ``arn:aws:ecs:...:task-definition/<family>:<rev>``.

    Raises:
        ValueError: If the ARN does not name a task definition revision.
    """
    parts = arn.split("/")
    if len(parts) != 2 or not parts[0].endswith(":task-definition"):
        raise ValueError(f"cannot derive family from task definition ARN {arn!r}")
    family, _, revision = parts[1].rpartition(":")
    if not family or not revision:
        raise ValueError(f"cannot derive family from task definition ARN {arn!r}")
    return family


def _tags(raw: Sequence[Mapping[str, Any]] | None) -> dict[str, str]:
    return {str(tag.get("key", "")): str(tag.get("value", "")) for tag in raw or []}


class EcsClusterInventory(MixinBlockingExecutor):
    """ProtocolClusterInventory for one ECS cluster."""

    def __init__(
        self,
        cluster: str,
        client: Any | None = None,
        region: str | None = None,
        page_size: int = MAX_PAGE_SIZE,
        timeout_seconds: float = 30.0,
    ) -> None:
        self._cluster = cluster
        self._client = client if client is not None else boto3.client("ecs", region_name=region)
        self._page_size = min(page_size, MAX_PAGE_SIZE)
        self._timeout_seconds = timeout_seconds
        self._init_executor(2, "ecs", timeout_seconds=timeout_seconds)

    def close(self) -> None:
        self._shutdown_executor()

    def _list_page(self, cursor: str | None) -> ModelInventoryPage:
        kwargs: dict[str, Any] = {"cluster": self._cluster, "maxResults": self._page_size}
        if cursor:
            kwargs["nextToken"] = cursor
        listing = self._client.list_tasks(**kwargs)
        task_arns = list(listing.get("taskArns") or [])
        next_cursor = listing.get("nextToken") or None

        if not task_arns:
            return ModelInventoryPage(instances=(), next_cursor=next_cursor)

        described = self._client.describe_tasks(
            cluster=self._cluster, tasks=task_arns, include=["TAGS"]
        )
        instances = tuple(
            ModelClusterTask(
                task_arn=str(task.get("taskArn", "")),
                family=family_from_task_definition_arn(str(task.get("taskDefinitionArn", ""))),
                tags=_tags(task.get("tags")),
            )
            for task in described.get("tasks") or []
        )
        return ModelInventoryPage(instances=instances, next_cursor=next_cursor)

    async def list_tagged_instances(self, cursor: str | None) -> ModelInventoryPage:
        try:
            page = await self._run_blocking(lambda: self._list_page(cursor))
        except (ClientError, BotoCoreError, TimeoutError) as e:
            raise self._translate(e) from e
        logger.debug(
            "Listed %d tasks",
            len(page.instances),
            extra={"cluster": self._cluster, "has_more": page.next_cursor is not None},
        )
        return page

    def _translate(self, error: Exception) -> Exception:
        ctx = ModelInfraErrorContext(
            transport_type=EnumInfraTransportType.ECS,
            operation="list_tasks",
            target_name=self._cluster,
            correlation_id=uuid4(),
        )
        if isinstance(error, TimeoutError):
            return InfraTimeoutError(
                f"ECS task listing timed out after {self._timeout_seconds}s",
                context=ctx,
                timeout_seconds=self._timeout_seconds,
            )
        code = ""
        if isinstance(error, ClientError):
            code = str(error.response.get("Error", {}).get("Code", ""))
            if code in ("AccessDeniedException", "UnrecognizedClientException"):
                return InfraAuthenticationError(
                    f"ECS denied task listing for cluster {self._cluster}",
                    context=ctx,
                )
        return InfraConnectionError(
            f"Failed to list tasks in cluster {self._cluster}: {code or type(error).__name__}",
            context=ctx,
        )


__all__: list[str] = [
    "MAX_PAGE_SIZE",
    "EcsClusterInventory",
    "family_from_task_definition_arn",
]
