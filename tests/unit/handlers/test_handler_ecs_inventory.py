# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Unit tests for EcsClusterInventory using a mocked boto3 ECS client."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

from mesh_infra.enums import EnumInfraTransportType
from mesh_infra.errors import InfraAuthenticationError, InfraConnectionError
from mesh_infra.handlers import EcsClusterInventory, family_from_task_definition_arn
from mesh_infra.models import MESH_TAG

TASK_DEF = "arn:aws:ecs:us-east-1:123456789012:task-definition/{family}:7"


class TestFamilyFromArn:
    def test_family_is_extracted(self) -> None:
        assert family_from_task_definition_arn(TASK_DEF.format(family="web")) == "web"

    @pytest.mark.parametrize(
        "arn",
        [
            "",
            "arn:aws:ecs:us-east-1:123:task/cluster/abc",
            "arn:aws:ecs:::task-definition/web",
            "arn:aws:ecs:::task-definition/a/b:1",
            "arn:aws:ecs:::task-definition/:1",
        ],
    )
    def test_malformed_arn_raises(self, arn: str) -> None:
        with pytest.raises(ValueError):
            family_from_task_definition_arn(arn)


class TestListTaggedInstances:
    @pytest.mark.asyncio
    async def test_lists_page_with_tags(self) -> None:
        client = MagicMock()
        client.list_tasks.return_value = {"taskArns": ["t1", "t2"], "nextToken": "page-2"}
        client.describe_tasks.return_value = {
            "tasks": [
                {
                    "taskArn": "t1",
                    "taskDefinitionArn": TASK_DEF.format(family="web"),
                    "tags": [{"key": MESH_TAG, "value": "true"}],
                },
                {"taskArn": "t2", "taskDefinitionArn": TASK_DEF.format(family="batch")},
            ]
        }
        inventory = EcsClusterInventory("test-cluster", client=client)

        page = await inventory.list_tagged_instances(None)
        inventory.close()

        assert page.next_cursor == "page-2"
        assert [(t.family, t.is_mesh_enabled) for t in page.instances] == [
            ("web", True),
            ("batch", False),
        ]
        client.list_tasks.assert_called_once_with(cluster="test-cluster", maxResults=100)
        client.describe_tasks.assert_called_once_with(
            cluster="test-cluster", tasks=["t1", "t2"], include=["TAGS"]
        )

    @pytest.mark.asyncio
    async def test_cursor_is_passed_and_empty_page_skips_describe(self) -> None:
        client = MagicMock()
        client.list_tasks.return_value = {"taskArns": []}
        inventory = EcsClusterInventory("test-cluster", client=client, page_size=10)

        page = await inventory.list_tagged_instances("page-2")
        inventory.close()

        assert page.instances == ()
        assert page.next_cursor is None
        client.list_tasks.assert_called_once_with(
            cluster="test-cluster", maxResults=10, nextToken="page-2"
        )
        client.describe_tasks.assert_not_called()

    @pytest.mark.asyncio
    async def test_access_denied_is_translated(self) -> None:
        client = MagicMock()
        client.list_tasks.side_effect = ClientError(
            {"Error": {"Code": "AccessDeniedException", "Message": "denied"}}, "ListTasks"
        )
        inventory = EcsClusterInventory("test-cluster", client=client)

        with pytest.raises(InfraAuthenticationError):
            await inventory.list_tagged_instances(None)
        inventory.close()

    @pytest.mark.asyncio
    async def test_throttling_is_a_connection_error(self) -> None:
        client = MagicMock()
        client.list_tasks.side_effect = ClientError(
            {"Error": {"Code": "ThrottlingException", "Message": "slow down"}}, "ListTasks"
        )
        inventory = EcsClusterInventory("test-cluster", client=client)

        with pytest.raises(InfraConnectionError) as exc_info:
            await inventory.list_tagged_instances(None)
        inventory.close()

        assert "ThrottlingException" in str(exc_info.value)
        assert exc_info.value.context["transport_type"] == EnumInfraTransportType.ECS.value

    @pytest.mark.asyncio
    async def test_unparseable_family_propagates(self) -> None:
        client = MagicMock()
        client.list_tasks.return_value = {"taskArns": ["t1"]}
        client.describe_tasks.return_value = {
            "tasks": [{"taskArn": "t1", "taskDefinitionArn": "garbage"}]
        }
        inventory = EcsClusterInventory("test-cluster", client=client)

        with pytest.raises(ValueError):
            await inventory.list_tagged_instances(None)
        inventory.close()
