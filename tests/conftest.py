# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Pytest configuration and shared fixtures for mesh_infra tests."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from mesh_infra.config import ModelBootstrapConfig
from mesh_infra.models import ModelWorkloadInstance

TASK_ARN = "arn:aws:ecs:us-east-1:123456789012:task/test-cluster/abcdef0123456789"
CLUSTER_ARN = "arn:aws:ecs:us-east-1:123456789012:cluster/test-cluster"


@pytest.fixture
def task_metadata() -> dict[str, Any]:
    """Provide an ECS ``/task`` metadata document for a Fargate task."""
    return {
        "Cluster": CLUSTER_ARN,
        "TaskARN": TASK_ARN,
        "Family": "Web",
        "AvailabilityZone": "us-east-1a",
        "Containers": [
            {
                "Name": "app",
                "Networks": [{"NetworkMode": "awsvpc", "IPv4Addresses": ["10.1.2.3"]}],
            }
        ],
    }


@pytest.fixture
def instance() -> ModelWorkloadInstance:
    """Provide the workload instance snapshot matching ``task_metadata``."""
    return ModelWorkloadInstance(
        task_arn=TASK_ARN,
        instance_id="abcdef0123456789",
        family="Web",
        cluster_arn=CLUSTER_ARN,
        node_address="10.1.2.3",
        availability_zone="us-east-1a",
        region="us-east-1",
    )


@pytest.fixture
def bootstrap_raw(tmp_path: Path) -> dict[str, Any]:
    """Provide a minimal camelCase task configuration document."""
    return {
        "bootstrapDir": str(tmp_path),
        "consulServers": {"hosts": "10.0.0.2"},
        "service": {"port": 9090, "tags": ["v1"], "meta": {"team": "payments"}},
        "proxy": {
            "upstreams": [{"destinationName": "db", "localBindPort": 5432}],
        },
        "healthSyncContainers": ["app"],
    }


@pytest.fixture
def bootstrap_config(bootstrap_raw: dict[str, Any]) -> ModelBootstrapConfig:
    return ModelBootstrapConfig.model_validate(bootstrap_raw)
