# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Shared pytest configuration for unit tests.

Every test collected under tests/unit/ gets the ``unit`` marker so the suite
can be selected with ``pytest -m unit``. A module-level ``pytestmark`` in a
conftest does not propagate to sibling modules, hence the collection hook.
"""

import pytest


def pytest_collection_modifyitems(
    config: pytest.Config,
    items: list[pytest.Item],
) -> None:
    """Add the unit marker to tests whose path is under tests/unit."""
    unit_marker = pytest.mark.unit

    for item in items:
        if "tests/unit" in str(item.path):
            if not any(marker.name == "unit" for marker in item.iter_markers()):
                item.add_marker(unit_marker)
