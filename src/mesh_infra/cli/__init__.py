# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""mesh-infra command line interface."""

from mesh_infra.cli.commands import cli, main

__all__: list[str] = ["cli", "main"]
