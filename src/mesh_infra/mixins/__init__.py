# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Reusable behaviour shared by infrastructure clients."""

from mesh_infra.mixins.mixin_blocking_executor import MixinBlockingExecutor

__all__: list[str] = ["MixinBlockingExecutor"]
