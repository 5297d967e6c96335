# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Reconcile resource kind enumeration."""

from enum import Enum


class EnumResourceKind(str, Enum):
    """Variants of resources processed by the credential controller.

    Attributes:
        INSTANCE_FAMILY: Family derived from running tasks; converges by upsert
        ORPHANED_CREDENTIAL: Family known only from existing ACL tokens;
            converges by revoke
    """

    INSTANCE_FAMILY = "instance_family"
    ORPHANED_CREDENTIAL = "orphaned_credential"


__all__ = ["EnumResourceKind"]
