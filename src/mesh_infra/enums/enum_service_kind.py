# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Consul service kind enumeration."""

from enum import Enum


class EnumServiceKind(str, Enum):
    """Kinds of catalog services registered by mesh-init.

    ``TYPICAL`` is the application service itself; Consul encodes it as an
    empty ``Kind`` string.
    """

    TYPICAL = ""
    CONNECT_PROXY = "connect-proxy"
    MESH_GATEWAY = "mesh-gateway"
    TERMINATING_GATEWAY = "terminating-gateway"
    API_GATEWAY = "api-gateway"

    @property
    def is_gateway(self) -> bool:
        return self in (
            EnumServiceKind.MESH_GATEWAY,
            EnumServiceKind.TERMINATING_GATEWAY,
            EnumServiceKind.API_GATEWAY,
        )


__all__ = ["EnumServiceKind"]
