# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Process logging setup shared by the mesh-infra commands."""

from __future__ import annotations

import logging
import os
import sys

LOG_LEVEL_ENV_VAR: str = "MESH_INFRA_LOG_LEVEL"

_VALID_LEVELS: frozenset[str] = frozenset(
    {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
)

# Level names used by the task configuration and the dataplane.
_LEVEL_ALIASES: dict[str, str] = {
    "TRACE": "DEBUG",
    "WARN": "WARNING",
}


def resolve_log_level(level: str | None = None) -> str:
    """Map a configured level name to a stdlib logging level name.

    ``level`` wins over ``MESH_INFRA_LOG_LEVEL``. Unknown names fall back to
    INFO with a warning on stderr.
    """
    raw = (level or os.getenv(LOG_LEVEL_ENV_VAR, "INFO")).upper()
    resolved = _LEVEL_ALIASES.get(raw, raw)
    if resolved not in _VALID_LEVELS:
        print(
            f"Warning: Invalid log level '{raw}', using INFO. "
            f"Valid levels: {', '.join(sorted(_VALID_LEVELS))}",
            file=sys.stderr,
        )
        return "INFO"
    return resolved


def configure_logging(level: str | None = None) -> None:
    """Configure root logging with the structured text format.

    Log Format Example:
        2025-01-15 10:30:45 [INFO] mesh_infra.bootstrap.mesh_init: Registered service
    """
    logging.basicConfig(
        level=getattr(logging, resolve_log_level(level), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


__all__: list[str] = ["LOG_LEVEL_ENV_VAR", "configure_logging", "resolve_log_level"]
