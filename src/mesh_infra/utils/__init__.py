# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Shared utilities: logging setup, error sanitization and retry."""

from mesh_infra.utils.util_error_sanitization import (
    REDACTED_MESSAGE,
    SENSITIVE_PATTERNS,
    sanitize_error_message,
    sanitize_error_string,
)
from mesh_infra.utils.util_logging import (
    LOG_LEVEL_ENV_VAR,
    configure_logging,
    resolve_log_level,
)
from mesh_infra.utils.util_retry import retry_with_constant_backoff

__all__: list[str] = [
    "LOG_LEVEL_ENV_VAR",
    "REDACTED_MESSAGE",
    "SENSITIVE_PATTERNS",
    "configure_logging",
    "resolve_log_level",
    "retry_with_constant_backoff",
    "sanitize_error_message",
    "sanitize_error_string",
]
