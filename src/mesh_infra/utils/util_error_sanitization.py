# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Error message sanitization utilities.

This module provides functions to sanitize error messages before they are
logged or printed to stderr by the mesh-infra commands.

Sanitization protects against leaking sensitive data such as:
- ACL token secret IDs and Vault tokens
- AWS credentials and signed IAM login requests
- CA and private key material

Guidelines:
    NEVER include: secret IDs, bearer tokens, AWS credentials, key material
    SAFE to include: error types, accessor IDs, family names, secret names

Example:
    >>> from mesh_infra.utils import sanitize_error_message
    >>> try:
    ...     raise ValueError("login failed: X-Consul-Token: 5f1c...")
    ... except Exception as e:
    ...     safe_msg = sanitize_error_message(e)
    >>> "5f1c" not in safe_msg
    True
"""

from __future__ import annotations

# Patterns that may indicate sensitive data in error messages.
# These patterns are checked case-insensitively against the error message.
# Plain mentions of "token" or "secret" are left alone: accessor IDs and
# secret names are safe to log and appear in most controller messages.
SENSITIVE_PATTERNS: tuple[str, ...] = (
    # Consul and Vault credentials
    "secretid",
    "secret_id",
    "x-consul-token",
    "x-vault-token",
    "token=",
    "token:",
    '"token"',
    # HTTP authentication
    "bearer",
    "authorization",
    # AWS credentials and signed IAM login requests
    "aws_secret",
    "aws_access",
    "aws_session_token",
    "x-amz-security-token",
    "iam_request_headers",
    # Generic credentials
    "password",
    "passwd",
    "private_key",
    "private-key",
    # Certificate and key material
    "-----begin",
    "-----end",
)

REDACTED_MESSAGE: str = "[REDACTED - potentially sensitive data]"


def sanitize_error_string(error_str: str, max_length: int = 500) -> str:
    """Sanitize a raw error string for safe inclusion in logs.

    Sanitization rules:
        1. If a sensitive pattern is present, return a generic redacted message
        2. Truncate long messages to prevent excessive data exposure

    Args:
        error_str: The error string to sanitize
        max_length: Maximum length of the sanitized message (default 500)

    Returns:
        Sanitized error message safe for logging.
    """
    if not error_str:
        return ""

    error_lower = error_str.lower()
    for pattern in SENSITIVE_PATTERNS:
        if pattern in error_lower:
            return REDACTED_MESSAGE

    if len(error_str) > max_length:
        return error_str[:max_length] + "... [truncated]"

    return error_str


def sanitize_error_message(exception: BaseException, max_length: int = 500) -> str:
    """Sanitize an exception for safe inclusion in logs.

    Returns:
        ``"{ExceptionType}: {sanitized_message}"``

    Example:
        >>> sanitize_error_message(KeyError("Bearer abc"))
        'KeyError: [REDACTED - potentially sensitive data]'
    """
    return f"{type(exception).__name__}: {sanitize_error_string(str(exception), max_length)}"


__all__: list[str] = [
    "REDACTED_MESSAGE",
    "SENSITIVE_PATTERNS",
    "sanitize_error_message",
    "sanitize_error_string",
]
