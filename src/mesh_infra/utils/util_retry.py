# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Constant-interval retry for idempotent infrastructure calls."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from mesh_infra.errors import RuntimeHostError
from mesh_infra.utils.util_error_sanitization import sanitize_error_message

logger = logging.getLogger(__name__)

T = TypeVar("T")

SleepFunc = Callable[[float], Awaitable[None]]


async def retry_with_constant_backoff(
    operation: Callable[[], Awaitable[T]],
    interval_seconds: float,
    *,
    operation_name: str,
    max_attempts: int | None = None,
    retry_on: tuple[type[BaseException], ...] = (RuntimeHostError,),
    sleep: SleepFunc = asyncio.sleep,
) -> T:
    """Run ``operation`` until it succeeds, waiting a fixed interval between tries.

    Every failed attempt is logged with the sanitized error and the wait
    before the next attempt. With ``max_attempts=None`` the loop only ends
    on success or cancellation.

    Args:
        operation: Zero-argument coroutine factory; must be idempotent
        interval_seconds: Wait between attempts
        operation_name: Human readable name used in log messages
        max_attempts: Give up after this many attempts and re-raise
        retry_on: Exception types that trigger a retry; others propagate
        sleep: Sleep coroutine, replaceable in tests

    Raises:
        The last error once ``max_attempts`` is exhausted.
    """
    attempt = 0
    while True:
        attempt += 1
        try:
            return await operation()
        except retry_on as e:
            if max_attempts is not None and attempt >= max_attempts:
                raise
            logger.warning(
                "Failed to %s (attempt %d), retrying in %.1fs: %s",
                operation_name,
                attempt,
                interval_seconds,
                sanitize_error_message(e),
                extra={
                    "operation": operation_name,
                    "attempt": attempt,
                    "retry_interval_seconds": interval_seconds,
                    "error_type": type(e).__name__,
                },
            )
        await sleep(interval_seconds)


__all__: list[str] = ["SleepFunc", "retry_with_constant_backoff"]
