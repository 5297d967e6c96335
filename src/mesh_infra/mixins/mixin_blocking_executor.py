# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Thread pool execution for synchronous SDK clients.

boto3, hvac and python-consul are blocking libraries. Clients built on them
inherit this mixin and route every SDK call through a bounded
ThreadPoolExecutor via ``loop.run_in_executor`` so the event loop is never
blocked.

Usage:
    ```python
    class VaultSecretStore(MixinBlockingExecutor):
        def __init__(self, config: ModelVaultConfig) -> None:
            self._init_executor(config.max_concurrent_operations, "vault")

        async def get(self, name: str) -> bytes | None:
            return await self._run_blocking(lambda: self._read(name))
    ```
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from typing import TypeVar

T = TypeVar("T")


class MixinBlockingExecutor:
    """Runs blocking callables in a private thread pool."""

    _executor: ThreadPoolExecutor | None = None
    _executor_timeout_seconds: float | None = None

    def _init_executor(
        self,
        max_workers: int,
        thread_name_prefix: str,
        timeout_seconds: float | None = None,
    ) -> None:
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix=thread_name_prefix,
        )
        self._executor_timeout_seconds = timeout_seconds

    async def _run_blocking(self, func: Callable[[], T]) -> T:
        """Run ``func`` in the pool, bounded by the configured timeout.

        Raises:
            TimeoutError: If the call exceeds the timeout.
        """
        loop = asyncio.get_running_loop()
        future = loop.run_in_executor(self._executor, func)
        if self._executor_timeout_seconds is None:
            return await future
        return await asyncio.wait_for(future, timeout=self._executor_timeout_seconds)

    def _shutdown_executor(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=False, cancel_futures=True)
            self._executor = None


__all__: list[str] = ["MixinBlockingExecutor"]
