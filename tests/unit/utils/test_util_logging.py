# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Unit tests for log level resolution."""

from __future__ import annotations

import pytest

from mesh_infra.utils import resolve_log_level
from mesh_infra.utils.util_logging import LOG_LEVEL_ENV_VAR


class TestResolveLogLevel:
    @pytest.mark.parametrize(
        ("configured", "expected"),
        [("TRACE", "DEBUG"), ("debug", "DEBUG"), ("WARN", "WARNING"), ("ERROR", "ERROR")],
    )
    def test_configured_levels(self, configured: str, expected: str) -> None:
        assert resolve_log_level(configured) == expected

    def test_environment_fallback(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(LOG_LEVEL_ENV_VAR, "warn")

        assert resolve_log_level() == "WARNING"

    def test_invalid_level_falls_back_to_info(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert resolve_log_level("LOUD") == "INFO"
        assert "Invalid log level 'LOUD'" in capsys.readouterr().err
