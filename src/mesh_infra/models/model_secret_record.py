# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Secret record stored per workload family.

The record is a JSON document ``{"accessor_id": ..., "token": ...}`` kept
under ``<prefix>-<family>`` in the secret store. ``{}`` (or no record at all)
is the canonical "no credential" state.
"""

from __future__ import annotations

import json

from pydantic import BaseModel, ConfigDict, SecretStr


def secret_name(prefix: str, family: str) -> str:
    """Return the deterministic secret name for a family."""
    return f"{prefix}-{family}"


class ModelSecretRecord(BaseModel):
    """Pointer from a family to its current credential."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    accessor_id: str = ""
    token: SecretStr = SecretStr("")

    @property
    def is_empty(self) -> bool:
        return not self.accessor_id

    @classmethod
    def from_payload(cls, payload: bytes | None) -> ModelSecretRecord:
        """Parse a stored payload; a missing or blank payload is the empty record.

        Raises:
            ValueError: If the payload is not a JSON object.
        """
        if payload is None or not payload.strip():
            return cls()
        document = json.loads(payload)
        if not isinstance(document, dict):
            raise ValueError("secret record must be a JSON object")
        return cls(
            accessor_id=str(document.get("accessor_id") or ""),
            token=SecretStr(str(document.get("token") or "")),
        )

    def to_payload(self) -> bytes:
        if self.is_empty:
            return b"{}"
        return json.dumps(
            {"accessor_id": self.accessor_id, "token": self.token.get_secret_value()}
        ).encode("utf-8")


EMPTY_SECRET_RECORD: ModelSecretRecord = ModelSecretRecord()

__all__: list[str] = ["EMPTY_SECRET_RECORD", "ModelSecretRecord", "secret_name"]
