# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Unit tests for credential and secret record models."""

from __future__ import annotations

import pytest
from pydantic import SecretStr

from mesh_infra.models import (
    EMPTY_SECRET_RECORD,
    ModelCredential,
    ModelSecretRecord,
    secret_name,
)


class TestModelCredential:
    @pytest.mark.parametrize(
        ("identities", "expected"),
        [((), None), (("web",), "web"), (("web", "api"), None)],
    )
    def test_owned_family(self, identities: tuple[str, ...], expected: str | None) -> None:
        credential = ModelCredential(accessor_id="a", service_identities=identities)

        assert credential.owned_family == expected

    def test_from_consul(self) -> None:
        credential = ModelCredential.from_consul(
            {
                "AccessorID": "a1",
                "SecretID": "s1",
                "Description": "Token for web service",
                "ServiceIdentities": [{"ServiceName": "web"}],
                "CreateIndex": 12,
            }
        )

        assert credential.accessor_id == "a1"
        assert credential.secret_id == SecretStr("s1")
        assert credential.service_identities == ("web",)

    def test_redacted_secret_is_none(self) -> None:
        credential = ModelCredential.from_consul({"AccessorID": "a1", "SecretID": ""})

        assert credential.secret_id is None
        assert "s1" not in repr(credential)


class TestModelSecretRecord:
    def test_secret_name(self) -> None:
        assert secret_name("consul-ecs", "web") == "consul-ecs-web"

    @pytest.mark.parametrize("payload", [None, b"", b"  ", b"{}"])
    def test_empty_payloads(self, payload: bytes | None) -> None:
        assert ModelSecretRecord.from_payload(payload).is_empty

    def test_round_trip_keeps_token_secret(self) -> None:
        record = ModelSecretRecord(accessor_id="a1", token=SecretStr("s1"))

        parsed = ModelSecretRecord.from_payload(record.to_payload())

        assert parsed.accessor_id == "a1"
        assert parsed.token.get_secret_value() == "s1"
        assert "s1" not in repr(parsed)

    def test_empty_record_serializes_to_empty_object(self) -> None:
        assert EMPTY_SECRET_RECORD.to_payload() == b"{}"

    def test_non_object_payload_is_rejected(self) -> None:
        with pytest.raises(ValueError):
            ModelSecretRecord.from_payload(b'["a1"]')

    def test_unknown_fields_are_ignored(self) -> None:
        record = ModelSecretRecord.from_payload(b'{"accessor_id": "a1", "extra": 1}')

        assert record.accessor_id == "a1"
