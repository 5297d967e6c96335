# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Unit tests for the IAM auth method bearer token."""

from __future__ import annotations

import base64
import json
from unittest.mock import MagicMock

import boto3
import pytest

from mesh_infra.discovery import build_iam_bearer_token, sts_endpoint
from mesh_infra.discovery.iam_login import SERVER_ID_HEADER, STS_REQUEST_BODY
from mesh_infra.errors import InfraAuthenticationError


def _decode(value: str) -> str:
    return base64.b64decode(value).decode("utf-8")


@pytest.fixture
def session() -> boto3.Session:
    return boto3.Session(
        aws_access_key_id="AKIDEXAMPLE",
        aws_secret_access_key="wJalrXUtnFEMI/K7MDENG+bPxRfiCYEXAMPLEKEY",
        region_name="us-west-2",
    )


class TestStsEndpoint:
    def test_regional(self) -> None:
        assert sts_endpoint("us-west-2") == "https://sts.us-west-2.amazonaws.com/"

    def test_global_without_region(self) -> None:
        assert sts_endpoint(None) == "https://sts.amazonaws.com/"

    def test_override_wins(self) -> None:
        assert sts_endpoint("us-west-2", "https://sts.internal/") == "https://sts.internal/"


class TestBearerToken:
    def test_token_encodes_signed_request(self, session: boto3.Session) -> None:
        token = json.loads(
            build_iam_bearer_token(
                "us-west-2", server_id_header_value="consul.example", session=session
            )
        )

        assert token["iam_http_request_method"] == "POST"
        assert _decode(token["iam_request_url"]) == "https://sts.us-west-2.amazonaws.com/"
        assert _decode(token["iam_request_body"]) == STS_REQUEST_BODY
        headers = json.loads(_decode(token["iam_request_headers"]))
        assert headers[SERVER_ID_HEADER] == ["consul.example"]
        assert headers["Authorization"][0].startswith("AWS4-HMAC-SHA256")
        assert "X-Amz-Date" in headers

    def test_missing_credentials(self) -> None:
        session = MagicMock()
        session.get_credentials.return_value = None

        with pytest.raises(InfraAuthenticationError):
            build_iam_bearer_token("us-west-2", session=session)
