# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Bearer token for the Consul AWS IAM auth method.

The token is a JSON document describing a pre-signed
``sts:GetCallerIdentity`` request. Consul replays the request against STS to
learn the caller's IAM identity, so the token proves who the task is without
sharing AWS credentials.
"""

from __future__ import annotations

import base64
import json
from uuid import uuid4

import boto3
from botocore.auth import SigV4Auth
from botocore.awsrequest import AWSRequest

from mesh_infra.enums import EnumInfraTransportType
from mesh_infra.errors import InfraAuthenticationError, ModelInfraErrorContext

STS_REQUEST_BODY: str = "Action=GetCallerIdentity&Version=2011-06-15"
SERVER_ID_HEADER: str = "X-Consul-IAM-ServerID"

TASK_ID_META_KEY: str = "consul.hashicorp.com/task-id"
CLUSTER_META_KEY: str = "consul.hashicorp.com/cluster"


def _b64(value: str) -> str:
    return base64.b64encode(value.encode("utf-8")).decode("ascii")


def sts_endpoint(region: str | None, override: str | None = None) -> str:
    if override:
        return override
    if region:
        return f"https://sts.{region}.amazonaws.com/"
    return "https://sts.amazonaws.com/"


def build_iam_bearer_token(
    region: str | None,
    endpoint: str | None = None,
    server_id_header_value: str | None = None,
    session: boto3.Session | None = None,
) -> str:
    """Sign a GetCallerIdentity request and encode it as a login bearer token.

    Raises:
        InfraAuthenticationError: If no AWS credentials are available.
    """
    session = session or boto3.Session(region_name=region)
    credentials = session.get_credentials()
    if credentials is None:
        raise InfraAuthenticationError(
            "No AWS credentials available to sign the IAM login request",
            context=ModelInfraErrorContext(
                transport_type=EnumInfraTransportType.CONSUL,
                operation="build_iam_bearer_token",
                correlation_id=uuid4(),
            ),
        )

    url = sts_endpoint(region, endpoint)
    request = AWSRequest(
        method="POST",
        url=url,
        data=STS_REQUEST_BODY,
        headers={"Content-Type": "application/x-www-form-urlencoded; charset=utf-8"},
    )
    if server_id_header_value:
        request.headers[SERVER_ID_HEADER] = server_id_header_value
    SigV4Auth(credentials.get_frozen_credentials(), "sts", region or "us-east-1").add_auth(
        request
    )

    headers = {name: [value] for name, value in request.headers.items()}
    return json.dumps(
        {
            "iam_http_request_method": "POST",
            "iam_request_url": _b64(url),
            "iam_request_body": _b64(STS_REQUEST_BODY),
            "iam_request_headers": _b64(json.dumps(headers)),
        }
    )


__all__: list[str] = [
    "CLUSTER_META_KEY",
    "SERVER_ID_HEADER",
    "STS_REQUEST_BODY",
    "TASK_ID_META_KEY",
    "build_iam_bearer_token",
    "sts_endpoint",
]
