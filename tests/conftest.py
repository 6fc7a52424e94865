from __future__ import annotations

import json
import os
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from core.config import AppConfig, LarkConfig

# Keep a developer's environment from leaking into config-dependent tests.
for _name in (
    "APP_ID",
    "APP_SECRET",
    "AUTH_TOKEN",
    "LARK_APP_ID",
    "LARK_APP_SECRET",
    "LARK_AUTH_TOKEN",
    "LARK_BASE_URL",
    "LOG_LEVEL",
):
    os.environ.pop(_name, None)

AUTH_URL = "https://open.larksuite.com/open-apis/auth/v3/app_access_token/internal"
RECORDS_PREFIX = "/open-apis/bitable/v1/apps/"


class FakeLark:
    """Stand-in for the Lark open platform, served through httpx.MockTransport."""

    def __init__(self) -> None:
        self.items: list[dict[str, Any]] = []
        self.auth_payload: dict[str, Any] = {
            "code": 0,
            "msg": "ok",
            "app_access_token": "t-fake-token",
        }
        self.records_payload: dict[str, Any] | None = None
        # Raw bodies, served instead of the JSON payloads when set.
        self.auth_content: bytes | None = None
        self.records_content: bytes | None = None
        self.fail_auth = False
        self.fail_records = False
        self.requests: list[httpx.Request] = []

    @property
    def auth_calls(self) -> int:
        return sum(1 for r in self.requests if str(r.url) == AUTH_URL)

    @property
    def record_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path.startswith(RECORDS_PREFIX)]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if str(request.url) == AUTH_URL:
            if self.fail_auth:
                raise httpx.ConnectError("auth unreachable", request=request)
            if self.auth_content is not None:
                return httpx.Response(200, content=self.auth_content)
            return httpx.Response(200, json=self.auth_payload)

        if request.url.path.startswith(RECORDS_PREFIX):
            if self.fail_records:
                raise httpx.ConnectError("records unreachable", request=request)
            if self.records_content is not None:
                return httpx.Response(200, content=self.records_content)
            payload = self.records_payload
            if payload is None:
                payload = {"code": 0, "msg": "success", "data": {"items": self.items}}
            return httpx.Response(200, json=payload)

        return httpx.Response(404, json={"code": 404, "msg": "not found"})

    @staticmethod
    def field_names(request: httpx.Request) -> list[str]:
        return json.loads(request.url.params["field_names"])

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def fake_lark() -> FakeLark:
    return FakeLark()


@pytest.fixture
def app_config() -> AppConfig:
    return AppConfig(
        lark=LarkConfig(app_id="cli_test", app_secret="shh"),
        auth_token="my-secret-token-123",
    )


@pytest.fixture
def records() -> Callable[..., list[dict[str, Any]]]:
    """Build record dicts for a single field from (id, value) pairs."""

    def _build(field_name: str, *pairs: tuple[str, Any]) -> list[dict[str, Any]]:
        return [{"id": rid, "fields": {field_name: value}} for rid, value in pairs]

    return _build
