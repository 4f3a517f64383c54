from __future__ import annotations

from typing import Any

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from src.core.dto.internal.currency import ServiceConfigDomain
from src.core.dto.io.rates import RateTableDTO


def build_rate_payload(**overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "result": "success",
        "base_code": "USD",
        "time_last_update_unix": 1718841601,
        "conversion_rates": {"USD": 1.0, "EUR": 0.92, "JPY": 157.1},
    }
    payload.update(overrides)
    return payload


def build_rate_table(**rates: float) -> RateTableDTO:
    return RateTableDTO(conversion_rates=rates or {"EUR": 0.92, "JPY": 157.1})


def build_service_config(**overrides: str) -> ServiceConfigDomain:
    values: dict[str, str] = {
        "upstream_url": "http://rates.local/v6",
        "access_token": "",
        "default_base": "USD",
    }
    values.update(overrides)
    return ServiceConfigDomain(**values)


def isolate_env_key(monkeypatch: pytest.MonkeyPatch, key: str) -> None:
    # setenv로 원래 상태를 기록한 뒤 삭제 → undo 시 원상 복구
    monkeypatch.setenv(key, "")
    monkeypatch.delenv(key)


class UpstreamStub:
    """환율 API 스텁 서버 (aiohttp TestServer)

    - 받은 요청 경로를 `calls`에 기록
    - `status`, `body`를 바꿔 실패 응답을 흉내낸다
    """

    def __init__(self, payload: dict[str, Any] | None = None) -> None:
        self.payload = payload if payload is not None else build_rate_payload()
        self.status: int = 200
        self.body: bytes | None = None
        self.calls: list[str] = []
        self._server: TestServer | None = None
        self.url: str = ""

    async def _handle(self, request: web.Request) -> web.Response:
        self.calls.append(request.path)
        if self.body is not None:
            return web.Response(status=self.status, body=self.body)
        return web.json_response(self.payload, status=self.status)

    async def start(self) -> str:
        app = web.Application()
        app.router.add_get("/{tail:.*}", self._handle)
        self._server = TestServer(app, host="127.0.0.1")
        await self._server.start_server()
        self.url = str(self._server.make_url("/v6"))
        return self.url

    async def close(self) -> None:
        if self._server:
            await self._server.close()
