from __future__ import annotations

from typing import AsyncIterator

import pytest
import pytest_asyncio

from tests.factory_builders import UpstreamStub, isolate_env_key

# 테스트가 건드리는 핵심 환경변수 + env 파일이 설정할 수 있는 부가 설정
SERVICE_ENV_KEYS = ("ENV", "PORT", "RATE_URL", "URL", "TOKEN_NAME", "BASE")
AMBIENT_ENV_KEYS = (
    "LOG_LEVEL",
    "LOG_TO_FILE",
    "LOG_DIR",
    "HEALTH_TOGGLE_ENABLED",
    "HEALTH_TOGGLE_INTERVAL",
    "SERVER_GRACE_PERIOD",
)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """관련 환경변수를 비우고, 테스트 중 dotenv가 설정한 값도 종료 시 되돌린다."""
    for key in SERVICE_ENV_KEYS + AMBIENT_ENV_KEYS:
        isolate_env_key(monkeypatch, key)
    return monkeypatch


@pytest_asyncio.fixture
async def upstream() -> AsyncIterator[UpstreamStub]:
    stub = UpstreamStub()
    await stub.start()
    yield stub
    await stub.close()
