from __future__ import annotations

from enum import StrEnum
from typing import Final, TypeAlias

# 통화 코드 (예: "USD", "EUR") - 대소문자 구분
CurrencyCode: TypeAlias = str

DEFAULT_ENVIRONMENT: Final[str] = "dev"
DEFAULT_PORT: Final[int] = 8001
DEFAULT_BASE_CURRENCY: Final[CurrencyCode] = "USD"
LISTEN_HOST: Final[str] = "0.0.0.0"
MAX_PORT: Final[int] = 65535


class ServingStatus(StrEnum):
    """헬스 체크 서빙 상태"""

    SERVING = "SERVING"
    NOT_SERVING = "NOT_SERVING"
