"""트라이/캐치 블록에서 사용할 예외 타입 정의 모듈.

광범위한 Exception 사용을 지양하고, 의도한 예외만 명시적으로 처리하기 위해 사용합니다.
"""

import asyncio
from enum import StrEnum
from typing import Final

import aiohttp
import orjson
from pydantic import ValidationError


# ----------------------------------------------------------------------------
# Enums
# ----------------------------------------------------------------------------
class ErrorDomain(StrEnum):
    """에러 도메인 분류"""

    CONFIGURATION = "configuration"
    SERVER = "server"
    UPSTREAM = "upstream"
    REQUEST = "request"
    UNKNOWN = "unknown"


class ErrorCode(StrEnum):
    """에러 코드 분류"""

    MISSING_ENV_FILE = "missing_env_file"
    INVALID_ENV_VALUE = "invalid_env_value"
    MISSING_SECRET = "missing_secret"
    MISSING_UPSTREAM_URL = "missing_upstream_url"
    BIND_FAILED = "bind_failed"
    FETCH_FAILED = "fetch_failed"
    BAD_STATUS = "bad_status"
    DECODE_FAILED = "decode_failed"
    SYMBOL_NOT_FOUND = "symbol_not_found"
    INVALID_REQUEST = "invalid_request"
    UNKNOWN_ERROR = "unknown_error"


# ----------------------------------------------------------------------------
# Exception Constants
# ----------------------------------------------------------------------------

# 1. 업스트림 전송 계층 예외
# - aiohttp.ClientError: 연결 거부, DNS 실패, 잘못된 URL 등
# - asyncio.TimeoutError: 전송 기본 타임아웃 초과
# - OSError: 소켓 레벨 에러
UPSTREAM_TRANSPORT_EXCEPTIONS: Final[tuple[type[BaseException], ...]] = (
    aiohttp.ClientError,
    asyncio.TimeoutError,
    OSError,
)

# 2. 업스트림 응답 디코딩 예외
# - orjson.JSONDecodeError: JSON 아님
# - ValidationError: conversion_rates 누락/타입 불일치
UPSTREAM_DECODE_EXCEPTIONS: Final[tuple[type[BaseException], ...]] = (
    orjson.JSONDecodeError,
    ValidationError,
    UnicodeDecodeError,
)
