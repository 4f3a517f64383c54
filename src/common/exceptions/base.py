from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from src.core.types import ErrorCode, ErrorDomain


@dataclass(slots=True, eq=False)
class CurrencyServiceException(Exception):
    """환율 서비스 기본 예외 클래스

    운영/관측 판단을 위한 구조화 필드를 포함하며, `to_dict()`는
    로그 직렬화 시 일관된 스키마를 제공합니다.
    """

    message: str
    original_exception: BaseException | None = None

    # 구조화 필드 (운영/관측 판단용)
    error_domain: ErrorDomain = ErrorDomain.UNKNOWN
    error_code: ErrorCode = ErrorCode.UNKNOWN_ERROR
    retryable: bool = False

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> dict[str, Any]:
        """예외 정보를 로그 extra 데이터로 변환"""
        result: dict[str, Any] = {
            "error": self.message,
            "error_type": self.__class__.__name__,
            "error_domain": self.error_domain.value,
            "error_code": self.error_code.value,
            "retryable": self.retryable,
        }

        if self.original_exception:
            result["original_error"] = str(self.original_exception)
            result["original_error_type"] = self.original_exception.__class__.__name__

        return result


@dataclass(slots=True, eq=False)
class ConfigurationError(CurrencyServiceException):
    """시작 시점 설정 오류 (치명적, 서비스 기동 중단)"""

    error_domain: ErrorDomain = ErrorDomain.CONFIGURATION
    error_code: ErrorCode = ErrorCode.INVALID_ENV_VALUE


@dataclass(slots=True, eq=False)
class ServerStartupError(CurrencyServiceException):
    """RPC 서버 기동 실패 (소켓 바인드 실패 등)"""

    error_domain: ErrorDomain = ErrorDomain.SERVER
    error_code: ErrorCode = ErrorCode.BIND_FAILED


@dataclass(slots=True, eq=False)
class RateFetchError(CurrencyServiceException):
    """업스트림 환율 조회 실패 (전송/상태코드/디코딩)"""

    error_domain: ErrorDomain = ErrorDomain.UPSTREAM
    error_code: ErrorCode = ErrorCode.FETCH_FAILED
    retryable: bool = True


@dataclass(slots=True, eq=False)
class SymbolNotFoundError(CurrencyServiceException):
    """요청한 심볼이 환율 테이블에 없음"""

    symbol: str = ""
    error_domain: ErrorDomain = ErrorDomain.REQUEST
    error_code: ErrorCode = ErrorCode.SYMBOL_NOT_FOUND


@dataclass(slots=True, eq=False)
class InvalidRequestError(CurrencyServiceException):
    """요청 필드 검증 실패"""

    error_domain: ErrorDomain = ErrorDomain.REQUEST
    error_code: ErrorCode = ErrorCode.INVALID_REQUEST
