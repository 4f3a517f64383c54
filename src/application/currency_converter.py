from __future__ import annotations

from typing import Protocol

from src.common.exceptions.base import InvalidRequestError, SymbolNotFoundError
from src.common.logger import PipelineLogger
from src.core.dto.internal.currency import (
    ConversionRequestDomain,
    ConversionResponseDomain,
)
from src.core.dto.io.rates import RateTableDTO
from src.core.types import CurrencyCode

logger = PipelineLogger.get_logger("currency_converter", "app")


class RateFetcher(Protocol):
    async def fetch(self, base: CurrencyCode) -> RateTableDTO: ...


class CurrencyConverter:
    """단일 변환 요청 처리기 (전송 계층과 무관)

    책임:
    - base 기본값 적용 (빈 base → 설정된 기본 base)
    - 요청당 정확히 한 번 업스트림 조회 (캐시 없음)
    - 심볼 존재 여부를 명시적으로 확인

    업스트림 실패(RateFetchError)는 그대로 전파하며, 상태 코드 매핑은 RPC 어댑터가 담당합니다.
    """

    def __init__(self, fetcher: RateFetcher, default_base: CurrencyCode) -> None:
        if not default_base:
            raise ValueError("default_base must not be empty")
        self._fetcher = fetcher
        self._default_base = default_base

    @property
    def default_base(self) -> CurrencyCode:
        return self._default_base

    def resolve_base(self, base: CurrencyCode) -> CurrencyCode:
        return base or self._default_base

    async def convert(self, request: ConversionRequestDomain) -> ConversionResponseDomain:
        """
        Raises:
            InvalidRequestError: symbol이 비어 있음 (업스트림 호출 없음)
            RateFetchError: 업스트림 조회 실패
            SymbolNotFoundError: 환율 테이블에 symbol이 없음
        """
        if not request.symbol:
            raise InvalidRequestError(message="symbol must not be empty")

        base = self.resolve_base(request.base)
        table = await self._fetcher.fetch(base)

        value = table.lookup(request.symbol)
        if value is None:
            logger.warning(
                f"symbol {request.symbol} not in {base} rate table",
                symbol=request.symbol,
                base=base,
            )
            raise SymbolNotFoundError(
                message=f"invalid symbol: {request.symbol}",
                symbol=request.symbol,
            )

        return ConversionResponseDomain(to=request.symbol, base=base, value=value)
