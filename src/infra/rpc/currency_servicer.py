"""currency.Currency gRPC 어댑터

도메인 예외 → gRPC 상태 코드 매핑:
    RateFetchError       → INTERNAL ("Internal error", 원인은 서버 로그에만 기록)
    SymbolNotFoundError  → INVALID_ARGUMENT ("invalid symbol: XXX")
    InvalidRequestError  → INVALID_ARGUMENT
"""

from __future__ import annotations

from typing import Any

import grpc

from src.application.currency_converter import CurrencyConverter
from src.common.exceptions.base import (
    InvalidRequestError,
    RateFetchError,
    SymbolNotFoundError,
)
from src.common.logger import PipelineLogger
from src.core.dto.internal.currency import ConversionRequestDomain
from src.infra.rpc.currency_pb import CurrencyResponse

logger = PipelineLogger.get_logger("currency_servicer", "rpc")

INTERNAL_ERROR_DETAIL = "Internal error"


class CurrencyServicer:
    def __init__(self, converter: CurrencyConverter) -> None:
        self._converter = converter

    async def Convert(self, request: Any, context: grpc.aio.ServicerContext) -> Any:
        await logger.ainfo(
            f"Convert symbol={request.symbol!r} base={request.base!r}",
            peer=context.peer(),
        )
        domain_request = ConversionRequestDomain(symbol=request.symbol, base=request.base)

        try:
            result = await self._converter.convert(domain_request)
        except RateFetchError as e:
            await logger.aerror(f"rate fetch failed: {e}", **e.to_dict())
            await context.abort(grpc.StatusCode.INTERNAL, INTERNAL_ERROR_DETAIL)
        except (SymbolNotFoundError, InvalidRequestError) as e:
            await context.abort(grpc.StatusCode.INVALID_ARGUMENT, e.message)

        return CurrencyResponse(to=result.to, base=result.base, value=result.value)
