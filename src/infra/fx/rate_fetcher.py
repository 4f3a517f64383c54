"""
업스트림 환율 API 클라이언트

`GET {url}[/{token}]/latest/{base}` 를 호출하고 응답 본문을 RateTableDTO로 디코딩합니다.
캐시/재시도/백오프 없이 호출당 정확히 한 번 요청합니다.
"""

from __future__ import annotations

import aiohttp
import orjson

from src.common.exceptions.base import RateFetchError
from src.common.logger import PipelineLogger
from src.core.dto.io.rates import RateTableDTO
from src.core.types import (
    UPSTREAM_DECODE_EXCEPTIONS,
    UPSTREAM_TRANSPORT_EXCEPTIONS,
    CurrencyCode,
    ErrorCode,
)

logger = PipelineLogger.get_logger("rate_fetcher", "infra")

LATEST_SEGMENT = "latest"


def build_rate_url(upstream_url: str, access_token: str, base: CurrencyCode) -> str:
    """업스트림 요청 URL 생성.

    토큰이 비어 있으면 토큰 세그먼트를 생략합니다.

    >>> build_rate_url("https://v6.exchangerate-api.com/v6", "abc", "USD")
    'https://v6.exchangerate-api.com/v6/abc/latest/USD'
    >>> build_rate_url("http://localhost:9000", "", "EUR")
    'http://localhost:9000/latest/EUR'
    """
    segments = [upstream_url.rstrip("/")]
    if access_token:
        segments.append(access_token)
    segments.extend((LATEST_SEGMENT, base))
    return "/".join(segments)


class ExchangeRateClient:
    """
    환율 API 클라이언트

    aiohttp 세션을 지연 생성해 재사용합니다. 타임아웃은 전송 기본값을 따릅니다.
    """

    def __init__(self, upstream_url: str, access_token: str = "") -> None:
        self.upstream_url = upstream_url
        self.access_token = access_token
        self._session: aiohttp.ClientSession | None = None

    async def __aenter__(self) -> ExchangeRateClient:
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """HTTP 세션을 생성하거나 재사용합니다."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                headers={"Accept": "application/json"},
            )
        return self._session

    async def close(self) -> None:
        """HTTP 세션을 종료합니다."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def fetch(self, base: CurrencyCode) -> RateTableDTO:
        """
        base 통화 기준 최신 환율 테이블 조회

        Args:
            base: 기준 통화 코드 (빈 문자열 불가, 호출 측에서 기본값 적용)

        Returns:
            RateTableDTO

        Raises:
            RateFetchError: 전송 실패, 2xx 외 상태 코드, 디코딩 실패
        """
        session = await self._ensure_session()
        url = build_rate_url(self.upstream_url, self.access_token, base)
        logger.info(f"Get today's exchange rate for {base}")

        try:
            async with session.get(url) as response:
                body = await response.read()
                status = response.status
        except UPSTREAM_TRANSPORT_EXCEPTIONS as e:
            raise RateFetchError(
                message=f"HTTP request failed: {e!r}",
                original_exception=e,
            ) from e

        if not 200 <= status < 300:
            raise RateFetchError(
                message=f"upstream returned HTTP {status}",
                error_code=ErrorCode.BAD_STATUS,
            )

        try:
            return RateTableDTO.model_validate(orjson.loads(body))
        except UPSTREAM_DECODE_EXCEPTIONS as e:
            raise RateFetchError(
                message=f"undecodable upstream body: {e}",
                original_exception=e,
                error_code=ErrorCode.DECODE_FAILED,
                retryable=False,
            ) from e
