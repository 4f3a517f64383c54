from typing import AsyncIterator

from src.infra.fx.rate_fetcher import ExchangeRateClient


async def init_rate_client(
    upstream_url: str, access_token: str
) -> AsyncIterator[ExchangeRateClient]:
    """ExchangeRateClient 초기화 및 정리 (aiohttp 세션 종료)"""
    client = ExchangeRateClient(upstream_url=upstream_url, access_token=access_token)
    yield client
    await client.close()
