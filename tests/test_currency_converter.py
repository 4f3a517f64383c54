from __future__ import annotations

import pytest

from src.application.currency_converter import CurrencyConverter
from src.common.exceptions.base import (
    InvalidRequestError,
    RateFetchError,
    SymbolNotFoundError,
)
from src.core.dto.internal.currency import ConversionRequestDomain
from src.core.dto.io.rates import RateTableDTO
from tests.factory_builders import build_rate_table


class _RecordingFetcher:
    def __init__(self, table: RateTableDTO | None = None) -> None:
        self.table = table or build_rate_table()
        self.bases: list[str] = []

    async def fetch(self, base: str) -> RateTableDTO:
        self.bases.append(base)
        return self.table


class _FailingFetcher:
    async def fetch(self, base: str) -> RateTableDTO:
        raise RateFetchError(message="connection refused")


@pytest.mark.asyncio
async def test_convert_returns_rate_for_symbol() -> None:
    fetcher = _RecordingFetcher()
    converter = CurrencyConverter(fetcher, default_base="GBP")

    result = await converter.convert(ConversionRequestDomain(symbol="EUR", base="USD"))

    assert result.to == "EUR"
    assert result.base == "USD"
    assert result.value == pytest.approx(0.92)
    assert fetcher.bases == ["USD"]


@pytest.mark.asyncio
async def test_convert_empty_base_uses_configured_default() -> None:
    fetcher = _RecordingFetcher()
    converter = CurrencyConverter(fetcher, default_base="GBP")

    result = await converter.convert(ConversionRequestDomain(symbol="JPY", base=""))

    assert result.base == "GBP"
    assert fetcher.bases == ["GBP"]


@pytest.mark.asyncio
@pytest.mark.parametrize("base", ["USD", "EUR", "usd"])
async def test_convert_non_empty_base_is_used_verbatim(base: str) -> None:
    fetcher = _RecordingFetcher()
    converter = CurrencyConverter(fetcher, default_base="GBP")

    result = await converter.convert(ConversionRequestDomain(symbol="EUR", base=base))

    assert result.base == base
    assert fetcher.bases == [base]


@pytest.mark.asyncio
async def test_convert_repeats_upstream_fetch_for_identical_requests() -> None:
    fetcher = _RecordingFetcher()
    converter = CurrencyConverter(fetcher, default_base="USD")
    request = ConversionRequestDomain(symbol="EUR", base="USD")

    for _ in range(3):
        await converter.convert(request)

    assert len(fetcher.bases) == 3


@pytest.mark.asyncio
async def test_convert_unknown_symbol_raises_symbol_not_found() -> None:
    converter = CurrencyConverter(_RecordingFetcher(), default_base="USD")

    with pytest.raises(SymbolNotFoundError) as exc_info:
        await converter.convert(ConversionRequestDomain(symbol="XYZ", base="USD"))

    assert exc_info.value.symbol == "XYZ"


@pytest.mark.asyncio
async def test_convert_symbol_lookup_is_case_sensitive() -> None:
    converter = CurrencyConverter(_RecordingFetcher(), default_base="USD")

    with pytest.raises(SymbolNotFoundError):
        await converter.convert(ConversionRequestDomain(symbol="eur", base="USD"))


@pytest.mark.asyncio
async def test_convert_empty_symbol_is_rejected_without_fetch() -> None:
    fetcher = _RecordingFetcher()
    converter = CurrencyConverter(fetcher, default_base="USD")

    with pytest.raises(InvalidRequestError):
        await converter.convert(ConversionRequestDomain(symbol="", base="USD"))

    assert fetcher.bases == []


@pytest.mark.asyncio
async def test_convert_propagates_fetch_failure() -> None:
    converter = CurrencyConverter(_FailingFetcher(), default_base="USD")

    with pytest.raises(RateFetchError):
        await converter.convert(ConversionRequestDomain(symbol="EUR", base="USD"))


def test_converter_requires_default_base() -> None:
    with pytest.raises(ValueError):
        CurrencyConverter(_RecordingFetcher(), default_base="")
