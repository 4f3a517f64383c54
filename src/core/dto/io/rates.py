"""업스트림 환율 API 응답 DTO"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, StrictFloat

from src.core.types import CurrencyCode

# 업스트림 응답은 알 수 없는 최상위 필드를 포함하므로 extra="ignore"
UPSTREAM_CONFIG = ConfigDict(
    extra="ignore",
    frozen=True,
    validate_default=True,
)


class RateTableDTO(BaseModel):
    """`GET .../latest/{base}` 응답 중 환율 테이블.

    - conversion_rates 누락 시 ValidationError (디코딩 실패로 취급)
    - 키는 대소문자를 구분하는 통화 코드
    - 환율은 JSON 숫자만 허용 (정수는 float로, "0.92" 같은 문자열은 거부)
    """

    conversion_rates: dict[CurrencyCode, StrictFloat] = Field(
        ..., description="통화 코드 → base 대비 환율"
    )

    model_config = UPSTREAM_CONFIG

    def lookup(self, symbol: CurrencyCode) -> float | None:
        """심볼 환율 조회. 없으면 None (호출 측에서 명시적으로 처리)."""
        return self.conversion_rates.get(symbol)
