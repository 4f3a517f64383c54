from __future__ import annotations

from dataclasses import dataclass

from src.core.types import CurrencyCode


@dataclass(slots=True, frozen=True, repr=False, match_args=False, kw_only=True)
class ServiceConfigDomain:
    """변환 핸들러 설정 (프로세스 수명 동안 불변).

    - 모든 필드를 명시적으로 받으며, 기본값은 호출 측에서 생성 전에 적용합니다.
    - access_token이 빈 문자열이면 URL에 토큰 세그먼트를 넣지 않습니다.
    """

    upstream_url: str
    access_token: str
    default_base: CurrencyCode

    def __repr__(self) -> str:
        # 토큰은 로그에 남기지 않는다
        token = "***" if self.access_token else "''"
        return (
            f"ServiceConfigDomain(upstream_url={self.upstream_url!r}, "
            f"access_token={token}, default_base={self.default_base!r})"
        )


@dataclass(slots=True, frozen=True, match_args=False, kw_only=True)
class ConversionRequestDomain:
    """호출자가 보낸 변환 요청 (호출당 1개, 불변).

    base가 빈 문자열이면 설정된 기본 base를 사용합니다.
    """

    symbol: CurrencyCode
    base: CurrencyCode = ""


@dataclass(slots=True, frozen=True, match_args=False, kw_only=True)
class ConversionResponseDomain:
    """성공한 변환 결과. `base`는 실제로 사용된 base입니다."""

    to: CurrencyCode
    base: CurrencyCode
    value: float
