"""부가(ambient) 설정 모듈 - 환경변수 기반

핵심 서비스 설정(ENV, PORT, RATE_URL, TOKEN_NAME, BASE)은 `env_resolver`가
2단계 기본값 규칙으로 해석합니다. 이 모듈은 그 외 운영 손잡이만 다룹니다.

설정 우선순위:
    1. 환경변수 (최우선) - export LOG_LEVEL=DEBUG
    2. config/{ENV}.env 파일 (부트스트랩이 프로세스 환경으로 로드)
    3. 코드 기본값 (settings.py 내부)

env 파일 값이 반영되도록 부트스트랩이 파일 로드 이후에 HealthSettings /
ServerSettings를 생성하고, LoggingSettings를 다시 읽어 기존 로거에 적용합니다.

사용 예시:
    # 헬스 토글 진단 모드 (1초 간격)
    export HEALTH_TOGGLE_ENABLED=true
    python main.py
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def env_settings(prefix: str) -> SettingsConfigDict:
    """접두사 기반 환경변수 설정

    Args:
        prefix: 환경변수 접두사 (예: LOG_, HEALTH_)

    Returns:
        Pydantic 설정 딕셔너리
    """
    return SettingsConfigDict(
        env_prefix=prefix,
        case_sensitive=False,
        extra="ignore",
    )


class LoggingSettings(BaseSettings):
    """로깅 설정

    환경변수 오버라이드:
        LOG_LEVEL: 로깅 레벨 (기본: INFO)
        LOG_TO_FILE: 파일 로깅 여부 (기본: false)
        LOG_DIR: 로그 디렉토리 (기본: logs)
    """

    level: str = "INFO"
    to_file: bool = False
    dir: str = "logs"

    model_config = env_settings("LOG_")


class HealthSettings(BaseSettings):
    """헬스 상태 토글(진단용) 설정

    환경변수 오버라이드:
        HEALTH_TOGGLE_ENABLED: 주기적 SERVING/NOT_SERVING 전환 여부 (기본: false)
        HEALTH_TOGGLE_INTERVAL: 전환 간격, 초 단위 (기본: 1.0)
    """

    toggle_enabled: bool = False
    toggle_interval: float = Field(default=1.0, gt=0)

    model_config = env_settings("HEALTH_")


class ServerSettings(BaseSettings):
    """gRPC 서버 운영 설정

    환경변수 오버라이드:
        SERVER_GRACE_PERIOD: 종료 시 진행 중 호출 대기 시간, 초 단위 (기본: 5.0)
    """

    grace_period: float = Field(default=5.0, ge=0)

    model_config = env_settings("SERVER_")


# ========================================
# 모듈 import 시점 로깅 설정 (env 파일 로드 후 부트스트랩이 재적용)
# ========================================

logging_settings = LoggingSettings()
