"""환경변수 기반 핵심 설정 해석기

기본값은 두 단계로 적용됩니다.
    1. resolve_raw: 변수가 없으면 타입 기본값("" / 0), 파싱 실패는 치명적 오류
    2. apply_domain_default: 타입 기본값이면 도메인 기본값(8001, "dev", "USD")으로 대체

비밀값은 한 번 더 간접 참조합니다.
    TOKEN_NAME=EXCHANGE_API_TOKEN  → os.environ["EXCHANGE_API_TOKEN"]
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import TypeVar, overload

from dotenv import load_dotenv
from pydantic import NonNegativeInt, TypeAdapter, ValidationError

from src.common.exceptions.base import ConfigurationError
from src.common.logger import PipelineLogger
from src.core.dto.internal.currency import ServiceConfigDomain
from src.core.types import (
    DEFAULT_BASE_CURRENCY,
    DEFAULT_ENVIRONMENT,
    DEFAULT_PORT,
    MAX_PORT,
    ErrorCode,
)

logger = PipelineLogger.get_logger("env_resolver", "config")

T = TypeVar("T", str, int)

# 부호 없는 정수 파서 (음수/비숫자 거부)
_UNSIGNED = TypeAdapter(NonNegativeInt)

DEFAULT_CONFIG_DIR = Path("config")


@overload
def resolve_raw(name: str, kind: type[str]) -> str: ...
@overload
def resolve_raw(name: str, kind: type[int]) -> int: ...


def resolve_raw(name: str, kind: type[T]) -> T:
    """환경변수를 타입에 맞게 읽는다.

    Args:
        name: 환경변수 이름
        kind: str 또는 int (부호 없는 정수)

    Returns:
        변수가 없으면 타입 기본값 ("" 또는 0)

    Raises:
        ConfigurationError: 값이 있으나 kind로 파싱할 수 없을 때
    """
    raw = os.environ.get(name)
    if raw is None:
        return kind()

    if kind is str:
        return raw

    try:
        return _UNSIGNED.validate_python(raw.strip(), strict=False)
    except ValidationError as e:
        raise ConfigurationError(
            message=f"{name} must be an unsigned integer, got {raw!r}",
            original_exception=e,
        ) from e


def apply_domain_default(value: T, default: T) -> T:
    """타입 기본값("" / 0)을 도메인 기본값으로 대체한다."""
    return default if value == type(value)() else value


def resolve_secret(name_var: str) -> str:
    """이름 변수 → 실제 비밀값 2단계 조회.

    name_var가 비어 있으면 비밀값 없음("")으로 본다. 이름이 지정됐는데
    해당 변수가 없으면 기본값 없이 치명적 오류로 처리한다.
    """
    secret_name = resolve_raw(name_var, str)
    if not secret_name:
        return ""

    try:
        return os.environ[secret_name]
    except KeyError as e:
        raise ConfigurationError(
            message=f"{name_var} points to {secret_name!r}, which is not set",
            original_exception=e,
            error_code=ErrorCode.MISSING_SECRET,
        ) from e


def resolve_environment() -> str:
    """ENV (기본: dev)"""
    return apply_domain_default(resolve_raw("ENV", str), DEFAULT_ENVIRONMENT)


def env_file_path(environment: str, config_dir: Path = DEFAULT_CONFIG_DIR) -> Path:
    return config_dir / f"{environment}.env"


def load_env_file(environment: str, config_dir: Path = DEFAULT_CONFIG_DIR) -> Path:
    """config/{environment}.env 를 프로세스 환경으로 한 번 로드한다.

    이미 설정된 환경변수는 덮어쓰지 않는다.

    Raises:
        ConfigurationError: 파일이 없거나 읽을 수 없을 때
    """
    path = env_file_path(environment, config_dir)
    if not path.is_file():
        raise ConfigurationError(
            message=f"env file not found: {path}",
            error_code=ErrorCode.MISSING_ENV_FILE,
        )

    try:
        with path.open(encoding="utf-8") as stream:
            load_dotenv(stream=stream, override=False)
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(
            message=f"env file not readable: {path}",
            original_exception=e,
            error_code=ErrorCode.MISSING_ENV_FILE,
        ) from e

    logger.info(f"환경 설정 파일 로드: {path}")
    return path


def resolve_listen_port() -> int:
    """PORT (기본: 8001)"""
    port = apply_domain_default(resolve_raw("PORT", int), DEFAULT_PORT)
    if port > MAX_PORT:
        raise ConfigurationError(message=f"PORT out of range: {port}")
    return port


def resolve_upstream_url() -> str:
    """RATE_URL, 비어 있으면 URL"""
    url = resolve_raw("RATE_URL", str) or resolve_raw("URL", str)
    return url.strip()


def build_service_config(
    *, upstream_url: str, access_token: str, default_base: str
) -> ServiceConfigDomain:
    """모든 필드를 명시적으로 받아 ServiceConfigDomain을 만든다.

    Raises:
        ConfigurationError: 업스트림 URL이 비어 있을 때 (요청마다 실패하는 대신 기동 시 실패)
    """
    if not upstream_url:
        raise ConfigurationError(
            message="upstream rate URL is empty (set RATE_URL or URL)",
            error_code=ErrorCode.MISSING_UPSTREAM_URL,
        )
    return ServiceConfigDomain(
        upstream_url=upstream_url,
        access_token=access_token,
        default_base=default_base,
    )


def resolve_service_config() -> ServiceConfigDomain:
    """환경변수에서 ServiceConfigDomain을 해석한다."""
    default_base = apply_domain_default(resolve_raw("BASE", str), DEFAULT_BASE_CURRENCY)
    return build_service_config(
        upstream_url=resolve_upstream_url(),
        access_token=resolve_secret("TOKEN_NAME"),
        default_base=default_base,
    )
