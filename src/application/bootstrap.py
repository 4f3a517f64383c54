"""서비스 부트스트랩

Flow:
1. ENV 해석 (기본: dev) → config/{ENV}.env 로드 (없으면 치명적), LOG_* 재적용
2. PORT (기본: 8001), ServiceConfigDomain 해석
3. DI Container 구성 및 Resource 초기화
4. 변환 서비스 + 헬스 서비스를 하나의 서버에 등록, 0.0.0.0:{port} 바인드
5. 변환 서비스 SERVING 보고, (옵션) 헬스 토글러 시작
6. 종료될 때까지 서빙
"""

from __future__ import annotations

import inspect
from pathlib import Path
from typing import Any

import grpc

from src.common.logger import PipelineLogger
from src.config.containers import ApplicationContainer
from src.config.env_resolver import (
    DEFAULT_CONFIG_DIR,
    load_env_file,
    resolve_environment,
    resolve_listen_port,
    resolve_service_config,
)
from src.config.settings import HealthSettings, LoggingSettings, ServerSettings
from src.core.health.health_toggler import HealthToggler
from src.infra.rpc.server import build_server

logger = PipelineLogger.get_logger("bootstrap", "app")


async def _resolve(provided: Any) -> Any:
    """비동기 Resource에 의존하는 provider는 awaitable을 반환한다."""
    if inspect.isawaitable(provided):
        return await provided
    return provided


class Application:
    """애플리케이션 메인 클래스

    책임:
    - 설정 해석 및 DI Container 관리
    - gRPC 서버 기동/종료
    - 헬스 토글러 태스크 관리
    - Graceful Shutdown
    """

    def __init__(self, config_dir: Path = DEFAULT_CONFIG_DIR) -> None:
        self.config_dir = config_dir
        self.container: ApplicationContainer | None = None
        self.server: grpc.aio.Server | None = None
        self.toggler: HealthToggler | None = None
        self.port: int = 0
        self.health_settings: HealthSettings | None = None
        self.server_settings: ServerSettings | None = None

    async def initialize(self, port_override: int | None = None) -> None:
        """설정 해석부터 포트 바인드까지 (모든 실패는 치명적)

        Args:
            port_override: 지정 시 PORT 대신 사용 (테스트에서 0으로 임의 포트 바인드)
        """
        environment = resolve_environment()
        load_env_file(environment, self.config_dir)
        # 모듈 레벨 로거는 env 파일 로드 전에 생성되었으므로 LOG_* 재적용
        PipelineLogger.apply_settings(LoggingSettings())

        port = resolve_listen_port() if port_override is None else port_override
        service_config = resolve_service_config()
        logger.info(f"서비스 설정: env={environment} {service_config!r}")

        # env 파일 로드 이후에 생성해야 파일 값이 반영된다
        self.health_settings = HealthSettings()
        self.server_settings = ServerSettings()

        self.container = ApplicationContainer(
            service_config=service_config,
            health_config=self.health_settings,
        )
        await _resolve(self.container.init_resources())

        currency_servicer = await _resolve(self.container.currency_servicer())
        health_servicer = await _resolve(self.container.health_servicer())
        self.toggler = await _resolve(self.container.health_toggler())

        self.server, self.port = build_server(currency_servicer, health_servicer, port)

        # 토글러 태스크 시작 전에 SERVING을 동기적으로 보고
        await self.toggler.mark_serving()

    async def run(self) -> None:
        """서버 시작 후 종료될 때까지 대기"""
        assert self.server is not None and self.toggler is not None
        await self.server.start()
        logger.info(f"Currency server listening on: 0.0.0.0:{self.port}")

        if self.health_settings and self.health_settings.toggle_enabled:
            await self.toggler.start()

        await self.server.wait_for_termination()

    async def shutdown(self) -> None:
        """Graceful Shutdown

        Flow:
        1. 헬스 토글러 중단
        2. 헬스 서비스 graceful shutdown 진입 (모든 서비스 NOT_SERVING)
        3. 서버 종료 (진행 중 호출은 grace 시간 동안 대기)
        4. Resource 정리 (aiohttp 세션)
        """
        logger.info("정리 작업 시작...")

        if self.toggler:
            await self.toggler.stop()

        if self.container:
            health_servicer = await _resolve(self.container.health_servicer())
            await health_servicer.enter_graceful_shutdown()

        if self.server:
            grace = self.server_settings.grace_period if self.server_settings else None
            await self.server.stop(grace)

        if self.container:
            await _resolve(self.container.shutdown_resources())
        logger.info("✅ 서버 종료 완료")
