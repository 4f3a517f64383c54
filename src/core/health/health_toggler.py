from __future__ import annotations

import asyncio
from typing import Protocol

from src.common.logger import PipelineLogger
from src.core.types import ServingStatus

logger = PipelineLogger.get_logger("health_toggler", "health")


class HealthReporter(Protocol):
    async def report(self, service_name: str, status: ServingStatus) -> None: ...


def status_for_tick(tick: int) -> ServingStatus:
    """오도미터 규칙: 짝수 틱 SERVING, 홀수 틱 NOT_SERVING"""
    return ServingStatus.SERVING if tick % 2 == 0 else ServingStatus.NOT_SERVING


class HealthToggler:
    """진단용 헬스 상태 토글러

    헬스 Watch 전파를 관찰할 수 있도록 서비스 상태를 일정 간격마다 뒤집습니다.
    실제 업스트림 가용성과는 무관합니다.

    책임:
    - 기동 시 SERVING 보고 (틱 0, 태스크 시작 전 동기적으로)
    - 단일 백그라운드 태스크에서 틱 카운트 → 상태 계산 → 보고
    - 상태 셀의 유일한 writer, 외부에는 읽기 전용 프로퍼티만 노출
    """

    def __init__(
        self,
        reporter: HealthReporter,
        service_name: str,
        interval: float = 1.0,
    ) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self._reporter = reporter
        self._service_name = service_name
        self._interval = interval

        self._tick: int = 0
        self._status: ServingStatus = status_for_tick(0)
        self._task: asyncio.Task[None] | None = None

    @property
    def tick(self) -> int:
        return self._tick

    @property
    def status(self) -> ServingStatus:
        return self._status

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def mark_serving(self) -> None:
        """틱을 0으로 되돌리고 SERVING 보고"""
        self._tick = 0
        await self._publish()

    async def start(self) -> None:
        """토글 태스크 시작 (이미 실행 중이면 무시)"""
        if self.is_running:
            return
        self._task = asyncio.create_task(
            self._toggle_loop(), name=f"health-toggler:{self._service_name}"
        )
        logger.info(
            f"{self._service_name}: 헬스 상태 토글 시작 (interval={self._interval}s)"
        )

    async def stop(self) -> None:
        """토글 태스크 취소 (태스크 예외는 기록만 하고 전파하지 않음)"""
        if self._task is None:
            return

        task, self._task = self._task, None
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        except Exception as e:
            logger.error(
                f"{self._service_name}: 헬스 토글 태스크 비정상 종료 - {e!r}",
                tick=self._tick,
            )
        logger.info(f"{self._service_name}: 헬스 상태 토글 중단")

    async def _publish(self) -> None:
        self._status = status_for_tick(self._tick)
        await self._reporter.report(self._service_name, self._status)
        logger.debug(f"{self._service_name}: tick={self._tick} status={self._status}")

    async def _toggle_loop(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            self._tick += 1
            try:
                await self._publish()
            except Exception as e:
                # 보고 실패는 해당 틱만 건너뛰고 다음 틱에서 다시 보고
                logger.error(
                    f"{self._service_name}: 헬스 상태 보고 실패 - {e!r}",
                    tick=self._tick,
                    exc_info=True,
                )
