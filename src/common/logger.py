from __future__ import annotations

import asyncio
import logging
import queue
import sys
import weakref
from datetime import datetime
from logging.handlers import QueueHandler, QueueListener, TimedRotatingFileHandler
from pathlib import Path
from typing import Any, ClassVar

from src.config.settings import LoggingSettings, logging_settings

# LogRecord 예약 속성과 충돌하는 extra 키는 접두사를 붙여 보존한다
_RESERVED_RECORD_KEYS = frozenset(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__.keys()
) | {"message", "asctime"}


class PipelineLogger:
    """
    비동기 서비스용 로깅 시스템
    컴포넌트별 로거, 큐 기반 비동기 출력, 키워드 extra 병합 기능 제공
    """

    # 모듈 import 시점의 LOG_* 값 (env 파일 로드 후 apply_settings로 교체)
    _settings: ClassVar[LoggingSettings] = logging_settings
    _instances: ClassVar[weakref.WeakSet[PipelineLogger]] = weakref.WeakSet()

    @classmethod
    def get_logger(cls, name: str, component: str | None = None, **kwargs) -> PipelineLogger:
        """
        로거 인스턴스를 반환하는 간단한 팩토리 메서드.
        표준 logging.getLogger가 이름 단위로 사실상 싱글톤이므로
        이름별 캐시 없이 인스턴스를 생성합니다 (설정 재적용용 약한 참조만 보관).
        """
        return cls(name, component, **kwargs)

    @classmethod
    def apply_settings(cls, settings: LoggingSettings) -> None:
        """
        새 로깅 설정을 이미 생성된 모든 로거에 적용합니다.

        env 파일이 로드되기 전에 모듈 레벨에서 만들어진 로거도
        LOG_LEVEL / LOG_TO_FILE / LOG_DIR 파일 값을 따르게 됩니다.
        생성자에서 명시한 값은 유지됩니다.
        """
        cls._settings = settings
        for instance in list(cls._instances):
            instance._reconfigure()

    def __init__(
        self,
        name: str,
        component: str | None = None,
        level: int | str | None = None,
        log_to_file: bool | None = None,
        log_to_console: bool = True,
        log_dir: str | None = None,
        rotation: str = "midnight",
    ):
        """
        로거 초기화

        Args:
            name: 로거 이름
            component: 컴포넌트 이름 (rpc, infra, app 등)
            level: 로깅 레벨 (None이면 LOG_LEVEL)
            log_to_file: 파일에 로깅 여부 (None이면 LOG_TO_FILE)
            log_to_console: 콘솔에 로깅 여부
            log_dir: 로그 디렉토리 (None이면 LOG_DIR)
            rotation: 로그 로테이션 주기
        """
        self.name = name
        self.component = component
        self.log_to_console = log_to_console
        self.rotation = rotation

        # 명시값 (None이면 LoggingSettings를 따른다)
        self._explicit_level = level
        self._explicit_to_file = log_to_file
        self._explicit_dir = log_dir
        self._apply_defaults()

        # 무제한 버퍼 (queue.Full 방지)
        self.log_queue: queue.Queue = queue.Queue()
        self.context: dict[str, Any] = {}
        self._closed = False

        self._setup_logger()
        PipelineLogger._instances.add(self)

    def _apply_defaults(self) -> None:
        settings = PipelineLogger._settings
        self.level = self._resolve_level(self._explicit_level or settings.level)
        self.log_to_file = (
            settings.to_file if self._explicit_to_file is None else self._explicit_to_file
        )
        self.log_dir = self._explicit_dir or settings.dir

    def _reconfigure(self) -> None:
        """리스너를 멈추고 현재 설정으로 핸들러를 다시 구성"""
        if self._closed:
            return
        self.listener.stop()
        self._close_handlers()
        self._apply_defaults()
        self._setup_logger()

    @staticmethod
    def _resolve_level(level: int | str) -> int:
        if isinstance(level, int):
            return level
        resolved = logging.getLevelName(level.upper())
        return resolved if isinstance(resolved, int) else logging.INFO

    def _setup_logger(self) -> None:
        """
        로거, 핸들러, 포맷터 설정
        """
        self.logger_name = f"{self.name}.{self.component}" if self.component else self.name
        self.logger = logging.getLogger(self.logger_name)
        self.logger.setLevel(self.level)
        self.logger.propagate = False

        # 기존 핸들러 제거
        if self.logger.hasHandlers():
            self.logger.handlers.clear()

        self.formatter = logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s [%(component)s] %(message)s"
        )

        handlers: list[logging.Handler] = []

        if self.log_to_console:
            console = logging.StreamHandler(sys.stdout)
            console.setFormatter(self.formatter)
            handlers.append(console)

        if self.log_to_file:
            log_filename = self._get_log_filename()
            # 디렉터리만 생성하고 파일 생성은 핸들러에 위임
            Path(log_filename).parent.mkdir(parents=True, exist_ok=True)

            file_handler = TimedRotatingFileHandler(
                filename=log_filename,
                when=self.rotation,
                backupCount=7,
            )
            file_handler.setFormatter(self.formatter)
            handlers.append(file_handler)

        self.queue_handler = QueueHandler(self.log_queue)
        self.logger.addHandler(self.queue_handler)

        self.listener = QueueListener(self.log_queue, *handlers, respect_handler_level=True)
        self.listener.start()

    def _get_log_filename(self) -> str:
        today = datetime.now().strftime("%Y-%m-%d")
        component_part = f"{self.component}/" if self.component else ""
        return f"{self.log_dir}/{component_part}{self.name}_{today}.log"

    def set_context(self, **kwargs) -> None:
        """
        로깅 컨텍스트 설정
        """
        self.context.update(kwargs)

    def clear_context(self) -> None:
        self.context.clear()

    def _process_message(self, level: int, msg: str, extra: dict[str, Any] | None = None) -> None:
        """
        메시지 처리 및 로깅
        """
        log_extra: dict[str, Any] = {"component": self.component or "main"}

        # exc_info, stack_info는 logger.log()의 파라미터로 추출
        exc_info_param = None
        stack_info_param = False

        if self.context:
            log_extra.update(self.context)

        if extra:
            exc_info_param = extra.pop("exc_info", None)
            stack_info_param = bool(extra.pop("stack_info", False))

            # 'extra' 키가 있으면 그 내용을 풀어서 병합
            nested_extra = extra.pop("extra", None)
            if isinstance(nested_extra, dict):
                log_extra.update(nested_extra)

            log_extra.update(extra)

        safe_extra = {
            (f"ctx_{key}" if key in _RESERVED_RECORD_KEYS else key): value
            for key, value in log_extra.items()
        }

        self.logger.log(
            level, msg, exc_info=exc_info_param, stack_info=stack_info_param, extra=safe_extra
        )

    async def alog(self, level: int, msg: str, **kwargs) -> None:
        """
        비동기적으로 로그 메시지 기록
        - 실행 중인 이벤트 루프가 있으면 스레드 풀로 위임
        - 루프가 없으면 동기 처리(로그는 QueueHandler로 빠르게 반환)
        """
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self._process_message(level, msg, kwargs)
            return
        await loop.run_in_executor(None, self._process_message, level, msg, kwargs)

    def debug(self, msg: str, **kwargs) -> None:
        self._process_message(logging.DEBUG, msg, kwargs)

    def info(self, msg: str, **kwargs) -> None:
        self._process_message(logging.INFO, msg, kwargs)

    def warning(self, msg: str, **kwargs) -> None:
        self._process_message(logging.WARNING, msg, kwargs)

    def error(self, msg: str, **kwargs) -> None:
        self._process_message(logging.ERROR, msg, kwargs)

    def critical(self, msg: str, **kwargs) -> None:
        self._process_message(logging.CRITICAL, msg, kwargs)

    async def ainfo(self, msg: str, **kwargs) -> None:
        await self.alog(logging.INFO, msg, **kwargs)

    async def awarning(self, msg: str, **kwargs) -> None:
        await self.alog(logging.WARNING, msg, **kwargs)

    async def aerror(self, msg: str, **kwargs) -> None:
        await self.alog(logging.ERROR, msg, **kwargs)

    def close(self) -> None:
        """
        리소스 정리
        """
        if self._closed:
            return
        self._closed = True
        self.listener.stop()
        self._close_handlers()
        PipelineLogger._instances.discard(self)

    def _close_handlers(self) -> None:
        for handler in self.listener.handlers:
            handler.close()
