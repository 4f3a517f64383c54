from __future__ import annotations

import logging
from logging.handlers import TimedRotatingFileHandler

from src.common.logger import PipelineLogger
from src.config.settings import LoggingSettings


class _ListHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__()
        self.records: list[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)


def _build_logger() -> tuple[PipelineLogger, _ListHandler]:
    plog = PipelineLogger.get_logger("test_logger", "tests", log_to_file=False)
    handler = _ListHandler()
    plog.logger.addHandler(handler)
    return plog, handler


def test_logger_merges_keyword_extras_with_component() -> None:
    plog, handler = _build_logger()
    try:
        plog.info("converted", symbol="EUR", base="USD")
    finally:
        plog.close()

    record = handler.records[-1]
    assert record.component == "tests"
    assert record.symbol == "EUR"
    assert record.base == "USD"


def test_logger_prefixes_reserved_record_keys() -> None:
    plog, handler = _build_logger()
    try:
        plog.warning("collision", name="shadowed", message="shadowed")
    finally:
        plog.close()

    record = handler.records[-1]
    assert record.name == "test_logger.tests"
    assert record.ctx_name == "shadowed"
    assert record.ctx_message == "shadowed"


def test_logger_context_is_applied_and_cleared() -> None:
    plog, handler = _build_logger()
    try:
        plog.set_context(request_id="r-1")
        plog.info("with context")
        plog.clear_context()
        plog.info("without context")
    finally:
        plog.close()

    assert handler.records[-2].request_id == "r-1"
    assert not hasattr(handler.records[-1], "request_id")


def test_apply_settings_updates_existing_loggers(tmp_path) -> None:
    previous = PipelineLogger._settings
    plog = PipelineLogger.get_logger("test_logger_reconfigure", "tests")
    pinned = PipelineLogger.get_logger("test_logger_pinned", "tests", level="WARNING")
    try:
        PipelineLogger.apply_settings(
            LoggingSettings(level="DEBUG", to_file=True, dir=str(tmp_path))
        )

        assert plog.logger.level == logging.DEBUG
        assert plog.log_to_file is True
        assert any(
            isinstance(handler, TimedRotatingFileHandler)
            for handler in plog.listener.handlers
        )
        # 생성자에서 명시한 레벨은 유지
        assert pinned.logger.level == logging.WARNING

        plog.debug("after reconfigure")
    finally:
        PipelineLogger.apply_settings(previous)
        plog.close()
        pinned.close()

    assert (tmp_path / "tests").is_dir()
    assert plog.logger.level == logging.getLevelName(previous.level.upper())


def test_closed_logger_is_not_reconfigured() -> None:
    previous = PipelineLogger._settings
    plog = PipelineLogger.get_logger("test_logger_closed", "tests", log_to_file=False)
    plog.close()
    try:
        PipelineLogger.apply_settings(LoggingSettings(level="DEBUG"))
    finally:
        PipelineLogger.apply_settings(previous)

    assert plog not in PipelineLogger._instances
