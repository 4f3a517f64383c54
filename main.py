"""애플리케이션 진입점

환율 변환 gRPC 서비스
- currency.Currency/Convert: 업스트림 환율 API 조회 후 심볼 환율 반환
- grpc.health.v1.Health: 서비스 헬스 상태 (진단 모드에서 주기적 토글)

Usage:
    python main.py                   # 개발 환경 (config/dev.env)
    ENV=prod python main.py          # 프로덕션 환경 (config/prod.env)
"""

import asyncio
import sys

from pydantic import ValidationError

from src.application.bootstrap import Application
from src.common.exceptions.base import CurrencyServiceException
from src.common.logger import PipelineLogger

logger = PipelineLogger.get_logger("main", "app")


async def main() -> int:
    """메인 실행 함수 (종료 코드 반환)"""
    app = Application()

    try:
        try:
            await app.initialize()
        except (CurrencyServiceException, ValidationError) as e:
            # ValidationError: LOG_/HEALTH_/SERVER_ 설정값 검증 실패
            extra = e.to_dict() if isinstance(e, CurrencyServiceException) else {}
            logger.critical(f"기동 실패: {e}", **extra)
            await app.shutdown()
            return 1

        try:
            await app.run()
        except asyncio.CancelledError:
            logger.info("사용자에 의해 서버가 종료되었습니다")
        finally:
            await app.shutdown()
        return 0
    finally:
        # 리스너 큐를 비운 뒤 종료
        logger.close()


if __name__ == "__main__":
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        print("\n서버가 종료되었습니다.")
