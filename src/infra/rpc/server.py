from __future__ import annotations

import grpc
from grpc_health.v1 import health, health_pb2_grpc

from src.common.exceptions.base import ServerStartupError
from src.common.logger import PipelineLogger
from src.core.types import LISTEN_HOST
from src.infra.rpc.currency_pb import add_currency_servicer_to_server
from src.infra.rpc.currency_servicer import CurrencyServicer

logger = PipelineLogger.get_logger("rpc_server", "rpc")


def build_server(
    currency_servicer: CurrencyServicer,
    health_servicer: health.aio.HealthServicer,
    port: int,
    host: str = LISTEN_HOST,
) -> tuple[grpc.aio.Server, int]:
    """변환 서비스와 헬스 서비스를 하나의 grpc.aio 서버에 등록하고 포트를 바인드한다.

    Args:
        port: 0이면 OS가 빈 포트를 할당 (테스트용)

    Returns:
        (server, 실제 바인드된 포트)

    Raises:
        ServerStartupError: 바인드 실패
    """
    server = grpc.aio.server()
    add_currency_servicer_to_server(currency_servicer, server)
    health_pb2_grpc.add_HealthServicer_to_server(health_servicer, server)

    address = f"{host}:{port}"
    try:
        bound_port = server.add_insecure_port(address)
    except RuntimeError as e:
        raise ServerStartupError(
            message=f"failed to bind {address}", original_exception=e
        ) from e

    # 구버전 grpcio는 예외 대신 0을 반환
    if bound_port == 0:
        raise ServerStartupError(message=f"failed to bind {address}")

    logger.info(f"Currency server bound on: {host}:{bound_port}")
    return server, bound_port
