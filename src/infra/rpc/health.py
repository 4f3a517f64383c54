"""grpc.health.v1 헬스 서비스 연동"""

from __future__ import annotations

from grpc_health.v1 import health, health_pb2

from src.core.types import ServingStatus

_STATUS_MAP = {
    ServingStatus.SERVING: health_pb2.HealthCheckResponse.SERVING,
    ServingStatus.NOT_SERVING: health_pb2.HealthCheckResponse.NOT_SERVING,
}


def create_health_servicer() -> health.aio.HealthServicer:
    return health.aio.HealthServicer()


class GrpcHealthReporter:
    """HealthToggler → grpc_health aio HealthServicer 어댑터"""

    def __init__(self, servicer: health.aio.HealthServicer) -> None:
        self._servicer = servicer

    async def report(self, service_name: str, status: ServingStatus) -> None:
        await self._servicer.set(service_name, _STATUS_MAP[status])
