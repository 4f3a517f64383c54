"""
Dependency Injection Container

아키텍처:
- 설정: 부트스트랩이 해석한 ServiceConfigDomain + pydantic 설정 객체를 주입
- Resource: ExchangeRateClient (aiohttp 세션 async init/shutdown 자동 관리)
- Singleton: 변환기, gRPC servicer, 헬스 servicer, 헬스 토글러

사용 예시:
    container = ApplicationContainer(
        service_config=resolve_service_config(),
        health_config=HealthSettings(),
    )
    await container.init_resources()
    servicer = await container.currency_servicer()
"""

from dependency_injector import containers, providers

from src.application.currency_converter import CurrencyConverter
from src.config.init_infra import init_rate_client
from src.config.settings import HealthSettings
from src.core.dto.internal.currency import ServiceConfigDomain
from src.core.health.health_toggler import HealthToggler
from src.infra.rpc.currency_pb import SERVICE_NAME
from src.infra.rpc.currency_servicer import CurrencyServicer
from src.infra.rpc.health import GrpcHealthReporter, create_health_servicer


class ApplicationContainer(containers.DeclarativeContainer):
    """최상위 컨테이너"""

    service_config = providers.Dependency(instance_of=ServiceConfigDomain)
    health_config = providers.Dependency(instance_of=HealthSettings)

    # ===== Infrastructure =====
    rate_client = providers.Resource(
        init_rate_client,
        upstream_url=service_config.provided.upstream_url,
        access_token=service_config.provided.access_token,
    )

    # ===== Application =====
    converter = providers.Singleton(
        CurrencyConverter,
        fetcher=rate_client,
        default_base=service_config.provided.default_base,
    )

    # ===== RPC =====
    currency_servicer = providers.Singleton(CurrencyServicer, converter=converter)
    health_servicer = providers.Singleton(create_health_servicer)
    health_reporter = providers.Singleton(GrpcHealthReporter, servicer=health_servicer)

    health_toggler = providers.Singleton(
        HealthToggler,
        reporter=health_reporter,
        service_name=SERVICE_NAME,
        interval=health_config.provided.toggle_interval,
    )
