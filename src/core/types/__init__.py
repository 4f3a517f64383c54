from src.core.types._common_types import (
    DEFAULT_BASE_CURRENCY,
    DEFAULT_ENVIRONMENT,
    DEFAULT_PORT,
    LISTEN_HOST,
    MAX_PORT,
    CurrencyCode,
    ServingStatus,
)
from src.core.types._exception_types import (
    UPSTREAM_DECODE_EXCEPTIONS,
    UPSTREAM_TRANSPORT_EXCEPTIONS,
    ErrorCode,
    ErrorDomain,
)

__all__ = [
    # _common_types
    "CurrencyCode",
    "ServingStatus",
    "DEFAULT_BASE_CURRENCY",
    "DEFAULT_ENVIRONMENT",
    "DEFAULT_PORT",
    "LISTEN_HOST",
    "MAX_PORT",
    # _exception_types
    "ErrorCode",
    "ErrorDomain",
    "UPSTREAM_DECODE_EXCEPTIONS",
    "UPSTREAM_TRANSPORT_EXCEPTIONS",
]
