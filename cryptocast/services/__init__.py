"""
CryptoCast Services

Service layer containing all business logic.
Each service has a defined interface (contract) and implementation.
"""

from cryptocast.services.base import (
    BaseService,
    DataUnavailableError,
    ServiceError,
    UpstreamTimeoutError,
    ValidationError,
)

__all__ = [
    "BaseService",
    "DataUnavailableError",
    "ServiceError",
    "UpstreamTimeoutError",
    "ValidationError",
]
