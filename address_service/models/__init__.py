"""Data models for the address service."""

from .schemas import (
    AddressRecord,
    CreateAddressRequest,
    UpdateAddressRequest,
    AddressIdRequest,
    AddressDataResponse,
    AddressListResponse,
    AddressMessageDataResponse,
    MessageResponse,
    ErrorResponse,
    HealthCheckResponse,
)
from .tables import Base, AddressRow

__all__ = [
    "AddressRecord",
    "CreateAddressRequest",
    "UpdateAddressRequest",
    "AddressIdRequest",
    "AddressDataResponse",
    "AddressListResponse",
    "AddressMessageDataResponse",
    "MessageResponse",
    "ErrorResponse",
    "HealthCheckResponse",
    "Base",
    "AddressRow",
]
