"""Service layer."""

from address_service.services.address_service import AddressService
from address_service.services.exceptions import (
    AddressServiceError,
    InternalServerError,
    NotFoundError,
)

__all__ = [
    "AddressService",
    "AddressServiceError",
    "InternalServerError",
    "NotFoundError",
]
