"""Request-scoped dependencies wiring the store into the service."""

from fastapi import Depends

from address_service.repositories.base import AddressRepository
from address_service.repositories.connection import database_manager
from address_service.repositories.sql_repository import SQLAlchemyAddressRepository
from address_service.services.address_service import AddressService


def get_address_repository() -> AddressRepository:
    """Get the relational repository bound to the shared connection manager."""
    return SQLAlchemyAddressRepository(database_manager)


def get_address_service(
    repository: AddressRepository = Depends(get_address_repository),
) -> AddressService:
    """Get AddressService instance for the current request."""
    return AddressService(repository)
