"""Repository layer for data access."""

from address_service.repositories.base import AddressRepository
from address_service.repositories.sql_repository import SQLAlchemyAddressRepository
from address_service.repositories.connection import (
    DatabaseConnectionManager,
    database_manager,
)

__all__ = [
    "AddressRepository",
    "SQLAlchemyAddressRepository",
    "DatabaseConnectionManager",
    "database_manager",
]
