"""SQLAlchemy implementation of AddressRepository."""

import logging
from typing import List, Optional

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from address_service.models.schemas import AddressRecord
from address_service.models.tables import AddressRow
from address_service.repositories.base import AddressRepository
from address_service.repositories.connection import DatabaseConnectionManager

logger = logging.getLogger(__name__)

addresses = AddressRow.__table__

# Projection returned by every statement
ADDRESS_COLUMNS = (addresses.c.id, addresses.c.street, addresses.c.city, addresses.c.country)


class SQLAlchemyAddressRepository(AddressRepository):
    """Relational implementation of AddressRepository.

    Each call runs one statement inside its own transaction, so it is
    committed on success and rolled back on error.
    """

    def __init__(self, connection_manager: DatabaseConnectionManager):
        self._connection_manager = connection_manager

    async def _execute(self, statement, operation: str, address_id: Optional[str] = None) -> List[AddressRecord]:
        """Run a statement returning address rows."""
        try:
            session_factory = await self._connection_manager.get_session_factory()
            async with session_factory() as session:
                async with session.begin():
                    result = await session.execute(statement)
                    rows = result.mappings().all()
            return [AddressRecord.model_validate(dict(row)) for row in rows]

        except IntegrityError as e:
            logger.warning(
                f"Integrity error during {operation} operation",
                extra={"address_id": address_id, "error": str(e.orig), "operation": operation}
            )
            raise

        except SQLAlchemyError as e:
            logger.error(
                f"Database error during {operation} operation",
                extra={"address_id": address_id, "error": str(e), "operation": operation}
            )
            raise

    async def insert(self, record: AddressRecord) -> AddressRecord:
        """Insert a new address row."""
        statement = (
            insert(addresses)
            .values(id=record.id, street=record.street, city=record.city, country=record.country)
            .returning(*ADDRESS_COLUMNS)
        )
        rows = await self._execute(statement, "insert", record.id)

        logger.info(
            "Address record inserted",
            extra={"address_id": record.id, "operation": "insert"}
        )
        return rows[0]

    async def select_all(self) -> List[AddressRecord]:
        """Get every address row in store-default order."""
        rows = await self._execute(select(*ADDRESS_COLUMNS), "select_all")

        logger.debug(
            "Address records retrieved",
            extra={"operation": "select_all", "count": len(rows)}
        )
        return rows

    async def select_by_id(self, address_id: str) -> List[AddressRecord]:
        """Get the rows matching an id."""
        statement = select(*ADDRESS_COLUMNS).where(addresses.c.id == address_id)
        rows = await self._execute(statement, "select_by_id", address_id)

        logger.debug(
            "Address lookup by id",
            extra={"address_id": address_id, "operation": "select_by_id", "count": len(rows)}
        )
        return rows

    async def update_by_id(self, address_id: str, street: str, city: Optional[str],
                           country: str) -> List[AddressRecord]:
        """Overwrite street, city and country of the row matching an id."""
        statement = (
            update(addresses)
            .where(addresses.c.id == address_id)
            .values(street=street, city=city, country=country)
            .returning(*ADDRESS_COLUMNS)
        )
        rows = await self._execute(statement, "update_by_id", address_id)

        if rows:
            logger.info(
                "Address record updated",
                extra={"address_id": address_id, "operation": "update_by_id"}
            )
        else:
            logger.debug(
                "Address not found for update",
                extra={"address_id": address_id, "operation": "update_by_id"}
            )
        return rows

    async def delete_by_id(self, address_id: str) -> List[AddressRecord]:
        """Delete the row matching an id."""
        statement = delete(addresses).where(addresses.c.id == address_id).returning(*ADDRESS_COLUMNS)
        rows = await self._execute(statement, "delete_by_id", address_id)

        if rows:
            logger.info(
                "Address record deleted",
                extra={"address_id": address_id, "operation": "delete_by_id"}
            )
        else:
            logger.debug(
                "Address not found for deletion",
                extra={"address_id": address_id, "operation": "delete_by_id"}
            )
        return rows
