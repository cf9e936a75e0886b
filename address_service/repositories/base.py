"""Abstract repository interface for address data."""

from abc import ABC, abstractmethod
from typing import List, Optional

from address_service.models.schemas import AddressRecord


class AddressRepository(ABC):
    """Abstract repository interface for address operations.

    Every method maps to a single statement against the address table and
    reports the rows it affected. Store failures propagate to the caller.
    """

    @abstractmethod
    async def insert(self, record: AddressRecord) -> AddressRecord:
        """Insert a new address row.

        Args:
            record: AddressRecord to insert

        Returns:
            The inserted AddressRecord

        Raises:
            sqlalchemy.exc.IntegrityError: If the id is already taken
        """
        pass

    @abstractmethod
    async def select_all(self) -> List[AddressRecord]:
        """Get every address row in store-default order."""
        pass

    @abstractmethod
    async def select_by_id(self, address_id: str) -> List[AddressRecord]:
        """Get the rows matching an id.

        Args:
            address_id: Identifier to look up

        Returns:
            List with the matching row, empty if none matches
        """
        pass

    @abstractmethod
    async def update_by_id(self, address_id: str, street: str, city: Optional[str],
                           country: str) -> List[AddressRecord]:
        """Overwrite street, city and country of the row matching an id.

        Args:
            address_id: Identifier of the row to update
            street: New street value
            city: New city value, None clears it
            country: New country value

        Returns:
            Updated rows, empty if none matched
        """
        pass

    @abstractmethod
    async def delete_by_id(self, address_id: str) -> List[AddressRecord]:
        """Delete the row matching an id.

        Args:
            address_id: Identifier of the row to delete

        Returns:
            Deleted rows, empty if none matched
        """
        pass
