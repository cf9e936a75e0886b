"""Address Service with business logic."""

import logging

from sqlalchemy.exc import SQLAlchemyError

from address_service.models.schemas import (
    AddressRecord,
    CreateAddressRequest,
    UpdateAddressRequest,
    AddressIdRequest,
    AddressDataResponse,
    AddressListResponse,
    AddressMessageDataResponse,
    MessageResponse,
)
from address_service.repositories.base import AddressRepository
from address_service.services.exceptions import InternalServerError, NotFoundError
from address_service.config.logging import LoggingService

logger = logging.getLogger(__name__)
logging_service = LoggingService(__name__)

CREATE_FAILED_MESSAGE = "Failed to create address"
FETCH_FAILED_MESSAGE = "Failed to fetch addresses"
NOT_FOUND_MESSAGE = "Address not found"
UPDATED_MESSAGE = "Address successfully updated"
DELETED_MESSAGE = "Address successfully deleted"


class AddressService:
    """Service layer for address operations.

    Holds no state besides the repository it was built with; a new
    instance is created for each request.
    """

    def __init__(self, repository: AddressRepository):
        """Initialize service with repository dependency.

        Args:
            repository: AddressRepository implementation
        """
        self.repository = repository

    async def create_address(self, request: CreateAddressRequest) -> AddressDataResponse:
        """Insert a new address.

        Args:
            request: CreateAddressRequest with id, street, optional city and country

        Returns:
            Envelope with the inserted row

        Raises:
            InternalServerError: If the store rejects the insert for any reason,
                a duplicate id included
        """
        record = AddressRecord(
            id=request.id,
            street=request.street,
            city=request.city,
            country=request.country,
        )

        try:
            created = await self.repository.insert(record)
        except SQLAlchemyError as e:
            logging_service.log_crud_operation(
                "create",
                request.id,
                success=False,
                error=str(e),
                error_type=type(e).__name__
            )
            raise InternalServerError(CREATE_FAILED_MESSAGE) from e

        logging_service.log_crud_operation("create", request.id, success=True)
        return AddressDataResponse(data=created)

    async def get_addresses(self) -> AddressListResponse:
        """List every stored address.

        Raises:
            InternalServerError: If the store query fails
        """
        try:
            records = await self.repository.select_all()
        except SQLAlchemyError as e:
            logging_service.log_error(
                "Database error while listing addresses",
                e,
                operation="get_addresses"
            )
            raise InternalServerError(FETCH_FAILED_MESSAGE) from e

        logging_service.log_crud_operation("read", None, success=True, count=len(records))
        return AddressListResponse(data=records)

    async def get_address_by_id(self, request: AddressIdRequest) -> AddressListResponse:
        """Look up an address by id.

        The result is a possibly empty list: an unknown id is not an error.
        Store failures propagate unchanged.
        """
        records = await self.repository.select_by_id(request.id)

        logging_service.log_crud_operation(
            "read",
            request.id,
            success=True,
            count=len(records)
        )
        return AddressListResponse(data=records)

    async def update_address(self, request: UpdateAddressRequest) -> AddressMessageDataResponse:
        """Replace street, city and country of an existing address.

        Raises:
            NotFoundError: If no row matches the id
        """
        updated = await self.repository.update_by_id(
            request.id,
            street=request.street,
            city=request.city,
            country=request.country,
        )

        if not updated:
            logging_service.log_crud_operation("update", request.id, success=False)
            raise NotFoundError(NOT_FOUND_MESSAGE)

        logging_service.log_crud_operation("update", request.id, success=True)
        return AddressMessageDataResponse(message=UPDATED_MESSAGE, data=updated[0])

    async def delete_address(self, request: AddressIdRequest) -> MessageResponse:
        """Delete an address.

        Raises:
            NotFoundError: If no row matches the id
        """
        deleted = await self.repository.delete_by_id(request.id)

        if not deleted:
            logging_service.log_crud_operation("delete", request.id, success=False)
            raise NotFoundError(NOT_FOUND_MESSAGE)

        logging_service.log_crud_operation("delete", request.id, success=True)
        return MessageResponse(message=DELETED_MESSAGE)
