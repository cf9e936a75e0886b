"""The "address" procedure namespace.

Queries are exposed as GET with query parameters, mutations as POST with a
JSON body. Create and update require a bearer token.
"""

from fastapi import APIRouter, Depends, HTTPException, Query

from address_service.api.auth import require_authenticated_caller
from address_service.api.dependencies import get_address_service
from address_service.models.schemas import (
    CreateAddressRequest,
    UpdateAddressRequest,
    AddressIdRequest,
    AddressDataResponse,
    AddressListResponse,
    AddressMessageDataResponse,
    MessageResponse,
    ErrorResponse,
)
from address_service.services.address_service import AddressService
from address_service.services.exceptions import AddressServiceError

router = APIRouter(prefix="/address", tags=["address"])

UNAUTHORIZED_RESPONSE = {401: {"model": ErrorResponse, "description": "Caller not authenticated"}}


def _to_http_exception(error: AddressServiceError) -> HTTPException:
    return HTTPException(status_code=error.status_code, detail=error.message)


@router.post(
    "/createAddress",
    response_model=AddressDataResponse,
    responses={
        **UNAUTHORIZED_RESPONSE,
        500: {"model": ErrorResponse, "description": "Failed to create address"},
    },
    dependencies=[Depends(require_authenticated_caller)],
)
async def create_address(
    request: CreateAddressRequest,
    service: AddressService = Depends(get_address_service)
):
    """Create a new address."""
    try:
        return await service.create_address(request)
    except AddressServiceError as e:
        raise _to_http_exception(e) from e


@router.get(
    "/getAddresses",
    response_model=AddressListResponse,
    responses={500: {"model": ErrorResponse, "description": "Failed to fetch addresses"}},
)
async def get_addresses(service: AddressService = Depends(get_address_service)):
    """List all addresses."""
    try:
        return await service.get_addresses()
    except AddressServiceError as e:
        raise _to_http_exception(e) from e


@router.get("/getAddressById", response_model=AddressListResponse)
async def get_address_by_id(
    address_id: str = Query(..., alias="id", min_length=1, description="Address identifier"),
    service: AddressService = Depends(get_address_service)
):
    """Get the addresses matching an id; empty when none does."""
    return await service.get_address_by_id(AddressIdRequest(id=address_id))


@router.post(
    "/updateAddress",
    response_model=AddressMessageDataResponse,
    responses={
        **UNAUTHORIZED_RESPONSE,
        404: {"model": ErrorResponse, "description": "Address not found"},
    },
    dependencies=[Depends(require_authenticated_caller)],
)
async def update_address(
    request: UpdateAddressRequest,
    service: AddressService = Depends(get_address_service)
):
    """Replace street, city and country of an existing address."""
    try:
        return await service.update_address(request)
    except AddressServiceError as e:
        raise _to_http_exception(e) from e


@router.post(
    "/deleteAddress",
    response_model=MessageResponse,
    responses={404: {"model": ErrorResponse, "description": "Address not found"}},
)
async def delete_address(
    request: AddressIdRequest,
    service: AddressService = Depends(get_address_service)
):
    """Delete an address."""
    try:
        return await service.delete_address(request)
    except AddressServiceError as e:
        raise _to_http_exception(e) from e
