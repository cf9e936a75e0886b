"""Pydantic models for the address service."""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class AddressRecord(BaseModel):
    """Core model for a stored address row."""

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(..., description="Caller-supplied unique identifier", min_length=1)
    street: str = Field(..., description="Street line", min_length=1)
    city: Optional[str] = Field(default=None, description="City, absent when unknown")
    country: str = Field(..., description="Country", min_length=1)


class CreateAddressRequest(BaseModel):
    """Request model for creating an address."""

    id: str = Field(..., description="Identifier for the new address", min_length=1)
    street: str = Field(..., description="Street line", min_length=1)
    city: Optional[str] = Field(default=None, description="City")
    country: str = Field(..., description="Country", min_length=1)


class UpdateAddressRequest(BaseModel):
    """Request model for replacing street, city and country of an address.

    ``id`` selects the row and is never written.
    """

    id: str = Field(..., description="Identifier of the address to update", min_length=1)
    street: str = Field(..., description="New street line", min_length=1)
    city: Optional[str] = Field(default=None, description="New city")
    country: str = Field(..., description="New country", min_length=1)


class AddressIdRequest(BaseModel):
    """Request model for operations addressing a single row by id."""

    id: str = Field(..., description="Address identifier", min_length=1)


class AddressDataResponse(BaseModel):
    """Envelope holding a single address."""

    data: AddressRecord


class AddressListResponse(BaseModel):
    """Envelope holding a sequence of addresses."""

    data: List[AddressRecord]


class AddressMessageDataResponse(BaseModel):
    """Envelope holding a confirmation message and the affected address."""

    message: str
    data: AddressRecord


class MessageResponse(BaseModel):
    """Envelope holding only a confirmation message."""

    message: str


class ErrorResponse(BaseModel):
    """Standard error response model."""

    detail: str = Field(..., description="Human-readable error message")


class HealthCheckResponse(BaseModel):
    """Response model for health check endpoint."""

    status: str = Field(..., description="Service status")
    database_connected: bool = Field(..., description="Database connection status")
    timestamp: datetime = Field(default_factory=datetime.utcnow)
