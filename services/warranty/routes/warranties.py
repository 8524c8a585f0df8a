"""
Warranty Management API Endpoints.

Registration, lookup and lifecycle changes of individual warranties.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from services.warranty.dependencies import get_registry
from services.warranty.models import WarrantyRecord, WarrantyStatus
from services.warranty.registry import WarrantyRegistry
from shared.auth import Caller, get_current_caller


router = APIRouter(prefix="/warranties", tags=["warranties"])

RegistryDep = Annotated[WarrantyRegistry, Depends(get_registry)]
CallerDep = Annotated[Caller, Depends(get_current_caller)]


class WarrantyRegisterRequest(BaseModel):
    """Request to register a new warranty."""

    owner: str = Field(..., min_length=1, description="Owner address; must be the caller")
    product_name: str = Field(..., description="Name of the product")
    serial_number: str = Field(..., description="Product serial number")
    manufacturer: str = Field(..., description="Product manufacturer")
    purchase_date: int = Field(..., ge=0, description="Purchase date (Unix timestamp)")
    expiration_date: int = Field(..., ge=0, description="Coverage end (Unix timestamp)")


class WarrantyResponse(BaseModel):
    """Warranty record response."""

    id: int
    owner: str
    product_name: str
    serial_number: str
    manufacturer: str
    purchase_date: int
    expiration_date: int
    status: WarrantyStatus
    created_at: int
    is_expired: bool

    @classmethod
    def from_record(cls, record: WarrantyRecord, now: int) -> WarrantyResponse:
        """Create response from WarrantyRecord, with expiry checked at `now`."""
        return cls(
            **record.model_dump(),
            is_expired=record.expiration_date < now,
        )


class WarrantyRegisterResponse(BaseModel):
    """Result of a registration."""

    id: int
    warranty: WarrantyResponse


class WarrantyStatusRequest(BaseModel):
    """Request to overwrite the stored status."""

    status: WarrantyStatus


class WarrantyTransferRequest(BaseModel):
    """Request to transfer warranty ownership."""

    new_owner: str = Field(..., min_length=1, description="New owner address")


class WarrantyCountResponse(BaseModel):
    count: int


class WarrantyExpiryResponse(BaseModel):
    id: int
    is_expired: bool
    checked_at: int


def _response(registry: WarrantyRegistry, warranty_id: int) -> WarrantyResponse:
    record = registry.get_by_id(warranty_id)
    if record is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Warranty {warranty_id} not found",
        )
    return WarrantyResponse.from_record(record, registry.clock.now())


@router.post(
    "",
    response_model=WarrantyRegisterResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new warranty",
)
async def register_warranty(
    request: WarrantyRegisterRequest,
    caller: CallerDep,
    registry: RegistryDep,
) -> WarrantyRegisterResponse:
    """
    Register a new warranty owned by the caller.

    Expired coverage windows are accepted and stored with status Expired.
    """
    warranty_id = registry.register(
        caller=caller.address,
        owner=request.owner,
        product_name=request.product_name,
        serial_number=request.serial_number,
        manufacturer=request.manufacturer,
        purchase_date=request.purchase_date,
        expiration_date=request.expiration_date,
    )
    return WarrantyRegisterResponse(id=warranty_id, warranty=_response(registry, warranty_id))


@router.get(
    "/count",
    response_model=WarrantyCountResponse,
    summary="Total registered warranties",
)
async def count_warranties(registry: RegistryDep) -> WarrantyCountResponse:
    return WarrantyCountResponse(count=registry.count())


@router.get(
    "/{warranty_id}",
    response_model=WarrantyResponse,
    summary="Get warranty by ID",
)
async def get_warranty(warranty_id: int, registry: RegistryDep) -> WarrantyResponse:
    """Get warranty record by ID."""
    return _response(registry, warranty_id)


@router.put(
    "/{warranty_id}/status",
    response_model=WarrantyResponse,
    summary="Update warranty status",
)
async def update_warranty_status(
    warranty_id: int,
    request: WarrantyStatusRequest,
    caller: CallerDep,
    registry: RegistryDep,
) -> WarrantyResponse:
    """Overwrite the stored status. Only the current owner may do this."""
    registry.update_status(caller.address, warranty_id, request.status)
    return _response(registry, warranty_id)


@router.post(
    "/{warranty_id}/transfer",
    response_model=WarrantyResponse,
    summary="Transfer warranty ownership",
)
async def transfer_warranty(
    warranty_id: int,
    request: WarrantyTransferRequest,
    caller: CallerDep,
    registry: RegistryDep,
) -> WarrantyResponse:
    """Transfer an Active warranty to a new owner."""
    registry.transfer(caller.address, warranty_id, request.new_owner)
    return _response(registry, warranty_id)


@router.post(
    "/{warranty_id}/revoke",
    response_model=WarrantyResponse,
    summary="Revoke a warranty",
)
async def revoke_warranty(
    warranty_id: int,
    caller: CallerDep,
    registry: RegistryDep,
) -> WarrantyResponse:
    registry.revoke(caller.address, warranty_id)
    return _response(registry, warranty_id)


@router.get(
    "/{warranty_id}/expired",
    response_model=WarrantyExpiryResponse,
    summary="Check warranty expiry against the current time",
)
async def check_warranty_expired(
    warranty_id: int,
    registry: RegistryDep,
) -> WarrantyExpiryResponse:
    """Live expiry check; independent of the stored status."""
    expired = registry.is_expired(warranty_id)
    return WarrantyExpiryResponse(
        id=warranty_id,
        is_expired=expired,
        checked_at=registry.clock.now(),
    )
