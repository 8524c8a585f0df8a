"""
Owner Lookup API Endpoints.

Ownership lists are public; no authentication required.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from services.warranty.dependencies import get_registry
from services.warranty.registry import WarrantyRegistry
from services.warranty.routes.warranties import WarrantyResponse


router = APIRouter(prefix="/owners", tags=["owners"])

RegistryDep = Annotated[WarrantyRegistry, Depends(get_registry)]


class OwnerWarrantiesResponse(BaseModel):
    """Ids owned by an address, in index order."""

    owner: str
    warranty_ids: list[int]


class OwnerWarrantyDetailsResponse(BaseModel):
    """Full records owned by an address, in index order."""

    owner: str
    warranties: list[WarrantyResponse]


@router.get(
    "/{owner}/warranties",
    response_model=OwnerWarrantiesResponse,
    summary="List warranty ids by owner",
)
async def list_owner_warranties(owner: str, registry: RegistryDep) -> OwnerWarrantiesResponse:
    return OwnerWarrantiesResponse(owner=owner, warranty_ids=registry.list_by_owner(owner))


@router.get(
    "/{owner}/warranties/details",
    response_model=OwnerWarrantyDetailsResponse,
    summary="List warranty records by owner",
)
async def list_owner_warranty_details(
    owner: str,
    registry: RegistryDep,
) -> OwnerWarrantyDetailsResponse:
    """Resolve the owner's id list into records."""
    now = registry.clock.now()
    records = registry.get_many(registry.list_by_owner(owner))
    return OwnerWarrantyDetailsResponse(
        owner=owner,
        warranties=[WarrantyResponse.from_record(r, now) for r in records],
    )
