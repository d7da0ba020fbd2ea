"""
Supply endpoints - consumables stock (glue, discs, polishing pads)
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from marmoraria.api.v1.endpoints.auth import get_identity, get_tenant_id
from marmoraria.db.session import get_db
from marmoraria.schemas.supply import StockAdjustment, SupplyCreate, SupplyResponse
from marmoraria.services import supply_service
from marmoraria.services.identity import IdentityContext

router = APIRouter(prefix="/supplies", tags=["Supplies"])


@router.get("", response_model=List[SupplyResponse])
async def list_supplies(
    search: Optional[str] = None,
    stock_filter: str = Query("all", alias="filter", description="all, low or zero"),
    tenant_id: str = Depends(get_tenant_id),
    db: Session = Depends(get_db),
):
    return supply_service.list_supplies(db, tenant_id, search=search, stock_filter=stock_filter)


@router.post("", response_model=SupplyResponse, status_code=status.HTTP_201_CREATED)
async def create_supply(
    request: SupplyCreate,
    tenant_id: str = Depends(get_tenant_id),
    identity: IdentityContext = Depends(get_identity),
    db: Session = Depends(get_db),
):
    return supply_service.create_supply(db, tenant_id, identity, **request.model_dump())


@router.get("/{supply_id}", response_model=SupplyResponse)
async def get_supply(
    supply_id: str,
    tenant_id: str = Depends(get_tenant_id),
    db: Session = Depends(get_db),
):
    return supply_service.get_supply(db, tenant_id, supply_id)


@router.post("/{supply_id}/adjust", response_model=SupplyResponse)
async def adjust_stock(
    supply_id: str,
    request: StockAdjustment,
    tenant_id: str = Depends(get_tenant_id),
    identity: IdentityContext = Depends(get_identity),
    db: Session = Depends(get_db),
):
    """
    Receive (ENTRADA) or consume (SAIDA) units

    A SAIDA larger than the current stock is rejected with
    INSUFFICIENT_STOCK.
    """
    return supply_service.adjust_stock(
        db,
        tenant_id,
        supply_id,
        identity,
        amount=request.amount,
        movement_type=request.movement_type,
        observations=request.observations,
    )


@router.delete("/{supply_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_supply(
    supply_id: str,
    tenant_id: str = Depends(get_tenant_id),
    identity: IdentityContext = Depends(get_identity),
    db: Session = Depends(get_db),
):
    supply_service.delete_supply(db, tenant_id, supply_id, identity)
