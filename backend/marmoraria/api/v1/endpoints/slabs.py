"""
Slab endpoints

Stock entry, listing, and the movements that change a slab: cuts (with a
remnant polygon), whole-unit withdrawals and restocks.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from marmoraria.api.v1.endpoints.auth import (
    get_current_admin_user,
    get_identity,
    get_tenant_id,
)
from marmoraria.core.config import settings
from marmoraria.db.session import get_db
from marmoraria.geometry.records import SlabStatus
from marmoraria.models.user import User
from marmoraria.schemas.slab import (
    CutCreate,
    CutPreviewRequest,
    CutPreviewResponse,
    CutRecordResponse,
    CutResponse,
    RestockRequest,
    SlabCreate,
    SlabResponse,
    SlabSummaryResponse,
    WithdrawRequest,
)
from marmoraria.services.identity import IdentityContext
from marmoraria.services.inventory_store import SqlInventoryStore
from marmoraria.services.slab_service import NewSlab, SlabService

router = APIRouter(prefix="/slabs", tags=["Slabs"])


def get_slab_service(
    db: Session = Depends(get_db),
    identity: IdentityContext = Depends(get_identity),
) -> SlabService:
    return SlabService(
        SqlInventoryStore(db),
        identity,
        exhausted_threshold=settings.EXHAUSTED_AREA_THRESHOLD_M2,
    )


def _points(polygon) -> list:
    return [(p.x, p.y) for p in polygon]


def _cut_response(slab, record) -> CutResponse:
    return CutResponse(
        slab=SlabResponse.model_validate(slab),
        cut=CutRecordResponse.model_validate(record),
    )


# ============================================================================
# ENDPOINT: List / Create
# ============================================================================

@router.get("", response_model=List[SlabSummaryResponse])
async def list_slabs(
    search: Optional[str] = Query(None, description="Name, id, supplier or category"),
    slab_status: Optional[SlabStatus] = Query(None, alias="status"),
    category: Optional[str] = None,
    tenant_id: str = Depends(get_tenant_id),
    service: SlabService = Depends(get_slab_service),
):
    """List slabs of the company, newest entry first"""
    return service.list_slabs(tenant_id, search=search, status=slab_status, category=category)


@router.post("", response_model=SlabResponse, status_code=status.HTTP_201_CREATED)
async def create_slab(
    request: SlabCreate,
    tenant_id: str = Depends(get_tenant_id),
    service: SlabService = Depends(get_slab_service),
):
    """Register a slab arriving in stock"""
    return service.create_slab(tenant_id, NewSlab(**request.model_dump()))


@router.get("/{slab_id}", response_model=SlabResponse)
async def get_slab(
    slab_id: str,
    tenant_id: str = Depends(get_tenant_id),
    service: SlabService = Depends(get_slab_service),
):
    return service.get_slab(tenant_id, slab_id)


@router.delete("/{slab_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_slab(
    slab_id: str,
    current_user: User = Depends(get_current_admin_user),
    tenant_id: str = Depends(get_tenant_id),
    service: SlabService = Depends(get_slab_service),
):
    """Remove a slab and its history (admins only)"""
    service.delete_slab(tenant_id, slab_id)


# ============================================================================
# ENDPOINT: Cuts
# ============================================================================

@router.post("/{slab_id}/cuts/preview", response_model=CutPreviewResponse)
async def preview_cut(
    slab_id: str,
    request: CutPreviewRequest,
    tenant_id: str = Depends(get_tenant_id),
    service: SlabService = Depends(get_slab_service),
):
    """
    Area of a proposed remnant, without saving anything

    Points outside the current remnant's bounding box (current width and
    height) are clamped to it, the same way they are when the cut is committed.
    """
    new_area, area_used = service.preview_area(tenant_id, slab_id, _points(request.polygon))
    return CutPreviewResponse(
        vertex_count=len(request.polygon),
        new_area=new_area,
        area_used=area_used,
    )


@router.post("/{slab_id}/cuts", response_model=CutResponse, status_code=status.HTTP_201_CREATED)
async def register_cut(
    slab_id: str,
    request: CutCreate,
    tenant_id: str = Depends(get_tenant_id),
    service: SlabService = Depends(get_slab_service),
):
    """
    Register a cut

    ``polygon`` is the outline of what is LEFT on the slab after the piece
    was removed. The area used is the difference between the previous
    available area and the area of this outline.
    """
    slab, cut = service.register_cut(
        tenant_id,
        slab_id,
        _points(request.polygon),
        client_name=request.client_name,
        project=request.project,
        observations=request.observations,
    )
    return _cut_response(slab, cut)


# ============================================================================
# ENDPOINT: Whole units
# ============================================================================

@router.post("/{slab_id}/withdraw", response_model=CutResponse)
async def withdraw_unit(
    slab_id: str,
    request: WithdrawRequest,
    tenant_id: str = Depends(get_tenant_id),
    service: SlabService = Depends(get_slab_service),
):
    """One whole unit leaves for a client"""
    slab, record = service.withdraw_unit(
        tenant_id,
        slab_id,
        client_name=request.client_name,
        project=request.project,
        observations=request.observations,
    )
    return _cut_response(slab, record)


@router.post("/{slab_id}/restock", response_model=CutResponse)
async def restock(
    slab_id: str,
    request: RestockRequest,
    tenant_id: str = Depends(get_tenant_id),
    service: SlabService = Depends(get_slab_service),
):
    slab, record = service.restock(
        tenant_id,
        slab_id,
        amount=request.amount,
        observations=request.observations,
    )
    return _cut_response(slab, record)
