"""
Report endpoints

Read-only views over the company's slabs: dashboard totals, the global
movement log and the client/project search.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from marmoraria.api.v1.endpoints.auth import get_tenant_id
from marmoraria.core.config import settings
from marmoraria.db.session import get_db
from marmoraria.geometry.records import MovementType
from marmoraria.schemas.report import (
    ClientProjectsResponse,
    DashboardResponse,
    HistoryEventResponse,
)
from marmoraria.services import report_service, supply_service
from marmoraria.services.inventory_store import SqlInventoryStore

router = APIRouter(prefix="/reports", tags=["Reports"])


@router.get("/dashboard", response_model=DashboardResponse)
async def get_dashboard(
    tenant_id: str = Depends(get_tenant_id),
    db: Session = Depends(get_db),
):
    slabs = SqlInventoryStore(db).list_by_tenant(tenant_id)
    return report_service.build_dashboard(
        slabs,
        recent_limit=settings.RECENT_ENTRIES_LIMIT,
        low_stock_supplies=supply_service.count_low_stock(db, tenant_id),
    )


@router.get("/history", response_model=List[HistoryEventResponse])
async def get_history(
    movement_type: Optional[MovementType] = Query(None, alias="type"),
    limit: int = Query(200, ge=1, le=1000),
    tenant_id: str = Depends(get_tenant_id),
    db: Session = Depends(get_db),
):
    """Every movement of every slab, newest first"""
    slabs = SqlInventoryStore(db).list_by_tenant(tenant_id)
    return report_service.build_history_log(slabs, movement_type=movement_type)[:limit]


@router.get("/projects", response_model=List[ClientProjectsResponse])
async def search_projects(
    q: Optional[str] = Query(None, description="Client or project name"),
    tenant_id: str = Depends(get_tenant_id),
    db: Session = Depends(get_db),
):
    slabs = SqlInventoryStore(db).list_by_tenant(tenant_id)
    return [
        ClientProjectsResponse.model_validate(group)
        for group in report_service.search_projects(slabs, q)
    ]
