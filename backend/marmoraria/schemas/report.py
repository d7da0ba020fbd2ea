"""
Report Pydantic Schemas - dashboard, history log, project search
"""
from pydantic import BaseModel
from typing import Dict, List

from marmoraria.schemas.slab import CutRecordResponse, SlabSummaryResponse


class DashboardResponse(BaseModel):
    total_available_area: float
    total_slabs: int
    whole_count: int
    remnant_count: int
    exhausted_count: int
    low_stock_count: int
    low_stock_supplies: int
    area_by_category: Dict[str, float]
    recent_entries: List[SlabSummaryResponse]

    class Config:
        from_attributes = True


class HistoryEventResponse(BaseModel):
    slab_id: str
    slab_name: str
    movement: CutRecordResponse

    class Config:
        from_attributes = True


class ClientProjectsResponse(BaseModel):
    client_name: str
    total_area_used: float
    events: List[HistoryEventResponse]

    class Config:
        from_attributes = True
