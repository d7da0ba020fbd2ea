"""
Slab Pydantic Schemas

Request bodies for stock entry and movements, and the response shapes of
SlabRecord / CutRecord.
"""
from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import date, datetime

from marmoraria.geometry.records import MovementType, SlabStatus


class PointSchema(BaseModel):
    """Vertex in centimeters"""
    x: float
    y: float

    class Config:
        from_attributes = True


# ============================================================================
# Requests
# ============================================================================

class SlabCreate(BaseModel):
    """A slab arriving in stock"""
    commercial_name: str = Field(..., min_length=1, max_length=200, description="e.g. 'Branco Itaúnas'")
    category: str = Field("Granito", max_length=50)
    thickness: str = Field("2cm", max_length=20)
    width: float = Field(..., gt=0, description="Width in cm")
    height: float = Field(..., gt=0, description="Height in cm")
    supplier: str = Field("", max_length=200)
    quantity: int = Field(1, ge=1)
    min_quantity: int = Field(0, ge=0)
    location: Optional[str] = Field(None, max_length=100)
    purchase_value: Optional[float] = Field(None, ge=0)
    observations: str = ""


class CutCreate(BaseModel):
    """Remnant left on the slab after a piece was cut out"""
    polygon: List[PointSchema] = Field(default_factory=list, description="Remnant outline, in drawing order")
    client_name: str = ""
    project: str = ""
    observations: str = ""


class CutPreviewRequest(BaseModel):
    polygon: List[PointSchema] = Field(default_factory=list)


class WithdrawRequest(BaseModel):
    """A whole unit leaving for a client"""
    client_name: str = ""
    project: str = ""
    observations: str = ""


class RestockRequest(BaseModel):
    amount: int = Field(1, description="Units received")
    observations: str = ""


# ============================================================================
# Responses
# ============================================================================

class CutRecordResponse(BaseModel):
    id: str
    date: datetime
    movement_type: MovementType
    client_name: str
    project: str
    area_used: float
    quantity_change: int
    leftover_width: float
    leftover_height: float
    leftover_polygon: List[PointSchema]
    operator_id: Optional[str] = None
    operator_name: str
    observations: str = ""

    class Config:
        from_attributes = True


class SlabSummaryResponse(BaseModel):
    """Slab without its history, for lists"""
    id: str
    entry_index: int
    company_id: str
    commercial_name: str
    category: str
    thickness: str
    supplier: str
    location: Optional[str] = None
    original_width: float
    original_height: float
    current_width: float
    current_height: float
    total_area: float
    available_area: float
    quantity: int
    min_quantity: int
    status: SlabStatus
    entry_date: Optional[date] = None
    last_operator_name: Optional[str] = None
    last_updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class SlabResponse(SlabSummaryResponse):
    """Full slab with remnant outline and history (newest first)"""
    current_polygon: List[PointSchema]
    purchase_value: Optional[float] = None
    observations: str = ""
    last_operator_id: Optional[str] = None
    history: List[CutRecordResponse]


class CutResponse(BaseModel):
    slab: SlabResponse
    cut: CutRecordResponse


class CutPreviewResponse(BaseModel):
    vertex_count: int
    new_area: float
    area_used: float
