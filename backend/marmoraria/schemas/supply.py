"""
Supply Pydantic Schemas
"""
from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime

from marmoraria.models.supply import SupplyMovementType


class SupplyCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    category: str = Field("Geral", max_length=100)
    unit: str = Field("un", max_length=20)
    quantity: float = Field(0, ge=0)
    min_quantity: float = Field(0, ge=0)
    supplier: Optional[str] = Field(None, max_length=200)
    observations: Optional[str] = None


class StockAdjustment(BaseModel):
    """ENTRADA adds to stock, SAIDA consumes it"""
    movement_type: SupplyMovementType
    amount: float
    observations: Optional[str] = None


class SupplyMovementResponse(BaseModel):
    id: str
    movement_type: SupplyMovementType
    quantity_change: float
    date: datetime
    operator_name: str
    observations: Optional[str] = None

    class Config:
        from_attributes = True


class SupplyResponse(BaseModel):
    id: str
    company_id: str
    name: str
    category: str
    unit: str
    quantity: float
    min_quantity: float
    supplier: Optional[str] = None
    observations: Optional[str] = None
    is_low_stock: bool
    is_out_of_stock: bool
    last_updated_at: datetime
    movements: List[SupplyMovementResponse] = []

    class Config:
        from_attributes = True
