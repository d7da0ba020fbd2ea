"""
Inventory Store

Repository for SlabRecords, keyed by tenant and slab id. The slab service
and the remnant tracker only see this interface:

- InMemoryInventoryStore: dict-backed, used by unit tests
- SqlInventoryStore: SQLAlchemy session over the slabs / slab_movements tables

Saves are upserts and last-write-wins. History rows are only ever inserted;
a movement already stored is never rewritten.
"""
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Tuple

from sqlalchemy.orm import Session

from marmoraria.geometry.records import (
    CutRecord,
    MovementType,
    Polygon,
    SlabRecord,
    SlabStatus,
    to_polygon,
)
from marmoraria.logging_config import get_logger
from marmoraria.models.slab import Slab, SlabMovement

logger = get_logger(__name__)


class InventoryStore(ABC):
    """Persistence for slab records"""

    @abstractmethod
    def get_by_id(self, tenant_id: str, slab_id: str) -> Optional[SlabRecord]:
        """Return the slab, or None when absent or owned by another tenant."""

    @abstractmethod
    def save(self, slab: SlabRecord) -> None:
        """Insert or replace the slab identified by ``slab.id``."""

    @abstractmethod
    def list_by_tenant(self, tenant_id: str) -> List[SlabRecord]:
        """All slabs of a tenant, ordered by entry index."""

    @abstractmethod
    def delete(self, tenant_id: str, slab_id: str) -> bool:
        """Remove a slab and its history. Returns False when nothing was deleted."""

    def next_entry_index(self, tenant_id: str) -> int:
        slabs = self.list_by_tenant(tenant_id)
        return max((s.entry_index for s in slabs), default=0) + 1


class InMemoryInventoryStore(InventoryStore):

    def __init__(self):
        self._slabs: Dict[Tuple[str, str], SlabRecord] = {}

    def get_by_id(self, tenant_id: str, slab_id: str) -> Optional[SlabRecord]:
        return self._slabs.get((tenant_id, slab_id))

    def save(self, slab: SlabRecord) -> None:
        self._slabs[(slab.company_id, slab.id)] = slab

    def list_by_tenant(self, tenant_id: str) -> List[SlabRecord]:
        slabs = [s for (tenant, _), s in self._slabs.items() if tenant == tenant_id]
        return sorted(slabs, key=lambda s: s.entry_index)

    def delete(self, tenant_id: str, slab_id: str) -> bool:
        return self._slabs.pop((tenant_id, slab_id), None) is not None


# ============================================================================
# SQL backend
# ============================================================================

def _polygon_to_json(polygon: Polygon) -> list:
    return [[p.x, p.y] for p in polygon]


def movement_to_record(movement: SlabMovement) -> CutRecord:
    return CutRecord(
        id=movement.id,
        date=movement.date,
        client_name=movement.client_name or "",
        project=movement.project or "",
        area_used=movement.area_used,
        leftover_width=movement.leftover_width,
        leftover_height=movement.leftover_height,
        leftover_polygon=to_polygon(movement.leftover_polygon or []),
        operator_id=movement.operator_id,
        operator_name=movement.operator_name,
        observations=movement.observations or "",
        movement_type=MovementType(movement.movement_type),
        quantity_change=movement.quantity_change,
    )


def slab_to_record(slab: Slab) -> SlabRecord:
    return SlabRecord(
        id=slab.id,
        entry_index=slab.entry_index,
        company_id=slab.company_id,
        commercial_name=slab.commercial_name,
        category=slab.category,
        thickness=slab.thickness,
        supplier=slab.supplier or "",
        original_width=slab.original_width,
        original_height=slab.original_height,
        current_width=slab.current_width,
        current_height=slab.current_height,
        current_polygon=to_polygon(slab.current_polygon or []),
        total_area=slab.total_area,
        available_area=slab.available_area,
        quantity=slab.quantity,
        status=SlabStatus(slab.status),
        history=tuple(movement_to_record(m) for m in slab.movements),
        min_quantity=slab.min_quantity,
        location=slab.location,
        purchase_value=slab.purchase_value,
        observations=slab.observations or "",
        entry_date=slab.entry_date,
        last_operator_id=slab.last_operator_id,
        last_operator_name=slab.last_operator_name,
        last_updated_at=slab.last_updated_at,
        created_at=slab.created_at,
    )


class SqlInventoryStore(InventoryStore):
    """
    SQLAlchemy-backed store. Each ``save`` commits, so a returned record is
    durable once the call completes.
    """

    def __init__(self, db: Session):
        self.db = db

    def _query(self, tenant_id: str):
        return self.db.query(Slab).filter(Slab.company_id == tenant_id)

    def get_by_id(self, tenant_id: str, slab_id: str) -> Optional[SlabRecord]:
        slab = self._query(tenant_id).filter(Slab.id == slab_id).first()
        return slab_to_record(slab) if slab else None

    def list_by_tenant(self, tenant_id: str) -> List[SlabRecord]:
        slabs = self._query(tenant_id).order_by(Slab.entry_index).all()
        return [slab_to_record(s) for s in slabs]

    def save(self, record: SlabRecord) -> None:
        slab = self.db.query(Slab).filter(Slab.id == record.id).first()
        if slab is None:
            slab = Slab(id=record.id, company_id=record.company_id)
            self.db.add(slab)

        slab.entry_index = record.entry_index
        slab.commercial_name = record.commercial_name
        slab.category = record.category
        slab.thickness = record.thickness
        slab.supplier = record.supplier
        slab.location = record.location
        slab.purchase_value = record.purchase_value
        slab.observations = record.observations
        slab.original_width = record.original_width
        slab.original_height = record.original_height
        slab.current_width = record.current_width
        slab.current_height = record.current_height
        slab.current_polygon = _polygon_to_json(record.current_polygon)
        slab.total_area = record.total_area
        slab.available_area = record.available_area
        slab.quantity = record.quantity
        slab.min_quantity = record.min_quantity
        slab.status = record.status.value
        slab.entry_date = record.entry_date
        slab.last_operator_id = record.last_operator_id
        slab.last_operator_name = record.last_operator_name
        slab.last_updated_at = record.last_updated_at

        stored_ids = {m.id for m in slab.movements}
        total = len(record.history)
        # history is newest first; sequence counts up from the oldest entry
        for position, entry in enumerate(record.history):
            if entry.id in stored_ids:
                continue
            slab.movements.append(SlabMovement(
                id=entry.id,
                sequence=total - 1 - position,
                movement_type=entry.movement_type.value,
                date=entry.date,
                client_name=entry.client_name,
                project=entry.project,
                observations=entry.observations,
                area_used=entry.area_used,
                quantity_change=entry.quantity_change,
                leftover_width=entry.leftover_width,
                leftover_height=entry.leftover_height,
                leftover_polygon=_polygon_to_json(entry.leftover_polygon),
                operator_id=entry.operator_id,
                operator_name=entry.operator_name,
            ))

        self.db.commit()
        logger.debug("Slab saved", extra={"slab_id": record.id, "company_id": record.company_id})

    def delete(self, tenant_id: str, slab_id: str) -> bool:
        slab = self._query(tenant_id).filter(Slab.id == slab_id).first()
        if slab is None:
            return False
        self.db.delete(slab)
        self.db.commit()
        return True
