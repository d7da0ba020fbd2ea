"""
Slab Service

Stock entry and every movement that changes a slab afterwards:

- create_slab: a new slab enters the yard as a full rectangle
- register_cut: a piece is cut out; the operator's drawing of what is left
  becomes the new remnant (see marmoraria.geometry.remnant)
- withdraw_unit / restock: whole units leave or arrive
- delete_slab, get_slab, list_slabs

The service works against an InventoryStore and an IdentityContext so the
same code runs on the SQL store in the API and the in-memory store in tests.
"""
import uuid
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from marmoraria.exceptions import (
    InsufficientStockError,
    MissingClientNameError,
    MissingProjectError,
    NotFoundError,
    SlabExhaustedError,
    ValidationError,
)
from marmoraria.geometry.records import (
    CM2_PER_M2,
    EXHAUSTED_AREA_THRESHOLD_M2,
    CutRecord,
    MovementType,
    SlabRecord,
    SlabStatus,
    derive_status,
    rectangle,
    to_polygon,
    utcnow,
)
from marmoraria.geometry.remnant import (
    CutContext,
    DraftState,
    add_vertex,
    begin_draft,
    clear_draft,
    commit_cut,
    compute_area,
)
from marmoraria.logging_config import audit_log, get_logger
from marmoraria.services.identity import IdentityContext, OperatorIdentity
from marmoraria.services.inventory_store import InventoryStore

logger = get_logger(__name__)


@dataclass
class NewSlab:
    """Fields an operator fills in when a slab arrives"""
    commercial_name: str
    width: float
    height: float
    category: str = "Granito"
    thickness: str = "2cm"
    supplier: str = ""
    quantity: int = 1
    min_quantity: int = 0
    location: Optional[str] = None
    purchase_value: Optional[float] = None
    observations: str = ""


def _movement_id() -> str:
    return f"MOV-{uuid.uuid4().hex[:12].upper()}"


def _require_client_and_project(client_name: str, project: str) -> None:
    if not (client_name or "").strip():
        raise MissingClientNameError()
    if not (project or "").strip():
        raise MissingProjectError()


class SlabService:

    def __init__(
        self,
        store: InventoryStore,
        identity: IdentityContext,
        exhausted_threshold: float = EXHAUSTED_AREA_THRESHOLD_M2,
    ):
        self.store = store
        self.identity = identity
        self.exhausted_threshold = exhausted_threshold

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_slab(self, tenant_id: str, slab_id: str) -> SlabRecord:
        slab = self.store.get_by_id(tenant_id, slab_id)
        if slab is None:
            raise NotFoundError("Slab", slab_id)
        return slab

    def list_slabs(
        self,
        tenant_id: str,
        search: Optional[str] = None,
        status: Optional[SlabStatus] = None,
        category: Optional[str] = None,
    ) -> List[SlabRecord]:
        """
        Slabs of a tenant, newest entry first.

        ``search`` matches commercial name, id, supplier or category,
        case-insensitively.
        """
        slabs = self.store.list_by_tenant(tenant_id)

        if search:
            term = search.strip().lower()
            slabs = [
                s for s in slabs
                if term in s.commercial_name.lower()
                or term in s.id.lower()
                or term in (s.supplier or "").lower()
                or term in s.category.lower()
            ]
        if status is not None:
            slabs = [s for s in slabs if s.status == status]
        if category:
            slabs = [s for s in slabs if s.category.lower() == category.lower()]

        return sorted(slabs, key=lambda s: s.entry_index, reverse=True)

    # ------------------------------------------------------------------
    # Entry
    # ------------------------------------------------------------------

    def create_slab(self, tenant_id: str, data: NewSlab) -> SlabRecord:
        """Register a slab arriving in stock as a full rectangle."""
        if not (data.commercial_name or "").strip():
            raise ValidationError("Commercial name is required", field="commercial_name")
        if data.width <= 0 or data.height <= 0:
            raise ValidationError("Width and height must be greater than zero", field="width")
        if data.quantity < 1:
            raise ValidationError("Quantity must be at least 1", field="quantity")

        operator = self.identity.current()
        now = utcnow()
        polygon = rectangle(data.width, data.height)
        area = data.width * data.height / CM2_PER_M2

        entry = CutRecord(
            id=_movement_id(),
            date=now,
            client_name="",
            project="",
            area_used=0.0,
            leftover_width=data.width,
            leftover_height=data.height,
            leftover_polygon=polygon,
            operator_id=operator.id,
            operator_name=operator.name,
            observations=data.observations or "",
            movement_type=MovementType.ENTRY,
            quantity_change=data.quantity,
        )

        slab = SlabRecord(
            id=f"CHP-{uuid.uuid4().hex[:8].upper()}",
            entry_index=self.store.next_entry_index(tenant_id),
            company_id=tenant_id,
            commercial_name=data.commercial_name.strip(),
            category=data.category,
            thickness=data.thickness,
            supplier=data.supplier or "",
            original_width=data.width,
            original_height=data.height,
            current_width=data.width,
            current_height=data.height,
            current_polygon=polygon,
            total_area=area,
            available_area=area,
            quantity=data.quantity,
            min_quantity=data.min_quantity,
            status=derive_status(polygon, data.width, data.height, data.quantity, area,
                                 self.exhausted_threshold),
            history=(entry,),
            location=data.location,
            purchase_value=data.purchase_value,
            observations=data.observations or "",
            entry_date=now.date(),
            last_operator_id=operator.id,
            last_operator_name=operator.name,
            last_updated_at=now,
            created_at=now,
        )

        self.store.save(slab)
        logger.info("Slab created", extra={"slab_id": slab.id, "company_id": tenant_id})
        audit_log(
            "SLAB_CREATED",
            user_id=operator.id,
            company_id=tenant_id,
            resource_type="slab",
            resource_id=slab.id,
            details={"width": data.width, "height": data.height, "quantity": data.quantity},
        )
        return slab

    # ------------------------------------------------------------------
    # Cuts
    # ------------------------------------------------------------------

    def draft_from_points(self, slab: SlabRecord, points: Sequence) -> DraftState:
        """Replay submitted points through the draft editor, so clamping applies."""
        draft = clear_draft(begin_draft(slab))
        for point in to_polygon(points):
            draft = add_vertex(draft, point)
        return draft

    def preview_area(self, tenant_id: str, slab_id: str, points: Sequence) -> Tuple[float, float]:
        """(new area, area that would be used) for a proposed remnant."""
        slab = self.get_slab(tenant_id, slab_id)
        draft = self.draft_from_points(slab, points)
        new_area = compute_area(draft)
        return new_area, round(slab.available_area - new_area, 4)

    def register_cut(
        self,
        tenant_id: str,
        slab_id: str,
        points: Sequence,
        client_name: str,
        project: str,
        observations: str = "",
    ) -> Tuple[SlabRecord, CutRecord]:
        """
        Commit a cut whose remnant is the polygon ``points``.

        Raises:
            NotFoundError: unknown slab for this tenant
            SlabExhaustedError: nothing left to cut
            CutValidationError: incomplete polygon, missing client or project
        """
        slab = self.get_slab(tenant_id, slab_id)
        if slab.status == SlabStatus.EXHAUSTED:
            raise SlabExhaustedError(slab_id)

        operator: Optional[OperatorIdentity] = (
            self.identity.current() if self.identity.is_authenticated else None
        )
        context = CutContext(
            client_name=client_name,
            project=project,
            operator=operator,
            observations=observations,
        )
        draft = self.draft_from_points(slab, points)
        updated, record = commit_cut(draft, slab, context, threshold=self.exhausted_threshold)

        if record.area_used < 0:
            logger.warning(
                "Cut recorded with a remnant larger than the available area",
                extra={"slab_id": slab_id, "area_used": record.area_used},
            )

        self.store.save(updated)
        logger.info(
            "Cut registered",
            extra={"slab_id": slab_id, "area_used": record.area_used, "status": updated.status.value},
        )
        audit_log(
            "SLAB_CUT_REGISTERED",
            user_id=record.operator_id,
            company_id=tenant_id,
            resource_type="slab",
            resource_id=slab_id,
            details={
                "cut_id": record.id,
                "client": record.client_name,
                "project": record.project,
                "area_used": record.area_used,
                "available_area": updated.available_area,
            },
        )
        return updated, record

    # ------------------------------------------------------------------
    # Whole units
    # ------------------------------------------------------------------

    def withdraw_unit(
        self,
        tenant_id: str,
        slab_id: str,
        client_name: str,
        project: str,
        observations: str = "",
    ) -> Tuple[SlabRecord, CutRecord]:
        """A whole slab leaves the yard for a client."""
        slab = self.get_slab(tenant_id, slab_id)
        if slab.quantity <= 0:
            raise InsufficientStockError(slab_id, slab.quantity, 1)
        _require_client_and_project(client_name, project)

        operator = self.identity.current()
        now = utcnow()
        quantity = slab.quantity - 1

        record = CutRecord(
            id=_movement_id(),
            date=now,
            client_name=client_name.strip(),
            project=project.strip(),
            area_used=round(slab.available_area, 4),
            leftover_width=slab.current_width,
            leftover_height=slab.current_height,
            leftover_polygon=slab.current_polygon,
            operator_id=operator.id,
            operator_name=operator.name,
            observations=observations or "",
            movement_type=MovementType.WITHDRAWAL,
            quantity_change=-1,
        )
        updated = slab.with_history_entry(
            record,
            quantity=quantity,
            status=self._status_after_quantity_change(slab, quantity),
            last_operator_id=operator.id,
            last_operator_name=operator.name,
            last_updated_at=now,
        )

        self.store.save(updated)
        audit_log(
            "SLAB_WITHDRAWN",
            user_id=operator.id,
            company_id=tenant_id,
            resource_type="slab",
            resource_id=slab_id,
            details={"client": record.client_name, "project": record.project, "quantity": quantity},
        )
        return updated, record

    def restock(
        self,
        tenant_id: str,
        slab_id: str,
        amount: int,
        observations: str = "",
    ) -> Tuple[SlabRecord, CutRecord]:
        """Identical whole units arrive for an existing slab entry."""
        if amount <= 0:
            raise ValidationError("Restock amount must be greater than zero", field="amount")

        slab = self.get_slab(tenant_id, slab_id)
        operator = self.identity.current()
        now = utcnow()
        quantity = slab.quantity + amount

        record = CutRecord(
            id=_movement_id(),
            date=now,
            client_name="",
            project="",
            area_used=0.0,
            leftover_width=slab.current_width,
            leftover_height=slab.current_height,
            leftover_polygon=slab.current_polygon,
            operator_id=operator.id,
            operator_name=operator.name,
            observations=observations or "",
            movement_type=MovementType.RESTOCK,
            quantity_change=amount,
        )
        updated = slab.with_history_entry(
            record,
            quantity=quantity,
            status=self._status_after_quantity_change(slab, quantity),
            last_operator_id=operator.id,
            last_operator_name=operator.name,
            last_updated_at=now,
        )

        self.store.save(updated)
        audit_log(
            "SLAB_RESTOCKED",
            user_id=operator.id,
            company_id=tenant_id,
            resource_type="slab",
            resource_id=slab_id,
            details={"amount": amount, "quantity": quantity},
        )
        return updated, record

    def _status_after_quantity_change(self, slab: SlabRecord, quantity: int) -> SlabStatus:
        """
        Status once the unit count changes and the geometry does not

        A slab that has been cut stays a remnant even when the drawn remnant
        matches the original rectangle.
        """
        status = derive_status(
            slab.current_polygon,
            slab.original_width,
            slab.original_height,
            quantity,
            slab.available_area,
            self.exhausted_threshold,
        )
        if status == SlabStatus.WHOLE and any(
            h.movement_type == MovementType.CUT for h in slab.history
        ):
            return SlabStatus.HAS_REMNANT
        return status

    # ------------------------------------------------------------------
    # Removal
    # ------------------------------------------------------------------

    def delete_slab(self, tenant_id: str, slab_id: str) -> None:
        operator = self.identity.current()
        if not self.store.delete(tenant_id, slab_id):
            raise NotFoundError("Slab", slab_id)
        logger.info("Slab deleted", extra={"slab_id": slab_id, "company_id": tenant_id})
        audit_log(
            "SLAB_DELETED",
            user_id=operator.id,
            company_id=tenant_id,
            resource_type="slab",
            resource_id=slab_id,
        )
