"""
Supply Service

Consumables (glue, cutting discs, polishing pads) tracked by count. Every
stock adjustment is an ENTRADA (received) or SAIDA (used in production)
movement recorded on the supply's history.
"""
import uuid
from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from marmoraria.exceptions import InsufficientStockError, NotFoundError, ValidationError
from marmoraria.logging_config import audit_log, get_logger
from marmoraria.models.supply import Supply, SupplyMovement, SupplyMovementType
from marmoraria.services.identity import IdentityContext

logger = get_logger(__name__)

SUPPLY_FILTERS = ("all", "low", "zero")


def get_supply(db: Session, company_id: str, supply_id: str) -> Supply:
    """
    Get a supply of a company

    Raises:
        NotFoundError: If the supply does not exist or belongs to another company
    """
    supply = db.query(Supply).filter(
        Supply.id == supply_id,
        Supply.company_id == company_id,
    ).first()

    if not supply:
        raise NotFoundError("Supply", supply_id)

    return supply


def list_supplies(
    db: Session,
    company_id: str,
    search: Optional[str] = None,
    stock_filter: str = "all",
) -> List[Supply]:
    """
    List supplies of a company

    Args:
        db: Database session
        company_id: Tenant
        search: Case-insensitive match on name, category or id
        stock_filter: 'all', 'low' (0 < qty <= min) or 'zero' (qty <= 0)

    Returns:
        Supplies ordered by name
    """
    if stock_filter not in SUPPLY_FILTERS:
        raise ValidationError(
            f"Invalid filter. Must be one of: {list(SUPPLY_FILTERS)}",
            field="stock_filter",
        )

    supplies = db.query(Supply).filter(
        Supply.company_id == company_id
    ).order_by(Supply.name).all()

    if search:
        term = search.strip().lower()
        supplies = [
            s for s in supplies
            if term in s.name.lower() or term in s.category.lower() or term in s.id.lower()
        ]

    if stock_filter == "zero":
        supplies = [s for s in supplies if s.is_out_of_stock]
    elif stock_filter == "low":
        supplies = [s for s in supplies if s.is_low_stock]

    return supplies


def create_supply(
    db: Session,
    company_id: str,
    identity: IdentityContext,
    name: str,
    category: str = "Geral",
    unit: str = "un",
    quantity: float = 0,
    min_quantity: float = 0,
    supplier: Optional[str] = None,
    observations: Optional[str] = None,
) -> Supply:
    if not (name or "").strip():
        raise ValidationError("Supply name is required", field="name")
    if quantity < 0 or min_quantity < 0:
        raise ValidationError("Quantities cannot be negative", field="quantity")

    operator = identity.current()
    supply = Supply(
        id=f"SUP-{uuid.uuid4().hex[:8].upper()}",
        company_id=company_id,
        name=name.strip(),
        category=category,
        unit=unit,
        quantity=quantity,
        min_quantity=min_quantity,
        supplier=supplier,
        observations=observations,
    )
    if quantity > 0:
        supply.movements.append(SupplyMovement(
            id=f"SUP-H-{uuid.uuid4().hex[:10].upper()}",
            sequence=0,
            movement_type=SupplyMovementType.ENTRADA.value,
            quantity_change=quantity,
            operator_id=operator.id,
            operator_name=operator.name,
            observations="Estoque inicial",
        ))

    db.add(supply)
    db.commit()
    db.refresh(supply)

    audit_log(
        "SUPPLY_CREATED",
        user_id=operator.id,
        company_id=company_id,
        resource_type="supply",
        resource_id=supply.id,
        details={"name": supply.name, "quantity": quantity},
    )
    return supply


def adjust_stock(
    db: Session,
    company_id: str,
    supply_id: str,
    identity: IdentityContext,
    amount: float,
    movement_type: SupplyMovementType,
    observations: Optional[str] = None,
) -> Supply:
    """
    Receive (ENTRADA) or consume (SAIDA) ``amount`` units of a supply

    Raises:
        ValidationError: amount is not positive
        InsufficientStockError: a SAIDA would leave negative stock
    """
    if amount <= 0:
        raise ValidationError("Amount must be greater than zero", field="amount")

    supply = get_supply(db, company_id, supply_id)
    operator = identity.current()

    if movement_type == SupplyMovementType.SAIDA:
        new_quantity = supply.quantity - amount
        if new_quantity < 0:
            raise InsufficientStockError(supply_id, supply.quantity, amount)
        default_note = "Uso em produção"
    else:
        new_quantity = supply.quantity + amount
        default_note = "Reposição de estoque"

    supply.quantity = new_quantity
    supply.last_updated_at = datetime.utcnow()
    supply.movements.append(SupplyMovement(
        id=f"SUP-H-{uuid.uuid4().hex[:10].upper()}",
        sequence=len(supply.movements),
        movement_type=movement_type.value,
        quantity_change=amount,
        operator_id=operator.id,
        operator_name=operator.name,
        observations=observations or default_note,
    ))

    db.commit()
    db.refresh(supply)

    logger.info(
        "Supply stock adjusted",
        extra={"supply_id": supply_id, "movement_type": movement_type.value, "amount": amount},
    )
    audit_log(
        "SUPPLY_ADJUSTED",
        user_id=operator.id,
        company_id=company_id,
        resource_type="supply",
        resource_id=supply_id,
        details={"movement_type": movement_type.value, "amount": amount, "quantity": new_quantity},
    )
    return supply


def delete_supply(db: Session, company_id: str, supply_id: str, identity: IdentityContext) -> None:
    operator = identity.current()
    supply = get_supply(db, company_id, supply_id)
    db.delete(supply)
    db.commit()

    audit_log(
        "SUPPLY_DELETED",
        user_id=operator.id,
        company_id=company_id,
        resource_type="supply",
        resource_id=supply_id,
    )


def count_low_stock(db: Session, company_id: str) -> int:
    """Supplies at or below their minimum, including those out of stock"""
    return db.query(Supply).filter(
        Supply.company_id == company_id,
        Supply.quantity <= Supply.min_quantity,
    ).count()
