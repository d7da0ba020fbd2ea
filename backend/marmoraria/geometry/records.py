"""
Immutable slab and cut records.

Coordinates and dimensions are centimeters, areas are square meters.
Updates go through ``dataclasses.replace`` (``SlabRecord.with_changes``);
a record handed out is never mutated in place.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime, timezone
from enum import Enum
from typing import Optional, Sequence, Tuple

CM2_PER_M2 = 10000
EXHAUSTED_AREA_THRESHOLD_M2 = 0.05


def utcnow() -> datetime:
    """Naive UTC timestamp, the form the database columns store."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class SlabStatus(str, Enum):
    """Lifecycle of one slab's usable shape"""
    WHOLE = "whole"
    HAS_REMNANT = "has_remnant"
    EXHAUSTED = "exhausted"


class MovementType(str, Enum):
    """Kinds of entries in a slab's history"""
    ENTRY = "entry"
    CUT = "cut"
    WITHDRAWAL = "withdrawal"
    RESTOCK = "restock"


@dataclass(frozen=True)
class Point:
    """Planar coordinate in centimeters."""

    x: float
    y: float

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)


Polygon = Tuple[Point, ...]


def rectangle(width: float, height: float) -> Polygon:
    """Four corners of a ``width x height`` slab, counter-clockwise from the origin."""
    return (
        Point(0, 0),
        Point(width, 0),
        Point(width, height),
        Point(0, height),
    )


def to_polygon(points: Sequence) -> Polygon:
    """Build a polygon from Points, ``(x, y)`` pairs or ``{"x":, "y":}`` dicts."""
    result = []
    for p in points:
        if isinstance(p, Point):
            result.append(p)
        elif isinstance(p, dict):
            result.append(Point(p["x"], p["y"]))
        else:
            x, y = p
            result.append(Point(x, y))
    return tuple(result)


def bounding_box(points: Sequence[Point]) -> Tuple[float, float]:
    """(max x, max y) over the points; (0, 0) when empty."""
    if not points:
        return (0, 0)
    return (max(p.x for p in points), max(p.y for p in points))


def is_full_rectangle(points: Sequence[Point], width: float, height: float) -> bool:
    """True when the polygon is exactly the original ``width x height`` rectangle."""
    return len(points) == 4 and set(points) == set(rectangle(width, height))


def derive_status(
    polygon: Sequence[Point],
    original_width: float,
    original_height: float,
    quantity: int,
    available_area: float,
    threshold: float = EXHAUSTED_AREA_THRESHOLD_M2,
) -> SlabStatus:
    if quantity <= 0 or available_area < threshold:
        return SlabStatus.EXHAUSTED
    if is_full_rectangle(polygon, original_width, original_height):
        return SlabStatus.WHOLE
    return SlabStatus.HAS_REMNANT


@dataclass(frozen=True)
class CutRecord:
    """One entry in a slab's history. Never modified after creation."""

    id: str
    date: datetime
    client_name: str
    project: str
    area_used: float
    leftover_width: float
    leftover_height: float
    leftover_polygon: Polygon
    operator_id: Optional[str]
    operator_name: str
    observations: str = ""
    movement_type: MovementType = MovementType.CUT
    quantity_change: int = 0


@dataclass(frozen=True)
class SlabRecord:
    """A physical slab as tracked in inventory."""

    id: str
    entry_index: int
    company_id: str
    commercial_name: str
    category: str
    thickness: str
    supplier: str
    original_width: float
    original_height: float
    current_width: float
    current_height: float
    current_polygon: Polygon
    total_area: float
    available_area: float
    quantity: int
    status: SlabStatus
    history: Tuple[CutRecord, ...] = ()
    min_quantity: int = 0
    location: Optional[str] = None
    purchase_value: Optional[float] = None
    observations: str = ""
    entry_date: Optional[date] = None
    last_operator_id: Optional[str] = None
    last_operator_name: Optional[str] = None
    last_updated_at: Optional[datetime] = None
    created_at: Optional[datetime] = field(default=None, compare=False)

    def with_changes(self, **changes) -> "SlabRecord":
        return replace(self, **changes)

    def with_history_entry(self, record: CutRecord, **changes) -> "SlabRecord":
        """Copy with ``record`` prepended to the history."""
        return replace(self, history=(record,) + self.history, **changes)

    @property
    def is_low_stock(self) -> bool:
        return 0 < self.quantity <= self.min_quantity
