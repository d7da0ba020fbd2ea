"""
Remnant geometry tracking

A cut-registration session edits a *draft*: the polygon the operator says is
left on the slab once the piece has been taken out. Every function here takes
a DraftState and returns a new one; nothing touches storage. ``commit_cut``
turns a finished draft into an updated SlabRecord plus the CutRecord that
documents the cut, and the caller decides whether to persist them.

Polygons are closed loops in insertion order. Self-intersecting drafts are
accepted and measured with the shoelace formula as they are.
"""
from __future__ import annotations

import math
import uuid
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional, Tuple

from marmoraria.exceptions import (
    InsufficientVerticesError,
    MissingClientNameError,
    MissingOperatorError,
    MissingProjectError,
    ValidationError,
)
from marmoraria.geometry.records import (
    CM2_PER_M2,
    EXHAUSTED_AREA_THRESHOLD_M2,
    CutRecord,
    MovementType,
    Point,
    Polygon,
    SlabRecord,
    SlabStatus,
    bounding_box,
    rectangle,
    utcnow,
)
from marmoraria.services.identity import OperatorIdentity

MIN_VERTICES = 3


@dataclass(frozen=True)
class DraftState:
    """Polygon being edited plus the bounds points are clamped to."""

    points: Polygon
    max_x: float
    max_y: float

    @property
    def vertex_count(self) -> int:
        return len(self.points)

    @property
    def is_complete(self) -> bool:
        return len(self.points) >= MIN_VERTICES


@dataclass(frozen=True)
class CutContext:
    """Who the piece was cut for, and who registered it."""

    client_name: str
    project: str
    operator: Optional[OperatorIdentity]
    observations: str = ""


def _clamp(value: float, upper: float) -> float:
    return min(max(value, 0), upper)


def _round4(value: float) -> float:
    return round(value, 4)


def begin_draft(slab: SlabRecord) -> DraftState:
    """Start editing from the slab's current shape (or its full rectangle)."""
    if slab.current_polygon:
        points = tuple(slab.current_polygon)
    else:
        points = rectangle(slab.current_width, slab.current_height)
    return DraftState(points=points, max_x=slab.current_width, max_y=slab.current_height)


def add_vertex(draft: DraftState, point: Point) -> DraftState:
    """Append ``point``, clamped into ``[0, max_x] x [0, max_y]``."""
    clamped = Point(_clamp(point.x, draft.max_x), _clamp(point.y, draft.max_y))
    return replace(draft, points=draft.points + (clamped,))


def undo_last_vertex(draft: DraftState) -> DraftState:
    if not draft.points:
        return draft
    return replace(draft, points=draft.points[:-1])


def clear_draft(draft: DraftState) -> DraftState:
    if not draft.points:
        return draft
    return replace(draft, points=())


def edge_length(draft: DraftState, edge_index: int) -> float:
    """Length in cm of the edge from vertex ``i`` to vertex ``(i + 1) mod n``."""
    start, end = _edge(draft, edge_index)
    return math.hypot(end.x - start.x, end.y - start.y)


def _edge(draft: DraftState, edge_index: int) -> Tuple[Point, Point]:
    n = len(draft.points)
    if n < 2:
        raise ValidationError("Draft has no edges to resize", field="edge_index")
    if not 0 <= edge_index < n:
        raise ValidationError(
            f"Edge index {edge_index} out of range for {n} vertices",
            field="edge_index",
        )
    return draft.points[edge_index], draft.points[(edge_index + 1) % n]


def resize_edge(draft: DraftState, edge_index: int, new_length: float) -> DraftState:
    """
    Move the end vertex of one edge so the edge measures ``new_length`` cm.

    Only vertex ``(edge_index + 1) mod n`` moves, along the direction from
    vertex ``edge_index``. Coordinates are rounded to whole centimeters and
    kept inside the draft bounds, so near an edge of the slab the bound wins
    and the edge ends up shorter than ``new_length``. The following edge
    changes length with it.
    A zero-length edge has no direction and is left alone.
    """
    if new_length <= 0:
        raise ValidationError("Edge length must be greater than zero", field="new_length")

    start, end = _edge(draft, edge_index)
    dx = end.x - start.x
    dy = end.y - start.y
    current = math.hypot(dx, dy)
    if current == 0:
        return draft

    ratio = new_length / current
    moved = Point(
        _clamp(round(start.x + dx * ratio), draft.max_x),
        _clamp(round(start.y + dy * ratio), draft.max_y),
    )

    end_index = (edge_index + 1) % len(draft.points)
    points = list(draft.points)
    points[end_index] = moved
    return replace(draft, points=tuple(points))


def polygon_area(points: Polygon) -> float:
    """Shoelace area in m2 of a closed polygon given in cm."""
    n = len(points)
    if n < MIN_VERTICES:
        return 0.0

    twice_area = 0.0
    for i in range(n):
        a = points[i]
        b = points[(i + 1) % n]
        twice_area += a.x * b.y - b.x * a.y

    return abs(twice_area) / 2 / CM2_PER_M2


def compute_area(draft: DraftState) -> float:
    return polygon_area(draft.points)


def _validate_commit(draft: DraftState, context: CutContext) -> None:
    if not draft.is_complete:
        raise InsufficientVerticesError(draft.vertex_count)
    if not (context.client_name or "").strip():
        raise MissingClientNameError()
    if not (context.project or "").strip():
        raise MissingProjectError()
    if context.operator is None:
        raise MissingOperatorError()


def commit_cut(
    draft: DraftState,
    slab: SlabRecord,
    context: CutContext,
    *,
    now: Optional[datetime] = None,
    threshold: float = EXHAUSTED_AREA_THRESHOLD_M2,
) -> Tuple[SlabRecord, CutRecord]:
    """
    Turn a finished draft into the slab's new remnant.

    Returns the updated slab and the cut record that was prepended to its
    history. ``area_used`` is the drop in available area; a draft larger than
    the current remnant yields a negative value and is recorded as such.

    Raises:
        CutValidationError: fewer than 3 points, missing client, project or
            operator. Neither the slab nor the draft is changed.
    """
    _validate_commit(draft, context)

    now = now or utcnow()
    new_area = compute_area(draft)
    area_used = _round4(slab.available_area - new_area)
    leftover_width, leftover_height = bounding_box(draft.points)

    if new_area < threshold or slab.quantity <= 0:
        status = SlabStatus.EXHAUSTED
    else:
        status = SlabStatus.HAS_REMNANT

    record = CutRecord(
        id=f"MOV-{uuid.uuid4().hex[:12].upper()}",
        date=now,
        client_name=context.client_name.strip(),
        project=context.project.strip(),
        area_used=area_used,
        leftover_width=leftover_width,
        leftover_height=leftover_height,
        leftover_polygon=draft.points,
        operator_id=context.operator.id,
        operator_name=context.operator.name,
        observations=context.observations or "",
        movement_type=MovementType.CUT,
        quantity_change=0,
    )

    updated = slab.with_history_entry(
        record,
        current_width=leftover_width,
        current_height=leftover_height,
        current_polygon=draft.points,
        available_area=new_area,
        status=status,
        last_operator_id=context.operator.id,
        last_operator_name=context.operator.name,
        last_updated_at=now,
    )
    return updated, record
