"""
Slab geometry: immutable records and the remnant draft editor
"""
from marmoraria.geometry.records import (
    CutRecord,
    MovementType,
    Point,
    SlabRecord,
    SlabStatus,
)
from marmoraria.geometry.remnant import (
    CutContext,
    DraftState,
    add_vertex,
    begin_draft,
    clear_draft,
    commit_cut,
    compute_area,
    edge_length,
    polygon_area,
    resize_edge,
    undo_last_vertex,
)

__all__ = [
    "CutRecord",
    "MovementType",
    "Point",
    "SlabRecord",
    "SlabStatus",
    "CutContext",
    "DraftState",
    "add_vertex",
    "begin_draft",
    "clear_draft",
    "commit_cut",
    "compute_area",
    "edge_length",
    "polygon_area",
    "resize_edge",
    "undo_last_vertex",
]
