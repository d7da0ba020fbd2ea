"""
Report Service

Read-only views built from a tenant's slab records:
- dashboard totals (area, status counts, area per category, recent entries)
- global history log (every movement across all slabs, newest first)
- project search (cuts grouped by client)
"""
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional

from marmoraria.geometry.records import CutRecord, MovementType, SlabRecord, SlabStatus

UNKNOWN_CLIENT = "Cliente não informado"


@dataclass
class DashboardReport:
    total_available_area: float
    total_slabs: int
    whole_count: int
    remnant_count: int
    exhausted_count: int
    low_stock_count: int
    area_by_category: Dict[str, float]
    recent_entries: List[SlabRecord]
    low_stock_supplies: int = 0


@dataclass
class HistoryEvent:
    slab_id: str
    slab_name: str
    movement: CutRecord

    @property
    def date(self) -> datetime:
        return self.movement.date


@dataclass
class ClientProjects:
    client_name: str
    events: List[HistoryEvent] = field(default_factory=list)

    @property
    def total_area_used(self) -> float:
        return round(sum(e.movement.area_used for e in self.events), 4)


def build_dashboard(
    slabs: List[SlabRecord],
    recent_limit: int = 5,
    low_stock_supplies: int = 0,
) -> DashboardReport:
    area_by_category: Dict[str, float] = defaultdict(float)
    for slab in slabs:
        area_by_category[slab.category] += slab.available_area

    recent = sorted(
        slabs,
        key=lambda s: (s.entry_date or datetime.min.date(), s.entry_index),
        reverse=True,
    )[:recent_limit]

    return DashboardReport(
        total_available_area=round(sum(s.available_area for s in slabs), 2),
        total_slabs=len(slabs),
        whole_count=sum(1 for s in slabs if s.status == SlabStatus.WHOLE),
        remnant_count=sum(1 for s in slabs if s.status == SlabStatus.HAS_REMNANT),
        exhausted_count=sum(1 for s in slabs if s.status == SlabStatus.EXHAUSTED),
        low_stock_count=sum(1 for s in slabs if s.is_low_stock),
        area_by_category={k: round(v, 2) for k, v in sorted(area_by_category.items())},
        recent_entries=recent,
        low_stock_supplies=low_stock_supplies,
    )


def build_history_log(
    slabs: List[SlabRecord],
    movement_type: Optional[MovementType] = None,
) -> List[HistoryEvent]:
    """All movements of all slabs, newest first"""
    events = [
        HistoryEvent(slab_id=slab.id, slab_name=slab.commercial_name, movement=movement)
        for slab in slabs
        for movement in slab.history
        if movement_type is None or movement.movement_type == movement_type
    ]
    return sorted(events, key=lambda e: e.date, reverse=True)


def search_projects(slabs: List[SlabRecord], term: Optional[str] = None) -> List[ClientProjects]:
    """
    Cuts and withdrawals grouped by client name

    A group is kept when ``term`` appears (case-insensitive) in the client
    name or in any of its project names. Groups are sorted by client name.
    """
    groups: Dict[str, ClientProjects] = {}
    for event in build_history_log(slabs):
        if event.movement.movement_type not in (MovementType.CUT, MovementType.WITHDRAWAL):
            continue
        client = event.movement.client_name or UNKNOWN_CLIENT
        groups.setdefault(client, ClientProjects(client_name=client)).events.append(event)

    needle = (term or "").strip().lower()
    if needle:
        groups = {
            name: group for name, group in groups.items()
            if needle in name.lower()
            or any(needle in e.movement.project.lower() for e in group.events)
        }

    return sorted(groups.values(), key=lambda g: g.client_name.lower())
