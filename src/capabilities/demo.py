"""Designated demo coverage snapshots.

The demo generator composes its dataset from optional packs; each pack
switches on a family of signals in the resulting coverage snapshot.
``ULTIMATE_DEMO_COVERAGE`` (every pack on) is the regression input that
must keep every feature ENABLED and every intent answerable.
"""

from __future__ import annotations

from src.models.common import GateBase
from src.models.coverage import CoverageCounts, CoverageMetrics, SampleSizes


class DemoPacks(GateBase, frozen=True):
    """Demo packs that influence the coverage snapshot."""

    core_ats: bool = True
    recruiter_hm: bool = True
    offers_outcomes: bool = True
    snapshots_diffs: bool = True
    capacity_history: bool = True


ALL_PACKS = DemoPacks()
CORE_ONLY_PACKS = DemoPacks(
    recruiter_hm=False,
    offers_outcomes=False,
    snapshots_diffs=False,
    capacity_history=False,
)

# Record volumes produced by the demo generator at its default seed.
DEMO_REQUISITIONS = 100
DEMO_CANDIDATES = 1200
DEMO_EVENTS = 6000
DEMO_USERS = 25
DEMO_SNAPSHOTS = 8


def demo_coverage(packs: DemoPacks, import_id: str = "ultimate-demo") -> CoverageMetrics:
    """Coverage snapshot the demo generator reports for ``packs``."""
    assigned = 1.0 if packs.recruiter_hm else 0.0
    return CoverageMetrics(
        import_id=import_id,
        counts=CoverageCounts(
            requisitions=DEMO_REQUISITIONS,
            candidates=DEMO_CANDIDATES,
            events=DEMO_EVENTS,
            users=DEMO_USERS,
            snapshots=DEMO_SNAPSHOTS if packs.snapshots_diffs else 1,
        ),
        field_coverage={
            "req.recruiter_id": assigned,
            "req.hiring_manager_id": assigned,
            "req.opened_at": 1.0,
            "req.closed_at": 0.4,
            "req.status": 1.0,
            "cand.applied_at": 1.0,
            "cand.current_stage": 1.0,
            "cand.hired_at": 0.05,
            "cand.rejected_at": 0.3,
            "cand.source": 1.0,
            "cand.name": 1.0,
            "event.from_stage": 0.95,
            "event.to_stage": 1.0,
            "event.actor_user_id": assigned,
            "event.event_at": 1.0,
        },
        flags={
            "has_stage_events": True,
            "has_timestamps": True,
            "has_terminal_timestamps": packs.offers_outcomes,
            "has_recruiter_assignment": packs.recruiter_hm,
            "has_hm_assignment": packs.recruiter_hm,
            "has_source_data": True,
            "has_multiple_snapshots": packs.snapshots_diffs,
            "has_capacity_history": packs.capacity_history,
        },
        sample_sizes=SampleSizes(
            hires=60,
            offers=80,
            rejections=500,
            active_reqs=60,
        ),
    )


ULTIMATE_DEMO_COVERAGE: CoverageMetrics = demo_coverage(ALL_PACKS)
MINIMAL_DEMO_COVERAGE: CoverageMetrics = demo_coverage(CORE_ONLY_PACKS, import_id="minimal-demo")
