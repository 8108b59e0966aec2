"""Capability threshold configuration.

Every number a capability predicate compares against is declared here
exactly once. The default registry is built from the defaults; a caller
can build a registry from an overridden copy to tune a deployment.

Deterministic -- no I/O.
"""

from __future__ import annotations

from pydantic import Field

from src.models.common import GateBase


class CapabilityThresholds(GateBase, frozen=True):
    """Thresholds for the capability registry.

    Naming: ``*_min`` is the BLOCKED boundary, ``*_full`` the LIMITED
    boundary, ``*_confidence_n`` the sample size at which confidence
    reaches MED (2x for HIGH, see ``high_confidence_multiplier``).
    """

    # Confidence policy
    high_confidence_multiplier: float = Field(default=2.0, gt=1.0)
    high_confidence_coverage: float = Field(default=0.8, ge=0.0, le=1.0)
    low_confidence_fraction: float = Field(default=0.5, ge=0.0, le=1.0)

    # Requisitions
    requisitions_min: int = 1
    requisitions_confidence_n: int = 10
    requisitions_status_coverage: float = 0.3

    # Candidates
    candidates_min: int = 1
    candidates_confidence_n: int = 30
    candidates_stage_coverage: float = 0.5

    # Stage events
    stage_events_min: int = 10
    stage_events_full: int = 50
    stage_events_from_coverage: float = 0.5

    # Application timestamps
    applied_coverage_min: float = 0.1
    applied_coverage_full: float = 0.5
    applied_confidence_n: int = 30

    # Terminal timestamps
    terminal_coverage_min: float = 0.05
    terminal_coverage_full: float = 0.1
    terminal_confidence_n: int = 10

    # Recruiter / hiring-manager assignment
    assignment_coverage_min: float = 0.1
    assignment_coverage_full: float = 0.5
    assignment_confidence_n: int = 5

    # Source data
    source_coverage_min: float = 0.1
    source_coverage_full: float = 0.3
    source_confidence_n: int = 20

    # Snapshots
    snapshots_min: int = 2
    snapshots_confidence_n: int = 4
    dwell_snapshots_min: int = 2
    dwell_snapshots_full: int = 4

    # Outcomes
    hires_min: int = 1
    hires_full: int = 5
    hires_coverage_min: float = 0.1
    offers_min: int = 1
    offers_full: int = 5
    sufficient_hires_min: int = 5
    sufficient_hires_full: int = 10
    sufficient_offers_min: int = 5
    sufficient_offers_full: int = 10

    # Requisition open dates
    opened_coverage_min: float = 0.1
    opened_coverage_full: float = 0.5
    opened_confidence_n: int = 5

    # Capacity history
    capacity_reqs_min: int = 10
    capacity_reqs_full: int = 20
    capacity_recruiter_coverage: float = 0.5

    # Funnel stages
    funnel_coverage_min: float = 0.3
    funnel_coverage_full: float = 0.8
    funnel_candidates_min: int = 5
    funnel_candidates_full: int = 10

    # Stage velocity
    velocity_events_min: int = 50
    velocity_from_coverage: float = 0.5
    velocity_snapshots_min: int = 4
    velocity_snapshot_weight: int = 10
