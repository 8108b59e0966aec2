"""Capability registry -- 18 data capabilities.

Each capability is a ``{key, predicate}`` pair. Predicates are plain
functions of ``(coverage, thresholds)`` bound to a thresholds instance
with ``functools.partial`` when the registry is built, so the registry
entry itself only ever sees the coverage snapshot.

Deterministic -- no I/O.
"""

from __future__ import annotations

from functools import partial

from src.capabilities.config import CapabilityThresholds
from src.capabilities.confidence import determine_confidence, pct, threshold_check
from src.capabilities.models import (
    CapabilityDefinition,
    CapabilityEvalResult,
    CapabilityEvidence,
)
from src.models.common import CapabilityStatus, ConfidenceLevel
from src.models.coverage import CoverageMetrics

# Flag names reported by the coverage producer.
FLAG_STAGE_EVENTS = "has_stage_events"
FLAG_TIMESTAMPS = "has_timestamps"
FLAG_TERMINAL_TIMESTAMPS = "has_terminal_timestamps"
FLAG_RECRUITER_ASSIGNMENT = "has_recruiter_assignment"
FLAG_HM_ASSIGNMENT = "has_hm_assignment"
FLAG_SOURCE_DATA = "has_source_data"
FLAG_MULTIPLE_SNAPSHOTS = "has_multiple_snapshots"
FLAG_CAPACITY_HISTORY = "has_capacity_history"


# ---------------------------------------------------------------------------
# Result helpers
# ---------------------------------------------------------------------------


def _flags(*pairs: tuple[str, bool]) -> dict[str, list[str]]:
    return {
        "flags_met": [name for name, present in pairs if present],
        "flags_missing": [name for name, present in pairs if not present],
    }


def _blocked(reason: str, evidence: CapabilityEvidence) -> CapabilityEvalResult:
    return CapabilityEvalResult(
        status=CapabilityStatus.BLOCKED,
        confidence=ConfidenceLevel.LOW,
        reasons=[reason],
        evidence=evidence,
    )


def _limited(reasons: list[str], evidence: CapabilityEvidence) -> CapabilityEvalResult:
    return CapabilityEvalResult(
        status=CapabilityStatus.LIMITED,
        confidence=ConfidenceLevel.LOW,
        reasons=reasons,
        evidence=evidence,
    )


def _enabled(
    t: CapabilityThresholds,
    evidence: CapabilityEvidence,
    sample_size: int,
    threshold: int,
    coverage: float,
    coverage_min: float,
) -> CapabilityEvalResult:
    level, reasons = determine_confidence(sample_size, threshold, coverage, coverage_min, t)
    return CapabilityEvalResult(
        status=CapabilityStatus.ENABLED,
        confidence=level,
        reasons=reasons,
        evidence=evidence,
    )


def _enabled_fallback(reason: str, evidence: CapabilityEvidence) -> CapabilityEvalResult:
    """ENABLED through an approximate signal: always LOW confidence."""
    return CapabilityEvalResult(
        status=CapabilityStatus.ENABLED,
        confidence=ConfidenceLevel.LOW,
        reasons=[reason],
        evidence=evidence,
    )


# ---------------------------------------------------------------------------
# Predicates
# ---------------------------------------------------------------------------


def eval_requisitions(c: CoverageMetrics, t: CapabilityThresholds) -> CapabilityEvalResult:
    count = c.counts.requisitions
    status_cov = c.coverage("req.status")
    evidence = CapabilityEvidence(
        field_coverages={"req.status": status_cov},
        sample_sizes={"requisitions": count},
        thresholds=[threshold_check("requisitions", t.requisitions_min, count)],
    )
    if count < t.requisitions_min:
        return _blocked("No requisitions found", evidence)
    return _enabled(
        t, evidence, count, t.requisitions_confidence_n, status_cov, t.requisitions_status_coverage
    )


def eval_candidates(c: CoverageMetrics, t: CapabilityThresholds) -> CapabilityEvalResult:
    count = c.counts.candidates
    stage_cov = c.coverage("cand.current_stage")
    evidence = CapabilityEvidence(
        field_coverages={"cand.current_stage": stage_cov},
        sample_sizes={"candidates": count},
        thresholds=[threshold_check("candidates", t.candidates_min, count)],
    )
    if count < t.candidates_min:
        return _blocked("No candidates found", evidence)
    return _enabled(
        t, evidence, count, t.candidates_confidence_n, stage_cov, t.candidates_stage_coverage
    )


def eval_stage_events(c: CoverageMetrics, t: CapabilityThresholds) -> CapabilityEvalResult:
    count = c.counts.events
    from_cov = c.coverage("event.from_stage")
    to_cov = c.coverage("event.to_stage")
    has_flag = c.flag(FLAG_STAGE_EVENTS)
    evidence = CapabilityEvidence(
        field_coverages={"event.from_stage": from_cov, "event.to_stage": to_cov},
        sample_sizes={"events": count},
        thresholds=[
            threshold_check("events", t.stage_events_full, count),
            threshold_check("event.from_stage", t.stage_events_from_coverage, from_cov),
        ],
        **_flags((FLAG_STAGE_EVENTS, has_flag)),
    )
    if not has_flag or count < t.stage_events_min:
        return _blocked("No stage events or too few", evidence)
    if count < t.stage_events_full or from_cov < t.stage_events_from_coverage:
        reasons: list[str] = []
        if count < t.stage_events_full:
            reasons.append(f"Only {count} events (need {t.stage_events_full}+)")
        if from_cov < t.stage_events_from_coverage:
            reasons.append(
                f"from_stage coverage {pct(from_cov)} < {pct(t.stage_events_from_coverage)}"
            )
        return _limited(reasons, evidence)
    return _enabled(
        t, evidence, count, t.stage_events_full, from_cov, t.stage_events_from_coverage
    )


def eval_timestamps(c: CoverageMetrics, t: CapabilityThresholds) -> CapabilityEvalResult:
    cov = c.coverage("cand.applied_at")
    count = c.counts.candidates
    has_flag = c.flag(FLAG_TIMESTAMPS)
    evidence = CapabilityEvidence(
        field_coverages={"cand.applied_at": cov},
        sample_sizes={"candidates": count},
        thresholds=[threshold_check("cand.applied_at", t.applied_coverage_full, cov)],
        **_flags((FLAG_TIMESTAMPS, has_flag)),
    )
    if not has_flag or cov < t.applied_coverage_min:
        return _blocked("No application timestamps", evidence)
    if cov < t.applied_coverage_full:
        return _limited(
            [f"Only {pct(cov)} coverage (need {pct(t.applied_coverage_full)}+)"], evidence
        )
    return _enabled(t, evidence, count, t.applied_confidence_n, cov, t.applied_coverage_full)


def eval_terminal_timestamps(
    c: CoverageMetrics, t: CapabilityThresholds
) -> CapabilityEvalResult:
    hire_cov = c.coverage("cand.hired_at")
    reject_cov = c.coverage("cand.rejected_at")
    terminal_cov = max(hire_cov, reject_cov)
    has_flag = c.flag(FLAG_TERMINAL_TIMESTAMPS)
    evidence = CapabilityEvidence(
        field_coverages={"cand.hired_at": hire_cov, "cand.rejected_at": reject_cov},
        sample_sizes={
            "hires": c.sample_sizes.hires,
            "rejections": c.sample_sizes.rejections,
        },
        thresholds=[
            threshold_check("terminal_coverage", t.terminal_coverage_full, terminal_cov)
        ],
        **_flags((FLAG_TERMINAL_TIMESTAMPS, has_flag)),
    )
    if not has_flag or terminal_cov < t.terminal_coverage_min:
        return _blocked("No terminal timestamps found", evidence)
    if terminal_cov < t.terminal_coverage_full:
        return _limited(
            [f"Terminal timestamp coverage below {pct(t.terminal_coverage_full)}"], evidence
        )
    return _enabled(
        t,
        evidence,
        c.sample_sizes.hires + c.sample_sizes.rejections,
        t.terminal_confidence_n,
        terminal_cov,
        t.terminal_coverage_full,
    )


def _eval_assignment(
    c: CoverageMetrics,
    t: CapabilityThresholds,
    *,
    field: str,
    flag: str,
    label: str,
) -> CapabilityEvalResult:
    cov = c.coverage(field)
    has_flag = c.flag(flag)
    evidence = CapabilityEvidence(
        field_coverages={field: cov},
        sample_sizes={"requisitions": c.counts.requisitions},
        thresholds=[threshold_check(field, t.assignment_coverage_full, cov)],
        **_flags((flag, has_flag)),
    )
    if not has_flag or cov < t.assignment_coverage_min:
        return _blocked(f"No {label} assignments", evidence)
    if cov < t.assignment_coverage_full:
        return _limited(
            [f"{label} assignment coverage {pct(cov)} < {pct(t.assignment_coverage_full)}"],
            evidence,
        )
    return _enabled(
        t,
        evidence,
        c.counts.requisitions,
        t.assignment_confidence_n,
        cov,
        t.assignment_coverage_full,
    )


def eval_recruiter_assignment(
    c: CoverageMetrics, t: CapabilityThresholds
) -> CapabilityEvalResult:
    return _eval_assignment(
        c, t, field="req.recruiter_id", flag=FLAG_RECRUITER_ASSIGNMENT, label="Recruiter"
    )


def eval_hm_assignment(c: CoverageMetrics, t: CapabilityThresholds) -> CapabilityEvalResult:
    return _eval_assignment(
        c, t, field="req.hiring_manager_id", flag=FLAG_HM_ASSIGNMENT, label="HM"
    )


def eval_source_data(c: CoverageMetrics, t: CapabilityThresholds) -> CapabilityEvalResult:
    cov = c.coverage("cand.source")
    has_flag = c.flag(FLAG_SOURCE_DATA)
    evidence = CapabilityEvidence(
        field_coverages={"cand.source": cov},
        sample_sizes={"candidates": c.counts.candidates},
        thresholds=[threshold_check("cand.source", t.source_coverage_full, cov)],
        **_flags((FLAG_SOURCE_DATA, has_flag)),
    )
    if not has_flag or cov < t.source_coverage_min:
        return _blocked("No source data", evidence)
    if cov < t.source_coverage_full:
        return _limited(
            [f"Source coverage {pct(cov)} < {pct(t.source_coverage_full)}"], evidence
        )
    return _enabled(
        t, evidence, c.counts.candidates, t.source_confidence_n, cov, t.source_coverage_full
    )


def eval_snapshots(c: CoverageMetrics, t: CapabilityThresholds) -> CapabilityEvalResult:
    count = c.counts.snapshots
    has_flag = c.flag(FLAG_MULTIPLE_SNAPSHOTS)
    evidence = CapabilityEvidence(
        sample_sizes={"snapshots": count},
        thresholds=[threshold_check("snapshots", t.snapshots_min, count)],
        **_flags((FLAG_MULTIPLE_SNAPSHOTS, has_flag)),
    )
    if not has_flag or count < t.snapshots_min:
        return _blocked(f"Need {t.snapshots_min}+ snapshots for trends", evidence)
    return _enabled(t, evidence, count, t.snapshots_confidence_n, 1.0, 0.5)


def eval_snapshot_dwell(c: CoverageMetrics, t: CapabilityThresholds) -> CapabilityEvalResult:
    count = c.counts.snapshots
    sufficient = count >= t.dwell_snapshots_full
    evidence = CapabilityEvidence(
        sample_sizes={"snapshots": count},
        thresholds=[threshold_check("snapshots", t.dwell_snapshots_full, count)],
        **_flags(("sufficient_snapshots", sufficient)),
    )
    if count < t.dwell_snapshots_min:
        return _blocked(f"Need {t.dwell_snapshots_full}+ snapshots for dwell times", evidence)
    if not sufficient:
        return _limited([f"Only {count} snapshots (need {t.dwell_snapshots_full}+)"], evidence)
    return _enabled(t, evidence, count, t.dwell_snapshots_full, 1.0, 0.5)


def _eval_outcome_count(
    t: CapabilityThresholds,
    *,
    name: str,
    actual: int,
    minimum: int,
    full: int,
    flag_name: str,
    blocked_reason: str,
    field_coverages: dict[str, float] | None = None,
    coverage: float = 1.0,
    coverage_min: float = 0.5,
) -> CapabilityEvalResult:
    evidence = CapabilityEvidence(
        field_coverages=field_coverages or {},
        sample_sizes={name: actual},
        thresholds=[threshold_check(name, full, actual)],
        **_flags((flag_name, actual >= full)),
    )
    if actual < minimum:
        return _blocked(blocked_reason, evidence)
    if actual < full:
        return _limited([f"Only {actual} {name} (need {full}+)"], evidence)
    return _enabled(t, evidence, actual, full, coverage, coverage_min)


def eval_hires(c: CoverageMetrics, t: CapabilityThresholds) -> CapabilityEvalResult:
    hired_cov = c.coverage("cand.hired_at")
    return _eval_outcome_count(
        t,
        name="hires",
        actual=c.sample_sizes.hires,
        minimum=t.hires_min,
        full=t.hires_full,
        flag_name="sufficient_hires",
        blocked_reason="No hires found",
        field_coverages={"cand.hired_at": hired_cov},
        coverage=hired_cov,
        coverage_min=t.hires_coverage_min,
    )


def eval_offers(c: CoverageMetrics, t: CapabilityThresholds) -> CapabilityEvalResult:
    return _eval_outcome_count(
        t,
        name="offers",
        actual=c.sample_sizes.offers,
        minimum=t.offers_min,
        full=t.offers_full,
        flag_name="sufficient_offers",
        blocked_reason="No offers found",
    )


def eval_sufficient_hires(c: CoverageMetrics, t: CapabilityThresholds) -> CapabilityEvalResult:
    return _eval_outcome_count(
        t,
        name="hires",
        actual=c.sample_sizes.hires,
        minimum=t.sufficient_hires_min,
        full=t.sufficient_hires_full,
        flag_name="ten_plus_hires",
        blocked_reason=f"Need {t.sufficient_hires_full}+ hires for cohort comparison",
    )


def eval_sufficient_offers(c: CoverageMetrics, t: CapabilityThresholds) -> CapabilityEvalResult:
    return _eval_outcome_count(
        t,
        name="offers",
        actual=c.sample_sizes.offers,
        minimum=t.sufficient_offers_min,
        full=t.sufficient_offers_full,
        flag_name="ten_plus_offers",
        blocked_reason=f"Need {t.sufficient_offers_full}+ offers for decay analysis",
    )


def eval_opened_dates(c: CoverageMetrics, t: CapabilityThresholds) -> CapabilityEvalResult:
    cov = c.coverage("req.opened_at")
    evidence = CapabilityEvidence(
        field_coverages={"req.opened_at": cov},
        sample_sizes={"requisitions": c.counts.requisitions},
        thresholds=[threshold_check("req.opened_at", t.opened_coverage_full, cov)],
        **_flags(("has_opened_dates", cov >= t.opened_coverage_full)),
    )
    if cov < t.opened_coverage_min:
        return _blocked("No req open dates", evidence)
    if cov < t.opened_coverage_full:
        return _limited(
            [f"Open date coverage {pct(cov)} < {pct(t.opened_coverage_full)}"], evidence
        )
    return _enabled(
        t, evidence, c.counts.requisitions, t.opened_confidence_n, cov, t.opened_coverage_full
    )


def eval_capacity_history(c: CoverageMetrics, t: CapabilityThresholds) -> CapabilityEvalResult:
    rec_cov = c.coverage("req.recruiter_id")
    count = c.counts.requisitions
    has_rec = c.flag(FLAG_RECRUITER_ASSIGNMENT)
    # Producers that do not track capacity history omit the flag entirely.
    reported = FLAG_CAPACITY_HISTORY in c.flags
    has_cap = c.flags.get(FLAG_CAPACITY_HISTORY, True)
    evidence = CapabilityEvidence(
        field_coverages={"req.recruiter_id": rec_cov},
        sample_sizes={"requisitions": count},
        thresholds=[
            threshold_check("req.recruiter_id", t.capacity_recruiter_coverage, rec_cov),
            threshold_check("requisitions", t.capacity_reqs_full, count),
        ],
        **_flags((FLAG_RECRUITER_ASSIGNMENT, has_rec), (FLAG_CAPACITY_HISTORY, has_cap)),
    )
    if not has_cap:
        return _blocked("Capacity history data not available", evidence)
    if not has_rec or count < t.capacity_reqs_min:
        return _blocked(
            f"Need recruiter assignments and {t.capacity_reqs_full}+ reqs for capacity",
            evidence,
        )
    if count < t.capacity_reqs_full or rec_cov < t.capacity_recruiter_coverage:
        return _limited(["Partial capacity data"], evidence)
    if not reported:
        return _enabled_fallback(
            "Capacity history inferred from recruiter assignments (not reported by import)",
            evidence,
        )
    return _enabled(
        t, evidence, count, t.capacity_reqs_full, rec_cov, t.capacity_recruiter_coverage
    )


def eval_funnel_stages(c: CoverageMetrics, t: CapabilityThresholds) -> CapabilityEvalResult:
    cov = c.coverage("cand.current_stage")
    count = c.counts.candidates
    evidence = CapabilityEvidence(
        field_coverages={"cand.current_stage": cov},
        sample_sizes={"candidates": count},
        thresholds=[threshold_check("cand.current_stage", t.funnel_coverage_full, cov)],
        **_flags(("has_stage_data", cov >= t.funnel_coverage_full)),
    )
    if cov < t.funnel_coverage_min or count < t.funnel_candidates_min:
        return _blocked("Insufficient stage data for funnel", evidence)
    if cov < t.funnel_coverage_full or count < t.funnel_candidates_full:
        return _limited(
            [f"Stage coverage {pct(cov)} (need {pct(t.funnel_coverage_full)}+)"], evidence
        )
    return _enabled(
        t, evidence, count, t.funnel_candidates_full, cov, t.funnel_coverage_full
    )


def eval_stage_velocity(c: CoverageMetrics, t: CapabilityThresholds) -> CapabilityEvalResult:
    event_count = c.counts.events
    from_cov = c.coverage("event.from_stage")
    snap_count = c.counts.snapshots
    has_events = event_count >= t.velocity_events_min and from_cov >= t.velocity_from_coverage
    has_snapshots = snap_count >= t.velocity_snapshots_min
    evidence = CapabilityEvidence(
        field_coverages={
            "event.from_stage": from_cov,
            "event.to_stage": c.coverage("event.to_stage"),
        },
        sample_sizes={"events": event_count, "snapshots": snap_count},
        thresholds=[
            threshold_check(
                "events_or_snapshots",
                t.velocity_events_min,
                max(event_count, snap_count * t.velocity_snapshot_weight),
            )
        ],
        **_flags(
            ("stage_events_sufficient", has_events),
            ("snapshots_sufficient", has_snapshots),
        ),
    )
    if not has_events and not has_snapshots:
        return _blocked(
            f"Need stage events or {t.velocity_snapshots_min}+ snapshots for velocity",
            evidence,
        )
    if not has_events:
        return _enabled_fallback(
            "Stage velocity approximated from snapshot dwell times", evidence
        )
    return _enabled(
        t, evidence, event_count, t.velocity_events_min, from_cov, t.velocity_from_coverage
    )


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


def build_capability_registry(
    thresholds: CapabilityThresholds | None = None,
) -> tuple[CapabilityDefinition, ...]:
    """Build the ordered capability table bound to ``thresholds``."""
    t = thresholds or CapabilityThresholds()

    def cap(key: str, name: str, description: str, fn) -> CapabilityDefinition:
        return CapabilityDefinition(
            key=key,
            display_name=name,
            description=description,
            evaluate=partial(fn, t=t),
        )

    return (
        cap("cap_requisitions", "Requisitions",
            "Open/closed requisition records with basic fields", eval_requisitions),
        cap("cap_candidates", "Candidates",
            "Candidate/application records", eval_candidates),
        cap("cap_stage_events", "Stage Events",
            "Workflow stage transition events (from -> to)", eval_stage_events),
        cap("cap_timestamps", "Application Timestamps",
            "Applied dates for candidates", eval_timestamps),
        cap("cap_terminal_timestamps", "Terminal Timestamps",
            "Hire/reject/withdraw dates", eval_terminal_timestamps),
        cap("cap_recruiter_assignment", "Recruiter Assignment",
            "Recruiter ownership on requisitions", eval_recruiter_assignment),
        cap("cap_hm_assignment", "HM Assignment",
            "Hiring manager assignments on requisitions", eval_hm_assignment),
        cap("cap_source_data", "Source Data",
            "Candidate source/channel information", eval_source_data),
        cap("cap_snapshots", "Multiple Snapshots",
            "Two or more data snapshots for trend analysis", eval_snapshots),
        cap("cap_snapshot_dwell", "Snapshot Dwell Times",
            "4+ snapshots spanning 21+ days for SLA analysis", eval_snapshot_dwell),
        cap("cap_hires", "Hire Outcomes",
            "5+ completed hires for outcome analysis", eval_hires),
        cap("cap_offers", "Offer Data",
            "5+ offers for accept rate and decay analysis", eval_offers),
        cap("cap_sufficient_hires", "Sufficient Hires (10+)",
            "10+ hires for statistical comparisons", eval_sufficient_hires),
        cap("cap_sufficient_offers", "Sufficient Offers (10+)",
            "10+ offers for decay curve analysis", eval_sufficient_offers),
        cap("cap_opened_dates", "Req Open Dates",
            "Requisition opened_at timestamps", eval_opened_dates),
        cap("cap_capacity_history", "Capacity History",
            "8+ weeks of recruiter throughput data", eval_capacity_history),
        cap("cap_funnel_stages", "Funnel Stages",
            "Candidate stage data for funnel visualization", eval_funnel_stages),
        cap("cap_stage_velocity", "Stage Velocity",
            "Stage durations derivable from events or snapshots", eval_stage_velocity),
    )


CAPABILITY_REGISTRY: tuple[CapabilityDefinition, ...] = build_capability_registry()


def get_capability_definition(
    key: str,
    registry: tuple[CapabilityDefinition, ...] = CAPABILITY_REGISTRY,
) -> CapabilityDefinition | None:
    for definition in registry:
        if definition.key == key:
            return definition
    return None
