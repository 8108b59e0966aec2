"""Intent requirement tables.

Tuples of ``(key, value)`` pairs in declaration order, exposed through
read-only mappings for lookup.
"""

from __future__ import annotations

from types import MappingProxyType

_INTENT_REQUIREMENTS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("whats_on_fire", ("cap_requisitions", "cap_candidates")),
    ("top_risks", ("cap_requisitions", "cap_candidates", "cap_stage_events")),
    ("top_actions", ("cap_requisitions", "cap_recruiter_assignment")),
    ("why_time_to_offer", ("cap_timestamps", "cap_hires")),
    ("why_hm_latency", ("cap_hm_assignment", "cap_stage_events")),
    ("stalled_reqs", ("cap_requisitions", "cap_stage_events")),
    ("forecast_gap", ("cap_requisitions", "cap_candidates", "cap_hires")),
    ("velocity_summary", ("cap_candidates", "cap_funnel_stages")),
    ("source_mix_summary", ("cap_source_data",)),
    ("capacity_summary", ("cap_recruiter_assignment",)),
    ("most_productive_recruiter", ("cap_recruiter_assignment", "cap_candidates")),
    ("lowest_performing_recruiter", ("cap_recruiter_assignment", "cap_candidates")),
    ("hm_with_most_open_reqs", ("cap_hm_assignment", "cap_requisitions")),
    ("bottleneck_analysis", ("cap_stage_events", "cap_snapshot_dwell")),
)

# Dotted paths a fact pack must carry before an intent can be rendered.
_FACT_PACK_SECTIONS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("whats_on_fire", ("actions.top_p0", "control_tower.kpis")),
    ("top_risks", ("risks.top_risks",)),
    ("top_actions", ("actions.top_p0", "actions.top_p1")),
    ("why_time_to_offer", ("explain.time_to_offer",)),
    ("why_hm_latency", ("explain.hm_latency",)),
    ("stalled_reqs", ("control_tower.kpis.stalled_reqs",)),
    ("forecast_gap", ("forecast",)),
    ("velocity_summary", ("velocity",)),
    ("source_mix_summary", ("sources",)),
    ("capacity_summary", ("capacity",)),
    ("most_productive_recruiter", ("recruiter_performance",)),
    ("lowest_performing_recruiter", ("recruiter_performance",)),
    ("hm_with_most_open_reqs", ("hiring_manager_ownership",)),
    ("bottleneck_analysis", ("bottlenecks",)),
)

INTENT_IDS: tuple[str, ...] = tuple(intent for intent, _ in _INTENT_REQUIREMENTS)

INTENT_CAPABILITY_REQUIREMENTS = MappingProxyType(dict(_INTENT_REQUIREMENTS))
FACT_PACK_REQUIRED_SECTIONS = MappingProxyType(dict(_FACT_PACK_SECTIONS))


def required_capabilities(intent_id: str) -> tuple[str, ...] | None:
    """Capabilities ``intent_id`` needs, or ``None`` for an unknown intent."""
    return INTENT_CAPABILITY_REQUIREMENTS.get(intent_id)
