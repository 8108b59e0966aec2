"""Feature registry -- product features and the capabilities they require.

Declaration order is display order: UI surfaces group by ``area`` but
keep the order of this table inside each group.
"""

from __future__ import annotations

from src.capabilities.models import FeatureDefinition
from src.models.common import FeatureArea


def _feature(
    key: str,
    name: str,
    description: str,
    area: FeatureArea,
    *required: str,
) -> FeatureDefinition:
    return FeatureDefinition(
        key=key,
        display_name=name,
        description=description,
        area=area,
        required_capabilities=tuple(required),
    )


A = FeatureArea

FEATURE_REGISTRY: tuple[FeatureDefinition, ...] = (
    # Control Tower
    _feature("ct_health_kpis", "Health KPIs", "TTF, Offers, Accept Rate, Stalled, HM Latency",
             A.CONTROL_TOWER, "cap_requisitions", "cap_candidates"),
    _feature("ct_risks", "Risk Detection", "Top 10 at-risk requisitions",
             A.CONTROL_TOWER, "cap_requisitions", "cap_candidates", "cap_stage_events"),
    _feature("ct_actions", "Action Queue", "Unified action items",
             A.CONTROL_TOWER, "cap_requisitions", "cap_recruiter_assignment"),
    _feature("ct_forecast", "Pipeline Forecast", "Expected hires and gap",
             A.CONTROL_TOWER, "cap_requisitions", "cap_candidates", "cap_hires"),
    _feature("ct_median_ttf", "Median TTF KPI", "Median time to fill",
             A.CONTROL_TOWER, "cap_timestamps", "cap_hires"),
    _feature("ct_accept_rate", "Accept Rate KPI", "Offer acceptance rate",
             A.CONTROL_TOWER, "cap_offers"),
    # Overview
    _feature("ov_kpi_cards", "Overview KPI Cards", "High-level metric cards",
             A.OVERVIEW, "cap_requisitions", "cap_candidates"),
    _feature("ov_weekly_trends", "Weekly Trends", "Time-series charts",
             A.OVERVIEW, "cap_timestamps", "cap_opened_dates"),
    _feature("ov_funnel_chart", "Pipeline Funnel", "Stage conversion funnel",
             A.OVERVIEW, "cap_funnel_stages"),
    _feature("ov_recruiter_table", "Recruiter Leaderboard", "Per-recruiter summary",
             A.OVERVIEW, "cap_recruiter_assignment"),
    # HM Friction
    _feature("hm_kpi_tiles", "HM Latency Tiles", "HM response time KPIs",
             A.HM_FRICTION, "cap_hm_assignment", "cap_stage_events"),
    _feature("hm_latency_heatmap", "Latency Heatmap", "HM latency by stage",
             A.HM_FRICTION, "cap_hm_assignment", "cap_stage_velocity"),
    _feature("hm_decay_curve", "HM Decay Curve", "Offer decay by HM delay",
             A.HM_FRICTION, "cap_hm_assignment", "cap_offers"),
    # Hiring managers
    _feature("hm_scorecard", "HM Scorecard", "Per-HM performance",
             A.HIRING_MANAGERS, "cap_hm_assignment", "cap_opened_dates"),
    _feature("hm_hiring_cycle", "HM Hiring Cycle", "Time per HM stage",
             A.HIRING_MANAGERS, "cap_hm_assignment", "cap_stage_events"),
    # Quality
    _feature("q_late_stage_fallout", "Late-Stage Fallout", "Drop-offs after interview",
             A.QUALITY, "cap_candidates", "cap_funnel_stages"),
    _feature("q_funnel_pass_through", "Pass-Through Rates", "Stage-by-stage conversion",
             A.QUALITY, "cap_funnel_stages", "cap_source_data"),
    _feature("q_acceptance_by_recruiter", "Accept by Recruiter", "Offer accept rate per recruiter",
             A.QUALITY, "cap_offers", "cap_recruiter_assignment"),
    # Sources
    _feature("src_volume_chart", "Source Volume", "Candidates by source",
             A.SOURCES, "cap_source_data"),
    _feature("src_hire_rate", "Source Hire Rate", "Conversion by source",
             A.SOURCES, "cap_source_data", "cap_hires"),
    _feature("src_mirage_detection", "Source Mirage", "High-volume low-conversion sources",
             A.SOURCES, "cap_source_data", "cap_funnel_stages"),
    # Velocity
    _feature("vi_decay_candidate", "Candidate Decay", "Offer probability over time",
             A.VELOCITY, "cap_timestamps", "cap_sufficient_offers"),
    _feature("vi_fast_vs_slow", "Fast vs Slow Cohorts", "Speed impact on quality",
             A.VELOCITY, "cap_timestamps", "cap_sufficient_hires"),
    _feature("vi_decay_req", "Req Decay", "Req fill probability over time",
             A.VELOCITY, "cap_opened_dates", "cap_hires"),
    _feature("vi_pipeline_health", "Pipeline Health", "Active pipeline adequacy",
             A.VELOCITY, "cap_funnel_stages"),
    # Forecasting
    _feature("fc_oracle", "Oracle Forecast", "Fill-date predictions",
             A.FORECASTING, "cap_sufficient_hires", "cap_stage_velocity"),
    _feature("fc_role_health", "Role Health", "Per-role pipeline status",
             A.FORECASTING, "cap_requisitions", "cap_candidates", "cap_stage_events"),
    _feature("fc_pre_mortem", "Pre-Mortem", "Risk prediction for open reqs",
             A.FORECASTING, "cap_stage_events", "cap_requisitions"),
    _feature("fc_new_role_planner", "New Role Planner", "Timeline estimates for new reqs",
             A.FORECASTING, "cap_funnel_stages", "cap_sufficient_hires"),
    # Data health
    _feature("dh_hygiene_score", "Hygiene Score", "Overall data quality rating",
             A.DATA_HEALTH, "cap_requisitions"),
    _feature("dh_zombie_reqs", "Zombie Reqs", "30+ day inactive reqs",
             A.DATA_HEALTH, "cap_requisitions", "cap_stage_events"),
    _feature("dh_ghost_candidates", "Ghost Candidates", "Stuck/abandoned candidates",
             A.DATA_HEALTH, "cap_candidates", "cap_timestamps"),
    _feature("dh_ttf_comparison", "TTF Comparison", "True vs Raw TTF",
             A.DATA_HEALTH, "cap_timestamps", "cap_terminal_timestamps"),
    # Capacity
    _feature("cap_load_table", "Load Table", "Recruiter workload distribution",
             A.CAPACITY, "cap_recruiter_assignment"),
    _feature("cap_fit_matrix", "Fit Matrix", "Skill-to-capacity matching",
             A.CAPACITY, "cap_capacity_history"),
    _feature("cap_rebalance", "Rebalance Suggestions", "Workload redistribution",
             A.CAPACITY, "cap_capacity_history"),
    # Bottlenecks / SLA
    _feature("sla_dwell_times", "Stage Dwell Times", "Time in each stage",
             A.BOTTLENECKS, "cap_snapshot_dwell"),
    _feature("sla_breach_detection", "SLA Breaches", "Policy violations",
             A.BOTTLENECKS, "cap_snapshot_dwell", "cap_stage_velocity"),
    _feature("sla_owner_attribution", "Owner Attribution", "Who owns the delay",
             A.BOTTLENECKS, "cap_snapshot_dwell", "cap_recruiter_assignment", "cap_hm_assignment"),
    # Ask
    _feature("ask_deterministic", "Ask (Deterministic)", "AI-off intent answers",
             A.ASK, "cap_requisitions", "cap_candidates"),
    # Scenarios
    _feature("sc_recruiter_leaves", "Recruiter Leaves", "Impact if recruiter leaves",
             A.SCENARIOS, "cap_recruiter_assignment", "cap_capacity_history"),
    _feature("sc_spin_up_team", "Spin-Up Team", "New team staffing plan",
             A.SCENARIOS, "cap_capacity_history"),
    # Exports
    _feature("export_exec_brief", "Exec Brief Export", "PDF/email executive summary",
             A.EXPORTS, "cap_requisitions", "cap_recruiter_assignment"),
    # Explain engines
    _feature("explain_ttf", "Explain: TTF", "Time to fill breakdown",
             A.ENGINE, "cap_timestamps", "cap_hires"),
    _feature("explain_tto", "Explain: Time to Offer", "Time to offer breakdown",
             A.ENGINE, "cap_timestamps"),
    _feature("explain_hm_latency", "Explain: HM Latency", "HM response breakdown",
             A.ENGINE, "cap_hm_assignment", "cap_stage_events"),
    _feature("explain_accept_rate", "Explain: Accept Rate", "Acceptance rate drivers",
             A.ENGINE, "cap_offers"),
    _feature("explain_stalled", "Explain: Stalled", "Why reqs stall",
             A.ENGINE, "cap_stage_events", "cap_requisitions"),
)


def features_requiring(
    capability_key: str,
    registry: tuple[FeatureDefinition, ...] = FEATURE_REGISTRY,
) -> list[str]:
    """Feature keys gated on ``capability_key``, in registry order."""
    return [f.key for f in registry if capability_key in f.required_capabilities]
