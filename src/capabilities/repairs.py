"""Repair catalog and repair-suggestion synthesis.

The catalog holds the static copy for each capability (what to upload,
which columns, UI strings). ``what_it_unlocks`` is never stored: it is
derived from whichever consumer asks -- the feature registry for the
engine view, a single intent for the answerability view.
"""

from __future__ import annotations

from src.capabilities.features import features_requiring
from src.capabilities.models import (
    CapabilityDefinition,
    FeatureDefinition,
    RepairSuggestion,
    RepairUICopy,
)
from src.models.common import RepairAction


def _entry(
    key: str,
    *,
    upload: str,
    columns: list[str],
    aliases: list[str],
    why: str,
    title: str,
    banner: str,
    blocked: str,
    cta: str,
    action: RepairAction = RepairAction.IMPORT_DATA,
) -> RepairSuggestion:
    return RepairSuggestion(
        capability_key=key,
        what_to_upload=upload,
        required_columns=columns,
        column_aliases=aliases,
        why_it_matters=why,
        ui_copy=RepairUICopy(
            short_title=title,
            banner_message=banner,
            blocked_message=blocked,
            cta_label=cta,
            cta_action=action,
        ),
    )


_SAME_COLUMNS = ["(same columns as previous import)"]

REPAIR_CATALOG: dict[str, RepairSuggestion] = {
    s.capability_key: s
    for s in (
        _entry(
            "cap_requisitions",
            upload="Requisition export from your ATS (iCIMS, Greenhouse, Lever, etc.)",
            columns=["Requisition ID", "Title", "Status"],
            aliases=["Req ID", "Job ID", "Position ID", "Posting ID"],
            why="Requisitions are the foundation: every feature needs to know what roles exist",
            title="Import Requisitions",
            banner="Import requisition data to unlock dashboard features",
            blocked="This feature requires requisition data. Import a requisition export to get started.",
            cta="Import Requisitions",
        ),
        _entry(
            "cap_candidates",
            upload="Candidate/Submittal export with application details",
            columns=["Candidate ID", "Requisition ID", "Current Stage"],
            aliases=["Applicant ID", "Person ID", "Submission ID", "Application ID"],
            why="Candidates flowing through your pipeline are how we measure recruiting performance",
            title="Import Candidates",
            banner="Import candidate data to see pipeline and quality metrics",
            blocked="This feature requires candidate data. Import a submittal or candidate export.",
            cta="Import Candidates",
        ),
        _entry(
            "cap_stage_events",
            upload="Workflow/Activity history export with stage transitions",
            columns=["Candidate ID", "From Stage", "To Stage", "Event Date"],
            aliases=["Previous Status", "New Status", "Activity Date",
                     "Workflow Step From", "Workflow Step To"],
            why="Stage transitions reveal bottlenecks, HM delays, and process health",
            title="Import Activity History",
            banner="Import workflow activity to unlock bottleneck and HM analysis",
            blocked="This feature requires stage transition events. Import an activity or workflow history export.",
            cta="Import Activity Data",
        ),
        _entry(
            "cap_timestamps",
            upload="Candidate export with Applied Date column",
            columns=["Applied Date"],
            aliases=["Submission Date", "Date Applied", "Application Date", "Date Submitted"],
            why="Application dates are needed to calculate time-based metrics like TTF and velocity",
            title="Add Applied Dates",
            banner="Include Applied Date in your export to unlock time-based metrics",
            blocked="This feature requires application timestamps. Re-export with the Applied Date column.",
            cta="Re-Import with Dates",
        ),
        _entry(
            "cap_terminal_timestamps",
            upload="Candidate export with Hire Date and/or Rejection Date",
            columns=["Hire/Rehire Date"],
            aliases=["Date Hired", "Start Date", "Rejection Date", "Date Rejected", "Withdrawn Date"],
            why="Terminal dates give accurate TTF and distinguish true hires from assumptions",
            title="Add Hire/Reject Dates",
            banner="Include hire/rejection dates for accurate time-to-fill metrics",
            blocked="This feature requires hire or rejection dates. Re-export with terminal timestamp columns.",
            cta="Re-Import with Dates",
        ),
        _entry(
            "cap_recruiter_assignment",
            upload="Requisition export with Recruiter/Owner column",
            columns=["Recruiter", "Requisition ID"],
            aliases=["Assigned Recruiter", "Primary Recruiter", "Req Owner", "Sourcer", "Coordinator"],
            why="Recruiter assignments enable individual performance tracking and capacity planning",
            title="Add Recruiter Data",
            banner="Include recruiter assignments to unlock performance and capacity features",
            blocked="This feature requires recruiter assignments. Re-export with the Recruiter column.",
            cta="Re-Import with Recruiter",
        ),
        _entry(
            "cap_hm_assignment",
            upload="Requisition export with Hiring Manager column",
            columns=["Hiring Manager", "Requisition ID"],
            aliases=["HM", "Manager", "Hiring Mgr", "Approver", "Department Head"],
            why="HM assignments reveal friction, latency, and accountability gaps",
            title="Add HM Data",
            banner="Include hiring manager assignments to unlock HM analysis",
            blocked="This feature requires hiring manager assignments. Re-export with the Hiring Manager column.",
            cta="Re-Import with HM",
        ),
        _entry(
            "cap_source_data",
            upload="Candidate export with Source/Channel column",
            columns=["Source"],
            aliases=["Referral Source", "Channel", "Origin", "Candidate Source", "Source Category"],
            why="Source data shows which channels deliver quality candidates efficiently",
            title="Add Source Data",
            banner="Include source/channel data to unlock source effectiveness analysis",
            blocked="This feature requires candidate source data. Re-export with the Source column.",
            cta="Re-Import with Source",
        ),
        _entry(
            "cap_snapshots",
            upload="Import the same export again next week for trend comparison",
            columns=_SAME_COLUMNS,
            aliases=[],
            why="Multiple snapshots enable week-over-week trend analysis",
            title="Import Another Snapshot",
            banner="Import another week's data to unlock trend analysis",
            blocked="This feature requires multiple data snapshots over time. Import another week's export.",
            cta="Import New Snapshot",
        ),
        _entry(
            "cap_snapshot_dwell",
            upload="Import 4+ weekly snapshots spanning at least 21 days",
            columns=_SAME_COLUMNS,
            aliases=[],
            why="Dwell time analysis shows how long candidates sit in each stage",
            title="More Snapshots Needed",
            banner="Import 4+ weekly snapshots to unlock SLA and dwell time analysis",
            blocked="This feature requires 4+ snapshots spanning 21+ days. Continue importing weekly.",
            cta="Import Snapshot",
        ),
        _entry(
            "cap_hires",
            upload="Candidate export including hired candidates (status: Hired)",
            columns=["Candidate Status", "Hire/Rehire Date"],
            aliases=["Disposition", "Final Status", "Outcome", "Start Date"],
            why="Hire outcomes are essential for TTF, forecast accuracy, and conversion metrics",
            title="Include Hires",
            banner="Include hired candidates to unlock TTF and forecasting",
            blocked="This feature requires hire outcome data. Ensure your export includes hired candidates.",
            cta="Re-Import with Hires",
        ),
        _entry(
            "cap_offers",
            upload="Candidate export with offer stage candidates",
            columns=["Candidate Stage (includes Offer)"],
            aliases=["Offer Date", "Offer Extended", "Date Offered"],
            why="Offer data reveals accept rates and where candidates fall out late in the process",
            title="Include Offers",
            banner="Include offer-stage candidates to unlock accept rate analysis",
            blocked="This feature requires offer data. Ensure your export includes candidates in Offer stage.",
            cta="Re-Import with Offers",
        ),
        _entry(
            "cap_sufficient_hires",
            upload="Broader candidate export with 10+ hires",
            columns=["Candidate Status (Hired)", "Hire/Rehire Date"],
            aliases=[],
            why="10+ hires enables statistical comparisons between fast and slow hires",
            title="More Hires Needed",
            banner="Need 10+ hires for statistical analysis. Expand your date range.",
            blocked="This feature requires 10+ hires. Try expanding your export date range.",
            cta="Expand Date Range",
        ),
        _entry(
            "cap_sufficient_offers",
            upload="Broader candidate export with 10+ offers",
            columns=["Candidate Stage (includes Offer)"],
            aliases=[],
            why="10+ offers enables reliable decay curve and conversion analysis",
            title="More Offers Needed",
            banner="Need 10+ offers for decay analysis. Expand your date range.",
            blocked="This feature requires 10+ offers. Try expanding your export date range.",
            cta="Expand Date Range",
        ),
        _entry(
            "cap_opened_dates",
            upload="Requisition export with Date Opened column",
            columns=["Date Opened"],
            aliases=["Open Date", "Created Date", "Posting Date", "Req Open Date"],
            why="Req open dates enable weekly trends and req aging analysis",
            title="Add Open Dates",
            banner="Include Date Opened in your requisition export for trend analysis",
            blocked="This feature requires requisition open dates. Re-export with the Date Opened column.",
            cta="Re-Import with Dates",
        ),
        _entry(
            "cap_capacity_history",
            upload="Requisition export with recruiter assignments spanning 8+ weeks",
            columns=["Recruiter", "Requisition ID", "Date Opened"],
            aliases=[],
            why="Historical workload data enables capacity planning and scenario modeling",
            title="More History Needed",
            banner="Need 8+ weeks of recruiter workload history for capacity features",
            blocked="This feature requires extended history. Export a broader date range with recruiter assignments.",
            cta="Expand Date Range",
        ),
        _entry(
            "cap_funnel_stages",
            upload="Candidate export with Current Stage column",
            columns=["Current Stage", "Candidate Status"],
            aliases=["Workflow Step", "Pipeline Stage", "Submission Status", "Candidate Step"],
            why="Stage data builds the recruiting funnel and shows where candidates drop off",
            title="Add Stage Data",
            banner="Include candidate stage data for funnel and pipeline analysis",
            blocked="This feature requires candidate stage information. Re-export with the Current Stage column.",
            cta="Re-Import with Stages",
        ),
        _entry(
            "cap_stage_velocity",
            upload="Activity history with stage transitions OR 4+ weekly snapshots",
            columns=["From Stage", "To Stage", "Event Date"],
            aliases=["Previous Status", "New Status", "Activity Date"],
            why="Stage velocity reveals which steps take too long and where to optimize",
            title="Add Stage Timing",
            banner="Import activity history or more snapshots to unlock velocity analysis",
            blocked="This feature requires stage timing data (activity history or 4+ snapshots).",
            cta="Import Activity Data",
        ),
    )
}


def build_repair_suggestion(capability_key: str, unlocks: list[str]) -> RepairSuggestion:
    """Catalog entry for ``capability_key`` with ``what_it_unlocks`` filled in.

    Keys missing from the catalog get generic copy so callers never fail.
    """
    template = REPAIR_CATALOG.get(capability_key)
    if template is None:
        template = RepairSuggestion(
            capability_key=capability_key,
            what_to_upload="An export containing the data this capability needs",
            why_it_matters=f"{capability_key} is required by the features listed",
            ui_copy=RepairUICopy(
                short_title=f"Add data for {capability_key}",
                cta_label="Import Data",
            ),
        )
    return template.model_copy(update={"what_it_unlocks": list(unlocks)}, deep=True)


def synthesize_repair_suggestions(
    failing_capabilities: list[str],
    features: tuple[FeatureDefinition, ...],
    capabilities: tuple[CapabilityDefinition, ...],
) -> list[RepairSuggestion]:
    """One suggestion per failing capability that gates at least one feature.

    Sorted by number of unlocked features, descending; ties keep the
    capability registry order (unknown keys sort last).
    """
    registry_index = {c.key: i for i, c in enumerate(capabilities)}
    suggestions: list[tuple[int, int, RepairSuggestion]] = []
    seen: set[str] = set()

    for key in failing_capabilities:
        if key in seen:
            continue
        seen.add(key)
        unlocks = features_requiring(key, features)
        if not unlocks:
            continue
        order = registry_index.get(key, len(registry_index))
        suggestions.append((-len(unlocks), order, build_repair_suggestion(key, unlocks)))

    suggestions.sort(key=lambda item: (item[0], item[1]))
    return [s for _, _, s in suggestions]
