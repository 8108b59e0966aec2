"""Capability engine dataclasses and Pydantic models.

Registry definitions are frozen dataclasses (they carry a predicate
callable); everything the engine emits is a Pydantic model so results
serialize with ``model_dump(mode="json")``.

Deterministic -- no I/O.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from pydantic import Field

from src.models.common import (
    CapabilityStatus,
    ConfidenceLevel,
    FeatureArea,
    GateBase,
    OverallStatus,
    RepairAction,
)
from src.models.coverage import CoverageMetrics


# ---------------------------------------------------------------------------
# Evaluation output
# ---------------------------------------------------------------------------


class ThresholdCheck(GateBase, frozen=True):
    """One threshold compared against the observed value."""

    field: str
    required: float
    actual: float
    met: bool


class CapabilityEvidence(GateBase):
    """Signals a predicate looked at while deciding a status."""

    field_coverages: dict[str, float] = Field(default_factory=dict)
    sample_sizes: dict[str, int] = Field(default_factory=dict)
    flags_met: list[str] = Field(default_factory=list)
    flags_missing: list[str] = Field(default_factory=list)
    thresholds: list[ThresholdCheck] = Field(default_factory=list)


class CapabilityEvalResult(GateBase, frozen=True):
    """Predicate output: status and confidence are independent axes."""

    status: CapabilityStatus
    confidence: ConfidenceLevel
    reasons: list[str] = Field(default_factory=list)
    evidence: CapabilityEvidence = Field(default_factory=CapabilityEvidence)


# ---------------------------------------------------------------------------
# Registry definitions (frozen dataclasses)
# ---------------------------------------------------------------------------


CapabilityPredicate = Callable[[CoverageMetrics], CapabilityEvalResult]


@dataclass(frozen=True)
class CapabilityDefinition:
    """A named, independently evaluable precondition.

    ``evaluate`` receives only the coverage snapshot, so no predicate can
    observe another capability's verdict.
    """

    key: str
    display_name: str
    description: str
    evaluate: CapabilityPredicate


@dataclass(frozen=True)
class FeatureDefinition:
    """A product feature and the capabilities it cannot work without."""

    key: str
    display_name: str
    description: str
    area: FeatureArea
    required_capabilities: tuple[str, ...]


# ---------------------------------------------------------------------------
# Repair suggestions
# ---------------------------------------------------------------------------


class RepairUICopy(GateBase, frozen=True):
    """Display strings for a repair suggestion."""

    short_title: str = Field(min_length=1)
    banner_message: str = ""
    blocked_message: str = ""
    cta_label: str = Field(min_length=1)
    cta_action: RepairAction = RepairAction.IMPORT_DATA


class RepairSuggestion(GateBase, frozen=True):
    """Actionable remediation for one capability."""

    capability_key: str
    what_to_upload: str = ""
    required_columns: list[str] = Field(default_factory=list)
    column_aliases: list[str] = Field(default_factory=list)
    why_it_matters: str = ""
    what_it_unlocks: list[str] = Field(default_factory=list)
    ui_copy: RepairUICopy


# ---------------------------------------------------------------------------
# Reports
# ---------------------------------------------------------------------------


class CapabilityReportEntry(GateBase, frozen=True):
    """Evaluation of one registry capability."""

    capability_key: str
    display_name: str
    description: str = ""
    status: CapabilityStatus
    confidence: ConfidenceLevel
    reasons: list[str] = Field(default_factory=list)
    evidence: CapabilityEvidence = Field(default_factory=CapabilityEvidence)


class FeatureCoverageEntry(GateBase, frozen=True):
    """Aggregated verdict for one feature."""

    feature_key: str
    display_name: str
    description: str = ""
    area: FeatureArea
    status: CapabilityStatus
    required_capabilities: list[str] = Field(default_factory=list)
    blocked_by: list[str] = Field(default_factory=list)
    limited_by: list[str] = Field(default_factory=list)
    reasons: list[str] = Field(default_factory=list)
    repair_suggestions: list[RepairSuggestion] = Field(default_factory=list)


class CapabilitySummary(GateBase, frozen=True):
    """Engine-wide counts and overall verdict."""

    total_capabilities: int = 0
    enabled: int = 0
    limited: int = 0
    blocked: int = 0
    total_features: int = 0
    features_enabled: int = 0
    features_limited: int = 0
    features_blocked: int = 0
    overall_status: OverallStatus
    confidence_floor: ConfidenceLevel


class AggregationResult(GateBase, frozen=True):
    """Output of the feature aggregator."""

    summary: CapabilitySummary
    feature_coverage: list[FeatureCoverageEntry] = Field(default_factory=list)
    repair_suggestions: list[RepairSuggestion] = Field(default_factory=list)


class CapabilityEngineResult(GateBase, frozen=True):
    """Top-level engine output.

    ``capability_report`` and ``feature_coverage`` are lists in registry
    declaration order; use :meth:`capability` / :meth:`feature` for keyed
    lookup.
    """

    summary: CapabilitySummary
    capability_report: list[CapabilityReportEntry] = Field(default_factory=list)
    feature_coverage: list[FeatureCoverageEntry] = Field(default_factory=list)
    repair_suggestions: list[RepairSuggestion] = Field(default_factory=list)

    def capability(self, key: str) -> CapabilityReportEntry | None:
        for entry in self.capability_report:
            if entry.capability_key == key:
                return entry
        return None

    def feature(self, key: str) -> FeatureCoverageEntry | None:
        for entry in self.feature_coverage:
            if entry.feature_key == key:
                return entry
        return None

    @property
    def capability_keys(self) -> list[str]:
        return [entry.capability_key for entry in self.capability_report]

    @property
    def feature_keys(self) -> list[str]:
        return [entry.feature_key for entry in self.feature_coverage]
