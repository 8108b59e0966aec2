"""Feature aggregator -- capability report to feature coverage.

Precedence is strict: a feature is BLOCKED if any required capability is
BLOCKED, else LIMITED if any is LIMITED, else ENABLED.

Deterministic -- no I/O.
"""

from __future__ import annotations

from src.capabilities.evaluator import unknown_capability_entry
from src.capabilities.features import FEATURE_REGISTRY
from src.capabilities.models import (
    AggregationResult,
    CapabilityDefinition,
    CapabilityReportEntry,
    CapabilitySummary,
    FeatureCoverageEntry,
    FeatureDefinition,
    RepairSuggestion,
)
from src.capabilities.registry import CAPABILITY_REGISTRY
from src.capabilities.repairs import synthesize_repair_suggestions
from src.models.common import (
    CONFIDENCE_RANK,
    STATUS_SEVERITY,
    CapabilityStatus,
    ConfidenceLevel,
    OverallStatus,
)


def worst_status(statuses: list[CapabilityStatus]) -> CapabilityStatus:
    """Most severe status in ``statuses`` (ENABLED for an empty list)."""
    worst = CapabilityStatus.ENABLED
    for status in statuses:
        if STATUS_SEVERITY[status] > STATUS_SEVERITY[worst]:
            worst = status
    return worst


def overall_status(feature_statuses: list[CapabilityStatus]) -> OverallStatus:
    if any(s == CapabilityStatus.BLOCKED for s in feature_statuses):
        return OverallStatus.BLOCKED
    if all(s == CapabilityStatus.ENABLED for s in feature_statuses):
        return OverallStatus.FULL
    return OverallStatus.PARTIAL


def confidence_floor(entries: list[CapabilityReportEntry]) -> ConfidenceLevel:
    if not entries:
        return ConfidenceLevel.LOW
    return min((e.confidence for e in entries), key=lambda level: CONFIDENCE_RANK[level])


class FeatureAggregator:
    """Combines capability evaluations into per-feature verdicts.

    Args:
        features: Feature registry (declaration order is output order).
        capabilities: Capability registry, used only to break ties when
            ranking repair suggestions.
    """

    def __init__(
        self,
        features: tuple[FeatureDefinition, ...] = FEATURE_REGISTRY,
        capabilities: tuple[CapabilityDefinition, ...] = CAPABILITY_REGISTRY,
    ) -> None:
        self._features = features
        self._capabilities = capabilities

    @property
    def features(self) -> tuple[FeatureDefinition, ...]:
        return self._features

    def aggregate(self, report: list[CapabilityReportEntry]) -> AggregationResult:
        by_key = {entry.capability_key: entry for entry in report}

        # Capability keys failing some feature, in first-seen order.
        failing: list[str] = []
        verdicts: list[tuple[FeatureDefinition, CapabilityStatus, list[str], list[str], list[str]]] = []

        for feature in self._features:
            required = [
                by_key.get(key) or unknown_capability_entry(key)
                for key in feature.required_capabilities
            ]
            blocked_by = [e.capability_key for e in required if e.status == CapabilityStatus.BLOCKED]
            limited_by = [e.capability_key for e in required if e.status == CapabilityStatus.LIMITED]
            status = worst_status([e.status for e in required])

            reasons: list[str] = []
            for entry in required:
                if entry.status == CapabilityStatus.ENABLED:
                    continue
                for reason in entry.reasons:
                    line = f"{entry.display_name}: {reason}"
                    if line not in reasons:
                        reasons.append(line)

            for key in blocked_by + limited_by:
                if key not in failing:
                    failing.append(key)
            verdicts.append((feature, status, blocked_by, limited_by, reasons))

        suggestions = synthesize_repair_suggestions(failing, self._features, self._capabilities)
        suggestion_by_key: dict[str, RepairSuggestion] = {
            s.capability_key: s for s in suggestions
        }

        coverage: list[FeatureCoverageEntry] = []
        for feature, status, blocked_by, limited_by, reasons in verdicts:
            coverage.append(
                FeatureCoverageEntry(
                    feature_key=feature.key,
                    display_name=feature.display_name,
                    description=feature.description,
                    area=feature.area,
                    status=status,
                    required_capabilities=list(feature.required_capabilities),
                    blocked_by=blocked_by,
                    limited_by=limited_by,
                    reasons=reasons,
                    repair_suggestions=[
                        suggestion_by_key[key]
                        for key in blocked_by + limited_by
                        if key in suggestion_by_key
                    ],
                )
            )

        return AggregationResult(
            summary=self._summarize(report, coverage),
            feature_coverage=coverage,
            repair_suggestions=suggestions,
        )

    def _summarize(
        self,
        report: list[CapabilityReportEntry],
        coverage: list[FeatureCoverageEntry],
    ) -> CapabilitySummary:
        def count(items, status: CapabilityStatus) -> int:
            return sum(1 for item in items if item.status == status)

        return CapabilitySummary(
            total_capabilities=len(report),
            enabled=count(report, CapabilityStatus.ENABLED),
            limited=count(report, CapabilityStatus.LIMITED),
            blocked=count(report, CapabilityStatus.BLOCKED),
            total_features=len(coverage),
            features_enabled=count(coverage, CapabilityStatus.ENABLED),
            features_limited=count(coverage, CapabilityStatus.LIMITED),
            features_blocked=count(coverage, CapabilityStatus.BLOCKED),
            overall_status=overall_status([e.status for e in coverage]),
            confidence_floor=confidence_floor(report),
        )
