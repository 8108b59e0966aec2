"""Tests for FeatureAggregator.

Covers: BLOCKED > LIMITED > ENABLED precedence on synthetic reports,
blocked_by / limited_by ordering, reason prefixing and dedup, summary
counts, overall status, and per-feature repairs.
"""

import itertools

import pytest

from src.capabilities.aggregator import FeatureAggregator, overall_status, worst_status
from src.capabilities.models import CapabilityReportEntry, FeatureDefinition
from src.capabilities.registry import CAPABILITY_REGISTRY
from src.models.common import (
    CapabilityStatus,
    ConfidenceLevel,
    FeatureArea,
    OverallStatus,
)

S = CapabilityStatus

# Three real capability keys so repair copy comes from the catalog.
KEYS = ("cap_requisitions", "cap_candidates", "cap_hm_assignment")


def _entry(key: str, status: CapabilityStatus, reason: str = "because") -> CapabilityReportEntry:
    return CapabilityReportEntry(
        capability_key=key,
        display_name=key.removeprefix("cap_").title(),
        status=status,
        confidence=ConfidenceLevel.HIGH if status == S.ENABLED else ConfidenceLevel.LOW,
        reasons=[] if status == S.ENABLED else [reason],
    )


def _feature(key: str, *required: str, area: FeatureArea = FeatureArea.OVERVIEW) -> FeatureDefinition:
    return FeatureDefinition(
        key=key,
        display_name=key,
        description="",
        area=area,
        required_capabilities=tuple(required),
    )


@pytest.fixture
def aggregator() -> FeatureAggregator:
    return FeatureAggregator(
        features=(
            _feature("f_all", *KEYS),
            _feature("f_req", "cap_requisitions"),
            _feature("f_hm", "cap_hm_assignment", area=FeatureArea.HM_FRICTION),
        ),
        capabilities=CAPABILITY_REGISTRY,
    )


# ===================================================================
# Precedence
# ===================================================================


class TestPrecedence:
    """A feature is only as healthy as its weakest capability."""

    @pytest.mark.parametrize("statuses", list(itertools.product(list(S), repeat=3)))
    def test_every_combination(self, aggregator, statuses) -> None:
        report = [_entry(k, s) for k, s in zip(KEYS, statuses)]
        feature = aggregator.aggregate(report).feature_coverage[0]

        if S.BLOCKED in statuses:
            expected = S.BLOCKED
        elif S.LIMITED in statuses:
            expected = S.LIMITED
        else:
            expected = S.ENABLED
        assert feature.status == expected
        assert feature.blocked_by == [k for k, s in zip(KEYS, statuses) if s == S.BLOCKED]
        assert feature.limited_by == [k for k, s in zip(KEYS, statuses) if s == S.LIMITED]

    def test_worst_status_empty_is_enabled(self) -> None:
        assert worst_status([]) == S.ENABLED

    def test_missing_capability_counts_as_blocked(self) -> None:
        aggregator = FeatureAggregator(features=(_feature("f_x", "cap_ghost"),))
        feature = aggregator.aggregate([]).feature_coverage[0]
        assert feature.status == S.BLOCKED
        assert feature.blocked_by == ["cap_ghost"]
        assert feature.reasons == ["cap_ghost: Unknown capability: cap_ghost"]


# ===================================================================
# Reasons
# ===================================================================


class TestReasons:

    def test_reasons_prefixed_with_display_name(self, aggregator) -> None:
        report = [
            _entry("cap_requisitions", S.BLOCKED, "No requisitions found"),
            _entry("cap_candidates", S.ENABLED),
            _entry("cap_hm_assignment", S.LIMITED, "HM assignment coverage 30% < 50%"),
        ]
        feature = aggregator.aggregate(report).feature_coverage[0]
        assert feature.reasons == [
            "Requisitions: No requisitions found",
            "Hm_Assignment: HM assignment coverage 30% < 50%",
        ]

    def test_enabled_feature_has_no_reasons(self, aggregator) -> None:
        report = [_entry(k, S.ENABLED) for k in KEYS]
        for feature in aggregator.aggregate(report).feature_coverage:
            assert feature.reasons == []
            assert feature.repair_suggestions == []


# ===================================================================
# Summary
# ===================================================================


class TestSummary:

    def test_counts(self, aggregator) -> None:
        report = [
            _entry("cap_requisitions", S.ENABLED),
            _entry("cap_candidates", S.LIMITED),
            _entry("cap_hm_assignment", S.BLOCKED),
        ]
        summary = aggregator.aggregate(report).summary
        assert (summary.enabled, summary.limited, summary.blocked) == (1, 1, 1)
        assert summary.total_capabilities == 3
        assert summary.total_features == 3
        # f_all BLOCKED, f_req ENABLED, f_hm BLOCKED
        assert (summary.features_enabled, summary.features_limited, summary.features_blocked) == (1, 0, 2)
        assert summary.overall_status == OverallStatus.BLOCKED
        assert summary.confidence_floor == ConfidenceLevel.LOW

    def test_partial_when_only_limited(self, aggregator) -> None:
        report = [
            _entry("cap_requisitions", S.ENABLED),
            _entry("cap_candidates", S.LIMITED),
            _entry("cap_hm_assignment", S.ENABLED),
        ]
        assert aggregator.aggregate(report).summary.overall_status == OverallStatus.PARTIAL

    def test_full_when_all_enabled(self, aggregator) -> None:
        result = aggregator.aggregate([_entry(k, S.ENABLED) for k in KEYS])
        assert result.summary.overall_status == OverallStatus.FULL
        assert result.summary.confidence_floor == ConfidenceLevel.HIGH
        assert result.repair_suggestions == []

    @pytest.mark.parametrize(
        ("statuses", "expected"),
        [
            ([], OverallStatus.FULL),
            ([S.ENABLED, S.ENABLED], OverallStatus.FULL),
            ([S.ENABLED, S.LIMITED], OverallStatus.PARTIAL),
            ([S.LIMITED, S.BLOCKED], OverallStatus.BLOCKED),
        ],
    )
    def test_overall_status(self, statuses, expected) -> None:
        assert overall_status(statuses) == expected


# ===================================================================
# Repairs
# ===================================================================


class TestRepairs:

    def test_feature_repairs_follow_blocked_then_limited(self, aggregator) -> None:
        report = [
            _entry("cap_requisitions", S.LIMITED),
            _entry("cap_candidates", S.ENABLED),
            _entry("cap_hm_assignment", S.BLOCKED),
        ]
        feature = aggregator.aggregate(report).feature_coverage[0]
        assert [r.capability_key for r in feature.repair_suggestions] == [
            "cap_hm_assignment",
            "cap_requisitions",
        ]

    def test_suggestion_unlocks_every_gated_feature(self, aggregator) -> None:
        report = [
            _entry("cap_requisitions", S.BLOCKED),
            _entry("cap_candidates", S.ENABLED),
            _entry("cap_hm_assignment", S.ENABLED),
        ]
        (suggestion,) = aggregator.aggregate(report).repair_suggestions
        assert suggestion.capability_key == "cap_requisitions"
        assert suggestion.what_it_unlocks == ["f_all", "f_req"]
