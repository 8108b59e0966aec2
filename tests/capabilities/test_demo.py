"""Regression gate on the designated demo coverage snapshots.

The ultimate demo must keep every feature ENABLED and every intent
answerable; any registry change that breaks this fails here.
"""

import pytest

from src.answerability.gate import check_answerability
from src.answerability.intents import INTENT_IDS
from src.capabilities.demo import (
    MINIMAL_DEMO_COVERAGE,
    ULTIMATE_DEMO_COVERAGE,
    DemoPacks,
    demo_coverage,
)
from src.capabilities.engine import evaluate_capabilities
from src.models.common import CapabilityStatus, OverallStatus


class TestUltimateDemoGate:

    def test_overall_full(self) -> None:
        result = evaluate_capabilities(ULTIMATE_DEMO_COVERAGE)
        assert result.summary.overall_status == OverallStatus.FULL

    def test_no_repair_suggestions(self) -> None:
        assert evaluate_capabilities(ULTIMATE_DEMO_COVERAGE).repair_suggestions == []

    def test_every_capability_enabled(self) -> None:
        result = evaluate_capabilities(ULTIMATE_DEMO_COVERAGE)
        not_enabled = [
            (e.capability_key, e.reasons)
            for e in result.capability_report
            if e.status != CapabilityStatus.ENABLED
        ]
        assert not_enabled == []

    @pytest.mark.parametrize("intent_id", INTENT_IDS)
    def test_every_intent_answerable(self, intent_id) -> None:
        result = check_answerability(intent_id, ULTIMATE_DEMO_COVERAGE)
        assert result.answerable is True
        assert result.blocked_capabilities == []


class TestMinimalDemo:

    def test_not_full(self) -> None:
        result = evaluate_capabilities(MINIMAL_DEMO_COVERAGE)
        assert result.summary.overall_status != OverallStatus.FULL
        assert result.repair_suggestions

    def test_assignment_features_blocked(self) -> None:
        result = evaluate_capabilities(MINIMAL_DEMO_COVERAGE)
        assert result.capability("cap_hm_assignment").status == CapabilityStatus.BLOCKED
        assert result.capability("cap_recruiter_assignment").status == CapabilityStatus.BLOCKED
        assert result.feature("ct_health_kpis").status == CapabilityStatus.ENABLED

    def test_hm_intent_blocked(self) -> None:
        result = check_answerability("why_hm_latency", MINIMAL_DEMO_COVERAGE)
        assert result.answerable is False
        assert result.blocked_capabilities == ["cap_hm_assignment"]


class TestDemoPacks:

    def test_disabling_snapshots_blocks_trends(self) -> None:
        coverage = demo_coverage(DemoPacks(snapshots_diffs=False))
        result = evaluate_capabilities(coverage)
        assert result.capability("cap_snapshots").status == CapabilityStatus.BLOCKED
        assert result.capability("cap_snapshot_dwell").status == CapabilityStatus.BLOCKED

    def test_disabling_capacity_blocks_capacity_history_only(self) -> None:
        result = evaluate_capabilities(demo_coverage(DemoPacks(capacity_history=False)))
        blocked = [
            e.capability_key
            for e in result.capability_report
            if e.status != CapabilityStatus.ENABLED
        ]
        assert blocked == ["cap_capacity_history"]
