"""Tests for the answerability gate.

Covers: intent table integrity, allow/deny on canonical coverage, scoped
unlock steps, LIMITED caveats, absent coverage, unknown-intent policy,
and determinism.
"""

import logging

import pytest

from src.answerability.gate import NO_DATA_REASON, AnswerabilityGate, check_answerability
from src.answerability.intents import (
    FACT_PACK_REQUIRED_SECTIONS,
    INTENT_CAPABILITY_REQUIREMENTS,
    INTENT_IDS,
    required_capabilities,
)
from src.capabilities.registry import CAPABILITY_REGISTRY
from src.config.settings import UnknownIntentPolicy

# ===================================================================
# Intent table
# ===================================================================


class TestIntentTable:

    def test_fourteen_intents(self) -> None:
        assert len(INTENT_IDS) == 14
        assert INTENT_IDS[0] == "whats_on_fire"
        assert INTENT_IDS[-1] == "bottleneck_analysis"

    def test_requirements_reference_real_capabilities(self) -> None:
        known = {c.key for c in CAPABILITY_REGISTRY}
        for intent, required in INTENT_CAPABILITY_REQUIREMENTS.items():
            assert required, intent
            assert set(required) <= known, intent

    def test_fact_pack_table_covers_every_intent(self) -> None:
        assert set(FACT_PACK_REQUIRED_SECTIONS) == set(INTENT_IDS)

    def test_table_is_read_only(self) -> None:
        with pytest.raises(TypeError):
            INTENT_CAPABILITY_REQUIREMENTS["new_intent"] = ("cap_requisitions",)  # type: ignore[index]

    def test_lookup(self) -> None:
        assert required_capabilities("why_hm_latency") == ("cap_hm_assignment", "cap_stage_events")
        assert required_capabilities("nope") is None


# ===================================================================
# Allow / deny
# ===================================================================


class TestAllowDeny:

    @pytest.mark.parametrize("intent_id", INTENT_IDS)
    def test_full_coverage_answers_everything(self, full_coverage, intent_id) -> None:
        result = check_answerability(intent_id, full_coverage)
        assert result.answerable is True
        assert result.reason == ""
        assert result.unlock_steps == []

    @pytest.mark.parametrize("intent_id", INTENT_IDS)
    def test_empty_coverage_blocks_everything(self, empty_coverage, intent_id) -> None:
        result = check_answerability(intent_id, empty_coverage)
        assert result.answerable is False
        assert result.blocked_capabilities == list(INTENT_CAPABILITY_REQUIREMENTS[intent_id])
        assert result.reason.startswith("Not enough data to answer this question. Missing: ")

    def test_hm_intent_blocked_without_hm(self, no_hm_coverage) -> None:
        result = check_answerability("why_hm_latency", no_hm_coverage)
        assert result.answerable is False
        assert result.blocked_capabilities == ["cap_hm_assignment"]
        assert result.reason == "Not enough data to answer this question. Missing: HM Assignment."

    def test_non_hm_intent_unaffected(self, no_hm_coverage) -> None:
        assert check_answerability("top_actions", no_hm_coverage).answerable is True

    def test_bottlenecks_blocked_without_events(self, no_events_coverage) -> None:
        result = check_answerability("bottleneck_analysis", no_events_coverage)
        assert result.blocked_capabilities == ["cap_stage_events", "cap_snapshot_dwell"]


class TestUnlockSteps:

    def test_steps_scoped_to_intent(self, no_hm_coverage) -> None:
        result = check_answerability("hm_with_most_open_reqs", no_hm_coverage)
        (step,) = result.unlock_steps
        assert step.capability_key == "cap_hm_assignment"
        assert step.what_it_unlocks == ["hm_with_most_open_reqs"]
        assert step.required_columns == ["Hiring Manager", "Requisition ID"]

    def test_steps_follow_requirement_order(self, empty_coverage) -> None:
        result = check_answerability("top_risks", empty_coverage)
        assert [s.capability_key for s in result.unlock_steps] == [
            "cap_requisitions",
            "cap_candidates",
            "cap_stage_events",
        ]


class TestLimitedCaveats:
    """LIMITED capabilities allow the intent and explain why in the reason."""

    def test_limited_still_answerable(self, make_coverage) -> None:
        coverage = make_coverage(field_coverage={"req.hiring_manager_id": 0.3})
        result = check_answerability("why_hm_latency", coverage)
        assert result.answerable is True
        assert result.limited_capabilities == ["cap_hm_assignment"]
        assert "HM Assignment" in result.reason
        assert result.reasons == ["HM Assignment: HM assignment coverage 30% < 50%"]
        assert result.unlock_steps == []


class TestNoCoverage:

    def test_known_intent_denied(self) -> None:
        result = check_answerability("whats_on_fire", None)
        assert result.answerable is False
        assert result.reason == NO_DATA_REASON
        assert "No data imported" in result.reason
        assert result.blocked_capabilities == []
        assert result.unlock_steps == []


# ===================================================================
# Unknown-intent policy
# ===================================================================


class TestUnknownIntentPolicy:

    @pytest.mark.parametrize("coverage_fixture", ["full_coverage", "empty_coverage", None])
    def test_fail_open_regardless_of_coverage(self, request, coverage_fixture) -> None:
        coverage = request.getfixturevalue(coverage_fixture) if coverage_fixture else None
        result = check_answerability("what_is_the_weather", coverage)
        assert result.answerable is True
        assert result.known_intent is False

    def test_fail_closed(self, full_coverage) -> None:
        gate = AnswerabilityGate(policy=UnknownIntentPolicy.FAIL_CLOSED)
        result = gate.check("what_is_the_weather", full_coverage)
        assert result.answerable is False
        assert result.reason == "Unknown intent: what_is_the_weather"

    def test_fail_closed_leaves_known_intents_alone(self, full_coverage) -> None:
        result = check_answerability(
            "whats_on_fire", full_coverage, policy=UnknownIntentPolicy.FAIL_CLOSED
        )
        assert result.answerable is True

    def test_unknown_intent_logged(self, caplog) -> None:
        with caplog.at_level(logging.WARNING, logger="src.answerability.gate"):
            check_answerability("mystery", None)
        assert "mystery" in caplog.text

    def test_custom_requirement_table(self, full_coverage) -> None:
        gate = AnswerabilityGate(requirements={"ghost_intent": ("cap_ghost",)})
        result = gate.check("ghost_intent", full_coverage)
        assert result.answerable is False
        assert result.blocked_capabilities == ["cap_ghost"]
        assert result.reasons == ["cap_ghost: Unknown capability: cap_ghost"]


class TestDeterminism:

    @pytest.mark.parametrize("intent_id", ["why_hm_latency", "top_risks", "unknown_x"])
    def test_identical_inputs_deep_equal(self, no_hm_coverage, intent_id) -> None:
        first = check_answerability(intent_id, no_hm_coverage)
        second = check_answerability(intent_id, no_hm_coverage.model_copy(deep=True))
        assert first == second
        assert first.model_dump() == second.model_dump()
