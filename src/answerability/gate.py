"""Answerability gate -- can an intent be answered from this coverage?

Only the intent's required capabilities are evaluated. Any BLOCKED one
denies the intent; LIMITED ones allow it with caveats. Intents missing
from the requirement table are resolved by ``UnknownIntentPolicy``.

Deterministic -- no I/O.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from src.answerability.intents import INTENT_CAPABILITY_REQUIREMENTS
from src.answerability.models import AnswerabilityResult
from src.capabilities.evaluator import CapabilityEvaluator
from src.capabilities.models import CapabilityReportEntry
from src.capabilities.repairs import build_repair_suggestion
from src.config.settings import UnknownIntentPolicy
from src.models.common import CapabilityStatus
from src.models.coverage import CoverageMetrics

logger = logging.getLogger(__name__)

NO_DATA_REASON = "No data imported yet. Import data to start asking questions."


def _caveats(entries: list[CapabilityReportEntry]) -> list[str]:
    lines: list[str] = []
    for entry in entries:
        for reason in entry.reasons:
            line = f"{entry.display_name}: {reason}"
            if line not in lines:
                lines.append(line)
    return lines


class AnswerabilityGate:
    """Allow/deny gate for question-answering intents.

    Args:
        policy: Verdict for intents with no requirement entry.
        evaluator: Capability evaluator (default registry if omitted).
        requirements: Intent -> required capability keys.
    """

    def __init__(
        self,
        policy: UnknownIntentPolicy = UnknownIntentPolicy.FAIL_OPEN,
        evaluator: CapabilityEvaluator | None = None,
        requirements: Mapping[str, tuple[str, ...]] = INTENT_CAPABILITY_REQUIREMENTS,
    ) -> None:
        self._policy = policy
        self._evaluator = evaluator or CapabilityEvaluator()
        self._requirements = requirements

    @property
    def policy(self) -> UnknownIntentPolicy:
        return self._policy

    def check(self, intent_id: str, coverage: CoverageMetrics | None) -> AnswerabilityResult:
        """Evaluate ``intent_id`` against ``coverage`` (``None`` = no data)."""
        required = self._requirements.get(intent_id)
        if required is None:
            return self._unknown_intent(intent_id)

        if coverage is None:
            logger.info("Intent %s blocked: no coverage", intent_id)
            return AnswerabilityResult(
                intent_id=intent_id,
                answerable=False,
                reason=NO_DATA_REASON,
                reasons=[NO_DATA_REASON],
            )

        # Duplicate keys in a requirement row collapse to one evaluation.
        keys = list(dict.fromkeys(required))
        entries = self._evaluator.evaluate_keys(keys, coverage)
        blocked = [e for e in entries if e.status == CapabilityStatus.BLOCKED]
        limited = [e for e in entries if e.status == CapabilityStatus.LIMITED]

        if blocked:
            names = ", ".join(e.display_name for e in blocked)
            reason = f"Not enough data to answer this question. Missing: {names}."
            logger.info("Intent %s blocked by %s", intent_id, [e.capability_key for e in blocked])
            return AnswerabilityResult(
                intent_id=intent_id,
                answerable=False,
                reason=reason,
                reasons=_caveats(blocked),
                blocked_capabilities=[e.capability_key for e in blocked],
                limited_capabilities=[e.capability_key for e in limited],
                unlock_steps=[
                    build_repair_suggestion(e.capability_key, [intent_id]) for e in blocked
                ],
            )

        if limited:
            names = ", ".join(e.display_name for e in limited)
            return AnswerabilityResult(
                intent_id=intent_id,
                answerable=True,
                reason=f"Answer is based on partial data. Limited: {names}.",
                reasons=_caveats(limited),
                limited_capabilities=[e.capability_key for e in limited],
            )

        return AnswerabilityResult(intent_id=intent_id, answerable=True)

    def _unknown_intent(self, intent_id: str) -> AnswerabilityResult:
        if self._policy == UnknownIntentPolicy.FAIL_CLOSED:
            logger.warning("Unknown intent %r denied (fail_closed)", intent_id)
            reason = f"Unknown intent: {intent_id}"
            return AnswerabilityResult(
                intent_id=intent_id,
                answerable=False,
                known_intent=False,
                reason=reason,
                reasons=[reason],
            )
        logger.warning("Unknown intent %r allowed (fail_open)", intent_id)
        return AnswerabilityResult(intent_id=intent_id, answerable=True, known_intent=False)


_default_gates = {policy: AnswerabilityGate(policy=policy) for policy in UnknownIntentPolicy}


def check_answerability(
    intent_id: str,
    coverage: CoverageMetrics | None,
    policy: UnknownIntentPolicy = UnknownIntentPolicy.FAIL_OPEN,
) -> AnswerabilityResult:
    """Check ``intent_id`` with the default registry and requirement table."""
    return _default_gates[policy].check(intent_id, coverage)
