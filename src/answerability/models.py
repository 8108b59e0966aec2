"""Answerability gate Pydantic models."""

from __future__ import annotations

from pydantic import Field

from src.capabilities.models import RepairSuggestion
from src.models.common import GateBase, RepairAction


class AnswerabilityResult(GateBase, frozen=True):
    """Allow/deny verdict for one intent.

    ``reason`` is empty for a clean allow; an allow with LIMITED
    capabilities carries caveats in ``reason`` and ``reasons``.
    """

    intent_id: str
    answerable: bool
    known_intent: bool = True
    reason: str = ""
    reasons: list[str] = Field(default_factory=list)
    blocked_capabilities: list[str] = Field(default_factory=list)
    limited_capabilities: list[str] = Field(default_factory=list)
    unlock_steps: list[RepairSuggestion] = Field(default_factory=list)


class UnlockStep(GateBase, frozen=True):
    """One remediation step in a blocked response."""

    title: str
    description: str
    action: RepairAction


class BlockedResponse(GateBase, frozen=True):
    """Structured "not enough data" explanation."""

    title: str
    body: str
    answer_markdown: str
    unlock_steps: list[UnlockStep] = Field(default_factory=list)


class FactPackValidation(GateBase, frozen=True):
    valid: bool
    missing_keys: list[str] = Field(default_factory=list)
