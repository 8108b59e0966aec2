"""Blocked-response builder for the question-answering surface."""

from __future__ import annotations

from src.answerability.models import AnswerabilityResult, BlockedResponse, UnlockStep
from src.models.common import RepairAction

BLOCKED_TITLE = "Not Enough Data"

# Used when the result names no capability (nothing imported at all).
DEFAULT_UNLOCK_STEPS: tuple[UnlockStep, ...] = (
    UnlockStep(
        title="Import Your Data",
        description="Import a requisition and candidate export from your ATS to start asking questions",
        action=RepairAction.IMPORT_DATA,
    ),
    UnlockStep(
        title="Load Demo Data",
        description="Explore with a fully populated demo dataset",
        action=RepairAction.LOAD_DEMO,
    ),
)


def build_blocked_response(result: AnswerabilityResult) -> BlockedResponse:
    """Render the "not enough data" explanation for a denied intent.

    Raises:
        ValueError: If ``result`` is answerable.
    """
    if result.answerable:
        msg = f"Intent {result.intent_id!r} is answerable; there is nothing to explain."
        raise ValueError(msg)

    body = result.reason or "Not enough data to answer this question."
    lines = [f"## {BLOCKED_TITLE}", "", body, ""]

    if result.unlock_steps:
        steps = [
            UnlockStep(
                title=s.ui_copy.short_title,
                description=s.why_it_matters,
                action=s.ui_copy.cta_action,
            )
            for s in result.unlock_steps
        ]
        lines += ["### How to unlock this answer:", ""]
        for i, suggestion in enumerate(result.unlock_steps, start=1):
            lines.append(f"{i}. **{suggestion.ui_copy.short_title}** — {suggestion.why_it_matters}")
            if suggestion.required_columns:
                lines.append(f"   Columns needed: {', '.join(suggestion.required_columns)}")
            lines.append("")
    else:
        steps = list(DEFAULT_UNLOCK_STEPS) if result.known_intent else []
        if steps:
            lines += ["### How to unlock this answer:", ""]
            for i, step in enumerate(steps, start=1):
                lines.append(f"{i}. **{step.title}** — {step.description}")
                lines.append("")

    return BlockedResponse(
        title=BLOCKED_TITLE,
        body=body,
        answer_markdown="\n".join(lines),
        unlock_steps=steps,
    )
