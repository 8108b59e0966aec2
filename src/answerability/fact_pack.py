"""Fact-pack validation for answerable intents.

Runs after the gate allows an intent: checks that the assembled fact
pack actually carries the sections the intent's answer renders from.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from src.answerability.intents import FACT_PACK_REQUIRED_SECTIONS
from src.answerability.models import FactPackValidation

NO_FACT_PACK = "(no fact pack)"

_MISSING = object()


def resolve_path(fact_pack: Mapping[str, Any], path: str) -> Any:
    """Value at dotted ``path``, or a sentinel when any segment is absent."""
    current: Any = fact_pack
    for part in path.split("."):
        if not isinstance(current, Mapping) or part not in current:
            return _MISSING
        current = current[part]
    return current


def validate_fact_pack_for_intent(
    intent_id: str,
    fact_pack: Mapping[str, Any] | None,
) -> FactPackValidation:
    """Check ``fact_pack`` carries every section ``intent_id`` needs.

    A section that is present but ``None`` counts as missing; falsy
    values such as ``0`` or ``[]`` are real answers and count as present.
    Unknown intents have no requirements and are always valid.
    """
    if fact_pack is None:
        return FactPackValidation(valid=False, missing_keys=[NO_FACT_PACK])

    paths = FACT_PACK_REQUIRED_SECTIONS.get(intent_id)
    if paths is None:
        return FactPackValidation(valid=True)

    missing: list[str] = []
    for path in paths:
        value = resolve_path(fact_pack, path)
        if value is _MISSING or value is None:
            missing.append(path)
    return FactPackValidation(valid=not missing, missing_keys=missing)
