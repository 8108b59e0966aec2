"""Capability evaluator -- runs registry predicates against a snapshot.

Each predicate sees only the coverage snapshot; the evaluator never feeds
one capability's verdict into another. Absent coverage short-circuits to
a universally BLOCKED report.

Deterministic -- no I/O.
"""

from __future__ import annotations

from collections.abc import Iterable

from src.capabilities.models import (
    CapabilityDefinition,
    CapabilityEvidence,
    CapabilityReportEntry,
)
from src.capabilities.registry import CAPABILITY_REGISTRY
from src.models.common import CapabilityStatus, ConfidenceLevel
from src.models.coverage import CoverageMetrics

NO_DATA_REASON = "No data imported"


def unknown_capability_entry(key: str) -> CapabilityReportEntry:
    """BLOCKED entry for a key no registry definition matches."""
    return CapabilityReportEntry(
        capability_key=key,
        display_name=key,
        status=CapabilityStatus.BLOCKED,
        confidence=ConfidenceLevel.LOW,
        reasons=[f"Unknown capability: {key}"],
    )


class CapabilityEvaluator:
    """Evaluates capabilities from an immutable registry."""

    def __init__(
        self,
        registry: tuple[CapabilityDefinition, ...] = CAPABILITY_REGISTRY,
    ) -> None:
        self._registry = registry
        self._by_key = {definition.key: definition for definition in registry}

    @property
    def registry(self) -> tuple[CapabilityDefinition, ...]:
        return self._registry

    def get(self, key: str) -> CapabilityDefinition | None:
        return self._by_key.get(key)

    def evaluate_capability(
        self,
        definition: CapabilityDefinition,
        coverage: CoverageMetrics | None,
    ) -> CapabilityReportEntry:
        if coverage is None:
            return CapabilityReportEntry(
                capability_key=definition.key,
                display_name=definition.display_name,
                description=definition.description,
                status=CapabilityStatus.BLOCKED,
                confidence=ConfidenceLevel.LOW,
                reasons=[NO_DATA_REASON],
                evidence=CapabilityEvidence(),
            )

        result = definition.evaluate(coverage)
        return CapabilityReportEntry(
            capability_key=definition.key,
            display_name=definition.display_name,
            description=definition.description,
            status=result.status,
            confidence=result.confidence,
            reasons=list(result.reasons),
            evidence=result.evidence,
        )

    def evaluate_all(self, coverage: CoverageMetrics | None) -> list[CapabilityReportEntry]:
        """Evaluate every registry capability, in registry order."""
        return [self.evaluate_capability(d, coverage) for d in self._registry]

    def evaluate_keys(
        self,
        keys: Iterable[str],
        coverage: CoverageMetrics | None,
    ) -> list[CapabilityReportEntry]:
        """Evaluate only ``keys``, in the order given.

        Keys missing from the registry come back BLOCKED.
        """
        entries: list[CapabilityReportEntry] = []
        for key in keys:
            definition = self._by_key.get(key)
            if definition is None:
                entries.append(unknown_capability_entry(key))
            else:
                entries.append(self.evaluate_capability(definition, coverage))
        return entries
