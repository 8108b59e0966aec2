"""Capability engine orchestrator and result query helpers.

Pipeline: coverage snapshot -> CapabilityEvaluator -> FeatureAggregator
-> CapabilityEngineResult. The engine holds only immutable registries;
an optional FIFO memo keyed by ``CoverageMetrics.content_hash()`` can be
enabled with ``cache_size``.

Deterministic -- no I/O.
"""

from __future__ import annotations

import logging
import threading

from src.capabilities.aggregator import FeatureAggregator, worst_status
from src.capabilities.evaluator import CapabilityEvaluator
from src.capabilities.features import FEATURE_REGISTRY
from src.capabilities.models import (
    CapabilityDefinition,
    CapabilityEngineResult,
    FeatureCoverageEntry,
    FeatureDefinition,
    RepairSuggestion,
)
from src.capabilities.registry import CAPABILITY_REGISTRY
from src.models.common import CapabilityStatus, FeatureArea
from src.models.coverage import CoverageMetrics

logger = logging.getLogger(__name__)


class CapabilityEngine:
    """Evaluates a coverage snapshot into a full engine result.

    Args:
        registry: Capability registry.
        features: Feature registry.
        cache_size: Number of results to memoize by snapshot hash.
            0 disables memoization. Absent coverage is never cached.
    """

    def __init__(
        self,
        registry: tuple[CapabilityDefinition, ...] = CAPABILITY_REGISTRY,
        features: tuple[FeatureDefinition, ...] = FEATURE_REGISTRY,
        cache_size: int = 0,
    ) -> None:
        if cache_size < 0:
            msg = f"cache_size must be >= 0, got {cache_size}"
            raise ValueError(msg)
        self._evaluator = CapabilityEvaluator(registry)
        self._aggregator = FeatureAggregator(features, registry)
        self._cache_size = cache_size
        self._cache: dict[str, CapabilityEngineResult] = {}
        self._lock = threading.Lock()

    @property
    def evaluator(self) -> CapabilityEvaluator:
        return self._evaluator

    @property
    def aggregator(self) -> FeatureAggregator:
        return self._aggregator

    @property
    def cache_len(self) -> int:
        return len(self._cache)

    def evaluate(self, coverage: CoverageMetrics | None) -> CapabilityEngineResult:
        """Evaluate ``coverage`` (``None`` means nothing was imported)."""
        if coverage is None or self._cache_size == 0:
            return self._compute(coverage)

        key = coverage.content_hash()
        with self._lock:
            cached = self._cache.get(key)
        if cached is not None:
            return cached

        result = self._compute(coverage)
        with self._lock:
            if key not in self._cache:
                while len(self._cache) >= self._cache_size:
                    # dicts keep insertion order: the first key is the oldest
                    self._cache.pop(next(iter(self._cache)))
                self._cache[key] = result
        return result

    def clear_cache(self) -> None:
        with self._lock:
            self._cache.clear()

    def _compute(self, coverage: CoverageMetrics | None) -> CapabilityEngineResult:
        report = self._evaluator.evaluate_all(coverage)
        aggregation = self._aggregator.aggregate(report)
        summary = aggregation.summary

        logger.debug(
            "Capability evaluation: overall=%s capabilities=%d/%d/%d features=%d/%d/%d repairs=%d",
            summary.overall_status,
            summary.enabled,
            summary.limited,
            summary.blocked,
            summary.features_enabled,
            summary.features_limited,
            summary.features_blocked,
            len(aggregation.repair_suggestions),
        )

        return CapabilityEngineResult(
            summary=summary,
            capability_report=report,
            feature_coverage=aggregation.feature_coverage,
            repair_suggestions=aggregation.repair_suggestions,
        )


_default_engine = CapabilityEngine()


def evaluate_capabilities(coverage: CoverageMetrics | None) -> CapabilityEngineResult:
    """Evaluate ``coverage`` against the default registries."""
    return _default_engine.evaluate(coverage)


# ---------------------------------------------------------------------------
# Query helpers
# ---------------------------------------------------------------------------


def get_feature_status(result: CapabilityEngineResult, feature_key: str) -> CapabilityStatus:
    """Status of a feature; unknown features report BLOCKED."""
    entry = result.feature(feature_key)
    return entry.status if entry is not None else CapabilityStatus.BLOCKED


def is_feature_enabled(result: CapabilityEngineResult, feature_key: str) -> bool:
    return get_feature_status(result, feature_key) == CapabilityStatus.ENABLED


def is_feature_usable(result: CapabilityEngineResult, feature_key: str) -> bool:
    """True when the feature can render, possibly with caveats."""
    return get_feature_status(result, feature_key) != CapabilityStatus.BLOCKED


def get_feature_repairs(
    result: CapabilityEngineResult, feature_key: str
) -> list[RepairSuggestion]:
    entry = result.feature(feature_key)
    return list(entry.repair_suggestions) if entry is not None else []


def get_features_by_area(
    result: CapabilityEngineResult, area: FeatureArea
) -> list[FeatureCoverageEntry]:
    """Features of ``area`` in registry order."""
    return [entry for entry in result.feature_coverage if entry.area == area]


def get_area_status(result: CapabilityEngineResult, area: FeatureArea) -> CapabilityStatus:
    """Weakest status among the area's features (ENABLED for an empty area)."""
    return worst_status([entry.status for entry in get_features_by_area(result, area)])


def is_area_blocked(result: CapabilityEngineResult, area: FeatureArea) -> bool:
    """True when every feature of a non-empty area is BLOCKED."""
    entries = get_features_by_area(result, area)
    return bool(entries) and all(e.status == CapabilityStatus.BLOCKED for e in entries)
