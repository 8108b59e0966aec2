"""Coverage snapshot value object consumed by the capability engine.

The snapshot is produced elsewhere (import diagnostics, demo generators)
and is treated here as an opaque, pre-aggregated description of one
dataset. Out-of-range numbers are clamped on construction so that every
downstream evaluation stays total.
"""

from __future__ import annotations

import hashlib
import json
import math

from pydantic import Field, field_validator

from src.models.common import GateBase


def _truncate_count(value: object) -> object:
    """Truncate float counts; NaN and infinities become 0. Other types are left to pydantic."""
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else 0
    return value


def _clamp_ratio(value: float) -> float:
    """Clamp a ratio into [0, 1]; NaN and infinities become 0."""
    if not math.isfinite(value):
        return 0.0
    return max(0.0, min(1.0, value))


class CoverageCounts(GateBase):
    """Record counts per entity type."""

    requisitions: int = 0
    candidates: int = 0
    events: int = 0
    users: int = 0
    snapshots: int = 0

    @field_validator("*", mode="before")
    @classmethod
    def _truncate(cls, value: object) -> object:
        return _truncate_count(value)

    @field_validator("*")
    @classmethod
    def _non_negative(cls, value: int) -> int:
        return max(0, value)


class SampleSizes(GateBase):
    """Counts of outcome types observed in the dataset."""

    hires: int = 0
    offers: int = 0
    rejections: int = 0
    active_reqs: int = 0

    @field_validator("*", mode="before")
    @classmethod
    def _truncate(cls, value: object) -> object:
        return _truncate_count(value)

    @field_validator("*")
    @classmethod
    def _non_negative(cls, value: int) -> int:
        return max(0, value)


class CoverageMetrics(GateBase):
    """Aggregated data-quality signals describing one dataset."""

    import_id: str | None = None
    counts: CoverageCounts = Field(default_factory=CoverageCounts)
    field_coverage: dict[str, float] = Field(default_factory=dict)
    flags: dict[str, bool] = Field(default_factory=dict)
    sample_sizes: SampleSizes = Field(default_factory=SampleSizes)

    @field_validator("field_coverage")
    @classmethod
    def _clamp_ratios(cls, value: dict[str, float]) -> dict[str, float]:
        return {key: _clamp_ratio(ratio) for key, ratio in value.items()}

    def coverage(self, field: str) -> float:
        """Completeness ratio for a field; absent fields count as 0."""
        return self.field_coverage.get(field, 0.0)

    def flag(self, name: str) -> bool:
        """Boolean signal; absent flags count as False."""
        return self.flags.get(name, False)

    def content_hash(self) -> str:
        """Stable sha256 of the snapshot content, used as a memoization key."""
        serialized = json.dumps(self.model_dump(mode="json"), sort_keys=True)
        return hashlib.sha256(serialized.encode()).hexdigest()
