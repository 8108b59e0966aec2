"""Confidence policy shared by all capability predicates.

HIGH when the sample clears its threshold by the safety multiplier and
the supporting field is well covered; MED when both just clear their
minimums; LOW otherwise. Confidence is only computed for capabilities
that are already ENABLED -- it never changes a status.
"""

from __future__ import annotations

from src.capabilities.config import CapabilityThresholds
from src.capabilities.models import ThresholdCheck
from src.models.common import ConfidenceLevel


def pct(ratio: float) -> str:
    """Render a ratio as a whole percentage, e.g. ``0.456 -> '46%'``."""
    return f"{ratio * 100:.0f}%"


def threshold_check(field: str, required: float, actual: float) -> ThresholdCheck:
    return ThresholdCheck(
        field=field,
        required=required,
        actual=actual,
        met=actual >= required,
    )


def determine_confidence(
    sample_size: int,
    threshold: int,
    coverage: float,
    coverage_min: float,
    thresholds: CapabilityThresholds,
) -> tuple[ConfidenceLevel, list[str]]:
    """Grade the evidence behind an ENABLED capability.

    Returns the level plus the reasons that justify it (never empty).
    """
    reasons: list[str] = []
    high_n = threshold * thresholds.high_confidence_multiplier
    high_cov = thresholds.high_confidence_coverage

    if sample_size >= high_n and coverage >= high_cov:
        reasons.append(
            f"Sample size {sample_size} is >= {thresholds.high_confidence_multiplier:g}x "
            f"threshold ({threshold})"
        )
        reasons.append(f"Field coverage {pct(coverage)} >= {pct(high_cov)}")
        return ConfidenceLevel.HIGH, reasons

    if sample_size >= threshold and coverage >= coverage_min:
        reasons.append(f"Sample size {sample_size} meets threshold ({threshold})")
        if coverage < high_cov:
            reasons.append(
                f"Coverage {pct(coverage)} below {pct(high_cov)} (HIGH requires >= {pct(high_cov)})"
            )
        else:
            reasons.append(
                f"Sample size below {thresholds.high_confidence_multiplier:g}x threshold "
                f"(HIGH requires {high_n:g})"
            )
        return ConfidenceLevel.MED, reasons

    fraction = thresholds.low_confidence_fraction
    if sample_size >= threshold * fraction or coverage >= coverage_min * fraction:
        reasons.append(
            f"Sample size {sample_size} is >= {pct(fraction)} of threshold ({threshold})"
        )
        return ConfidenceLevel.LOW, reasons

    reasons.append(f"Sample size {sample_size} below {pct(fraction)} of threshold ({threshold})")
    return ConfidenceLevel.LOW, reasons
