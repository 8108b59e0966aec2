"""Shared types, enums, and base models used across the capability gate."""

from enum import StrEnum

from pydantic import BaseModel


# --- Shared enums (stable vocabulary consumed by UI and tests) ---


class CapabilityStatus(StrEnum):
    """Status of a capability or an aggregated feature."""

    ENABLED = "ENABLED"
    LIMITED = "LIMITED"
    BLOCKED = "BLOCKED"


class ConfidenceLevel(StrEnum):
    """Confidence in an evaluation, orthogonal to status."""

    HIGH = "HIGH"
    MED = "MED"
    LOW = "LOW"


class OverallStatus(StrEnum):
    """Engine-wide verdict across all features."""

    FULL = "full"
    PARTIAL = "partial"
    BLOCKED = "blocked"


class FeatureArea(StrEnum):
    """Closed grouping tag used to organize features for display."""

    CONTROL_TOWER = "control-tower"
    OVERVIEW = "overview"
    RECRUITER_DETAIL = "recruiter-detail"
    HM_FRICTION = "hm-friction"
    HIRING_MANAGERS = "hiring-managers"
    QUALITY = "quality"
    SOURCES = "sources"
    VELOCITY = "velocity"
    FORECASTING = "forecasting"
    DATA_HEALTH = "data-health"
    CAPACITY = "capacity"
    BOTTLENECKS = "bottlenecks"
    ASK = "ask"
    SCENARIOS = "scenarios"
    EXPORTS = "exports"
    ENGINE = "engine"


class RepairAction(StrEnum):
    """Action tag attached to a remediation step."""

    IMPORT_DATA = "import"
    LOAD_DEMO = "demo"
    OPEN_SETTINGS = "settings"


# Severity order used by every "weakest link" aggregation.
STATUS_SEVERITY: dict[CapabilityStatus, int] = {
    CapabilityStatus.ENABLED: 0,
    CapabilityStatus.LIMITED: 1,
    CapabilityStatus.BLOCKED: 2,
}

CONFIDENCE_RANK: dict[ConfidenceLevel, int] = {
    ConfidenceLevel.HIGH: 2,
    ConfidenceLevel.MED: 1,
    ConfidenceLevel.LOW: 0,
}


# --- Base model ---


class GateBase(BaseModel):
    """Base model with common configuration for all gate Pydantic models."""

    model_config = {
        "populate_by_name": True,
        "protected_namespaces": (),
    }
