"""FastAPI capability engine endpoints.

POST /v1/capabilities/evaluate      -- evaluate a coverage snapshot
GET  /v1/capabilities/registry      -- capability and feature metadata
POST /v1/capabilities/areas/{area}  -- status of one feature area

Deterministic -- no I/O beyond the request.
"""

from fastapi import APIRouter, Body, Depends, HTTPException
from pydantic import BaseModel

from src.api.dependencies import get_engine
from src.capabilities.engine import (
    CapabilityEngine,
    get_area_status,
    get_features_by_area,
    is_area_blocked,
)
from src.capabilities.models import CapabilityEngineResult, FeatureCoverageEntry
from src.models.common import CapabilityStatus, FeatureArea
from src.models.coverage import CoverageMetrics

router = APIRouter(prefix="/v1/capabilities", tags=["capabilities"])


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class CapabilityInfo(BaseModel):
    key: str
    display_name: str
    description: str


class FeatureInfo(BaseModel):
    key: str
    display_name: str
    description: str
    area: FeatureArea
    required_capabilities: list[str]


class RegistryResponse(BaseModel):
    capabilities: list[CapabilityInfo]
    features: list[FeatureInfo]
    areas: list[FeatureArea]


class AreaStatusResponse(BaseModel):
    area: FeatureArea
    status: CapabilityStatus
    blocked: bool
    features: list[FeatureCoverageEntry]


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@router.post("/evaluate", response_model=CapabilityEngineResult)
async def evaluate(
    coverage: CoverageMetrics | None = Body(default=None),
    engine: CapabilityEngine = Depends(get_engine),
) -> CapabilityEngineResult:
    """Evaluate a coverage snapshot; an empty body means nothing imported."""
    return engine.evaluate(coverage)


@router.get("/registry", response_model=RegistryResponse)
async def registry(engine: CapabilityEngine = Depends(get_engine)) -> RegistryResponse:
    return RegistryResponse(
        capabilities=[
            CapabilityInfo(key=c.key, display_name=c.display_name, description=c.description)
            for c in engine.evaluator.registry
        ],
        features=[
            FeatureInfo(
                key=f.key,
                display_name=f.display_name,
                description=f.description,
                area=f.area,
                required_capabilities=list(f.required_capabilities),
            )
            for f in engine.aggregator.features
        ],
        areas=list(FeatureArea),
    )


@router.post("/areas/{area}", response_model=AreaStatusResponse)
async def area_status(
    area: str,
    coverage: CoverageMetrics | None = Body(default=None),
    engine: CapabilityEngine = Depends(get_engine),
) -> AreaStatusResponse:
    try:
        feature_area = FeatureArea(area)
    except ValueError as exc:
        raise HTTPException(status_code=404, detail=f"Unknown feature area: {area}") from exc

    result = engine.evaluate(coverage)
    features = get_features_by_area(result, feature_area)
    status = get_area_status(result, feature_area)
    return AreaStatusResponse(
        area=feature_area,
        status=status,
        blocked=is_area_blocked(result, feature_area),
        features=features,
    )
