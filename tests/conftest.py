"""Shared pytest fixtures for the capability gate test suite.

Provides:
- full_coverage / empty_coverage: the canonical full and empty snapshots
- no_hm_coverage: full coverage with only hiring-manager data removed
- no_events_coverage: full coverage with no stage events and one snapshot
- make_coverage: factory that overlays changes on the full snapshot
- client: AsyncClient against the FastAPI app
"""

from collections.abc import Callable

import pytest
from httpx import ASGITransport, AsyncClient

from src.models.coverage import CoverageMetrics

FULL_COUNTS = {
    "requisitions": 50,
    "candidates": 200,
    "events": 500,
    "users": 10,
    "snapshots": 6,
}

FULL_FIELD_COVERAGE = {
    "req.recruiter_id": 0.9,
    "req.hiring_manager_id": 0.85,
    "req.opened_at": 0.95,
    "req.closed_at": 0.6,
    "req.status": 0.98,
    "cand.applied_at": 0.92,
    "cand.current_stage": 0.95,
    "cand.hired_at": 0.15,
    "cand.rejected_at": 0.2,
    "cand.source": 0.7,
    "cand.name": 0.99,
    "event.from_stage": 0.85,
    "event.to_stage": 0.88,
    "event.actor_user_id": 0.75,
    "event.event_at": 0.95,
}

FULL_FLAGS = {
    "has_stage_events": True,
    "has_timestamps": True,
    "has_terminal_timestamps": True,
    "has_recruiter_assignment": True,
    "has_hm_assignment": True,
    "has_source_data": True,
    "has_multiple_snapshots": True,
    "has_capacity_history": True,
}

FULL_SAMPLE_SIZES = {"hires": 25, "offers": 30, "rejections": 40, "active_reqs": 35}


def _build(
    counts: dict | None = None,
    field_coverage: dict | None = None,
    flags: dict | None = None,
    sample_sizes: dict | None = None,
) -> CoverageMetrics:
    return CoverageMetrics(
        import_id="test-import",
        counts={**FULL_COUNTS, **(counts or {})},
        field_coverage={**FULL_FIELD_COVERAGE, **(field_coverage or {})},
        flags={**FULL_FLAGS, **(flags or {})},
        sample_sizes={**FULL_SAMPLE_SIZES, **(sample_sizes or {})},
    )


@pytest.fixture
def make_coverage() -> Callable[..., CoverageMetrics]:
    """Full coverage with per-section overrides merged in."""
    return _build


@pytest.fixture
def full_coverage() -> CoverageMetrics:
    return _build()


@pytest.fixture
def empty_coverage() -> CoverageMetrics:
    return CoverageMetrics(
        counts={key: 0 for key in FULL_COUNTS},
        field_coverage={key: 0.0 for key in FULL_FIELD_COVERAGE},
        flags={key: False for key in FULL_FLAGS},
        sample_sizes={key: 0 for key in FULL_SAMPLE_SIZES},
    )


@pytest.fixture
def no_hm_coverage() -> CoverageMetrics:
    return _build(
        field_coverage={"req.hiring_manager_id": 0.0},
        flags={"has_hm_assignment": False},
    )


@pytest.fixture
def no_events_coverage() -> CoverageMetrics:
    return _build(
        counts={"events": 0, "snapshots": 1},
        field_coverage={"event.from_stage": 0.0, "event.to_stage": 0.0},
        flags={"has_stage_events": False, "has_multiple_snapshots": False},
    )


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
async def client() -> AsyncClient:
    from src.api.main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac
