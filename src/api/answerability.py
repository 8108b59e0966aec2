"""FastAPI answerability endpoints.

GET  /v1/ask/intents        -- intent requirement table
POST /v1/ask/answerability  -- gate verdict (+ blocked response)
"""

import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from src.answerability.gate import AnswerabilityGate
from src.answerability.intents import INTENT_CAPABILITY_REQUIREMENTS
from src.answerability.models import AnswerabilityResult, BlockedResponse
from src.answerability.response import build_blocked_response
from src.api.dependencies import get_gate
from src.models.coverage import CoverageMetrics

router = APIRouter(prefix="/v1/ask", tags=["answerability"])

logger = logging.getLogger(__name__)


class IntentInfo(BaseModel):
    intent_id: str
    required_capabilities: list[str]


class IntentsResponse(BaseModel):
    intents: list[IntentInfo]
    unknown_intent_policy: str


class AnswerabilityRequest(BaseModel):
    intent_id: str
    coverage: CoverageMetrics | None = None


class AnswerabilityResponse(BaseModel):
    result: AnswerabilityResult
    blocked_response: BlockedResponse | None = None


@router.get("/intents", response_model=IntentsResponse)
async def list_intents(gate: AnswerabilityGate = Depends(get_gate)) -> IntentsResponse:
    return IntentsResponse(
        intents=[
            IntentInfo(intent_id=intent, required_capabilities=list(required))
            for intent, required in INTENT_CAPABILITY_REQUIREMENTS.items()
        ],
        unknown_intent_policy=gate.policy.value,
    )


@router.post("/answerability", response_model=AnswerabilityResponse)
async def answerability(
    body: AnswerabilityRequest,
    gate: AnswerabilityGate = Depends(get_gate),
) -> AnswerabilityResponse:
    result = gate.check(body.intent_id, body.coverage)
    if result.answerable:
        return AnswerabilityResponse(result=result)

    logger.info("Answerability denied for %s", body.intent_id)
    return AnswerabilityResponse(result=result, blocked_response=build_blocked_response(result))
