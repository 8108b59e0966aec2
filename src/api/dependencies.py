"""FastAPI dependency factories for the engine and the answerability gate.

Both are built once per distinct settings value and reused: the engine
holds only immutable registries (plus its optional memo), the gate holds
only its policy.
"""

from functools import lru_cache

from fastapi import Depends

from src.answerability.gate import AnswerabilityGate
from src.capabilities.engine import CapabilityEngine
from src.config.settings import Settings, UnknownIntentPolicy, get_settings


@lru_cache(maxsize=8)
def _engine_for(cache_size: int) -> CapabilityEngine:
    return CapabilityEngine(cache_size=cache_size)


@lru_cache(maxsize=2)
def _gate_for(policy: UnknownIntentPolicy) -> AnswerabilityGate:
    return AnswerabilityGate(policy=policy)


def get_engine(settings: Settings = Depends(get_settings)) -> CapabilityEngine:
    return _engine_for(settings.ENGINE_CACHE_SIZE)


def get_gate(settings: Settings = Depends(get_settings)) -> AnswerabilityGate:
    return _gate_for(settings.UNKNOWN_INTENT_POLICY)
