"""
Reasoning Gateway - ordered model cascade over an OpenAI-compatible endpoint.
"""

from .candidates import ModelCandidate, load_model_candidates
from .client import (
    Attempt,
    AttemptOutcome,
    FailureKind,
    ReasoningFailure,
    ReasoningGateway,
    ReasoningResult,
    ReasoningSuccess,
)
from .parsing import recover_json

__all__ = [
    "Attempt",
    "AttemptOutcome",
    "FailureKind",
    "ModelCandidate",
    "ReasoningFailure",
    "ReasoningGateway",
    "ReasoningResult",
    "ReasoningSuccess",
    "load_model_candidates",
    "recover_json",
]
