# Shared module for configuration, models, errors and logging
from .config import Settings, get_settings
from .errors import (
    ConfigurationError,
    InputError,
    MatchEngineError,
    PersistenceError,
)
from .models import (
    CandidateProfile,
    CandidateSkill,
    ExtractionMethod,
    HiddenRequirement,
    JobContext,
    MatchAnalysis,
    NormalRequirement,
    RequirementSet,
    ScoreBreakdown,
)

__all__ = [
    "Settings",
    "get_settings",
    "ConfigurationError",
    "InputError",
    "MatchEngineError",
    "PersistenceError",
    "CandidateProfile",
    "CandidateSkill",
    "ExtractionMethod",
    "HiddenRequirement",
    "JobContext",
    "MatchAnalysis",
    "NormalRequirement",
    "RequirementSet",
    "ScoreBreakdown",
]
