"""
Pydantic models for requirements, candidate profiles and match analyses.

Field names follow the stored document schema so analyses stay
interchangeable with existing records.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ExtractionMethod(str, Enum):
    """Where an analysis came from."""

    MODEL_DERIVED = "model-derived"  # Parsed from the reasoning service
    FALLBACK = "fallback"  # Deterministic rule/keyword path


FALLBACK_MODEL_VERSION = "fallback"


# -----------------------------------------------------------------------------
# Requirements
# -----------------------------------------------------------------------------


class NormalRequirement(BaseModel):
    """Publicly visible skill requirement."""

    skill_name: str
    required_level: str = Field(default="Intermediate", description="Basic | Intermediate | Advanced")
    weight: float = Field(default=5, ge=0, le=10)


class HiddenRequirement(BaseModel):
    """Confidential requirement, never shown to candidates."""

    skill_name: str
    importance: float = Field(default=7, ge=0, le=10)
    reason: Optional[str] = Field(default=None, description="Why this requirement is confidential")


class ExperienceRange(BaseModel):
    """Inferred experience bounds in years. max=None means unspecified."""

    min: float = Field(default=0, ge=0)
    max: Optional[float] = Field(default=None, ge=0)


class RequirementSet(BaseModel):
    """Normal + hidden requirements for one job."""

    model_config = ConfigDict(use_enum_values=True)

    job_id: str
    normal_skills: list[NormalRequirement] = Field(default_factory=list)
    hidden_skills: list[HiddenRequirement] = Field(default_factory=list)
    experience_required: ExperienceRange = Field(default_factory=ExperienceRange)
    extraction_method: ExtractionMethod
    confidence_score: int = Field(ge=0, le=100)
    ai_model_version: str = FALLBACK_MODEL_VERSION
    analyzed_at: datetime = Field(default_factory=utcnow)


# -----------------------------------------------------------------------------
# Candidate side
# -----------------------------------------------------------------------------


class CandidateSkill(BaseModel):
    """Skill extracted from a resume (read-only input)."""

    skill_name: str
    proficiency_level: Optional[str] = None
    years_of_experience: Optional[float] = None
    category: Optional[str] = None


class CandidateProfile(BaseModel):
    candidate_id: str
    skills: list[CandidateSkill] = Field(default_factory=list)
    education: list[str] = Field(default_factory=list)
    experience_years: float = 0


class JobContext(BaseModel):
    """Job details the matcher needs besides the requirement sets."""

    experience_min: float = 0
    experience_max: float = 10
    employment_type: str = "FULL_TIME"
    work_mode: str = "HYBRID"
    location: Optional[str] = None

    @classmethod
    def from_requirements(cls, requirements: RequirementSet, **overrides) -> "JobContext":
        """Build a context from the inferred experience range (0 or missing max -> 10)."""
        exp = requirements.experience_required
        data = {
            "experience_min": exp.min or 0,
            "experience_max": exp.max or 10,
        }
        data.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**data)


# -----------------------------------------------------------------------------
# Match analysis
# -----------------------------------------------------------------------------


class ScoreBreakdown(BaseModel):
    """The five-component score vector. Single source of truth for aggregates."""

    technical_skills_score: int = Field(default=0, ge=0, le=100)
    soft_skills_score: int = Field(default=0, ge=0, le=100)
    experience_score: int = Field(default=0, ge=0, le=100)
    education_score: int = Field(default=0, ge=0, le=100)
    hidden_criteria_score: int = Field(default=0, ge=0, le=100)


class MatchedSkill(BaseModel):
    skill_name: str
    resume_proficiency: Optional[str] = None
    required_proficiency: Optional[str] = None
    match_strength: int = Field(default=0, ge=0, le=100)
    is_hidden: bool = False


class MissingSkill(BaseModel):
    skill_name: str
    importance: str = "Medium"  # Critical | High | Medium | Low
    category: Optional[str] = None
    is_critical: bool = False


class ExtraSkill(BaseModel):
    skill_name: str
    value_add_score: int = Field(default=1, ge=1, le=10)


class Insights(BaseModel):
    """Narrative insight collections."""

    strengths: list[str] = Field(default_factory=list)
    weaknesses: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    red_flags: list[str] = Field(default_factory=list)
    unique_selling_points: list[str] = Field(default_factory=list)


class HiddenMatchAnalysis(BaseModel):
    """Confidential analysis block, operator eyes only."""

    cultural_fit_score: int = Field(default=0, ge=0, le=100)
    strategic_alignment_score: int = Field(default=0, ge=0, le=100)
    internal_notes: list[str] = Field(default_factory=list)
    flags: list[str] = Field(default_factory=list)


class MatchAnalysis(BaseModel):
    """Outcome of matching one candidate against one job."""

    model_config = ConfigDict(use_enum_values=True)

    candidate_id: str
    job_id: str
    scoring_breakdown: ScoreBreakdown = Field(default_factory=ScoreBreakdown)
    matched_skills: list[MatchedSkill] = Field(default_factory=list)
    missing_skills: list[MissingSkill] = Field(default_factory=list)
    extra_skills: list[ExtraSkill] = Field(default_factory=list)
    ai_insights: Insights = Field(default_factory=Insights)
    hidden_match_analysis: HiddenMatchAnalysis = Field(default_factory=HiddenMatchAnalysis)
    confidence_score: int = Field(default=0, ge=0, le=100)
    extraction_method: ExtractionMethod = ExtractionMethod.FALLBACK
    ai_model_version: str = FALLBACK_MODEL_VERSION
    processing_time_ms: int = Field(default=0, ge=0)


class JobPosting(BaseModel):
    """Job text as supplied by the job store."""

    job_id: str
    title: str = ""
    description: str = ""
    hidden_requirements: str = Field(default="", description="Confidential requirement text")
    experience_min: Optional[float] = None
    experience_max: Optional[float] = None
    employment_type: Optional[str] = None
    work_mode: Optional[str] = None
    location: Optional[str] = None

    def context_for(self, requirements: RequirementSet) -> JobContext:
        """Job details override what was inferred from the description."""
        return JobContext.from_requirements(
            requirements,
            experience_min=self.experience_min,
            experience_max=self.experience_max or None,
            employment_type=self.employment_type,
            work_mode=self.work_mode,
            location=self.location,
        )
