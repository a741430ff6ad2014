"""
Score aggregation: full (operator) and restricted (candidate) scores plus a
grade, all derived from the five-component breakdown.
"""

from datetime import datetime
from typing import Any

from pydantic import Field, computed_field

from shared.coerce import round_half_up
from shared.models import MatchAnalysis, ScoreBreakdown, utcnow

# soft_skills_score is stored but carries no weight in either sum
FULL_WEIGHTS = {
    "technical_skills_score": 0.40,
    "experience_score": 0.20,
    "education_score": 0.10,
    "hidden_criteria_score": 0.30,
}
RESTRICTED_WEIGHTS = {
    "technical_skills_score": 0.60,
    "experience_score": 0.30,
    "education_score": 0.10,
}

GRADE_THRESHOLDS = (
    (80, "Excellent"),
    (65, "Good"),
    (50, "Fair"),
)


def _weighted(breakdown: ScoreBreakdown, weights: dict[str, float]) -> int:
    total = sum(getattr(breakdown, name) * weight for name, weight in weights.items())
    return max(0, min(100, round_half_up(total)))


def full_score(breakdown: ScoreBreakdown) -> int:
    """Operator score, includes hidden criteria."""
    return _weighted(breakdown, FULL_WEIGHTS)


def restricted_score(breakdown: ScoreBreakdown) -> int:
    """Candidate-visible score, excludes hidden criteria."""
    return _weighted(breakdown, RESTRICTED_WEIGHTS)


def grade(score: int) -> str:
    for threshold, label in GRADE_THRESHOLDS:
        if score >= threshold:
            return label
    return "Poor"


class MatchResult(MatchAnalysis):
    """
    Persisted match record.

    The scores and grade are computed fields: they are recalculated from the
    breakdown whenever they are read or serialised, so a stored or
    model-proposed aggregate can never override the formulas.
    """

    analyzed_at: datetime = Field(default_factory=utcnow)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def overall_score(self) -> int:
        return full_score(self.scoring_breakdown)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def public_score(self) -> int:
        return restricted_score(self.scoring_breakdown)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def match_grade(self) -> str:
        return grade(self.overall_score)

    def to_document(self) -> dict[str, Any]:
        """Serialise for storage (scores included for indexed queries)."""
        return self.model_dump(mode="python")


def build_match_result(analysis: MatchAnalysis) -> MatchResult:
    """Wrap an analysis as a MatchResult."""
    return MatchResult(**analysis.model_dump())
