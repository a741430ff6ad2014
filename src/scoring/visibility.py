"""
Role-scoped, read-time projections of stored match results and requirement sets.
"""

from enum import Enum
from typing import Any, Union

from shared.models import RequirementSet

from .aggregate import MatchResult

OPERATOR_ROLE_NAMES = {"admin", "operator"}

# Keys that carry (or are derived from) confidential criteria
CONFIDENTIAL_KEYS = ("overall_score", "public_score", "match_grade", "hidden_match_analysis")

# Requirement set fields a candidate may see
PUBLIC_REQUIREMENT_KEYS = ("job_id", "normal_skills")


class Role(str, Enum):
    OPERATOR = "operator"
    CANDIDATE = "candidate"


def parse_role(value: Union[str, Role, None]) -> Role:
    """Map a caller role (e.g. "ADMIN") to a Role; anything unknown is a candidate."""
    if isinstance(value, Role):
        return value
    if value and value.strip().lower() in OPERATOR_ROLE_NAMES:
        return Role.OPERATOR
    return Role.CANDIDATE


def operator_view(result: MatchResult) -> dict[str, Any]:
    """Everything, with the full score labelled as the match score."""
    view = result.model_dump(mode="json")
    view["match_score"] = view["overall_score"]
    return view


def restricted_view(result: MatchResult) -> dict[str, Any]:
    """
    Candidate-facing view.

    Only the restricted score is exposed (as match_score). The confidential
    analysis block, the hidden-criteria component, hidden-origin matched
    skills, the full score and the grade derived from it are removed.
    """
    view = result.model_dump(mode="json")
    view["match_score"] = view["public_score"]

    for key in CONFIDENTIAL_KEYS:
        view.pop(key, None)
    view["scoring_breakdown"].pop("hidden_criteria_score", None)
    view["matched_skills"] = [m for m in view["matched_skills"] if not m.get("is_hidden")]
    return view


def project(result: MatchResult, role: Union[str, Role, None]) -> dict[str, Any]:
    """Apply the visibility filter for the caller's role."""
    if parse_role(role) is Role.OPERATOR:
        return operator_view(result)
    return restricted_view(result)


def requirements_view(requirements: RequirementSet, role: Union[str, Role, None]) -> dict[str, Any]:
    """
    Role-scoped view of a job's requirement set.

    Candidates see only the public requirements; the hidden requirements and
    their reasons stay with operators.
    """
    view = requirements.model_dump(mode="json")
    if parse_role(role) is Role.OPERATOR:
        return view
    return {key: view[key] for key in PUBLIC_REQUIREMENT_KEYS}
