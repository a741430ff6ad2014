"""
Scoring - aggregate scores, grade and role-scoped views.
"""

from .aggregate import (
    MatchResult,
    build_match_result,
    full_score,
    grade,
    restricted_score,
)
from .visibility import (
    Role,
    operator_view,
    parse_role,
    project,
    requirements_view,
    restricted_view,
)

__all__ = [
    "MatchResult",
    "Role",
    "build_match_result",
    "full_score",
    "grade",
    "operator_view",
    "parse_role",
    "project",
    "requirements_view",
    "restricted_score",
    "restricted_view",
]
