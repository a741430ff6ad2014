"""
Ranker - orders a job's match results for bulk review.
"""

from .ranking import (
    GradeStatistics,
    JobStatistics,
    RankedCandidate,
    decision_for,
    grade_statistics,
    rank_results,
    top_matches,
)

__all__ = [
    "GradeStatistics",
    "JobStatistics",
    "RankedCandidate",
    "decision_for",
    "grade_statistics",
    "rank_results",
    "top_matches",
]
