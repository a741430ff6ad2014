"""
Bulk triage of a job's match results.
Orders candidates by full score and assigns coarse decision bands.
"""

from dataclasses import dataclass, field
from typing import Iterable

from scoring.aggregate import MatchResult

SHORTLIST_SCORE = 75
HOLD_SCORE = 60


@dataclass
class RankedCandidate:
    """One row of a job's ranking."""

    candidate_id: str
    job_id: str
    rank: int
    overall_score: int
    match_grade: str
    decision: str


@dataclass
class GradeStatistics:
    grade: str
    count: int
    avg_score: float
    max_score: int
    min_score: int


@dataclass
class JobStatistics:
    job_id: str
    statistics: list[GradeStatistics] = field(default_factory=list)
    total: int = 0


def decision_for(score: int) -> str:
    """Triage band. Independent of (and coarser than) the grade."""
    if score >= SHORTLIST_SCORE:
        return "Shortlist"
    if score >= HOLD_SCORE:
        return "Hold"
    return "Reject"


def rank_results(results: Iterable[MatchResult]) -> list[RankedCandidate]:
    """Order by descending full score; ties keep their input order."""
    ordered = sorted(results, key=lambda r: r.overall_score, reverse=True)
    return [
        RankedCandidate(
            candidate_id=r.candidate_id,
            job_id=r.job_id,
            rank=position,
            overall_score=r.overall_score,
            match_grade=r.match_grade,
            decision=decision_for(r.overall_score),
        )
        for position, r in enumerate(ordered, start=1)
    ]


def top_matches(
    results: Iterable[MatchResult],
    limit: int = 10,
    min_score: int = 60,
) -> list[MatchResult]:
    """Best results at or above min_score, highest first."""
    eligible = [r for r in results if r.overall_score >= min_score]
    eligible.sort(key=lambda r: r.overall_score, reverse=True)
    return eligible[: max(0, limit)]


def grade_statistics(job_id: str, results: Iterable[MatchResult]) -> JobStatistics:
    """Count / average / max / min full score per grade, best average first."""
    by_grade: dict[str, list[int]] = {}
    for r in results:
        by_grade.setdefault(r.match_grade, []).append(r.overall_score)

    stats = [
        GradeStatistics(
            grade=name,
            count=len(scores),
            avg_score=round(sum(scores) / len(scores), 2),
            max_score=max(scores),
            min_score=min(scores),
        )
        for name, scores in by_grade.items()
    ]
    stats.sort(key=lambda s: s.avg_score, reverse=True)

    return JobStatistics(
        job_id=job_id,
        statistics=stats,
        total=sum(s.count for s in stats),
    )
