"""
Matching service: wires extraction, matching, scoring and ranking to storage.
"""

from typing import Optional, Protocol, Union

from loguru import logger

from extractor import RequirementExtractor
from matcher import CandidateMatcher
from ranker import JobStatistics, RankedCandidate, grade_statistics, rank_results, top_matches
from scoring import MatchResult, Role, build_match_result, project, requirements_view
from shared.errors import InputError
from shared.models import CandidateProfile, JobContext, JobPosting, RequirementSet


class MatchStore(Protocol):
    """What the service needs from persistence (see shared.database.Database)."""

    async def save_requirement_set(self, requirements: RequirementSet) -> None: ...

    async def get_requirement_set(self, job_id: str) -> Optional[RequirementSet]: ...

    async def save_match_result(self, result: MatchResult) -> None: ...

    async def get_match_result(self, candidate_id: str, job_id: str) -> Optional[MatchResult]: ...

    async def get_match_results_by_job(
        self, job_id: str, limit: Optional[int] = None
    ) -> list[MatchResult]: ...

    async def get_match_results_by_candidate(
        self, candidate_id: str, limit: Optional[int] = None
    ) -> list[MatchResult]: ...

    async def delete_match_result(self, candidate_id: str, job_id: str) -> bool: ...


class MatchingService:
    """Request/response entry points for the matching engine."""

    def __init__(
        self,
        store: MatchStore,
        extractor: Optional[RequirementExtractor] = None,
        matcher: Optional[CandidateMatcher] = None,
    ):
        self.store = store
        self.extractor = extractor or RequirementExtractor()
        self.matcher = matcher or CandidateMatcher(self.extractor.gateway)

    async def analyze_job(self, job: JobPosting) -> RequirementSet:
        """Extract and store (create or replace) a job's requirement set."""
        requirements = await self.extractor.extract(
            job.job_id, job.description, job.hidden_requirements
        )
        await self.store.save_requirement_set(requirements)
        logger.info(
            f"Stored requirements for job {job.job_id} "
            f"({requirements.extraction_method}, confidence {requirements.confidence_score})"
        )
        return requirements

    async def match_candidate(
        self,
        profile: CandidateProfile,
        job_id: str,
        job: Optional[JobPosting] = None,
    ) -> MatchResult:
        """
        Match a candidate against an analyzed job and store the result.

        Raises:
            InputError: job not analyzed yet, or candidate has no skills
        """
        requirements = await self.store.get_requirement_set(job_id)
        if requirements is None:
            raise InputError(f"Job {job_id} has not been analyzed yet, run job analysis first")
        if not profile.skills:
            raise InputError(
                f"Candidate {profile.candidate_id} has no extracted skills, upload a resume first"
            )

        context = job.context_for(requirements) if job else JobContext.from_requirements(requirements)
        analysis = await self.matcher.match(
            profile,
            requirements.normal_skills,
            requirements.hidden_skills,
            context,
            job_id=job_id,
        )
        result = build_match_result(analysis)
        await self.store.save_match_result(result)

        logger.info(
            f"Candidate {profile.candidate_id} / job {job_id}: overall={result.overall_score} "
            f"public={result.public_score} grade={result.match_grade}"
        )
        return result

    async def get_result(
        self, candidate_id: str, job_id: str, role: Union[str, Role, None]
    ) -> Optional[dict]:
        """Stored result projected for the caller's role, or None."""
        result = await self.store.get_match_result(candidate_id, job_id)
        if result is None:
            return None
        return project(result, role)

    async def rank_job(self, job_id: str) -> list[RankedCandidate]:
        return rank_results(await self.store.get_match_results_by_job(job_id))

    async def top_matches(self, job_id: str, limit: int = 10, min_score: int = 60) -> list[MatchResult]:
        results = await self.store.get_match_results_by_job(job_id)
        return top_matches(results, limit=limit, min_score=min_score)

    async def job_statistics(self, job_id: str) -> JobStatistics:
        return grade_statistics(job_id, await self.store.get_match_results_by_job(job_id))

    async def get_requirements(self, job_id: str, role: Union[str, Role, None]) -> Optional[dict]:
        """Stored requirement set projected for the caller's role, or None."""
        requirements = await self.store.get_requirement_set(job_id)
        if requirements is None:
            return None
        return requirements_view(requirements, role)

    async def candidate_matches(self, candidate_id: str, role: Union[str, Role, None]) -> list[dict]:
        """Every stored result for a candidate, each projected for the caller's role."""
        results = await self.store.get_match_results_by_candidate(candidate_id)
        return [project(result, role) for result in results]

    async def delete_result(self, candidate_id: str, job_id: str) -> bool:
        """Remove a stored match result. False if there was none."""
        deleted = await self.store.delete_match_result(candidate_id, job_id)
        if deleted:
            logger.info(f"Deleted match result {candidate_id}/{job_id}")
        else:
            logger.warning(f"No match result to delete for {candidate_id}/{job_id}")
        return deleted
