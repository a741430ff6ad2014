"""
Candidate-to-job matching through the reasoning gateway, with a rule-based
fallback so a complete analysis is always returned.
"""

import time
from typing import Optional, Sequence

from loguru import logger

from gateway import ModelCandidate, ReasoningGateway, ReasoningSuccess
from shared.models import (
    CandidateProfile,
    HiddenRequirement,
    JobContext,
    MatchAnalysis,
    NormalRequirement,
)

from .decoding import decode_analysis
from .prompts import build_match_prompt
from .rule_matcher import rule_match


def _elapsed_ms(started: float) -> int:
    return int((time.perf_counter() - started) * 1000)


class CandidateMatcher:
    """Matches a candidate profile against a job's requirement sets."""

    def __init__(self, gateway: Optional[ReasoningGateway] = None):
        self.gateway = gateway or ReasoningGateway()

    async def match(
        self,
        profile: CandidateProfile,
        normal: list[NormalRequirement],
        hidden: list[HiddenRequirement],
        context: Optional[JobContext] = None,
        job_id: str = "",
        candidates: Optional[Sequence[ModelCandidate]] = None,
    ) -> MatchAnalysis:
        """
        Produce a MatchAnalysis. Never raises for reasoning failures.

        Returns:
            Model-derived analysis (confidence 95) or rule-based one (60)
        """
        context = context or JobContext()
        started = time.perf_counter()

        prompt = build_match_prompt(profile, normal, hidden, context)
        result = await self.gateway.run(prompt, candidates=candidates)

        if isinstance(result, ReasoningSuccess):
            analysis = decode_analysis(
                result.data,
                candidate_id=profile.candidate_id,
                job_id=job_id,
                model=result.model,
                processing_time_ms=_elapsed_ms(started),
            )
            logger.info(
                f"Matched candidate {profile.candidate_id} to job {job_id} with {result.model}"
            )
            return analysis

        logger.error(
            f"Reasoning failed for candidate {profile.candidate_id}, job {job_id} "
            f"({result.kind.value}), falling back to rules"
        )
        analysis = rule_match(profile, normal, hidden, context, job_id)
        analysis.processing_time_ms = _elapsed_ms(started)
        return analysis
