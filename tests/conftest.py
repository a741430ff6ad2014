"""
Pytest configuration and shared fixtures.
"""

import asyncio
from types import SimpleNamespace
from typing import Any, Optional

import pytest
from pydantic import SecretStr

from gateway import ModelCandidate, ReasoningGateway
from scoring import MatchResult
from shared.config import Settings
from shared.models import (
    CandidateProfile,
    CandidateSkill,
    ExtractionMethod,
    HiddenRequirement,
    NormalRequirement,
    RequirementSet,
    ScoreBreakdown,
)


def completion(content: Optional[str]) -> SimpleNamespace:
    """Shape of an OpenAI chat completion, as far as the gateway reads it."""
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


class FakeCompletions:
    """
    Scripted chat.completions endpoint.

    `replies` maps a model name to a list of outcomes consumed in order. An
    outcome is a string (response content), None (empty content), an
    exception instance (raised) or the string "<hang>" (never returns).
    """

    def __init__(self, replies: dict[str, list[Any]]):
        self.replies = {model: list(outcomes) for model, outcomes in replies.items()}
        self.calls: list[dict[str, Any]] = []

    async def create(self, model: str, messages: list[dict[str, str]], **kwargs):
        self.calls.append({"model": model, "messages": messages, **kwargs})
        outcomes = self.replies.get(model) or [RuntimeError(f"unknown model {model}")]
        outcome = outcomes.pop(0) if len(outcomes) > 1 else outcomes[0]

        if isinstance(outcome, BaseException):
            raise outcome
        if outcome == "<hang>":
            await asyncio.sleep(3600)
        return completion(outcome)

    @property
    def models_called(self) -> list[str]:
        return [call["model"] for call in self.calls]


class FakeClient:
    def __init__(self, replies: dict[str, list[Any]]):
        self.chat = SimpleNamespace(completions=FakeCompletions(replies))

    @property
    def completions(self) -> FakeCompletions:
        return self.chat.completions


class MemoryStore:
    """In-memory stand-in for shared.database.Database."""

    def __init__(self):
        self.requirement_sets: dict[str, RequirementSet] = {}
        self.match_results: dict[tuple[str, str], MatchResult] = {}

    async def save_requirement_set(self, requirements: RequirementSet) -> None:
        self.requirement_sets[requirements.job_id] = requirements

    async def get_requirement_set(self, job_id: str) -> Optional[RequirementSet]:
        return self.requirement_sets.get(job_id)

    async def save_match_result(self, result: MatchResult) -> None:
        self.match_results[(result.candidate_id, result.job_id)] = result

    async def get_match_result(self, candidate_id: str, job_id: str) -> Optional[MatchResult]:
        return self.match_results.get((candidate_id, job_id))

    async def get_match_results_by_job(
        self, job_id: str, limit: Optional[int] = None
    ) -> list[MatchResult]:
        return [r for (_, j), r in self.match_results.items() if j == job_id][:limit]

    async def get_match_results_by_candidate(
        self, candidate_id: str, limit: Optional[int] = None
    ) -> list[MatchResult]:
        return [r for (c, _), r in self.match_results.items() if c == candidate_id][:limit]

    async def delete_match_result(self, candidate_id: str, job_id: str) -> bool:
        return self.match_results.pop((candidate_id, job_id), None) is not None


@pytest.fixture
def settings() -> Settings:
    """Settings with a credential and no .env influence."""
    return Settings(
        _env_file=None,
        reasoning_api_key=SecretStr("test-key"),
        reasoning_models="model-a,model-b",
        reasoning_models_path=None,
        reasoning_retries=0,
    )


@pytest.fixture
def no_key_settings() -> Settings:
    return Settings(_env_file=None, reasoning_api_key=SecretStr(""), reasoning_models_path=None)


@pytest.fixture
def make_gateway(settings):
    """Build a gateway over a scripted fake client."""

    def factory(replies: dict[str, list[Any]], gateway_settings: Optional[Settings] = None):
        client = FakeClient(replies)
        gateway = ReasoningGateway(settings=gateway_settings or settings, client=client)
        return gateway, client.completions

    return factory


@pytest.fixture
def failing_gateway(make_gateway):
    """Gateway whose every candidate errors, so callers take the fallback path."""
    gateway, _ = make_gateway(
        {"model-a": [RuntimeError("boom")], "model-b": [RuntimeError("boom")]}
    )
    return gateway


@pytest.fixture
def candidates() -> list[ModelCandidate]:
    return [
        ModelCandidate(name="model-a", timeout_seconds=5),
        ModelCandidate(name="model-b", timeout_seconds=5),
    ]


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def java_profile() -> CandidateProfile:
    return CandidateProfile(
        candidate_id="cand-1",
        skills=[
            CandidateSkill(skill_name="Java", proficiency_level="Advanced", years_of_experience=4),
            CandidateSkill(skill_name="docker", proficiency_level="Intermediate"),
        ],
        education=["BSc Computer Science"],
        experience_years=3,
    )


@pytest.fixture
def backend_requirements() -> RequirementSet:
    return RequirementSet(
        job_id="job-1",
        normal_skills=[
            NormalRequirement(skill_name="Java", required_level="Advanced", weight=10),
            NormalRequirement(skill_name="Kubernetes", required_level="Intermediate", weight=8),
            NormalRequirement(skill_name="Docker", required_level="Basic", weight=5),
        ],
        hidden_skills=[HiddenRequirement(skill_name="Mentoring", importance=8)],
        extraction_method=ExtractionMethod.FALLBACK,
        confidence_score=30,
    )


@pytest.fixture
def make_result():
    """Build a MatchResult from breakdown components."""

    def factory(
        candidate_id: str = "cand-1",
        job_id: str = "job-1",
        technical: int = 0,
        soft: int = 0,
        experience: int = 0,
        education: int = 0,
        hidden: int = 0,
        **fields,
    ) -> MatchResult:
        return MatchResult(
            candidate_id=candidate_id,
            job_id=job_id,
            scoring_breakdown=ScoreBreakdown(
                technical_skills_score=technical,
                soft_skills_score=soft,
                experience_score=experience,
                education_score=education,
                hidden_criteria_score=hidden,
            ),
            **fields,
        )

    return factory


@pytest.fixture
def scored_result(make_result):
    """A result with a chosen full score."""

    def factory(score: int, candidate_id: str = "cand-1", job_id: str = "job-1") -> MatchResult:
        # Full weights sum to 1.0, so equal weighted components give that score
        return make_result(
            candidate_id=candidate_id,
            job_id=job_id,
            technical=score,
            experience=score,
            education=score,
            hidden=score,
        )

    return factory
