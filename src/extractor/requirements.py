"""
Requirement extraction: job description + confidential text -> RequirementSet.
Uses the reasoning gateway and falls back to a keyword scan.
"""

from dataclasses import dataclass
from typing import Any, Optional, Sequence

from loguru import logger

from gateway import ModelCandidate, ReasoningGateway, ReasoningSuccess
from shared.coerce import clamp_float, to_dict_list, to_number, to_text
from shared.models import (
    FALLBACK_MODEL_VERSION,
    ExperienceRange,
    ExtractionMethod,
    HiddenRequirement,
    NormalRequirement,
    RequirementSet,
)

from .prompts import build_requirements_prompt

MODEL_CONFIDENCE = 95
FALLBACK_CONFIDENCE = 30

FALLBACK_KEYWORDS: tuple[str, ...] = (
    "Java",
    "Python",
    "JavaScript",
    "Node",
    "React",
    "SQL",
    "MongoDB",
    "AWS",
    "Docker",
    "Kubernetes",
)
FALLBACK_WEIGHT = 5
FALLBACK_LEVEL = "Intermediate"
FALLBACK_IMPORTANCE = 7

LEVELS = {"basic": "Basic", "intermediate": "Intermediate", "advanced": "Advanced"}


@dataclass
class DecodedRequirements:
    normal_skills: list[NormalRequirement]
    hidden_skills: list[HiddenRequirement]
    experience_required: ExperienceRange


def decode_requirements(raw: dict[str, Any]) -> DecodedRequirements:
    """
    Convert the raw model object into typed requirements.

    Defaults: missing arrays -> [], entries without skill_name dropped,
    weight -> 5 and importance -> 7 (both clamped to 1-10), unknown
    required_level -> "Intermediate", experience min -> 0, max -> None.
    """
    normal = []
    for entry in to_dict_list(raw.get("normal_skills")):
        name = to_text(entry.get("skill_name"))
        if not name:
            continue
        level = LEVELS.get(str(entry.get("required_level", "")).strip().lower(), FALLBACK_LEVEL)
        normal.append(
            NormalRequirement(
                skill_name=name,
                required_level=level,
                weight=clamp_float(entry.get("weight"), 1, 10, FALLBACK_WEIGHT),
            )
        )

    hidden = []
    for entry in to_dict_list(raw.get("hidden_skills")):
        name = to_text(entry.get("skill_name"))
        if not name:
            continue
        hidden.append(
            HiddenRequirement(
                skill_name=name,
                importance=clamp_float(entry.get("importance"), 1, 10, FALLBACK_IMPORTANCE),
                reason=to_text(entry.get("reason")),
            )
        )

    experience = raw.get("experience_required")
    if not isinstance(experience, dict):
        experience = {}
    exp_min = to_number(experience.get("min"))
    exp_max = to_number(experience.get("max"))
    exp_min = max(0.0, exp_min) if exp_min is not None else 0.0
    if exp_max is not None and exp_max < exp_min:
        exp_max = None

    return DecodedRequirements(
        normal_skills=normal,
        hidden_skills=hidden,
        experience_required=ExperienceRange(min=exp_min, max=exp_max),
    )


def _mentions(keyword: str, text: str) -> bool:
    return keyword.lower() in (text or "").lower()


def keyword_fallback(
    job_id: str,
    description: str = "",
    hidden_requirements: str = "",
    keywords: Sequence[str] = FALLBACK_KEYWORDS,
) -> RequirementSet:
    """
    Deterministic extraction by substring scan of a fixed vocabulary.

    Terms in the public description become normal requirements; terms found
    only in the confidential text become hidden requirements.
    """
    logger.warning(f"Using keyword fallback for job {job_id}")

    normal = [
        NormalRequirement(skill_name=kw, required_level=FALLBACK_LEVEL, weight=FALLBACK_WEIGHT)
        for kw in keywords
        if _mentions(kw, description)
    ]
    hidden = [
        HiddenRequirement(skill_name=kw, importance=FALLBACK_IMPORTANCE)
        for kw in keywords
        if _mentions(kw, hidden_requirements) and not _mentions(kw, description)
    ]

    return RequirementSet(
        job_id=job_id,
        normal_skills=normal,
        hidden_skills=hidden,
        experience_required=ExperienceRange(),
        extraction_method=ExtractionMethod.FALLBACK,
        confidence_score=FALLBACK_CONFIDENCE,
        ai_model_version=FALLBACK_MODEL_VERSION,
    )


class RequirementExtractor:
    """Turns job text into normal and hidden requirement sets."""

    def __init__(
        self,
        gateway: Optional[ReasoningGateway] = None,
        keywords: Sequence[str] = FALLBACK_KEYWORDS,
    ):
        self.gateway = gateway or ReasoningGateway()
        self.keywords = tuple(keywords)

    async def extract(
        self,
        job_id: str,
        description: str,
        hidden_requirements: str = "",
        candidates: Optional[Sequence[ModelCandidate]] = None,
    ) -> RequirementSet:
        """
        Analyze a job. Never raises for reasoning failures.

        Returns:
            RequirementSet tagged model-derived (confidence 95) or fallback (30)
        """
        logger.info(f"Extracting requirements for job {job_id}")
        prompt = build_requirements_prompt(description, hidden_requirements)
        result = await self.gateway.run(prompt, candidates=candidates)

        if not isinstance(result, ReasoningSuccess):
            logger.error(f"Reasoning failed for job {job_id} ({result.kind.value})")
            return keyword_fallback(job_id, description, hidden_requirements, self.keywords)

        decoded = decode_requirements(result.data)
        logger.info(
            f"Job {job_id}: {len(decoded.normal_skills)} normal, "
            f"{len(decoded.hidden_skills)} hidden requirements ({result.model})"
        )
        return RequirementSet(
            job_id=job_id,
            normal_skills=decoded.normal_skills,
            hidden_skills=decoded.hidden_skills,
            experience_required=decoded.experience_required,
            extraction_method=ExtractionMethod.MODEL_DERIVED,
            confidence_score=MODEL_CONFIDENCE,
            ai_model_version=result.model,
        )
