"""
Deterministic rule-based matching, used when the reasoning service fails.
"""

from loguru import logger

from shared.coerce import round_half_up
from shared.models import (
    FALLBACK_MODEL_VERSION,
    CandidateProfile,
    ExtractionMethod,
    HiddenMatchAnalysis,
    HiddenRequirement,
    Insights,
    JobContext,
    MatchAnalysis,
    MatchedSkill,
    MissingSkill,
    NormalRequirement,
    ScoreBreakdown,
)

FALLBACK_CONFIDENCE = 60
EDUCATION_BASELINE = 60
SOFT_SKILLS_BASELINE = 50
MATCH_STRENGTH = 80
OVERQUALIFIED_SCORE = 80
UNDERQUALIFIED_CEILING = 70
HIGH_IMPORTANCE_WEIGHT = 7
CRITICAL_WEIGHT = 8


def weighted_coverage(matched_weight: float, total_weight: float) -> int:
    """Share of requirement weight covered, 0-100; 0 when nothing is required."""
    if total_weight <= 0:
        return 0
    return round_half_up(100 * matched_weight / total_weight)


def experience_score(years: float, context: JobContext) -> int:
    """100 inside the range, linear up to 70 below it, 80 above it."""
    if context.experience_min <= years <= context.experience_max:
        return 100
    if years < context.experience_min:
        if context.experience_min <= 0:
            return 0
        return max(0, round_half_up(UNDERQUALIFIED_CEILING * years / context.experience_min))
    return OVERQUALIFIED_SCORE


def rule_match(
    profile: CandidateProfile,
    normal: list[NormalRequirement],
    hidden: list[HiddenRequirement],
    context: JobContext,
    job_id: str,
) -> MatchAnalysis:
    """Score a candidate by exact (case-insensitive) skill-name matching."""
    logger.warning(f"Using rule-based matching for candidate {profile.candidate_id}, job {job_id}")

    skills = {s.skill_name.strip().lower(): s for s in profile.skills if s.skill_name}

    matched: list[MatchedSkill] = []
    missing: list[MissingSkill] = []
    normal_hit = normal_total = 0.0

    for req in normal:
        normal_total += req.weight
        skill = skills.get(req.skill_name.strip().lower())
        if skill is not None:
            normal_hit += req.weight
            matched.append(
                MatchedSkill(
                    skill_name=req.skill_name,
                    resume_proficiency=skill.proficiency_level,
                    required_proficiency=req.required_level,
                    match_strength=MATCH_STRENGTH,
                )
            )
        else:
            missing.append(
                MissingSkill(
                    skill_name=req.skill_name,
                    importance="High" if req.weight >= HIGH_IMPORTANCE_WEIGHT else "Medium",
                    is_critical=req.weight >= CRITICAL_WEIGHT,
                )
            )

    hidden_hit = hidden_total = 0.0
    for req in hidden:
        hidden_total += req.importance
        skill = skills.get(req.skill_name.strip().lower())
        if skill is not None:
            hidden_hit += req.importance
            matched.append(
                MatchedSkill(
                    skill_name=req.skill_name,
                    resume_proficiency=skill.proficiency_level,
                    match_strength=MATCH_STRENGTH,
                    is_hidden=True,
                )
            )

    technical = weighted_coverage(normal_hit, normal_total)
    hidden_score = weighted_coverage(hidden_hit, hidden_total)
    visible_matches = [m for m in matched if not m.is_hidden]

    return MatchAnalysis(
        candidate_id=profile.candidate_id,
        job_id=job_id,
        scoring_breakdown=ScoreBreakdown(
            technical_skills_score=technical,
            soft_skills_score=SOFT_SKILLS_BASELINE,
            experience_score=experience_score(profile.experience_years, context),
            education_score=EDUCATION_BASELINE,
            hidden_criteria_score=hidden_score,
        ),
        matched_skills=matched,
        missing_skills=missing,
        extra_skills=[],
        ai_insights=Insights(
            strengths=[f"Has {m.skill_name}" for m in visible_matches[:5]],
            weaknesses=[f"Missing {m.skill_name}" for m in missing[:3]],
            recommendations=["Consider additional skill development"],
        ),
        hidden_match_analysis=HiddenMatchAnalysis(strategic_alignment_score=hidden_score),
        confidence_score=FALLBACK_CONFIDENCE,
        extraction_method=ExtractionMethod.FALLBACK,
        ai_model_version=FALLBACK_MODEL_VERSION,
    )
