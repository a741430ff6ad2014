"""
Decoding boundary for model-produced match analyses.

Every "absent -> default" rule for the untyped response lives here:
scores missing or non-numeric -> 0, scores clamped to 0-100, value-add
clamped to 1-10, lists missing -> [], list entries without a skill_name
dropped. Aggregates or grades proposed by the model are never read.
"""

from typing import Any

from shared.coerce import clamp_int, to_dict_list, to_str_list, to_text
from shared.models import (
    ExtraSkill,
    ExtractionMethod,
    HiddenMatchAnalysis,
    Insights,
    MatchAnalysis,
    MatchedSkill,
    MissingSkill,
    ScoreBreakdown,
)

MODEL_CONFIDENCE = 95

IMPORTANCE_LEVELS = {"critical": "Critical", "high": "High", "medium": "Medium", "low": "Low"}


def _flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return value is True


def _section(raw: dict[str, Any], key: str) -> dict[str, Any]:
    value = raw.get(key)
    return value if isinstance(value, dict) else {}


def decode_breakdown(raw: dict[str, Any]) -> ScoreBreakdown:
    scores = _section(raw, "scoring_breakdown")
    return ScoreBreakdown(
        technical_skills_score=clamp_int(scores.get("technical_skills_score")),
        soft_skills_score=clamp_int(scores.get("soft_skills_score")),
        experience_score=clamp_int(scores.get("experience_score")),
        education_score=clamp_int(scores.get("education_score")),
        hidden_criteria_score=clamp_int(scores.get("hidden_criteria_score")),
    )


def decode_matched(raw: dict[str, Any]) -> list[MatchedSkill]:
    matched = []
    for entry in to_dict_list(raw.get("matched_skills")):
        name = to_text(entry.get("skill_name"))
        if not name:
            continue
        matched.append(
            MatchedSkill(
                skill_name=name,
                resume_proficiency=to_text(entry.get("resume_proficiency")),
                required_proficiency=to_text(entry.get("required_proficiency")),
                match_strength=clamp_int(entry.get("match_strength")),
                is_hidden=_flag(entry.get("is_hidden")),
            )
        )
    return matched


def decode_missing(raw: dict[str, Any]) -> list[MissingSkill]:
    missing = []
    for entry in to_dict_list(raw.get("missing_skills")):
        name = to_text(entry.get("skill_name"))
        if not name:
            continue
        importance = IMPORTANCE_LEVELS.get(str(entry.get("importance", "")).strip().lower(), "Medium")
        missing.append(
            MissingSkill(
                skill_name=name,
                importance=importance,
                category=to_text(entry.get("category")),
                is_critical=_flag(entry.get("is_critical")),
            )
        )
    return missing


def decode_extra(raw: dict[str, Any]) -> list[ExtraSkill]:
    return [
        ExtraSkill(
            skill_name=to_text(entry.get("skill_name")),
            value_add_score=clamp_int(entry.get("value_add_score"), low=1, high=10, default=1),
        )
        for entry in to_dict_list(raw.get("extra_skills"))
        if to_text(entry.get("skill_name"))
    ]


def decode_insights(raw: dict[str, Any]) -> Insights:
    insights = _section(raw, "ai_insights")
    return Insights(
        strengths=to_str_list(insights.get("strengths")),
        weaknesses=to_str_list(insights.get("weaknesses")),
        recommendations=to_str_list(insights.get("recommendations")),
        red_flags=to_str_list(insights.get("red_flags")),
        unique_selling_points=to_str_list(insights.get("unique_selling_points")),
    )


def decode_hidden_analysis(raw: dict[str, Any]) -> HiddenMatchAnalysis:
    hidden = _section(raw, "hidden_match_analysis")
    return HiddenMatchAnalysis(
        cultural_fit_score=clamp_int(hidden.get("cultural_fit_score")),
        strategic_alignment_score=clamp_int(hidden.get("strategic_alignment_score")),
        internal_notes=to_str_list(hidden.get("internal_notes")),
        flags=to_str_list(hidden.get("flags")),
    )


def decode_analysis(
    raw: dict[str, Any],
    candidate_id: str,
    job_id: str,
    model: str,
    processing_time_ms: int = 0,
) -> MatchAnalysis:
    """Convert a raw model object into a typed MatchAnalysis."""
    return MatchAnalysis(
        candidate_id=candidate_id,
        job_id=job_id,
        scoring_breakdown=decode_breakdown(raw),
        matched_skills=decode_matched(raw),
        missing_skills=decode_missing(raw),
        extra_skills=decode_extra(raw),
        ai_insights=decode_insights(raw),
        hidden_match_analysis=decode_hidden_analysis(raw),
        confidence_score=MODEL_CONFIDENCE,
        extraction_method=ExtractionMethod.MODEL_DERIVED,
        ai_model_version=model,
        processing_time_ms=max(0, processing_time_ms),
    )
