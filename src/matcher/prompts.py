"""
Prompt for candidate-to-job matching.
"""

import json

from shared.models import CandidateProfile, HiddenRequirement, JobContext, NormalRequirement

MATCH_PROMPT = """You are an expert recruitment analyst specializing in resume-to-job matching and candidate evaluation. Hiring managers will use your analysis to decide whether the candidate fits this role.

## INPUT DATA

### CANDIDATE PROFILE:
{profile}

### JOB REQUIREMENTS (technical skills, public):
{normal}

### HIDDEN REQUIREMENTS (cultural/soft skills, internal):
{hidden}

### JOB DETAILS:
- Experience Required: {exp_min:g}-{exp_max:g} years
- Employment Type: {employment_type}
- Work Mode: {work_mode}
- Location: {location}

## SCORING
Score each category from 0 to 100:
- technical_skills_score: programming languages, frameworks, tools vs. the public requirements
- soft_skills_score: communication, leadership, teamwork, problem-solving
- experience_score: relevant experience vs. the required range
- education_score: relevance of education and certifications
- hidden_criteria_score: fit against the hidden requirements

The aggregates are computed from your breakdown with these exact formulas:
- overall = round(0.40*technical_skills_score + 0.20*experience_score + 0.10*education_score + 0.30*hidden_criteria_score)
- public = round(0.60*technical_skills_score + 0.30*experience_score + 0.10*education_score)
Grades: "Excellent" (80-100), "Good" (65-79), "Fair" (50-64), "Poor" (0-49).

## DETAILS
- matched_skills: requirements the candidate meets (skill_name, resume_proficiency, required_proficiency, match_strength 0-100, is_hidden true when the requirement is a hidden one)
- missing_skills: requirements the candidate lacks (skill_name, importance "Critical"|"High"|"Medium"|"Low", category, is_critical)
- extra_skills: valuable skills beyond the requirements (skill_name, value_add_score 1-10)
- ai_insights: strengths, weaknesses, recommendations, red_flags, unique_selling_points (lists of short sentences)
- hidden_match_analysis (internal only): cultural_fit_score 0-100, strategic_alignment_score 0-100, internal_notes, flags

## OUTPUT FORMAT
Return ONLY valid JSON with exactly this structure, no markdown:

{{
  "scoring_breakdown": {{
    "technical_skills_score": 90,
    "soft_skills_score": 75,
    "experience_score": 85,
    "education_score": 80,
    "hidden_criteria_score": 88
  }},
  "matched_skills": [
    {{"skill_name": "Java", "resume_proficiency": "Advanced", "required_proficiency": "Advanced", "match_strength": 95, "is_hidden": false}}
  ],
  "missing_skills": [
    {{"skill_name": "Kubernetes", "importance": "Medium", "category": "DevOps", "is_critical": false}}
  ],
  "extra_skills": [
    {{"skill_name": "Machine Learning", "value_add_score": 7}}
  ],
  "ai_insights": {{
    "strengths": [],
    "weaknesses": [],
    "recommendations": [],
    "red_flags": [],
    "unique_selling_points": []
  }},
  "hidden_match_analysis": {{
    "cultural_fit_score": 85,
    "strategic_alignment_score": 90,
    "internal_notes": [],
    "flags": []
  }}
}}

JSON:"""


def build_match_prompt(
    profile: CandidateProfile,
    normal: list[NormalRequirement],
    hidden: list[HiddenRequirement],
    context: JobContext,
) -> str:
    resume = {
        "skills": [s.model_dump(exclude_none=True) for s in profile.skills],
        "education": profile.education,
        "experience_years": profile.experience_years,
    }
    return MATCH_PROMPT.format(
        profile=json.dumps(resume, indent=2),
        normal=json.dumps([r.model_dump() for r in normal], indent=2),
        hidden=json.dumps([r.model_dump(exclude_none=True) for r in hidden], indent=2),
        exp_min=context.experience_min,
        exp_max=context.experience_max,
        employment_type=context.employment_type,
        work_mode=context.work_mode,
        location=context.location or "Not specified",
    )
