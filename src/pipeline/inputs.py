"""
YAML loaders for job postings and candidate profiles used by the CLI.
"""

from pathlib import Path

import yaml
from loguru import logger
from pydantic import ValidationError

from shared.errors import InputError
from shared.models import CandidateProfile, JobPosting


def _load_yaml(path: Path) -> dict:
    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")

    with open(path) as f:
        data = yaml.safe_load(f)

    if not isinstance(data, dict):
        raise InputError(f"Expected a mapping at the top of {path}")
    return data


def load_job_posting(path: Path) -> JobPosting:
    """
    Load a job posting, e.g.:

        job_id: "42"
        description: |
          Backend engineer, Java and Kubernetes...
        hidden_requirements: |
          Startup mindset, can mentor juniors
        experience_min: 2
        experience_max: 5
    """
    data = _load_yaml(path)
    if data.get("job_id") is not None:
        data["job_id"] = str(data["job_id"])
    try:
        job = JobPosting(**data)
    except ValidationError as e:
        raise InputError(f"Invalid job posting in {path}: {e}") from e
    logger.info(f"Loaded job posting {job.job_id}")
    return job


def load_candidate_profile(path: Path) -> CandidateProfile:
    """
    Load an extracted candidate profile. Skills may be given as plain names
    or as mappings with skill_name/proficiency_level/years_of_experience/category.
    """
    data = _load_yaml(path)
    if data.get("candidate_id") is not None:
        data["candidate_id"] = str(data["candidate_id"])
    data["skills"] = [
        {"skill_name": s} if isinstance(s, str) else s for s in data.get("skills") or []
    ]
    try:
        profile = CandidateProfile(**data)
    except ValidationError as e:
        raise InputError(f"Invalid candidate profile in {path}: {e}") from e
    logger.info(f"Loaded profile for candidate {profile.candidate_id} ({len(profile.skills)} skills)")
    return profile
