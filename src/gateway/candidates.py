"""
Model candidate configuration.

Candidates come from a YAML file when REASONING_MODELS_PATH is set, otherwise
from the comma-separated REASONING_MODELS setting. They are read on every
call so a changed file or environment takes effect without a restart.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml
from loguru import logger

from shared.config import Settings, get_settings


@dataclass(frozen=True)
class ModelCandidate:
    """One reasoning model to try, with its own call ceiling."""

    name: str
    timeout_seconds: float = 300.0
    temperature: float = 0.2


def _from_entry(entry: Any, settings: Settings) -> Optional[ModelCandidate]:
    if isinstance(entry, str):
        name = entry.strip()
        if not name:
            return None
        return ModelCandidate(
            name=name,
            timeout_seconds=settings.reasoning_timeout_seconds,
            temperature=settings.reasoning_temperature,
        )

    if isinstance(entry, dict) and entry.get("name"):
        return ModelCandidate(
            name=str(entry["name"]).strip(),
            timeout_seconds=float(
                entry.get("timeout_seconds", settings.reasoning_timeout_seconds)
            ),
            temperature=float(entry.get("temperature", settings.reasoning_temperature)),
        )

    logger.warning(f"Ignoring malformed model candidate entry: {entry!r}")
    return None


def load_candidates_file(path: Path, settings: Settings) -> list[ModelCandidate]:
    """Load candidates from YAML (a top-level `models:` list)."""
    with open(path) as f:
        data = yaml.safe_load(f) or {}

    entries = data.get("models", []) if isinstance(data, dict) else data
    candidates = [c for c in (_from_entry(e, settings) for e in entries or []) if c]
    logger.debug(f"Loaded {len(candidates)} model candidates from {path}")
    return candidates


def load_model_candidates(settings: Optional[Settings] = None) -> list[ModelCandidate]:
    """Resolve the ordered candidate list from settings."""
    settings = settings or get_settings()

    path = settings.reasoning_models_path
    if path is not None:
        if path.exists():
            return load_candidates_file(path, settings)
        logger.warning(f"Model candidates file not found: {path}, using REASONING_MODELS")

    return [
        c
        for c in (_from_entry(name, settings) for name in settings.reasoning_models_list)
        if c
    ]
