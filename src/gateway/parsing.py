"""
Recovery of JSON objects from free-form model output.
"""

import json
import re
from typing import Any, Optional

# Greedy: spans from the first "{" to the last "}"
_BRACE_BLOCK = re.compile(r"\{[\s\S]*\}")
_FENCE = re.compile(r"```(?:json)?", re.IGNORECASE)


def _load_object(text: str) -> Optional[dict[str, Any]]:
    try:
        value = json.loads(text)
    except (json.JSONDecodeError, ValueError):
        return None
    return value if isinstance(value, dict) else None


def recover_json(text: Optional[str]) -> Optional[dict[str, Any]]:
    """
    Extract a JSON object from model output.

    Tries the largest brace-delimited substring first, then the text with
    markdown code fences stripped. Returns None when neither parses to an
    object.
    """
    if not text or not isinstance(text, str):
        return None

    match = _BRACE_BLOCK.search(text)
    if match:
        parsed = _load_object(match.group(0))
        if parsed is not None:
            return parsed

    cleaned = _FENCE.sub("", text).strip()
    return _load_object(cleaned)
