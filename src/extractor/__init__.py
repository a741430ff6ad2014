"""
Requirement Extractor - job text to normal/hidden requirement sets.
"""

from .requirements import (
    FALLBACK_KEYWORDS,
    RequirementExtractor,
    decode_requirements,
    keyword_fallback,
)

__all__ = [
    "FALLBACK_KEYWORDS",
    "RequirementExtractor",
    "decode_requirements",
    "keyword_fallback",
]
