"""
Matcher Service - candidate profile vs. job requirements.

Asks the reasoning gateway for a five-component breakdown and falls back to
weighted skill matching when no model answers.
"""

from .decoding import decode_analysis
from .llm_matcher import CandidateMatcher
from .rule_matcher import rule_match

__all__ = ["CandidateMatcher", "decode_analysis", "rule_match"]
