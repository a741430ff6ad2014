"""
Matching pipeline - analyze job → match candidate → score → store → read/rank.
"""

from .service import MatchingService, MatchStore

__all__ = ["MatchingService", "MatchStore"]
