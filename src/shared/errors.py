"""
Error taxonomy for the matching engine.

Failures inside the reasoning pipeline (a single model misbehaving, or every
model failing) are not exceptions: they travel as gateway result values and
end in a lower-confidence fallback. Only the conditions below reach callers.
"""


class MatchEngineError(Exception):
    """Base class for engine errors."""


class ConfigurationError(MatchEngineError):
    """Reasoning service credential (or other required setting) is missing."""


class InputError(MatchEngineError):
    """A required upstream entity is absent (job not analyzed, no candidate skills)."""


class PersistenceError(MatchEngineError):
    """Reading or writing a stored document failed."""
