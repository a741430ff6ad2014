"""
Reasoning gateway: calls an OpenAI-compatible endpoint across an ordered list
of model candidates and returns the first structured (JSON object) answer.
"""

import asyncio
import random
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Optional, Sequence, Union

import httpx
from loguru import logger
from openai import AsyncOpenAI

from shared.config import Settings, get_settings
from shared.errors import ConfigurationError

from .candidates import ModelCandidate, load_model_candidates
from .parsing import recover_json


class AttemptOutcome(str, Enum):
    OK = "ok"
    EMPTY = "empty"
    UNPARSEABLE = "unparseable"
    TIMEOUT = "timeout"
    ERROR = "error"


class FailureKind(str, Enum):
    CONFIGURATION = "configuration"  # No credential, nothing attempted
    NO_CANDIDATES = "no_candidates"
    EXHAUSTED = "exhausted"  # Every candidate failed


@dataclass
class Attempt:
    """Trace entry for one call to one candidate."""

    model: str
    outcome: AttemptOutcome
    detail: str = ""
    elapsed_ms: int = 0


@dataclass
class ReasoningSuccess:
    data: dict[str, Any]
    model: str
    attempts: list[Attempt] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return True


@dataclass
class ReasoningFailure:
    kind: FailureKind
    attempts: list[Attempt] = field(default_factory=list)
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return False


ReasoningResult = Union[ReasoningSuccess, ReasoningFailure]

CandidateProvider = Callable[[], Sequence[ModelCandidate]]


class ReasoningGateway:
    """
    Tries model candidates strictly in order until one returns a JSON object.

    Ordinary operational failures (timeouts, transport errors, empty or
    unparseable output) never raise; they are recorded as attempts and the
    next candidate is tried. Task cancellation is not absorbed: it aborts the
    in-flight call and skips the remaining candidates.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        candidate_provider: Optional[CandidateProvider] = None,
        client: Optional[AsyncOpenAI] = None,
    ):
        self.settings = settings or get_settings()
        self._candidate_provider = candidate_provider or (
            lambda: load_model_candidates(self.settings)
        )
        self._client = client

    @property
    def client(self) -> AsyncOpenAI:
        """Get or create OpenAI-compatible client."""
        if self._client is None:
            self._client = AsyncOpenAI(
                api_key=self.settings.reasoning_api_key.get_secret_value(),
                base_url=self.settings.reasoning_base_url,
                timeout=httpx.Timeout(self.settings.reasoning_timeout_seconds, connect=10.0),
                max_retries=0,  # Retries are ours to decide
                default_headers={
                    "HTTP-Referer": self.settings.site_url,
                    "X-Title": self.settings.site_name,
                },
            )
        return self._client

    async def run(
        self,
        prompt: str,
        candidates: Optional[Sequence[ModelCandidate]] = None,
    ) -> ReasoningResult:
        """
        Send the prompt to each candidate in turn.

        Args:
            prompt: Full prompt text
            candidates: Ordered candidates for this call (provider used if None)

        Returns:
            ReasoningSuccess with the parsed object and the model that produced
            it, or ReasoningFailure describing why nothing was produced.
        """
        if not self.settings.has_reasoning_credential:
            error = ConfigurationError(
                "REASONING_API_KEY is not set, reasoning service disabled"
            )
            logger.error(str(error))
            return ReasoningFailure(kind=FailureKind.CONFIGURATION, error=error)

        resolved = list(candidates) if candidates is not None else list(self._candidate_provider())
        if not resolved:
            logger.error("No reasoning model candidates configured")
            return ReasoningFailure(kind=FailureKind.NO_CANDIDATES)

        attempts: list[Attempt] = []
        for candidate in resolved:
            for retry in range(self.settings.reasoning_retries + 1):
                if retry:
                    delay = self._backoff_delay(retry)
                    logger.debug(f"Retrying {candidate.name} in {delay:.2f}s")
                    await asyncio.sleep(delay)

                data, attempt = await self._attempt(candidate, prompt)
                attempts.append(attempt)

                if data is not None:
                    logger.info(f"Parsed JSON from {candidate.name}")
                    return ReasoningSuccess(data=data, model=candidate.name, attempts=attempts)

        logger.error(f"All {len(resolved)} model candidates failed to return valid JSON")
        return ReasoningFailure(kind=FailureKind.EXHAUSTED, attempts=attempts)

    def _backoff_delay(self, retry: int) -> float:
        """Exponential backoff with jitter, capped."""
        delay = min(
            self.settings.reasoning_backoff_base * (2 ** (retry - 1)),
            self.settings.reasoning_backoff_max,
        )
        return delay * random.uniform(0.5, 1.0)

    async def _attempt(
        self, candidate: ModelCandidate, prompt: str
    ) -> tuple[Optional[dict[str, Any]], Attempt]:
        logger.info(f"Attempting model: {candidate.name}")
        started = time.perf_counter()

        def record(outcome: AttemptOutcome, detail: str = "") -> Attempt:
            elapsed = int((time.perf_counter() - started) * 1000)
            if outcome is not AttemptOutcome.OK:
                logger.warning(f"{candidate.name} failed ({outcome.value}): {detail}")
            return Attempt(candidate.name, outcome, detail, elapsed)

        try:
            text = await asyncio.wait_for(
                self._complete(candidate, prompt),
                timeout=candidate.timeout_seconds,
            )
        except asyncio.TimeoutError:
            return None, record(
                AttemptOutcome.TIMEOUT, f"no response within {candidate.timeout_seconds:.0f}s"
            )
        except Exception as e:
            return None, record(AttemptOutcome.ERROR, str(e))

        if not text or not text.strip():
            return None, record(AttemptOutcome.EMPTY, "empty response")

        logger.debug(f"Raw response ({candidate.name}): {text[:200]}")
        data = recover_json(text)
        if data is None:
            return None, record(AttemptOutcome.UNPARSEABLE, text[:80])

        return data, record(AttemptOutcome.OK)

    async def _complete(self, candidate: ModelCandidate, prompt: str) -> Optional[str]:
        response = await self.client.chat.completions.create(
            model=candidate.name,
            messages=[{"role": "user", "content": prompt}],
            temperature=candidate.temperature,
            timeout=candidate.timeout_seconds,
        )
        if not response.choices:
            return None
        return response.choices[0].message.content
