"""Admission pipeline: one /opinion request in, exactly one reply out.

Terminal states, evaluated in order:
1. duplicate      -- the quoted message was already analyzed
2. rate_limited   -- non-exempt caller is over the sliding-window quota
3. empty_text     -- the quoted message has no text
4. no_url         -- text without a URL; a random refusal is returned
5. analyzed / analysis_failed -- URL found, tone drawn, provider called

The quota is checked before the text is inspected, so an attempt is consumed
even when there turns out to be nothing to analyze. The idempotency record
is written whenever a URL was found, regardless of analysis success.
"""

import logging
import random
from collections.abc import Iterable
from enum import Enum

from pydantic import BaseModel

from opinion_bot.llm.analyzer import AnalysisClient
from opinion_bot.llm.prompts import build_tone_prompt
from opinion_bot.models.analysis import AnalysisResult
from opinion_bot.models.message import OpinionRequest
from opinion_bot.opinion.replies import (
    ALREADY_ANSWERED,
    ANALYSIS_FAILED,
    NOTHING_TO_ANALYZE,
    QUOTA_EXCEEDED,
    pick_refusal,
)
from opinion_bot.opinion.tones import RandomSource, Tone, select_tone
from opinion_bot.opinion.urls import extract_url
from opinion_bot.store.idempotency import IdempotencyCache
from opinion_bot.store.rate_limit import RateLimiter

logger = logging.getLogger(__name__)


class Outcome(str, Enum):
    """Terminal state of a single pipeline run."""

    DUPLICATE = "duplicate"
    RATE_LIMITED = "rate_limited"
    EMPTY_TEXT = "empty_text"
    NO_URL = "no_url"
    ANALYZED = "analyzed"
    ANALYSIS_FAILED = "analysis_failed"


class PipelineReply(BaseModel):
    """The single reply produced for a request.

    ``reply_to_quoted`` is True only when a URL was found; otherwise the reply
    threads to the /opinion command message.
    """

    outcome: Outcome
    text: str
    reply_to_quoted: bool = False
    disable_link_preview: bool = False
    tone: Tone | None = None

    @property
    def ok(self) -> bool:
        return self.outcome == Outcome.ANALYZED


class AdmissionPipeline:
    """Sequences idempotency, quota, URL extraction, tone and analysis per request."""

    def __init__(
        self,
        analyzer: AnalysisClient,
        cache: IdempotencyCache,
        limiter: RateLimiter,
        *,
        exempt_user_ids: Iterable[int] = (),
        rng: RandomSource | None = None,
    ) -> None:
        self._analyzer = analyzer
        self._cache = cache
        self._limiter = limiter
        self._exempt_user_ids = frozenset(exempt_user_ids)
        self._rng = rng or random.Random()

    def is_exempt(self, user_id: int) -> bool:
        return user_id in self._exempt_user_ids

    async def handle(self, request: OpinionRequest) -> PipelineReply:
        """Run one request through the pipeline. Never raises for component failures."""
        quoted = request.quoted_ref

        if await self._cache.seen(quoted):
            logger.info("Duplicate request for message %s", quoted.token)
            return PipelineReply(outcome=Outcome.DUPLICATE, text=ALREADY_ANSWERED)

        if not self.is_exempt(request.user_id):
            if not await self._limiter.admit(request.user_id, request.command_ref):
                return PipelineReply(outcome=Outcome.RATE_LIMITED, text=QUOTA_EXCEEDED)

        if not request.quoted_text:
            return PipelineReply(outcome=Outcome.EMPTY_TEXT, text=NOTHING_TO_ANALYZE)

        url = extract_url(request.quoted_text)
        if url is None:
            return PipelineReply(outcome=Outcome.NO_URL, text=pick_refusal(self._rng))

        tone = select_tone(self._rng)
        logger.info("Analyzing %s with %s tone", url, tone.value)
        result = await self._analyze(url, tone)

        await self._cache.mark_seen(quoted)

        if result.ok:
            outcome, text = Outcome.ANALYZED, result.text
        else:
            outcome, text = Outcome.ANALYSIS_FAILED, ANALYSIS_FAILED

        return PipelineReply(
            outcome=outcome,
            text=text,
            reply_to_quoted=True,
            disable_link_preview=True,
            tone=tone,
        )

    async def _analyze(self, url: str, tone: Tone) -> AnalysisResult:
        try:
            return await self._analyzer.analyze(url, build_tone_prompt(tone))
        except Exception:
            logger.error("Unexpected analyzer failure for %s", url, exc_info=True)
            return AnalysisResult(ok=False)
