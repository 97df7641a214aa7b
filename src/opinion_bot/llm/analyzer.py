"""Analysis client: URL + tone prompt -> streamed Gemini opinion.

Opens one streaming generate_content call per analysis with the URL-context
tool enabled and a fixed thinking budget, then concatenates the text parts of
every chunk in arrival order. The call never raises: every failure (missing
key, transport error, mid-stream error, deadline, empty output) becomes an
``AnalysisResult`` with ``ok=False`` and the partial text is discarded.
No retries are attempted at this layer.
"""

import asyncio
import logging
import time

from google import genai
from google.genai import types

from opinion_bot.config import Settings
from opinion_bot.errors import ConfigurationError, EmptyProviderResponse, ProviderStreamError
from opinion_bot.llm.prompts import GEMINI_MODEL, THINKING_BUDGET
from opinion_bot.models.analysis import AnalysisRequest, AnalysisResult
from opinion_bot.textutil import truncate

logger = logging.getLogger(__name__)


def _chunk_text(chunk: types.GenerateContentResponse) -> str:
    """Concatenate the text parts of a chunk's first candidate (may be empty)."""
    if not chunk.candidates:
        return ""
    content = chunk.candidates[0].content
    if content is None or not content.parts:
        return ""
    return "".join(part.text or "" for part in content.parts)


class AnalysisClient:
    """Streams a tone-flavored opinion about a URL from Gemini."""

    def __init__(
        self,
        client: genai.Client | None,
        *,
        api_key: str,
        model: str = GEMINI_MODEL,
        thinking_budget: int = THINKING_BUDGET,
        timeout_seconds: float = 120.0,
    ) -> None:
        self._client = client
        self._api_key = api_key
        self._model = model
        self._thinking_budget = thinking_budget
        self._timeout_seconds = timeout_seconds
        self._missing_key_logged = False

    @classmethod
    def from_settings(cls, settings: Settings, client: genai.Client | None) -> "AnalysisClient":
        return cls(
            client,
            api_key=settings.gemini_api_key,
            model=settings.gemini_model,
            thinking_budget=settings.thinking_budget,
            timeout_seconds=settings.analysis_timeout_seconds,
        )

    def _build_config(self, tone_prompt: str) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            system_instruction=tone_prompt,
            tools=[types.Tool(url_context=types.UrlContext())],
            thinking_config=types.ThinkingConfig(thinking_budget=self._thinking_budget),
        )

    async def analyze(self, url: str, tone_prompt: str) -> AnalysisResult:
        """Analyze ``url`` under ``tone_prompt``. Never raises."""
        request = AnalysisRequest(url=url, tone_prompt=tone_prompt)
        started = time.monotonic()

        try:
            text = await self._run(request)
        except ConfigurationError as exc:
            if not self._missing_key_logged:
                logger.error("LLM API key not configured: %s", exc)
                self._missing_key_logged = True
            return AnalysisResult(ok=False)
        except EmptyProviderResponse:
            logger.error(
                "LLM returned empty response for %s (elapsed_ms=%d)",
                url,
                _elapsed_ms(started),
            )
            return AnalysisResult(ok=False)
        except ProviderStreamError:
            logger.error(
                "LLM stream failed for %s (elapsed_ms=%d)",
                url,
                _elapsed_ms(started),
                exc_info=True,
            )
            return AnalysisResult(ok=False)

        logger.info(
            "LLM analysis completed for %s (length=%d, elapsed_ms=%d): %s",
            url,
            len(text),
            _elapsed_ms(started),
            truncate(text, 100),
        )
        return AnalysisResult(text=text, ok=True)

    async def _run(self, request: AnalysisRequest) -> str:
        """Open the stream and drain it, translating failures into the error taxonomy."""
        if not self._api_key or self._client is None:
            raise ConfigurationError("GEMINI_API_KEY not configured")

        logger.info("Starting LLM analysis of %s with model %s", request.url, self._model)

        try:
            if self._timeout_seconds > 0:
                async with asyncio.timeout(self._timeout_seconds):
                    text = await self._consume_stream(request)
            else:
                text = await self._consume_stream(request)
        except TimeoutError as exc:
            raise ProviderStreamError(
                f"analysis exceeded {self._timeout_seconds:.0f}s deadline"
            ) from exc
        except Exception as exc:
            raise ProviderStreamError(f"stream error: {exc}") from exc

        if not text:
            raise EmptyProviderResponse("no response from LLM")
        return text

    async def _consume_stream(self, request: AnalysisRequest) -> str:
        contents = [
            types.Content(role="user", parts=[types.Part.from_text(text=request.url)]),
        ]
        stream = await self._client.aio.models.generate_content_stream(
            model=self._model,
            contents=contents,
            config=self._build_config(request.tone_prompt),
        )

        pieces: list[str] = []
        chunk_count = 0
        async for chunk in stream:
            chunk_count += 1
            pieces.append(_chunk_text(chunk))

        logger.debug("LLM stream finished after %d chunk(s)", chunk_count)
        return "".join(pieces)


def _elapsed_ms(started: float) -> int:
    return int((time.monotonic() - started) * 1000)
