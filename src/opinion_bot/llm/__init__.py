"""LLM analysis: tone-flavored URL opinions via Gemini streaming.

Public API:
    AnalysisClient.analyze(url, tone_prompt) -> AnalysisResult
        Streams an opinion about a URL. Never raises; failures yield ok=False.
"""

from opinion_bot.llm.analyzer import AnalysisClient
from opinion_bot.llm.client import build_gemini_client
from opinion_bot.llm.prompts import build_tone_prompt

__all__ = [
    "AnalysisClient",
    "build_gemini_client",
    "build_tone_prompt",
]
