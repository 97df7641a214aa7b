"""Opinion helpers: URL extraction, tone selection, and fixed replies."""

from opinion_bot.opinion.replies import REFUSAL_RESPONSES, pick_refusal
from opinion_bot.opinion.tones import RandomSource, Tone, select_tone
from opinion_bot.opinion.urls import extract_url

__all__ = [
    "REFUSAL_RESPONSES",
    "RandomSource",
    "Tone",
    "extract_url",
    "pick_refusal",
    "select_tone",
]
