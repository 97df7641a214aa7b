"""Gemini client construction.

The client is built once at startup from an explicit API key and handed to
the analyzer; nothing below the app lifespan reads settings directly. Uses a
60-second HTTP timeout and no HttpRetryOptions: the pipeline does not retry.
"""

import logging

from google import genai
from google.genai import types

logger = logging.getLogger(__name__)


def build_gemini_client(api_key: str) -> genai.Client | None:
    """Return a configured Gemini client, or None when no API key is set."""
    if not api_key:
        logger.warning("GEMINI_API_KEY not configured; URL analysis is disabled")
        return None
    return genai.Client(
        api_key=api_key,
        http_options=types.HttpOptions(timeout=60_000),
    )
