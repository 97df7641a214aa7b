"""Analysis request/result models exchanged with the Gemini analyzer."""

from pydantic import BaseModel


class AnalysisRequest(BaseModel):
    """A single URL analysis call. Built per request, never persisted."""

    url: str
    tone_prompt: str


class AnalysisResult(BaseModel):
    """Outcome of an analysis call.

    ``ok`` is False whenever the key is unset, the provider is unreachable,
    the stream fails, the deadline passes, or the stream yields no text.
    ``text`` is empty in every failure case.
    """

    text: str = ""
    ok: bool = False
