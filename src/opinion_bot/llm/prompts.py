"""System prompt templates for tone-flavored URL opinions.

Each tone has a base instruction plus a video-handling clause telling the
model how to refuse when the link turns out to be a video. Templates are
static; only the tone choice varies per request.
"""

from opinion_bot.opinion.tones import Tone

# Gemini model default -- overridden by GEMINI_MODEL
GEMINI_MODEL = "gemini-flash-latest"

# Thinking budget (tokens) passed with every analysis request
THINKING_BUDGET = 1024

BASE_PROMPTS: dict[Tone, str] = {
    Tone.BULLSHIT: (
        "Write a short summary why the text provided by a link is a bullshit. "
        "Don't write introduction or something else, just answer. "
        "If it's a github project - analyze it, and provide based arguments why it's a bullshit. "
        "Keep the answer short and funny."
    ),
    Tone.POSITIVE: (
        "Write a short summary with positive and well-argumented feedback about the content "
        "provided by a link. Don't write introduction, just answer. "
        "If it's a github project - analyze it and highlight the good aspects with solid arguments. "
        "Keep the answer short and encouraging."
    ),
    Tone.NEGATIVE: (
        "Write a short summary with argumented criticism about why the content provided by a link "
        "is not good. Don't write introduction, just answer. "
        "If it's a github project - analyze it and provide solid arguments about its weaknesses. "
        "Keep the answer short and constructive but critical."
    ),
}

VIDEO_PROMPTS: dict[Tone, str] = {
    Tone.BULLSHIT: (
        " If it's a video - don't think long and answer that you will not watch such bullshit "
        "(make the answer random and creative each time)."
    ),
    Tone.POSITIVE: (
        " If it's a video - politely explain that you can't watch videos but you're sure "
        "it must be interesting content."
    ),
    Tone.NEGATIVE: (
        " If it's a video - rudely refuse to watch it and make a sarcastic comment about people "
        "who share videos instead of text."
    ),
}


def build_tone_prompt(tone: Tone) -> str:
    """Return the system instruction for a tone: base prompt followed by the video clause."""
    return BASE_PROMPTS[tone] + VIDEO_PROMPTS[tone]
