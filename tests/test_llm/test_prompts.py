"""Tests for tone prompt templates."""

from opinion_bot.llm.prompts import BASE_PROMPTS, VIDEO_PROMPTS, build_tone_prompt
from opinion_bot.opinion.tones import Tone


def test_every_tone_has_base_and_video_prompt():
    """Both template maps cover exactly the three tones."""
    assert set(BASE_PROMPTS) == set(Tone)
    assert set(VIDEO_PROMPTS) == set(Tone)


def test_build_tone_prompt_is_base_then_video():
    """The system instruction is the base prompt followed by the video clause."""
    for tone in Tone:
        prompt = build_tone_prompt(tone)
        assert prompt == BASE_PROMPTS[tone] + VIDEO_PROMPTS[tone]
        assert prompt.index(BASE_PROMPTS[tone]) < prompt.index(VIDEO_PROMPTS[tone].strip())


def test_video_clauses_mention_video():
    """Every video clause tells the model how to react to a video link."""
    for clause in VIDEO_PROMPTS.values():
        assert "video" in clause.lower()
        assert clause.startswith(" ")


def test_base_prompts_match_their_tone():
    """Base prompts carry the tone's stance keyword."""
    assert "bullshit" in BASE_PROMPTS[Tone.BULLSHIT]
    assert "positive" in BASE_PROMPTS[Tone.POSITIVE]
    assert "criticism" in BASE_PROMPTS[Tone.NEGATIVE]


def test_prompts_are_distinct_per_tone():
    """No two tones share the same system instruction."""
    prompts = {build_tone_prompt(tone) for tone in Tone}
    assert len(prompts) == 3
