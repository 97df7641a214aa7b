"""Weighted-random tone selection for opinion replies.

Each request draws its tone independently: 10% bullshit, 40% positive,
50% negative. The random source is injectable so tests can drive the
draw deterministically.
"""

import random
from enum import Enum
from collections.abc import Sequence
from typing import Protocol


class Tone(str, Enum):
    """Rhetorical stance requested from the analysis provider."""

    BULLSHIT = "bullshit"
    POSITIVE = "positive"
    NEGATIVE = "negative"


class RandomSource(Protocol):
    """Anything with ``random()`` in [0, 1) and ``choice(seq)``, e.g. random.Random."""

    def random(self) -> float: ...

    def choice(self, seq: Sequence[str]) -> str: ...


# Upper bounds (exclusive) on a [0, 100) draw
_TONE_THRESHOLDS: tuple[tuple[float, Tone], ...] = (
    (10.0, Tone.BULLSHIT),
    (50.0, Tone.POSITIVE),
    (100.0, Tone.NEGATIVE),
)

_default_rng = random.Random()


def select_tone(rng: RandomSource | None = None) -> Tone:
    """Draw a tone: [0,10) bullshit, [10,50) positive, [50,100) negative."""
    draw = (rng or _default_rng).random() * 100
    for upper, tone in _TONE_THRESHOLDS:
        if draw < upper:
            return tone
    return Tone.NEGATIVE
