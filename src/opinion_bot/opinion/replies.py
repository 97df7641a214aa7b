"""Fixed user-facing reply strings.

Every terminal state of the admission pipeline maps to one of these, or to
the provider's own text on a successful analysis.
"""

from opinion_bot.opinion.tones import RandomSource

ALREADY_ANSWERED = "I've already shared my opinion on this one 🙄"
QUOTA_EXCEEDED = "You've used up your opinions for now. Come back in a couple of days ⏳"
NOTHING_TO_ANALYZE = "The replied message has no text to analyze"
ANALYSIS_FAILED = "I'm tired dude, next time 😴"

# Ingress-level replies
NOT_A_REPLY = "Please use /opinion as a reply to a message"
UNKNOWN_COMMAND = "Unknown command. Available commands: /opinion"

REFUSAL_RESPONSES: tuple[str, ...] = (
    "I'm tired 😴",
    "I don't want to talk 😤",
    "NO 😠",
    "Not today 😑",
    "Leave me alone 🙄",
    "I'm not in the mood 😒",
    "Go away 😡",
    "Seriously? 🤨",
    "Don't bother me 💢",
    "Ask someone else 😾",
    "I refuse 🚫",
    "Absolutely not 😤",
)


def pick_refusal(rng: RandomSource) -> str:
    """Pick one refusal uniformly at random."""
    return rng.choice(REFUSAL_RESPONSES)
