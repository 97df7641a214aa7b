"""Internal error taxonomy.

None of these ever reach a chat user verbatim: the pipeline maps each one to
a fixed reply string or fails open.
"""


class OpinionBotError(Exception):
    """Base class for opinion bot errors."""


class ConfigurationError(OpinionBotError):
    """A required credential (the Gemini API key) is not configured."""


class ProviderStreamError(OpinionBotError):
    """The analysis provider failed to open, or failed mid-stream."""


class EmptyProviderResponse(OpinionBotError):
    """The provider stream finished cleanly but produced no text."""


class StoreUnavailable(OpinionBotError):
    """The Redis store could not be reached. Always handled fail-open."""
