"""Small text helpers shared by logging and the Telegram client."""


def truncate(text: str, max_len: int) -> str:
    """Shorten ``text`` to ``max_len`` characters, appending '...' when cut.

    A negative ``max_len`` is treated as zero.
    """
    max_len = max(max_len, 0)
    if len(text) <= max_len:
        return text
    return text[:max_len] + "..."
