"""URL extraction from free-form chat text."""

import re

# Lowercase http/https only. Other schemes (ftp://, mailto:, ssh://) and
# uppercase schemes are intentionally not matched.
URL_PATTERN = re.compile(r"https?://\S+")

# Prose punctuation and closing brackets that commonly trail a pasted link
TRAILING_PUNCTUATION = ".,)]};!?:"


def extract_url(text: str) -> str | None:
    """Return the first http(s) URL in ``text``, or None if there is none.

    Trailing punctuation is stripped repeatedly, so ``"(https://a.com)."``
    yields ``"https://a.com"``. The URL is otherwise returned as written:
    no scheme, percent-encoding or trailing-slash normalization.
    """
    if not text:
        return None

    match = URL_PATTERN.search(text)
    if match is None:
        return None

    url = match.group(0).rstrip(TRAILING_PUNCTUATION)
    return url or None
