"""Input sanitization before chat text enters the markup pipeline."""

import unicodedata
from html import escape

# Telegram's limit for a single text message
MAX_MESSAGE_LENGTH = 4096


def sanitize_message(text: str, max_length: int = MAX_MESSAGE_LENGTH) -> str:
    """
    Turn plain chat text into markup input.

    - Limits length
    - Removes control characters (except newlines, tabs)
    - Escapes HTML so only markdown syntax is interpreted
    - Strips leading/trailing whitespace
    """
    if not text:
        return ""

    text = text[:max_length]

    # Format characters (ZWJ in emoji sequences) are kept
    text = "".join(
        char for char in text if unicodedata.category(char) != "Cc" or char in "\n\t"
    )

    text = escape(text, quote=False)

    return text.strip()
