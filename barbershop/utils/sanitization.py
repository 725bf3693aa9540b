import html
import re

CONTROL_CHARS = re.compile(r"[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]")


def clean_text(value: str, max_length: int = 500) -> str:
    """
    Normalize catalog free text before it is stored.

    Text is kept raw for the JSON API (clients escape on display). Entities
    left over from older escaped records are decoded, so cleaning the same
    value twice never changes it.

    Raises:
        ValueError: If the cleaned text is longer than max_length
    """
    if not value:
        return ""

    value = CONTROL_CHARS.sub("", html.unescape(str(value))).strip()

    if len(value) > max_length:
        raise ValueError(f"Input exceeds maximum length of {max_length} characters")

    return value
