"""Text helpers for machine identifiers."""

import re
import unicodedata


def slugify(value: str, separator: str = "-") -> str:
    """Convert free text to a lowercase, hyphenated, ASCII slug.

    >>> slugify("Acme Co.")
    'acme-co'
    >>> slugify("Same_Day  Delivery")
    'same-day-delivery'
    """
    text = unicodedata.normalize("NFKD", str(value)).encode("ascii", "ignore").decode("ascii")
    text = text.replace("@", f"{separator}at{separator}").lower()
    text = re.sub(r"[^\w\s-]", "", text)
    text = re.sub(r"[\s_-]+", separator, text)
    return text.strip(separator)
