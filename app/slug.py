"""Slug derivation for entity titles."""
import re

from unidecode import unidecode

_SUBSTITUTIONS = (
    ('&', ' and '),
    ('@', ' at '),
)


def slugify(text: str) -> str:
    """Convert a display title to a filesystem and URL safe slug.

    "Trivia Night" -> "trivia-night", "Rock & Roll" -> "rock-and-roll",
    "Straße" -> "strasse".  Non-Latin scripts are transliterated rather
    than dropped.

    Applying it to an existing slug returns the slug unchanged, so callers
    may pass either a title or a slug.
    """
    if not text:
        return ''
    text = unidecode(text)
    text = text.lower()
    for needle, replacement in _SUBSTITUTIONS:
        text = text.replace(needle, replacement)
    text = re.sub(r"['\"]", '', text)
    text = re.sub(r'[^a-z0-9]+', '-', text)
    return text.strip('-')
