"""Text and duration normalization for lyricloop.

Catalog titles and artist names arrive with diacritics, bracketed
annotations ("(Live)", "[Remastered 2011]"), featured-artist credits and
arbitrary punctuation. These helpers reduce them to a canonical form so
that records from different catalogs can be compared token by token.

All functions are pure and never raise on odd input.
"""

import math
import re
import unicodedata

__all__ = [
    "UNKNOWN_DURATION",
    "answer_key",
    "normalize_duration",
    "normalize_text",
    "round_half_up",
    "tokenize",
]

UNKNOWN_DURATION: None = None

_APOSTROPHES = str.maketrans({"’": "'", "‘": "'", "ʼ": "'", "`": "'"})
_BRACKETED = re.compile(r"\([^()]*\)|\[[^\[\]]*\]|\{[^{}]*\}")
# A dash suffix is a version tag only when it is made of version words
# and years, optionally ending in "at <venue>"; a year alone is a title
_VERSION_WORD = (
    r"(?:remaster(?:ed)?|remix|live|version|edit|mix|mono|stereo|demo"
    r"|acoustic|radio|single|album|extended|original)"
)
_VERSION_SUFFIX = re.compile(
    rf"\s[-–—]\s+(?:\d{{4}}\s+)?{_VERSION_WORD}"
    rf"(?:\s+(?:{_VERSION_WORD}|\d{{4}}))*(?:\s+(?:at|from|in)\s.*)?$"
)
_PUNCTUATION = re.compile(r"[^\w\s']|_")
_LOOSE_APOSTROPHE = re.compile(r"(?<!\w)'|'(?!\w)")
# Only a credit following the title; a leading "Ft." is part of the title
_FEATURING = re.compile(r"\s(feat|ft|featuring)(?:\s.*)?$")
_WHITESPACE = re.compile(r"\s+")


def _strip_diacritics(text: str) -> str:
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def normalize_text(text: str | None) -> str:
    """Canonicalize free text for comparison.

    Steps: casefold, strip diacritics, drop bracketed annotations and
    version suffixes, turn punctuation into spaces (apostrophes inside
    words survive), drop a trailing featured-artist credit and collapse
    whitespace.

    The result is idempotent: normalize_text(normalize_text(s)) == normalize_text(s).

    Args:
        text: Arbitrary text (None is treated as empty)

    Returns:
        Normalized text, possibly empty
    """
    if not text:
        return ""

    # casefold can introduce combining marks ("İ") and NFKD can introduce capitals ("ℌ")
    result = _strip_diacritics(text.casefold()).casefold().translate(_APOSTROPHES)

    # Nested groups need repeated passes
    previous = None
    while previous != result:
        previous = result
        result = _BRACKETED.sub(" ", result)

    result = _VERSION_SUFFIX.sub("", result)
    result = _PUNCTUATION.sub(" ", result)
    result = _LOOSE_APOSTROPHE.sub("", result)
    result = _WHITESPACE.sub(" ", result).strip()
    return _FEATURING.sub("", result)


def tokenize(text: str | None) -> list[str]:
    """Split normalized text into tokens."""
    normalized = normalize_text(text)
    return normalized.split(" ") if normalized else []


def answer_key(text: str | None) -> str:
    """Comparison key for quiz answers and distractors.

    Falls back to a casefolded, trimmed form when normalization strips
    the answer down to nothing (e.g. an answer made only of punctuation).
    """
    return normalize_text(text) or (text or "").strip().casefold()


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 rounded up."""
    return int(math.floor(value + 0.5))


def normalize_duration(seconds: int | float | None) -> int | None:
    """Normalize a track duration in seconds.

    Zero, missing and negative durations are all reported as
    UNKNOWN_DURATION so that scoring can treat them as "no signal".

    Args:
        seconds: Duration in seconds

    Returns:
        Non-negative duration, or UNKNOWN_DURATION
    """
    if seconds is None or isinstance(seconds, bool):
        return UNKNOWN_DURATION
    if isinstance(seconds, float):
        if math.isnan(seconds) or math.isinf(seconds):
            return UNKNOWN_DURATION
        seconds = round_half_up(seconds)
    if seconds <= 0:
        return UNKNOWN_DURATION
    return int(seconds)
