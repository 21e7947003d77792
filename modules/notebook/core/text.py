"""
Text Utilities.

String helpers shared by search, suggestions, tagging and the AI wrapper:

    levenshtein_distance   - unit-cost edit distance
    calculate_similarity   - edit distance normalized to [0, 1]
    truncate_text          - preview with trailing ellipsis
    normalize_tag          - lossy tag normalization for storage
    normalize_tags         - normalize a batch and cap its size
    estimate_tokens        - rough token count for the text-generation API
    truncate_to_token_limit - shrink text until it fits a token budget
"""

import math
import re
from collections.abc import Iterable

ELLIPSIS = "..."

# Hangul syllables are kept alongside ASCII letters, digits and hyphen.
_TAG_DISALLOWED = re.compile(r"[^a-z0-9\-가-힣]")
_HANGUL = re.compile(r"[ㄱ-힝]")


def levenshtein_distance(str1: str, str2: str) -> int:
    """
    Compute the Levenshtein edit distance between two strings.

    Fills a (len(str2) + 1) x (len(str1) + 1) table where each cell holds
    the cheapest way to turn a prefix of str1 into a prefix of str2 using
    unit-cost insertions, deletions and substitutions.

    Args:
        str1: First string
        str2: Second string

    Returns:
        Minimum number of single-character edits
    """
    matrix = [[0] * (len(str1) + 1) for _ in range(len(str2) + 1)]

    for i in range(len(str2) + 1):
        matrix[i][0] = i
    for j in range(len(str1) + 1):
        matrix[0][j] = j

    for i in range(1, len(str2) + 1):
        for j in range(1, len(str1) + 1):
            if str2[i - 1] == str1[j - 1]:
                matrix[i][j] = matrix[i - 1][j - 1]
            else:
                matrix[i][j] = 1 + min(
                    matrix[i - 1][j - 1],
                    matrix[i][j - 1],
                    matrix[i - 1][j],
                )

    return matrix[len(str2)][len(str1)]


def calculate_similarity(str1: str, str2: str) -> float:
    """
    Similarity in [0, 1] derived from the edit distance.

    Two empty strings are identical (1.0). Otherwise the distance is
    normalized by the length of the longer string.
    """
    if len(str1) > len(str2):
        longer, shorter = str1, str2
    else:
        longer, shorter = str2, str1

    if len(longer) == 0:
        return 1.0

    distance = levenshtein_distance(longer, shorter)
    return (len(longer) - distance) / len(longer)


def truncate_text(text: str, max_length: int = 100) -> str:
    """Return the first max_length characters, marking a cut with an ellipsis."""
    if len(text) <= max_length:
        return text
    return text[:max_length] + ELLIPSIS


def tokenize(text: str) -> list[str]:
    """Split on whitespace and lower-case every token."""
    return [token.lower() for token in text.split()]


def normalize_tag(raw: str, max_length: int = 20) -> str:
    """
    Normalize a tag for storage.

    Lower-cases, trims, strips everything except [a-z0-9-] and Hangul
    syllables, then caps the length. The original casing and punctuation
    are not recoverable.
    """
    cleaned = _TAG_DISALLOWED.sub("", raw.strip().lower())
    return cleaned[:max_length]


def normalize_tags(
    raw_tags: Iterable[str],
    max_length: int = 20,
    max_count: int | None = None,
) -> list[str]:
    """Normalize each tag, drop the ones that end up empty, cap the batch."""
    tags = [tag for tag in (normalize_tag(t, max_length) for t in raw_tags) if tag]
    if max_count is not None:
        tags = tags[:max_count]
    return tags


def estimate_tokens(text: str) -> int:
    """
    Estimate the token count of text.

    Hangul characters count as roughly two tokens, everything else as
    half a token.
    """
    korean_chars = len(_HANGUL.findall(text))
    other_chars = len(text) - korean_chars
    return math.ceil(korean_chars * 2 + other_chars * 0.5)


def truncate_to_token_limit(text: str, limit: int = 8000) -> str:
    """Keep 90% of the text repeatedly until its estimate fits the limit."""
    truncated = text
    while truncated and estimate_tokens(truncated) > limit:
        truncated = truncated[: math.floor(len(truncated) * 0.9)]
    return truncated
