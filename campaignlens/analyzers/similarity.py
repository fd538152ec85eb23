"""
Normalized text similarity used for near-duplicate detection.

Author: Yobie Benjamin
Date: 2026-10-18
"""

import re
from typing import Optional, Set

_PUNCTUATION = re.compile(r"[^\w\s]")
_WHITESPACE = re.compile(r"\s+")

NGRAM_SIZE = 3


def normalize_text(text: Optional[str]) -> str:
    """Lower-case, strip punctuation and collapse whitespace."""
    if not text:
        return ""
    text = _PUNCTUATION.sub("", text.lower())
    return _WHITESPACE.sub(" ", text).strip()


def _ngrams(text: str, size: int) -> Set[str]:
    # Texts shorter than one n-gram are their own single gram
    if len(text) < size:
        return {text}
    return {text[i:i + size] for i in range(len(text) - size + 1)}


def calculate_text_similarity(
    text1: Optional[str],
    text2: Optional[str],
    ngram_size: int = NGRAM_SIZE,
) -> float:
    """
    Jaccard index over the sets of character n-grams of the normalized texts.

    Word boundaries are kept, and each distinct n-gram counts once, so
    unrelated prose sharing only common letter runs scores low while
    texts differing by a few characters stay close to 1.0. Returns 0.0
    when either text is empty after normalization and 1.0 for texts that
    normalize to the same string. The measure is symmetric.

    Args:
        text1: First text
        text2: Second text
        ngram_size: Characters per n-gram

    Returns:
        Similarity in [0, 1]
    """
    norm1 = normalize_text(text1)
    norm2 = normalize_text(text2)

    if not norm1 or not norm2:
        return 0.0
    if norm1 == norm2:
        return 1.0

    grams1 = _ngrams(norm1, ngram_size)
    grams2 = _ngrams(norm2, ngram_size)
    union = len(grams1 | grams2)
    if union == 0:
        return 0.0

    return len(grams1 & grams2) / union
