"""
Text Normalizer

Reduces words to a comparable stem and decides whether two words mean
roughly the same thing. Substring and thesaurus checks only, no edit distance.
"""

from .constants import SEPARATOR_CHARS, STRIP_SUFFIXES, WORD_VARIATIONS


def normalize(word: str) -> str:
    """
    Lowercase `word`, drop separator characters and strip one suffix.

    The suffixes end in different letters, so at most one can apply and it
    is removed once (``"tests"`` -> ``"test"``, ``"testings"`` -> ``"testing"``).
    """
    stem = word.lower()
    for char in SEPARATOR_CHARS:
        stem = stem.replace(char, "")
    for suffix in STRIP_SUFFIXES:
        if stem.endswith(suffix):
            return stem[: -len(suffix)]
    return stem


def in_same_variation_group(stem1: str, stem2: str) -> bool:
    return any(
        stem1 in forms and stem2 in forms
        for forms in WORD_VARIATIONS.values()
    )


def are_similar(word1: str, word2: str) -> bool:
    """
    True when the stems are equal, one stem contains the other, or both
    stems belong to the same thesaurus entry.
    """
    norm1 = normalize(word1)
    norm2 = normalize(word2)

    if norm1 == norm2:
        return True

    # Compound words: "university" vs "universitymanagement"
    if norm1 in norm2 or norm2 in norm1:
        return True

    return in_same_variation_group(norm1, norm2)
