"""
Text metrics: syllables, readability and medical-term extraction.

Pure, deterministic functions. Empty or malformed input returns a
degenerate value (1, 0.0, []) rather than raising.
"""

import re
from typing import List

from medpulse.analysis.keywords import MEDICAL_KEYWORDS, READABILITY_LEVELS, contains_any


VOWELS = "aeiouy"

# Flesch Reading Ease coefficients
FLESCH_BASE: float = 206.835
FLESCH_SENTENCE_WEIGHT: float = 1.015
FLESCH_SYLLABLE_WEIGHT: float = 84.6

_SENTENCE_BOUNDARY = re.compile(r"[.!?]+")


def split_sentences(text: str) -> List[str]:
    """
    Split text on runs of . ! ? and drop blank fragments.

    Fragments are returned untrimmed.
    """
    return [s for s in _SENTENCE_BOUNDARY.split(text or "") if s.strip()]


def count_words(text: str) -> int:
    """Number of whitespace-delimited words."""
    return len((text or "").split())


def count_sentences(text: str) -> int:
    """Number of non-blank sentences."""
    return len(split_sentences(text))


def count_syllables(word: str) -> int:
    """
    Estimate the syllable count of a single word.

    Counts groups of consecutive vowels (aeiouy). Words of three characters
    or fewer count as one syllable, and a trailing "e" is treated as silent.

    Args:
        word: The word to measure (any case, punctuation allowed).

    Returns:
        Syllable estimate, never less than 1.
    """
    word = word.lower()
    if len(word) <= 3:
        return 1

    count = 0
    previous_was_vowel = False
    for char in word:
        is_vowel = char in VOWELS
        if is_vowel and not previous_was_vowel:
            count += 1
        previous_was_vowel = is_vowel

    if word.endswith("e"):
        count -= 1

    return max(1, count)


def calculate_readability(text: str) -> float:
    """
    Compute a simplified Flesch Reading Ease score.

    Formula:
        206.835 - 1.015 * (words / sentences) - 84.6 * (syllables / words)

    The result is clamped to [0, 100]. Text with no sentences or no words
    scores 0.

    Args:
        text: Free text.

    Returns:
        Readability score between 0.0 and 100.0 (higher is easier).
    """
    sentences = split_sentences(text)
    words = (text or "").split()

    if not sentences or not words:
        return 0.0

    syllables = sum(count_syllables(word) for word in words)
    avg_words_per_sentence = len(words) / len(sentences)
    avg_syllables_per_word = syllables / len(words)

    score = (
        FLESCH_BASE
        - FLESCH_SENTENCE_WEIGHT * avg_words_per_sentence
        - FLESCH_SYLLABLE_WEIGHT * avg_syllables_per_word
    )
    return max(0.0, min(100.0, score))


def readability_level(score: float) -> str:
    """Map a readability score onto its descriptive band."""
    for minimum, label in READABILITY_LEVELS:
        if score >= minimum:
            return label
    return READABILITY_LEVELS[-1][1]


def extract_medical_terms(text: str) -> List[str]:
    """
    Return the words of text that contain a medical keyword.

    Matching is substring-based on lowercased whitespace-split words, so
    "medications," matches "medication". Duplicates are kept and original
    order is preserved.

    Example:
        >>> extract_medical_terms("Chronic pain needs therapy and more therapy")
        ['chronic', 'therapy', 'therapy']
    """
    words = (text or "").lower().split()
    return [word for word in words if contains_any(word, MEDICAL_KEYWORDS)]
