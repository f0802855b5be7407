"""
Keyword-bucket sentiment classification for clinical text.
"""

from typing import Tuple

from medpulse.analysis.keywords import NEGATIVE_WORDS, POSITIVE_WORDS, contains_any
from medpulse.analysis.text_metrics import extract_medical_terms
from medpulse.models.analysis import TextAnalysisResult


BASE_CONFIDENCE: float = 0.5
CONFIDENCE_PER_WORD: float = 0.1
MAX_POLARITY_CONFIDENCE: float = 0.9
CONFIDENCE_PER_MEDICAL_TERM: float = 0.05
MAX_CONFIDENCE: float = 0.95


def count_polarity_words(text: str) -> Tuple[int, int]:
    """
    Count words containing a positive and a negative keyword.

    Returns:
        Tuple of (positive_count, negative_count).
    """
    words = (text or "").lower().split()
    positive = sum(1 for word in words if contains_any(word, POSITIVE_WORDS))
    negative = sum(1 for word in words if contains_any(word, NEGATIVE_WORDS))
    return positive, negative


def analyze_sentiment(text: str) -> TextAnalysisResult:
    """
    Classify text as positive, negative or neutral.

    Rules:
    - The polarity with more matching words wins; a tie is neutral
    - Confidence starts at 0.5 and gains 0.1 per word of the winning
      polarity, capped at 0.9
    - Each medical term in the text then adds 0.05, capped at 0.95

    This is a pure function of its input.

    Args:
        text: Free text.

    Returns:
        TextAnalysisResult with label and confidence score.

    Example:
        >>> analyze_sentiment("The treatment was excellent and successful").label
        'positive'
    """
    positive, negative = count_polarity_words(text)

    label = "neutral"
    confidence = BASE_CONFIDENCE

    if positive > negative:
        label = "positive"
        confidence = min(MAX_POLARITY_CONFIDENCE, BASE_CONFIDENCE + positive * CONFIDENCE_PER_WORD)
    elif negative > positive:
        label = "negative"
        confidence = min(MAX_POLARITY_CONFIDENCE, BASE_CONFIDENCE + negative * CONFIDENCE_PER_WORD)

    medical_terms = extract_medical_terms(text)
    if medical_terms:
        confidence = min(MAX_CONFIDENCE, confidence + len(medical_terms) * CONFIDENCE_PER_MEDICAL_TERM)

    return TextAnalysisResult(label=label, score=confidence)
