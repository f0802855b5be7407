"""
Combined content report for a draft post.
"""

from medpulse.analysis.sentiment import analyze_sentiment
from medpulse.analysis.text_metrics import (
    calculate_readability,
    count_sentences,
    count_words,
    extract_medical_terms,
    readability_level,
)
from medpulse.models.analysis import ContentReport


# Below this readability, jargon-heavy text gets a suggestion
SUGGESTION_READABILITY: float = 50.0

SIMPLIFY_SUGGESTION = "Consider simplifying complex medical terms for broader understanding."


def build_content_report(text: str) -> ContentReport:
    """
    Run every text heuristic over a draft and bundle the results.

    A simplification suggestion is attached when the text contains medical
    terms and reads below SUGGESTION_READABILITY.
    """
    medical_terms = extract_medical_terms(text)
    readability = calculate_readability(text)

    suggestion = None
    if medical_terms and readability < SUGGESTION_READABILITY:
        suggestion = SIMPLIFY_SUGGESTION

    return ContentReport(
        sentiment=analyze_sentiment(text),
        medical_terms_count=len(medical_terms),
        readability=readability,
        readability_level=readability_level(readability),
        word_count=count_words(text),
        sentence_count=count_sentences(text),
        suggestion=suggestion,
    )
