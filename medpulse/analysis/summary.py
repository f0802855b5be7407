"""
Extractive summaries of clinical narratives.

Sentences are ranked by medical relevance and the top few are stitched
back together. No text is generated; every summary sentence appears
verbatim in the input.
"""

from medpulse.analysis.keywords import MEDICAL_KEYWORDS, contains_any
from medpulse.analysis.text_metrics import split_sentences


SUMMARY_SENTENCES: int = 3

# Fragments longer than this earn a bonus point
LONG_SENTENCE_CHARS: int = 50


def score_sentence(sentence: str) -> int:
    """
    Score one sentence for medical relevance.

    +1 per word containing a medical keyword, +1 if the sentence is longer
    than LONG_SENTENCE_CHARS characters.
    """
    words = sentence.lower().split()
    score = sum(1 for word in words if contains_any(word, MEDICAL_KEYWORDS))
    if len(sentence) > LONG_SENTENCE_CHARS:
        score += 1
    return score


def create_medical_summary(content: str, max_sentences: int = SUMMARY_SENTENCES) -> str:
    """
    Build an extractive summary from the most medically relevant sentences.

    Sentences are sorted by score, highest first; equal scores keep their
    order in the input. The chosen sentences are joined with ". " and a
    final period is added.

    Empty or whitespace-only content returns "" instead of a bare ".".

    Args:
        content: Free text, typically a post body.
        max_sentences: How many sentences to keep (default 3).

    Returns:
        Summary string.
    """
    sentences = split_sentences(content)
    if not sentences:
        return ""

    # sorted() is stable, so input order breaks ties
    ranked = sorted(sentences, key=score_sentence, reverse=True)
    top = [s.strip() for s in ranked[:max_sentences]]

    return ". ".join(top) + "."
