"""
Fixed keyword tables for MedPulse content intelligence.

This file is the single source of truth for the vocabularies the heuristics
scan for:
1. Medical keywords: drive term extraction, summary scoring and the
   sentiment confidence boost
2. Sentiment words: positive / negative / neutral buckets
3. Specialties: candidate topics for trend ranking
4. Query synonyms: appended to search queries

CUSTOMIZATION:

All keywords are lowercase and matched as substrings of lowercased words
(e.g., "therapy" matches "chemotherapy", "acute" matches "acutely").
Keep entries specific enough that substring matching stays meaningful.
"""

from types import MappingProxyType
from typing import Tuple


# =============================================================================
# Medical Keywords
# =============================================================================

MEDICAL_KEYWORDS: Tuple[str, ...] = (
    # Clinical workflow
    "diagnosis",
    "treatment",
    "symptoms",
    "patient",
    "condition",
    "medication",
    "therapy",
    "clinical",
    "medical",
    "disease",
    "syndrome",
    "pathology",
    "prognosis",
    "etiology",
    "epidemiology",
    # Disciplines
    "pharmacology",
    "radiology",
    "cardiology",
    "neurology",
    "oncology",
    "pediatrics",
    "surgery",
    "anesthesia",
    "emergency",
    "intensive",
    # Descriptors
    "acute",
    "chronic",
    "benign",
    "malignant",
    "inflammatory",
)


# =============================================================================
# Sentiment Words
# =============================================================================

POSITIVE_WORDS: Tuple[str, ...] = (
    "effective",
    "successful",
    "improved",
    "better",
    "excellent",
    "good",
)

NEGATIVE_WORDS: Tuple[str, ...] = (
    "failed",
    "worse",
    "complications",
    "adverse",
    "poor",
    "ineffective",
)

# Recognised but never tip the label either way
NEUTRAL_WORDS: Tuple[str, ...] = (
    "standard",
    "typical",
    "normal",
    "routine",
    "regular",
)


# =============================================================================
# Specialties (trend topics)
# =============================================================================

SPECIALTIES: Tuple[str, ...] = (
    "cardiology",
    "neurology",
    "oncology",
    "pediatrics",
    "surgery",
    "radiology",
    "pathology",
    "psychiatry",
    "dermatology",
    "orthopedics",
)


# =============================================================================
# Query Synonyms
# =============================================================================

# Iteration order is the order synonyms are appended to a query
QUERY_SYNONYMS = MappingProxyType({
    "heart": ("cardiac", "cardiovascular", "coronary"),
    "brain": ("cerebral", "neurological", "cranial"),
    "lung": ("pulmonary", "respiratory", "bronchial"),
    "pain": ("discomfort", "ache", "soreness"),
})


# =============================================================================
# Readability Bands
# =============================================================================

# (minimum score, label), highest first
READABILITY_LEVELS: Tuple[Tuple[float, str], ...] = (
    (90, "Very Easy"),
    (80, "Easy"),
    (70, "Fairly Easy"),
    (60, "Standard"),
    (50, "Fairly Difficult"),
    (30, "Difficult"),
    (0, "Very Difficult"),
)


def contains_any(word: str, keywords: Tuple[str, ...]) -> bool:
    """
    Check whether any keyword occurs inside a word.

    Args:
        word: Lowercased word.
        keywords: Lowercase keyword tuple.

    Returns:
        True if at least one keyword is a substring of word.
    """
    return any(keyword in word for keyword in keywords)
