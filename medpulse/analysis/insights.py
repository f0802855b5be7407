"""
Hand-authored medical insight lookup.

Not computed from data: each entry is returned when the query mentions one
of its trigger phrases. Entries are immutable and built once.
"""

from typing import List, Tuple

from medpulse.models.analysis import MedicalInsight


# (trigger phrases, insight), checked in order
KNOWLEDGE_BASE: Tuple[Tuple[Tuple[str, ...], MedicalInsight], ...] = (
    (
        ("chest pain", "cardiac"),
        MedicalInsight(
            condition="Acute Coronary Syndrome",
            treatments=("Aspirin", "Clopidogrel", "Statin therapy", "Beta-blockers"),
            interactions=("Warfarin interaction with aspirin", "Statin-fibrate interactions"),
            evidence_level="high",
            confidence=0.85,
        ),
    ),
    (
        ("shortness of breath", "dyspnea"),
        MedicalInsight(
            condition="Respiratory Distress",
            treatments=("Oxygen therapy", "Bronchodilators", "Corticosteroids"),
            interactions=("Beta-blocker contraindication in asthma",),
            evidence_level="high",
            confidence=0.80,
        ),
    ),
    (
        ("headache", "migraine"),
        MedicalInsight(
            condition="Primary Headache Disorders",
            treatments=("NSAIDs", "Triptans", "Preventive medications"),
            interactions=("Triptan-SSRI serotonin syndrome risk",),
            evidence_level="medium",
            confidence=0.75,
        ),
    ),
)


def generate_medical_insights(query: str) -> List[MedicalInsight]:
    """
    Look up knowledge-base entries whose trigger phrases occur in the query.

    Args:
        query: Symptom or condition text (case-insensitive).

    Returns:
        Matching insights in knowledge-base order (may be empty).
    """
    lowered = (query or "").lower()
    return [
        insight
        for triggers, insight in KNOWLEDGE_BASE
        if any(trigger in lowered for trigger in triggers)
    ]
