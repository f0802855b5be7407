"""
Derived content-analysis models.

These are ephemeral results computed from text. SummaryRecord and
AnalysisRecord are the audit copies written to the data store; nothing
depends on reading them back except "latest summary for a post".
"""

from dataclasses import dataclass, field, asdict
from datetime import datetime
from typing import List, Optional, Tuple
import uuid

from medpulse.models.post import _parse_datetime


SENTIMENT_LABELS = ("positive", "neutral", "negative")
EVIDENCE_LEVELS = ("high", "medium", "low")


@dataclass(frozen=True)
class TextAnalysisResult:
    """
    Sentiment label plus a confidence score.

    Attributes:
        label: "positive", "neutral" or "negative".
        score: Confidence in [0, 1].
    """
    label: str
    score: float

    def __post_init__(self) -> None:
        if self.label not in SENTIMENT_LABELS:
            raise ValueError(f"label must be one of {SENTIMENT_LABELS}, got {self.label!r}")
        if not (0.0 <= self.score <= 1.0):
            raise ValueError(f"score must be between 0.0 and 1.0, got {self.score}")

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class MedicalInsight:
    """A hand-authored knowledge-base entry matched from a query."""
    condition: str
    treatments: Tuple[str, ...]
    interactions: Tuple[str, ...]
    evidence_level: str
    confidence: float

    def __post_init__(self) -> None:
        if self.evidence_level not in EVIDENCE_LEVELS:
            raise ValueError(
                f"evidence_level must be one of {EVIDENCE_LEVELS}, got {self.evidence_level!r}"
            )
        if not (0.0 <= self.confidence <= 1.0):
            raise ValueError(f"confidence must be between 0.0 and 1.0, got {self.confidence}")

    def to_dict(self) -> dict:
        return {
            "condition": self.condition,
            "treatments": list(self.treatments),
            "interactions": list(self.interactions),
            "evidence_level": self.evidence_level,
            "confidence": self.confidence,
        }


@dataclass
class TrendingTopic:
    """
    A topic aggregated over a window of posts.

    Attributes:
        topic: Specialty name or lowercased tag.
        mentions: Number of posts in the window carrying this topic.
        sentiment: Derived from the summed up/down votes of those posts.
        growth_rate: min(100, mentions * 10). A mention-count proxy, not a rate.
        related_posts: Up to five contributing post ids.
    """
    topic: str
    mentions: int
    sentiment: str
    growth_rate: float
    related_posts: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class ContentReport:
    """Full analysis of a draft post body, as shown beside the editor."""
    sentiment: TextAnalysisResult
    medical_terms_count: int
    readability: float
    readability_level: str
    word_count: int
    sentence_count: int
    suggestion: Optional[str] = None

    def to_dict(self) -> dict:
        data = asdict(self)
        data["sentiment"] = self.sentiment.to_dict()
        return data


@dataclass
class SummaryRecord:
    """Persisted copy of a generated post summary."""
    post_id: str
    summary_content: str
    model_used: str
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict:
        data = asdict(self)
        data["created_at"] = self.created_at.isoformat()
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "SummaryRecord":
        record = cls(
            post_id=str(data["post_id"]),
            summary_content=data.get("summary_content") or "",
            model_used=data.get("model_used") or "",
            created_at=_parse_datetime(data.get("created_at")) or datetime.now(),
        )
        if data.get("id") is not None:
            record.id = str(data["id"])
        return record


@dataclass
class AnalysisRecord:
    """Persisted copy of a sentiment analysis (text truncated by the caller)."""
    text: str
    label: str
    score: float
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict:
        data = asdict(self)
        data["created_at"] = self.created_at.isoformat()
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "AnalysisRecord":
        record = cls(
            text=data.get("text") or "",
            label=data.get("label") or "neutral",
            score=float(data.get("score") or 0.0),
            created_at=_parse_datetime(data.get("created_at")) or datetime.now(),
        )
        if data.get("id") is not None:
            record.id = str(data["id"])
        return record
