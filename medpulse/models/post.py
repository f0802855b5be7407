"""
Post and search-result models for MedPulse.

A Post is the slice of a community post the content-intelligence code reads:
title, body, vote counts and free-form tags. SearchResult is one candidate
row returned by the data store's full-text search.
"""

from dataclasses import dataclass, field, asdict
from datetime import datetime
from typing import List, Optional
import uuid


RESULT_TYPES = ("post", "community", "user")

# Scopes accepted by the full-text search call
CONTENT_TYPES = ("all", "posts", "communities", "users")


def _parse_datetime(value) -> Optional[datetime]:
    """Parse an ISO string (with optional trailing Z) into a datetime."""
    if value is None or isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return None


@dataclass
class Post:
    """
    A community post as supplied by the data store.

    Attributes:
        id: Post identifier.
        title: Post title.
        content: Post body text.
        created_at: When the post was created.
        upvotes: Upvote count.
        downvotes: Downvote count.
        tags: Free-form tags attached to the post.
    """

    title: str = ""
    content: str = ""
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: datetime = field(default_factory=datetime.now)
    upvotes: int = 0
    downvotes: int = 0
    tags: List[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """
        Validate field values.

        Raises:
            ValueError: If validation fails.
        """
        errors = []

        if not self.id or not str(self.id).strip():
            errors.append("id is required and cannot be empty")

        if self.upvotes < 0:
            errors.append(f"upvotes cannot be negative, got {self.upvotes}")

        if self.downvotes < 0:
            errors.append(f"downvotes cannot be negative, got {self.downvotes}")

        if errors:
            raise ValueError(f"Post validation failed: {'; '.join(errors)}")

    def to_dict(self) -> dict:
        """Convert to a plain dictionary with ISO-formatted dates."""
        data = asdict(self)
        data["created_at"] = self.created_at.isoformat()
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Post":
        """
        Create a Post from a data store row.

        Accepts both a flat ``tags`` list and the store's nested
        ``post_tags: [{"tag": ...}]`` shape. Missing or negative vote counts
        become 0.
        """
        tags = list(data.get("tags") or [])
        for tag_row in data.get("post_tags") or []:
            tag = tag_row.get("tag") if isinstance(tag_row, dict) else tag_row
            if tag:
                tags.append(tag)

        created_at = _parse_datetime(data.get("created_at")) or datetime.now()

        return cls(
            id=str(data["id"]) if data.get("id") is not None else str(uuid.uuid4()),
            title=data.get("title") or "",
            content=data.get("content") or "",
            created_at=created_at,
            upvotes=max(0, int(data.get("upvotes") or 0)),
            downvotes=max(0, int(data.get("downvotes") or 0)),
            tags=tags,
        )

    def __str__(self) -> str:
        return f"{self.title} (+{self.upvotes}/-{self.downvotes})"


@dataclass
class SearchResult:
    """
    One candidate returned by the external full-text search.

    ``relevance_score`` is the baseline from the search call;
    ``ai_relevance_score`` is filled in by the re-ranking pass.
    """

    id: str
    title: str = ""
    content: str = ""
    result_type: str = "post"
    author_name: Optional[str] = None
    created_at: Optional[datetime] = None
    relevance_score: float = 0.0
    ai_relevance_score: Optional[float] = None

    def __post_init__(self) -> None:
        if self.result_type not in RESULT_TYPES:
            raise ValueError(
                f"result_type must be one of {RESULT_TYPES}, got {self.result_type!r}"
            )

    def to_dict(self) -> dict:
        data = asdict(self)
        data["created_at"] = self.created_at.isoformat() if self.created_at else None
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "SearchResult":
        ai_score = data.get("ai_relevance_score")
        return cls(
            id=str(data.get("id", "")),
            title=data.get("title") or "",
            content=data.get("content") or "",
            result_type=data.get("result_type") or "post",
            author_name=data.get("author_name"),
            created_at=_parse_datetime(data.get("created_at")),
            relevance_score=float(data.get("relevance_score") or 0.0),
            ai_relevance_score=float(ai_score) if ai_score is not None else None,
        )
