"""
Topic extraction and trending-topic ranking.

Provides pure, side-effect-free functions to:
1. Tag a post with specialty and free-form tag topics
2. Aggregate topics across a window of posts and rank them

The window itself (last 7 days, most recent 100 posts) is chosen by the
caller's query; these functions rank whatever posts they are given.
"""

from dataclasses import dataclass, field
from typing import Dict, List

from medpulse.analysis.keywords import SPECIALTIES
from medpulse.models.analysis import TrendingTopic
from medpulse.models.post import Post


# =============================================================================
# Ranking Configuration
# =============================================================================

MAX_TRENDING_TOPICS: int = 10
MAX_RELATED_POSTS: int = 5

# upvotes / (upvotes + downvotes + 1) above/below these bounds
POSITIVE_RATIO: float = 0.6
NEGATIVE_RATIO: float = 0.4

GROWTH_PER_MENTION: int = 10
MAX_GROWTH_RATE: int = 100


@dataclass
class _TopicTally:
    """Running totals for one topic while scanning posts."""
    mentions: int = 0
    post_ids: List[str] = field(default_factory=list)
    upvotes: int = 0
    downvotes: int = 0


# =============================================================================
# Topic Extraction
# =============================================================================

def extract_topics_from_post(post: Post) -> List[str]:
    """
    Extract the topics a post is about.

    Matching rules:
    - A specialty is a topic if it appears anywhere in the lowercased
      title + content (substring match)
    - Every tag on the post is a topic, lowercased
    - Duplicates are removed, first occurrence wins

    Args:
        post: The post to analyze.

    Returns:
        List of topic names (may be empty).

    Example:
        >>> post = Post(title="Cardiology grand rounds", content="...", tags=["ECG"])
        >>> extract_topics_from_post(post)
        ['cardiology', 'ecg']
    """
    text = f"{post.title} {post.content}".lower()

    topics = [specialty for specialty in SPECIALTIES if specialty in text]
    topics.extend(tag.lower() for tag in post.tags if tag)

    return list(dict.fromkeys(topics))


# =============================================================================
# Aggregate Scoring
# =============================================================================

def calculate_vote_sentiment(upvotes: int, downvotes: int) -> str:
    """
    Derive a sentiment label from summed votes.

    ratio = upvotes / (upvotes + downvotes + 1); above 0.6 is positive,
    below 0.4 negative, anything else neutral.
    """
    ratio = upvotes / (upvotes + downvotes + 1)
    if ratio > POSITIVE_RATIO:
        return "positive"
    if ratio < NEGATIVE_RATIO:
        return "negative"
    return "neutral"


def calculate_growth_rate(mentions: int) -> float:
    """
    Growth indicator for a topic: min(100, mentions * 10).

    This is a proxy derived from the mention count alone; no time series
    is involved.
    """
    return float(min(MAX_GROWTH_RATE, mentions * GROWTH_PER_MENTION))


def analyze_trending_topics(posts: List[Post]) -> List[TrendingTopic]:
    """
    Rank the topics discussed in a window of posts.

    For each topic: count the posts mentioning it, collect their ids, and
    sum their up/down votes. Sentiment is computed from the summed votes,
    not per post. Topics are sorted by mentions (descending, first-seen
    order breaks ties) and the top 10 returned, each with at most 5
    related post ids.

    This is a pure function - it does not modify the input posts.

    Args:
        posts: Posts in the window, already filtered by the caller.

    Returns:
        Up to 10 TrendingTopic entries; empty if there are no posts.
    """
    tallies: Dict[str, _TopicTally] = {}

    for post in posts:
        for topic in extract_topics_from_post(post):
            tally = tallies.setdefault(topic, _TopicTally())
            tally.mentions += 1
            tally.post_ids.append(post.id)
            tally.upvotes += post.upvotes or 0
            tally.downvotes += post.downvotes or 0

    trending = [
        TrendingTopic(
            topic=topic,
            mentions=tally.mentions,
            sentiment=calculate_vote_sentiment(tally.upvotes, tally.downvotes),
            growth_rate=calculate_growth_rate(tally.mentions),
            related_posts=tally.post_ids[:MAX_RELATED_POSTS],
        )
        for topic, tally in tallies.items()
    ]

    trending.sort(key=lambda t: t.mentions, reverse=True)
    return trending[:MAX_TRENDING_TOPICS]
