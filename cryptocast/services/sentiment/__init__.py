"""
Sentiment Service

Keyword-based sentiment over news headlines for a coin.
"""

from cryptocast.services.sentiment.analyzer import (
    NEGATIVE_KEYWORDS,
    POSITIVE_KEYWORDS,
    analyze_sentiment,
)
from cryptocast.services.sentiment.service import (
    SentimentService,
    get_sentiment_service,
    parse_rss_corpus,
)

__all__ = [
    "NEGATIVE_KEYWORDS",
    "POSITIVE_KEYWORDS",
    "analyze_sentiment",
    "SentimentService",
    "get_sentiment_service",
    "parse_rss_corpus",
]
