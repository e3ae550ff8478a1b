"""
Keyword Sentiment Analyzer

Bag-of-words polarity scoring over a free-text corpus.
"""

import re
from typing import Iterable, Optional, Sequence

from cryptocast.schemas.forecast import SentimentData

# Keywords for sentiment analysis
POSITIVE_KEYWORDS = [
    "bullish", "buy", "moon", "pump", "growth", "potential", "undervalued",
    "rally", "surge", "breakout", "adoption", "all-time high",
]

NEGATIVE_KEYWORDS = [
    "bearish", "sell", "dump", "crash", "overvalued", "scam",
    "plunge", "hack", "lawsuit", "liquidation",
]


def _count(keyword: str, content: str) -> int:
    return len(re.findall(re.escape(keyword), content))


def analyze_sentiment(
    texts: Optional[Iterable[str]],
    positive_keywords: Sequence[str] = POSITIVE_KEYWORDS,
    negative_keywords: Sequence[str] = NEGATIVE_KEYWORDS,
) -> SentimentData:
    """
    Score a corpus by keyword occurrences.

    Occurrences are case-insensitive substring matches, so "buy" also counts
    inside "buying". score = (positive - negative) / max(1, total), in [-1, 1].
    """
    content = " ".join(t for t in (texts or []) if t).lower()

    keywords: dict[str, int] = {}
    positive_count = 0
    negative_count = 0

    for keyword in positive_keywords:
        count = _count(keyword.lower(), content)
        keywords[keyword] = keywords.get(keyword, 0) + count
        positive_count += count

    for keyword in negative_keywords:
        count = _count(keyword.lower(), content)
        keywords[keyword] = keywords.get(keyword, 0) + count
        negative_count += count

    mentions = positive_count + negative_count
    score = (positive_count - negative_count) / max(1, mentions)

    return SentimentData(
        score=score,
        mentions=mentions,
        positive_count=positive_count,
        negative_count=negative_count,
        keywords=keywords,
    )
