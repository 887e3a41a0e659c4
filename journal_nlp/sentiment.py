"""Sentiment analysis: remote label when reachable, lexicon scoring otherwise."""

from __future__ import annotations

import math
import re
from typing import Optional

from .lexicon import count_split, count_word_boundary
from .remote import RemoteClassifier
from .schemas import BatchSentiment, NEUTRAL_SENTIMENT, SentimentLabel, SentimentResult


_MARKDOWN_SYMBOLS_RE = re.compile(r"[#*_`~\[\]()]")
_IMAGE_LINK_RE = re.compile(r"!\[.*?\]\(.*?\)")
_LINK_RE = re.compile(r"\[.*?\]\(.*?\)")

# Batch path: a lexicon hit per word is worth 20 points per percent of text.
BATCH_AMPLIFIER = 20
BATCH_LABEL_THRESHOLD = 20


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def to_percent_scale(normalized_score: float) -> int:
    """Convert a -1..1 score to the stored -100..100 integer scale."""
    return max(-100, min(100, _round_half_up(normalized_score * 100)))


def to_unit_scale(percent_score: float) -> float:
    """Convert a stored -100..100 score back to the -1..1 scale."""
    return max(-1.0, min(1.0, percent_score / 100.0))


def strip_markdown(text: str) -> str:
    cleaned = _MARKDOWN_SYMBOLS_RE.sub("", text)
    cleaned = _IMAGE_LINK_RE.sub("", cleaned)
    cleaned = _LINK_RE.sub("", cleaned)
    return cleaned.strip()


def analyze_sentiment(text: str, classifier: Optional[RemoteClassifier] = None) -> SentimentResult:
    """Analyze journal text, preferring the remote classifier when reachable.

    Args:
        text: Raw entry content, possibly markdown.
        classifier: Optional remote capability. Without one the lexicon path
            is used directly.

    Returns:
        A SentimentResult on the -1..1 scale. Never raises for remote
        failures.
    """
    if not text or len(text.strip()) < 3:
        return NEUTRAL_SENTIMENT

    clean_text = strip_markdown(text)
    if len(clean_text) < 3:
        return NEUTRAL_SENTIMENT

    label = classifier.try_classify_sentiment(clean_text) if classifier else None
    if label is None:
        return analyze_sentiment_lexicon(clean_text)

    lexicon = analyze_sentiment_lexicon(clean_text)
    confidence = 0.8 if abs(lexicon.normalized_score) > 0.3 else 0.6
    if label is SentimentLabel.POSITIVE:
        normalized = confidence
    elif label is SentimentLabel.NEGATIVE:
        normalized = -confidence
    else:
        normalized = 0.0
    return SentimentResult(label, confidence, normalized)


def analyze_sentiment_lexicon(text: str) -> SentimentResult:
    """Ratio of positive to negative lexicon hits, on the -1..1 scale."""
    counts = count_split(text)
    total = counts.total
    if total == 0:
        return NEUTRAL_SENTIMENT

    positive_ratio = counts.positive_count / total
    negative_ratio = counts.negative_count / total

    if positive_ratio > 0.6:
        label = SentimentLabel.POSITIVE
        normalized = min(positive_ratio, 0.95)
    elif negative_ratio > 0.6:
        label = SentimentLabel.NEGATIVE
        normalized = -min(negative_ratio, 0.95)
    else:
        label = SentimentLabel.NEUTRAL
        normalized = positive_ratio - negative_ratio

    return SentimentResult(label, max(0.5, abs(normalized)), normalized)


def analyze_sentiment_batch(text: str) -> BatchSentiment:
    """Offline scorer on the -100..100 integer scale.

    Not interchangeable with analyze_sentiment; use to_unit_scale /
    to_percent_scale when the two meet.
    """
    if not text or len(text.strip()) < 3:
        return BatchSentiment(SentimentLabel.NEUTRAL, 0)

    lower = text.lower()
    counts = count_word_boundary(lower)
    total_words = len(re.split(r"\s+", lower))
    raw = (counts.positive_count - counts.negative_count) / max(total_words, 1) * 100
    score = max(-100, min(100, _round_half_up(raw * BATCH_AMPLIFIER)))

    if score > BATCH_LABEL_THRESHOLD:
        label = SentimentLabel.POSITIVE
    elif score < -BATCH_LABEL_THRESHOLD:
        label = SentimentLabel.NEGATIVE
    else:
        label = SentimentLabel.NEUTRAL
    return BatchSentiment(label, score)
