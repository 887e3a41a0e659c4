"""Keyword-vote mood detection with a sentiment override."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Tuple

from .schemas import Mood, SentimentScale


logger = logging.getLogger(__name__)


# Declaration order breaks ties: the first category with the top count wins.
MOOD_KEYWORDS: Tuple[Tuple[Mood, Tuple[str, ...]], ...] = (
    (
        Mood.SAD,
        (
            "sad", "sadness", "depressed", "depression", "hopeless", "worthless",
            "lonely", "alone", "crying", "cry", "tears", "hurt", "pain", "miserable",
            "devastated", "heartbroken", "grief", "sorrow", "unhappy", "down", "low",
        ),
    ),
    (
        Mood.ANXIOUS,
        (
            "anxious", "anxiety", "worried", "worry", "nervous", "panic", "scared",
            "fear", "afraid", "terrified", "uneasy", "tense", "restless", "overwhelmed",
        ),
    ),
    (
        Mood.STRESSED,
        (
            "stressed", "stress", "overwhelmed", "pressure", "deadline", "busy",
            "exhausted", "tired", "drained", "burnt out", "burnout", "overworked",
            "swamped", "hectic", "chaotic",
        ),
    ),
    (
        Mood.EXCITED,
        (
            "excited", "excitement", "thrilled", "amazing", "awesome", "incredible",
            "fantastic", "wonderful", "great news", "can't wait", "looking forward",
            "pumped", "stoked", "enthusiastic",
        ),
    ),
    (
        Mood.CALM,
        (
            "calm", "peaceful", "relaxed", "serene", "tranquil", "content",
            "at peace", "centered", "balanced", "grounded", "meditat", "zen",
            "composed", "settled",
        ),
    ),
    (
        Mood.ANGRY,
        (
            "angry", "anger", "furious", "mad", "frustrated", "annoyed", "irritated",
            "rage", "outraged", "infuriated", "pissed", "upset", "livid", "enraged",
        ),
    ),
    (
        Mood.HAPPY,
        (
            "happy", "happiness", "joy", "joyful", "glad", "delighted", "pleased",
            "grateful", "thankful", "blessed", "cheerful", "content", "satisfied",
            "great day", "wonderful", "excellent", "good day", "productive",
        ),
    ),
)

POSITIVE_MOODS = frozenset({Mood.EXCITED, Mood.CALM, Mood.HAPPY})


@dataclass(frozen=True)
class MoodThresholds:
    override: float
    positive: float
    negative: float


# The two sets have not been calibrated against each other.
MOOD_THRESHOLDS: Dict[SentimentScale, MoodThresholds] = {
    SentimentScale.UNIT: MoodThresholds(override=-0.5, positive=0.3, negative=-0.3),
    SentimentScale.PERCENT: MoodThresholds(override=-50, positive=30, negative=-30),
}


def count_mood_keywords(text: str) -> Dict[Mood, int]:
    """Number of each category's keywords that occur anywhere in the text."""
    lower = text.lower()
    return {mood: sum(1 for kw in keywords if kw in lower) for mood, keywords in MOOD_KEYWORDS}


def detect_mood(
    text: str,
    sentiment_score: float,
    scale: SentimentScale = SentimentScale.UNIT,
) -> Mood:
    """Pick a mood from keyword votes, falling back to the sentiment score.

    Positive keyword moods are overridden to ``sad`` when the sentiment is
    strongly negative. ``scale`` says which sentiment scale the score is on.
    """
    scale = SentimentScale(scale)
    thresholds = MOOD_THRESHOLDS[scale]
    counts = count_mood_keywords(text or "")

    top_mood = Mood.NEUTRAL
    top_count = 0
    for mood, count in counts.items():
        if count > top_count:
            top_mood, top_count = mood, count

    logger.debug(
        "Mood keyword counts for %r (sentiment=%s %s): %s",
        (text or "")[:60],
        sentiment_score,
        scale.value,
        {m.value: c for m, c in counts.items()},
    )

    if top_count >= 1:
        if top_mood in POSITIVE_MOODS and sentiment_score < thresholds.override:
            return Mood.SAD
        return top_mood

    if sentiment_score > thresholds.positive:
        return Mood.HAPPY
    if sentiment_score < thresholds.negative:
        return Mood.SAD
    return Mood.NEUTRAL
