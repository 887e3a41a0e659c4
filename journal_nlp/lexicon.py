"""Positive/negative word lists and the two ways of counting them.

The live analyzer splits on non-word characters and tests membership against
POSITIVE_WORDS / NEGATIVE_WORDS. The batch path runs a word-boundary regex per
entry of its own lists, BATCH_POSITIVE_WORDS / BATCH_NEGATIVE_WORDS, so the two
strategies score some texts differently and each call site keeps its own.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import FrozenSet, Pattern, Sequence, Tuple


POSITIVE_WORDS: FrozenSet[str] = frozenset(
    [
        "happy", "joy", "love", "excellent", "good", "great", "wonderful",
        "amazing", "fantastic", "awesome", "beautiful", "best", "better",
        "grateful", "thankful", "excited", "thrilled", "delighted", "pleased",
        "enjoy", "enjoyed", "fun", "nice", "lovely", "perfect", "success",
        "successful", "accomplish", "achieved", "proud", "confidence",
        "hopeful", "optimistic", "positive", "blessed", "calm", "peaceful",
        "relaxed", "comfortable", "satisfied", "smile", "laugh", "laughing",
    ]
)

NEGATIVE_WORDS: FrozenSet[str] = frozenset(
    [
        "sad", "angry", "hate", "terrible", "bad", "awful", "horrible",
        "worst", "disappointed", "depressed", "anxious", "worried", "stress",
        "stressed", "frustrated", "annoyed", "upset", "hurt", "pain",
        "painful", "difficult", "hard", "struggle", "struggling", "fail",
        "failed", "failure", "lost", "miss", "lonely", "alone", "cry",
        "crying", "tears", "unhappy", "miserable", "scared", "fear", "afraid",
        "nervous", "overwhelmed", "exhausted", "tired", "sick",
    ]
)

_SPLIT_RE = re.compile(r"\W+")


BATCH_POSITIVE_WORDS: Tuple[str, ...] = tuple(sorted(POSITIVE_WORDS))

# A list, not a set: "angry" appears twice and counts twice per occurrence.
BATCH_NEGATIVE_WORDS: Tuple[str, ...] = (
    "sad", "angry", "hate", "terrible", "bad", "awful", "horrible", "worst",
    "disappointed", "depressed", "anxious", "worried", "stress", "stressed",
    "frustrated", "upset", "unhappy", "lonely", "afraid", "fear", "scared",
    "nervous", "pain", "hurt", "cry", "crying", "fail", "failed", "failure",
    "difficult", "hard", "struggle", "struggling", "overwhelming", "overwhelmed",
    "tired", "exhausted", "sick", "ill", "weak", "miserable", "regret", "guilt",
    "shame", "embarrassed", "rejected", "worthless", "helpless", "hopeless",
    "angry", "annoyed", "irritated", "mad", "furious",
)


def _compile_boundary(words: Sequence[str]) -> Tuple[Pattern[str], ...]:
    return tuple(re.compile(rf"\b{re.escape(word)}\b") for word in words)


_POSITIVE_BOUNDARY = _compile_boundary(BATCH_POSITIVE_WORDS)
_NEGATIVE_BOUNDARY = _compile_boundary(BATCH_NEGATIVE_WORDS)


@dataclass(frozen=True)
class LexiconCounts:
    positive_count: int = 0
    negative_count: int = 0

    @property
    def total(self) -> int:
        return self.positive_count + self.negative_count


def count_split(text: str) -> LexiconCounts:
    """Count lexicon hits among tokens produced by splitting on non-word runs."""
    if not text:
        return LexiconCounts()
    positive = 0
    negative = 0
    for word in _SPLIT_RE.split(text.lower()):
        if word in POSITIVE_WORDS:
            positive += 1
        if word in NEGATIVE_WORDS:
            negative += 1
    return LexiconCounts(positive, negative)


def count_word_boundary(text: str) -> LexiconCounts:
    """Count whole-word occurrences of each batch lexicon entry."""
    if not text:
        return LexiconCounts()
    lower = text.lower()
    positive = sum(len(p.findall(lower)) for p in _POSITIVE_BOUNDARY)
    negative = sum(len(p.findall(lower)) for p in _NEGATIVE_BOUNDARY)
    return LexiconCounts(positive, negative)
