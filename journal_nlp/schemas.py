"""Core data structures shared across modules."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional


class SentimentLabel(str, Enum):
    POSITIVE = "POSITIVE"
    NEGATIVE = "NEGATIVE"
    NEUTRAL = "NEUTRAL"


class SentimentScale(str, Enum):
    """The two numeric sentiment scales in use.

    UNIT is the float -1..1 scale produced by the live analyzer.
    PERCENT is the integer -100..100 scale produced by the batch path and
    stored alongside entries.
    """

    UNIT = "unit"
    PERCENT = "percent"


class Mood(str, Enum):
    SAD = "sad"
    ANXIOUS = "anxious"
    STRESSED = "stressed"
    EXCITED = "excited"
    CALM = "calm"
    ANGRY = "angry"
    HAPPY = "happy"
    NEUTRAL = "neutral"


class DistortionType(str, Enum):
    """Cognitive distortion categories from CBT."""

    ALL_OR_NOTHING = "all-or-nothing"
    OVERGENERALIZATION = "overgeneralization"
    MENTAL_FILTER = "mental-filter"
    DISQUALIFYING_POSITIVE = "disqualifying-positive"
    JUMPING_TO_CONCLUSIONS = "jumping-to-conclusions"
    MAGNIFICATION = "magnification"
    EMOTIONAL_REASONING = "emotional-reasoning"
    SHOULD_STATEMENTS = "should-statements"
    LABELING = "labeling"
    PERSONALIZATION = "personalization"


def _plain(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_plain(v) for v in value]
    return value


@dataclass(frozen=True)
class SentimentResult:
    """Live sentiment on the UNIT scale.

    score is the confidence (0..1); normalized_score carries polarity (-1..1).
    """

    label: SentimentLabel
    score: float
    normalized_score: float

    def to_dict(self) -> Dict[str, Any]:
        return _plain(asdict(self))


NEUTRAL_SENTIMENT = SentimentResult(SentimentLabel.NEUTRAL, 0.5, 0.0)


@dataclass(frozen=True)
class BatchSentiment:
    """Offline sentiment on the PERCENT scale (integer -100..100)."""

    label: SentimentLabel
    score: int

    def to_dict(self) -> Dict[str, Any]:
        return _plain(asdict(self))


@dataclass
class EntrySignals:
    """Per-entry input to topic discovery."""

    keywords: List[str] = field(default_factory=list)
    sentiment: float = 0


@dataclass
class Topic:
    """A cluster of co-occurring keywords across entries."""

    id: str
    name: str
    keywords: List[str]
    entry_count: int
    average_sentiment: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class CognitiveDistortion:
    type: DistortionType
    label: str
    confidence: float
    excerpt: str
    explanation: str

    def to_dict(self) -> Dict[str, Any]:
        return _plain(asdict(self))


@dataclass
class ReframingResult:
    distortions: List[CognitiveDistortion] = field(default_factory=list)
    reframes: List[str] = field(default_factory=list)
    socratics: List[str] = field(default_factory=list)
    positive_anchors: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return _plain(asdict(self))


@dataclass
class FullAnalysisResult:
    """Sentiment, keywords and entities for one piece of text."""

    sentiment: SentimentResult
    keywords: List[str]
    entities: List[str]

    def to_dict(self) -> Dict[str, Any]:
        return _plain(asdict(self))


@dataclass
class EntryAnalysis:
    """Everything the core can say about a single entry."""

    sentiment: SentimentResult
    mood: Mood
    keywords: List[str]
    entities: List[str]
    reframing: ReframingResult

    def to_dict(self) -> Dict[str, Any]:
        return _plain(asdict(self))


@dataclass(frozen=True)
class SimilarityHit:
    id: str
    similarity: float


@dataclass
class JournalEntry:
    """A raw journal entry loaded for the offline batch path."""

    id: str
    content: str
    source: str = ""
    created_at: Optional[datetime] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def created_at_iso(self) -> Optional[str]:
        """Return the timestamp in ISO-8601 format."""
        if self.created_at is None:
            return None
        return self.created_at.isoformat()
