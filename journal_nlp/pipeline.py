"""Facade that wires configuration, the remote capability and every engine."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from .config import AppConfig
from .distortions import detect_cognitive_distortions
from .keywords import extract_entities, extract_keywords
from .mood import detect_mood
from .reframes import generate_reframes
from .remote import RemoteClassifier, build_classifier
from .schemas import (
    CognitiveDistortion,
    EntryAnalysis,
    FullAnalysisResult,
    JournalEntry,
    Mood,
    SentimentResult,
    SentimentScale,
    SimilarityHit,
    Topic,
)
from .sentiment import analyze_sentiment, analyze_sentiment_batch
from .similarity import find_most_similar
from .topics import discover_topics


class JournalAnalyzer:
    """High-level entry point composed of the independent engines."""

    def __init__(self, config: Optional[AppConfig] = None, classifier: Optional[RemoteClassifier] = None):
        self.config = config or AppConfig()
        self.classifier = classifier if classifier is not None else build_classifier(self.config)

    def analyze_sentiment(self, text: str) -> SentimentResult:
        return analyze_sentiment(text, self.classifier)

    def detect_mood(self, text: str, sentiment: SentimentResult) -> Mood:
        return detect_mood(text, sentiment.normalized_score, SentimentScale.UNIT)

    def extract_keywords(self, text: str, max_keywords: Optional[int] = None) -> List[str]:
        limit = self.config.analysis.max_keywords if max_keywords is None else max_keywords
        return extract_keywords(text, limit)

    def extract_entities(self, text: str) -> List[str]:
        return extract_entities(text)

    def detect_cognitive_distortions(self, text: str) -> List[CognitiveDistortion]:
        return detect_cognitive_distortions(text, self.classifier)

    def analyze_text(self, text: str) -> FullAnalysisResult:
        """Sentiment, keywords and entities; the sentiment call runs on a worker thread."""
        with ThreadPoolExecutor(max_workers=1) as pool:
            pending = pool.submit(self.analyze_sentiment, text)
            keywords = self.extract_keywords(text)
            entities = self.extract_entities(text)
            sentiment = pending.result()
        return FullAnalysisResult(sentiment=sentiment, keywords=keywords, entities=entities)

    def analyze_entry(self, text: str) -> EntryAnalysis:
        """Every per-entry signal: sentiment, mood, keywords, entities, reframing."""
        base = self.analyze_text(text)
        distortions = self.detect_cognitive_distortions(text)
        return EntryAnalysis(
            sentiment=base.sentiment,
            mood=self.detect_mood(text, base.sentiment),
            keywords=base.keywords,
            entities=base.entities,
            reframing=generate_reframes(distortions, text),
        )

    def discover_topics(self, entries: Iterable[Any]) -> List[Topic]:
        return discover_topics(entries)

    def find_most_similar(
        self,
        query: Sequence[float],
        candidates: Sequence[Mapping[str, Any]],
        limit: int = 5,
        exclude_id: Optional[str] = None,
    ) -> List[SimilarityHit]:
        return find_most_similar(query, candidates, limit=limit, exclude_id=exclude_id)

    def backfill(self, entries: Iterable[JournalEntry]) -> List[Dict[str, Any]]:
        """Offline re-scoring on the -100..100 scale, one record per entry."""
        records: List[Dict[str, Any]] = []
        for entry in entries:
            sentiment = analyze_sentiment_batch(entry.content)
            mood = detect_mood(entry.content, sentiment.score, SentimentScale.PERCENT)
            records.append(
                {
                    "id": entry.id,
                    "created_at": entry.created_at_iso(),
                    "sentiment_label": sentiment.label.value,
                    "sentiment_score": sentiment.score,
                    "mood": mood.value,
                    "keywords": self.extract_keywords(entry.content),
                }
            )
        return records
