"""Heuristic text analysis for journal entries."""

from .config import AppConfig
from .distortions import detect_cognitive_distortions
from .keywords import extract_entities, extract_keywords
from .mood import detect_mood
from .pipeline import JournalAnalyzer
from .reframes import generate_reframes
from .sentiment import analyze_sentiment, analyze_sentiment_batch, analyze_sentiment_lexicon
from .similarity import cosine_similarity, find_most_similar, parse_embedding, serialize_embedding
from .topics import discover_topics

__all__ = [
    "AppConfig",
    "JournalAnalyzer",
    "analyze_sentiment",
    "analyze_sentiment_batch",
    "analyze_sentiment_lexicon",
    "cosine_similarity",
    "detect_cognitive_distortions",
    "detect_mood",
    "discover_topics",
    "extract_entities",
    "extract_keywords",
    "find_most_similar",
    "generate_reframes",
    "parse_embedding",
    "serialize_embedding",
]
