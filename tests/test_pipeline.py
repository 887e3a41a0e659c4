from datetime import datetime

import pytest

from journal_nlp.config import AppConfig
from journal_nlp.pipeline import JournalAnalyzer
from journal_nlp.schemas import DistortionType, JournalEntry, Mood, SentimentLabel


@pytest.fixture
def analyzer(local_config):
    return JournalAnalyzer(local_config)


def test_provider_none_disables_remote(analyzer):
    assert analyzer.classifier is None


def test_explicit_classifier_is_used(local_config, make_classifier):
    classifier = make_classifier(reply="NEGATIVE")
    analyzer = JournalAnalyzer(local_config, classifier=classifier)
    result = analyzer.analyze_sentiment("What a happy and wonderful day")
    assert result.label is SentimentLabel.NEGATIVE
    assert result.normalized_score == -0.8


def test_analyze_text(analyzer):
    result = analyzer.analyze_text("Dinner with Maria was lovely. Maria cooked pasta and we laughed.")
    assert result.sentiment.label is SentimentLabel.POSITIVE
    assert result.keywords[0] == "maria"
    assert "Maria" in result.entities
    assert result.to_dict()["sentiment"]["label"] == "POSITIVE"


def test_max_keywords_from_config():
    analyzer = JournalAnalyzer(AppConfig.from_dict({"model": {"provider": "none"}, "analysis": {"max_keywords": 2}}))
    assert len(analyzer.extract_keywords("apples bananas cherries dates")) == 2


def test_analyze_entry(analyzer):
    text = "I always fail at everything. I should be better. I am grateful for my friends though."
    result = analyzer.analyze_entry(text)
    types = {d.type for d in result.reframing.distortions}
    assert {DistortionType.ALL_OR_NOTHING, DistortionType.SHOULD_STATEMENTS} <= types
    assert len(result.reframing.reframes) == 2
    assert result.reframing.positive_anchors == [
        "I should be better",
        "I am grateful for my friends though",
    ]
    assert result.mood is Mood.HAPPY
    payload = result.to_dict()
    assert payload["mood"] == "happy"
    assert {d["type"] for d in payload["reframing"]["distortions"]} >= {"all-or-nothing", "should-statements"}


def test_detect_mood_uses_unit_scale(analyzer):
    sentiment = analyzer.analyze_sentiment("awful terrible horrible")
    assert analyzer.detect_mood("I am so excited and happy today!", sentiment) is Mood.SAD


def test_find_most_similar(analyzer):
    hits = analyzer.find_most_similar([1.0, 0.0], [{"id": "a", "embedding": [1.0, 0.0]}], exclude_id="a")
    assert hits == []


def test_backfill(analyzer):
    entries = [
        JournalEntry(id="1", content="A good, lovely day with friends", created_at=datetime(2026, 2, 1)),
        JournalEntry(id="2", content="Sad and lonely, everything felt awful"),
        JournalEntry(id="3", content="Went to the store"),
    ]
    records = analyzer.backfill(entries)
    assert [r["id"] for r in records] == ["1", "2", "3"]
    assert records[0]["created_at"] == "2026-02-01T00:00:00"
    assert records[0]["sentiment_label"] == "POSITIVE"
    assert records[0]["sentiment_score"] == 100
    assert records[0]["mood"] == "happy"
    assert records[1]["sentiment_label"] == "NEGATIVE"
    assert records[1]["mood"] == "sad"
    assert records[2] == {
        "id": "3",
        "created_at": None,
        "sentiment_label": "NEUTRAL",
        "sentiment_score": 0,
        "mood": "neutral",
        "keywords": ["went", "store"],
    }


def test_backfill_never_calls_remote(local_config, make_classifier):
    classifier = make_classifier(reply="NEGATIVE")
    JournalAnalyzer(local_config, classifier=classifier).backfill([JournalEntry(id="1", content="A good day")])
    assert classifier.generator.prompts == []
