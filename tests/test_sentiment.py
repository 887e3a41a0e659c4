import pytest

from journal_nlp.schemas import BatchSentiment, SentimentLabel
from journal_nlp.sentiment import (
    analyze_sentiment,
    analyze_sentiment_batch,
    analyze_sentiment_lexicon,
    strip_markdown,
    to_percent_scale,
    to_unit_scale,
)


@pytest.mark.parametrize("text", ["", "  ", "hi", "**"])
def test_short_text_is_neutral(text):
    result = analyze_sentiment(text)
    assert result.label is SentimentLabel.NEUTRAL
    assert result.score == 0.5
    assert result.normalized_score == 0


def test_lexicon_positive():
    result = analyze_sentiment("I feel happy and grateful, what a wonderful day")
    assert result.label is SentimentLabel.POSITIVE
    assert result.normalized_score == pytest.approx(0.95)
    assert result.score == pytest.approx(0.95)


def test_lexicon_negative():
    result = analyze_sentiment_lexicon("sad and tired and lonely")
    assert result.label is SentimentLabel.NEGATIVE
    assert result.normalized_score == pytest.approx(-0.95)


def test_lexicon_mixed_is_neutral():
    result = analyze_sentiment_lexicon("happy but sad")
    assert result.label is SentimentLabel.NEUTRAL
    assert result.normalized_score == 0
    assert result.score == 0.5


def test_no_lexicon_words_is_neutral():
    result = analyze_sentiment("The bus arrived at noon.")
    assert result.label is SentimentLabel.NEUTRAL
    assert result.normalized_score == 0


def test_strip_markdown():
    assert strip_markdown("# **Title**") == "Title"


def test_remote_label_with_strong_lexicon(make_classifier):
    classifier = make_classifier(reply="POSITIVE")
    result = analyze_sentiment("happy happy joy", classifier)
    assert result.label is SentimentLabel.POSITIVE
    assert result.score == 0.8
    assert result.normalized_score == 0.8


def test_remote_label_with_weak_lexicon(make_classifier):
    classifier = make_classifier(reply="Negative.")
    result = analyze_sentiment("The bus arrived at noon.", classifier)
    assert result.label is SentimentLabel.NEGATIVE
    assert result.score == 0.6
    assert result.normalized_score == -0.6


def test_remote_unparseable_is_neutral(make_classifier):
    result = analyze_sentiment("happy happy joy", make_classifier(reply="no idea"))
    assert result.label is SentimentLabel.NEUTRAL
    assert result.normalized_score == 0.0


def test_remote_failure_falls_back(make_classifier):
    result = analyze_sentiment("happy happy joy", make_classifier(fail=True))
    assert result.label is SentimentLabel.POSITIVE
    assert result.normalized_score == pytest.approx(0.95)


def test_remote_unavailable_falls_back(make_classifier):
    classifier = make_classifier(reply="NEGATIVE", available=False)
    result = analyze_sentiment("happy happy joy", classifier)
    assert result.label is SentimentLabel.POSITIVE
    assert classifier.generator.prompts == []


def test_batch_short_text():
    result = analyze_sentiment_batch("ok")
    assert result.label is SentimentLabel.NEUTRAL
    assert result.score == 0


def test_batch_scores_are_amplified_and_clamped():
    # 1 positive hit in 10 words: 10% * 20 -> clamped to 100.
    result = analyze_sentiment_batch("today I went out and it was a good walk")
    assert result.score == 100
    assert result.label is SentimentLabel.POSITIVE


def test_batch_small_signal_stays_neutral():
    # 1 hit in 200 words: 0.5% * 20 = 10.
    text = "good " + " ".join(["word"] * 199)
    result = analyze_sentiment_batch(text)
    assert result.score == 10
    assert result.label is SentimentLabel.NEUTRAL


def test_batch_negative():
    result = analyze_sentiment_batch("this was a bad and awful day overall")
    assert result.score == -100
    assert result.label is SentimentLabel.NEGATIVE


def test_scale_conversion():
    assert to_percent_scale(0.126) == 13
    assert to_percent_scale(-0.004) == 0
    assert to_percent_scale(-0.5) == -50
    assert to_percent_scale(2.0) == 100
    assert to_unit_scale(-50) == -0.5
    assert to_unit_scale(-250) == -1.0


def test_batch_and_live_lexicons_disagree():
    text = "I feel worthless and hopeless today"
    assert analyze_sentiment_batch(text) == BatchSentiment(SentimentLabel.NEGATIVE, -100)
    assert analyze_sentiment(text).label is SentimentLabel.NEUTRAL

    text = "I miss my mom"
    assert analyze_sentiment_batch(text) == BatchSentiment(SentimentLabel.NEUTRAL, 0)
    assert analyze_sentiment(text).label is SentimentLabel.NEGATIVE
