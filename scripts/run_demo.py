"""End-to-end demo: sentiment -> mood -> keywords/entities -> distortions -> reframes -> topics."""

from __future__ import annotations

import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from journal_nlp.config import AppConfig, configure_logging  # noqa: E402
from journal_nlp.pipeline import JournalAnalyzer  # noqa: E402


DEMO_ENTRIES = [
    (
        "Work was a disaster today. The project deadline moved again and my team "
        "meeting ran long. I should have pushed back. I always end up staying late."
    ),
    (
        "Another long meeting about the project. The team is stressed but I learned "
        "a lot from Maria. I'm grateful she took the time to help."
    ),
    (
        "Finally shipped the project! The team celebrated after the meeting and "
        "I felt proud of the progress we made together."
    ),
    (
        "Went running with my sister before work. The project still feels heavy, "
        "but the team meeting was calmer than usual."
    ),
]


def main() -> None:
    config = AppConfig.from_yaml(str(PROJECT_ROOT / "config.yaml"))
    configure_logging(config.logging)
    analyzer = JournalAnalyzer(config)

    signals = []
    for i, text in enumerate(DEMO_ENTRIES, start=1):
        result = analyzer.analyze_entry(text)
        signals.append({"keywords": result.keywords, "sentiment": result.sentiment.normalized_score * 100})

        print(f"\n== Entry {i} ==")
        print(" ".join(text.split()[:20]) + "...")
        print(
            f"sentiment={result.sentiment.label.value} "
            f"score={result.sentiment.normalized_score:+.2f} mood={result.mood.value}"
        )
        print(f"keywords={result.keywords}")
        print(f"entities={result.entities}")
        for distortion in result.reframing.distortions:
            print(f"  - {distortion.label} ({distortion.confidence:.2f}): {distortion.excerpt}")
        for reframe in result.reframing.reframes:
            print(f"  reframe: {reframe}")
        for anchor in result.reframing.positive_anchors:
            print(f"  anchor: {anchor}")

    print("\n== Topics ==")
    topics = analyzer.discover_topics(signals)
    if not topics:
        print("No topics found.")
    for topic in topics:
        print(
            f"{topic.id}: {topic.name} keywords={topic.keywords} "
            f"entries={topic.entry_count} avg_sentiment={topic.average_sentiment}"
        )


if __name__ == "__main__":
    main()
