"""CLI entrypoint for re-scoring exported journal entries offline."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from journal_nlp.config import AppConfig, configure_logging  # noqa: E402
from journal_nlp.ingest import EntryLoader  # noqa: E402
from journal_nlp.pipeline import JournalAnalyzer  # noqa: E402


logger = logging.getLogger("run_backfill")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Compute batch sentiment (-100..100) and mood for journal exports."
    )
    parser.add_argument(
        "--config",
        type=str,
        default=str(PROJECT_ROOT / "config.yaml"),
        help="Path to YAML config.",
    )
    parser.add_argument(
        "--input",
        action="append",
        required=True,
        help="File or directory of entries (repeatable).",
    )
    parser.add_argument(
        "--topics",
        action="store_true",
        help="Also print topics discovered across the loaded entries.",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    config = AppConfig.from_yaml(args.config)
    configure_logging(config.logging)

    entries = EntryLoader().load_paths(args.input)
    logger.info("Loaded %d entries", len(entries))

    # backfill() never consults the remote model.
    analyzer = JournalAnalyzer(config)
    records = analyzer.backfill(entries)
    for record in records:
        print(json.dumps(record, ensure_ascii=False))

    if args.topics:
        signals = [{"keywords": r["keywords"], "sentiment": r["sentiment_score"]} for r in records]
        for topic in analyzer.discover_topics(signals):
            print(json.dumps({"topic": topic.to_dict()}, ensure_ascii=False))

    logger.info("Backfill complete: %d records", len(records))


if __name__ == "__main__":
    main()
