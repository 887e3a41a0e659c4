"""Evaluate cognitive distortion detection against labeled seed data."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections import Counter
from pathlib import Path
from typing import Dict, List, Set

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from journal_nlp.config import AppConfig, configure_logging  # noqa: E402
from journal_nlp.pipeline import JournalAnalyzer  # noqa: E402


logger = logging.getLogger("evaluate_distortions")


def _ratio(numerator: int, denominator: int) -> float:
    return numerator / denominator if denominator else 0.0


def _f1(precision: float, recall: float) -> float:
    return 2 * precision * recall / (precision + recall) if precision + recall else 0.0


def evaluate(analyzer: JournalAnalyzer, cases: List[Dict]) -> Dict[str, Dict[str, float]]:
    """Per-type and overall precision/recall/F1 over the seed cases."""
    tp: Counter = Counter()
    fp: Counter = Counter()
    fn: Counter = Counter()

    for case in cases:
        expected: Set[str] = set(case.get("expected_distortions") or [])
        detected = {d.type.value for d in analyzer.detect_cognitive_distortions(case["content"])}
        for kind in detected & expected:
            tp[kind] += 1
        for kind in detected - expected:
            fp[kind] += 1
        for kind in expected - detected:
            fn[kind] += 1
        logger.info(
            "%s (%s): expected=%s detected=%s",
            case.get("id"),
            case.get("severity", "medium"),
            sorted(expected),
            sorted(detected),
        )

    report: Dict[str, Dict[str, float]] = {}
    for kind in sorted(set(tp) | set(fp) | set(fn)):
        precision = _ratio(tp[kind], tp[kind] + fp[kind])
        recall = _ratio(tp[kind], tp[kind] + fn[kind])
        report[kind] = {"precision": precision, "recall": recall, "f1": _f1(precision, recall)}

    total_tp, total_fp, total_fn = sum(tp.values()), sum(fp.values()), sum(fn.values())
    precision = _ratio(total_tp, total_tp + total_fp)
    recall = _ratio(total_tp, total_tp + total_fn)
    report["overall"] = {"precision": precision, "recall": recall, "f1": _f1(precision, recall)}
    return report


def main() -> None:
    parser = argparse.ArgumentParser(description="Evaluate distortion detection on labeled data")
    parser.add_argument("--config", default=str(PROJECT_ROOT / "config.yaml"))
    parser.add_argument("--seed", default=str(PROJECT_ROOT / "data" / "distortion_seed.json"))
    parser.add_argument("--local-only", action="store_true", help="Skip the remote model pass")
    args = parser.parse_args()

    config = AppConfig.from_yaml(args.config)
    if args.local_only:
        config.model.provider = "none"
    configure_logging(config.logging)

    cases = json.loads(Path(args.seed).read_text(encoding="utf-8"))
    logger.info("Loaded %d labeled cases from %s", len(cases), args.seed)

    severity = Counter(case.get("severity", "medium") for case in cases)
    report = evaluate(JournalAnalyzer(config), cases)

    print("By severity: " + ", ".join(f"{k}={v}" for k, v in sorted(severity.items())))
    for kind, metrics in report.items():
        print(
            f"{kind:<24} precision={metrics['precision']:.2f} "
            f"recall={metrics['recall']:.2f} f1={metrics['f1']:.2f}"
        )


if __name__ == "__main__":
    main()
