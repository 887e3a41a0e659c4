"""Topic discovery from keyword co-occurrence across entries."""

from __future__ import annotations

import math
from typing import Dict, Iterable, List, Mapping, Tuple, Union

from .schemas import EntrySignals, Topic


MIN_ENTRIES = 3
MAX_TOPICS = 8
MIN_CO_OCCURRENCE = 2
MAX_RELATED = 4
MIN_RELATED = 2

THEMES: Tuple[Tuple[str, frozenset], ...] = (
    ("Work & Career", frozenset(["work", "meeting", "project", "team", "office", "job"])),
    ("Family & Relationships", frozenset(["family", "mom", "dad", "sister", "brother", "kids"])),
    ("Health & Wellness", frozenset(["health", "exercise", "gym", "fitness", "running"])),
    ("Creative Pursuits", frozenset(["music", "art", "writing", "creative", "book"])),
)

EntryLike = Union[EntrySignals, Mapping]


def _as_signals(entry: EntryLike) -> EntrySignals:
    if isinstance(entry, EntrySignals):
        return entry
    return EntrySignals(
        keywords=list(entry.get("keywords") or []),
        sentiment=entry.get("sentiment") or 0,
    )


def topic_name(keywords: List[str]) -> str:
    """Human-readable name for a keyword cluster."""
    main = keywords[0][:1].upper() + keywords[0][1:]
    if len(keywords) == 1:
        return main
    if len(keywords) == 2:
        return f"{main} & {keywords[1]}"

    lowered = {k.lower() for k in keywords}
    for name, theme_words in THEMES:
        if lowered & theme_words:
            return name
    return f"{main} & More"


def discover_topics(entries: Iterable[EntryLike]) -> List[Topic]:
    """Cluster keywords that repeatedly appear together into named topics.

    ``entry_count`` is the highest single-keyword frequency in the cluster,
    an approximation of how many entries the topic spans.
    """
    signals = [_as_signals(e) for e in entries]
    if len(signals) < MIN_ENTRIES:
        return []

    co_occurrence: Dict[str, Dict[str, int]] = {}
    sentiment_stats: Dict[str, List[float]] = {}  # word -> [sum, count]

    for entry in signals:
        keywords = entry.keywords
        for i, word in enumerate(keywords):
            row = co_occurrence.setdefault(word, {})
            stats = sentiment_stats.setdefault(word, [0.0, 0])
            stats[0] += entry.sentiment
            stats[1] += 1
            for other in keywords[i + 1 :]:
                row[other] = row.get(other, 0) + 1

    seeds = sorted(sentiment_stats, key=lambda w: sentiment_stats[w][1], reverse=True)

    used: set = set()
    topics: List[Topic] = []
    for seed in seeds:
        if seed in used:
            continue
        related_counts = co_occurrence.get(seed)
        if not related_counts:
            continue

        candidates = [
            (word, count)
            for word, count in related_counts.items()
            if word not in used and count >= MIN_CO_OCCURRENCE
        ]
        candidates.sort(key=lambda item: item[1], reverse=True)
        related = [word for word, _ in candidates[:MAX_RELATED]]

        if len(related) >= MIN_RELATED:
            members = [seed] + related
            used.update(members)

            stats = [sentiment_stats[w] for w in members if w in sentiment_stats]
            if stats:
                mean = sum(s / c for s, c in stats) / len(stats)
                average = int(math.floor(mean + 0.5))
            else:
                average = 0
            entry_count = max((int(c) for _, c in stats), default=0)

            topics.append(
                Topic(
                    id=f"topic-{len(topics) + 1}",
                    name=topic_name(members),
                    keywords=members,
                    entry_count=entry_count,
                    average_sentiment=average,
                )
            )

        if len(topics) >= MAX_TOPICS:
            break

    return topics
