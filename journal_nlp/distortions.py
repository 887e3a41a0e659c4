"""Rule-based cognitive distortion detection with an optional LLM supplement."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Pattern, Sequence, Tuple

from .remote import DISTORTION_PREFIX_CHARS, RemoteClassifier
from .schemas import CognitiveDistortion, DistortionType


logger = logging.getLogger(__name__)

MIN_TEXT_LENGTH = 10
MIN_SENTENCE_LENGTH = 5
EXCERPT_CHARS = 100
MAX_DISTORTIONS = 5
# The LLM pass only runs when the rules found fewer than this many.
REMOTE_PASS_BELOW = 3

_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")


@dataclass(frozen=True)
class DistortionRule:
    type: DistortionType
    label: str
    confidence: float
    explanation: str
    patterns: Tuple[Pattern[str], ...]
    sentence_filter: Optional[Callable[[str], bool]] = None
    first_only: bool = False


def _compile(*patterns: str) -> Tuple[Pattern[str], ...]:
    return tuple(re.compile(p, re.IGNORECASE) for p in patterns)


RULES: Tuple[DistortionRule, ...] = (
    DistortionRule(
        type=DistortionType.ALL_OR_NOTHING,
        label="All-or-Nothing Thinking",
        confidence=0.7,
        explanation="Viewing situations in black-and-white categories without middle ground.",
        patterns=_compile(
            r"\b(always|never|every|all|nothing|no one|everyone)\b",
            r"\b(completely|totally|absolutely|entirely)\s+(failed|ruined|destroyed|perfect)",
        ),
    ),
    DistortionRule(
        type=DistortionType.OVERGENERALIZATION,
        label="Overgeneralization",
        confidence=0.65,
        explanation="Drawing broad conclusions from a single event or limited evidence.",
        patterns=_compile(
            r"\b(always happens?|never works?|every time|typical)\b",
            r"\b(again|once again)\b",
        ),
        sentence_filter=lambda sentence: "never" in sentence.lower(),
    ),
    DistortionRule(
        type=DistortionType.SHOULD_STATEMENTS,
        label="Should Statements",
        confidence=0.6,
        explanation='Using "should" or "must" statements can create guilt and pressure.',
        patterns=_compile(r"\b(should|shouldn't|ought to|must|have to|need to|supposed to)\b"),
        first_only=True,
    ),
    DistortionRule(
        type=DistortionType.MAGNIFICATION,
        label="Catastrophizing",
        confidence=0.68,
        explanation="Magnifying negatives and expecting the worst-case scenario.",
        patterns=_compile(
            r"\b(disaster|catastrophe|terrible|awful|worst|horrible|ruined)\b",
            r"\b(can't stand|unbearable|intolerable)\b",
        ),
    ),
    DistortionRule(
        type=DistortionType.EMOTIONAL_REASONING,
        label="Emotional Reasoning",
        confidence=0.62,
        explanation='Assuming that feelings reflect reality ("I feel it, so it must be true").',
        patterns=_compile(
            r"\b(feel|felt|feeling)\s+(like|that).+\b(therefore|so|must be)\b",
            r"because\s+i\s+feel",
        ),
    ),
)


@dataclass(frozen=True)
class RemoteHint:
    """How a phrase in the model's reply maps to a distortion."""

    needles: Tuple[str, ...]
    type: DistortionType
    label: str
    confidence: float
    explanation: str


REMOTE_HINTS: Tuple[RemoteHint, ...] = (
    RemoteHint(
        needles=("all-or-nothing", "black"),
        type=DistortionType.ALL_OR_NOTHING,
        label="All-or-Nothing Thinking",
        confidence=0.75,
        explanation="Viewing situations in extremes without middle ground.",
    ),
    RemoteHint(
        needles=("overgeneralization",),
        type=DistortionType.OVERGENERALIZATION,
        label="Overgeneralization",
        confidence=0.73,
        explanation="Drawing broad conclusions from limited evidence.",
    ),
    RemoteHint(
        needles=("catastroph",),
        type=DistortionType.MAGNIFICATION,
        label="Catastrophizing",
        confidence=0.72,
        explanation="Expecting the worst-case scenario.",
    ),
)


def split_sentences(text: str, min_length: int = MIN_SENTENCE_LENGTH) -> List[str]:
    """Split on runs of . ! ? and keep pieces longer than ``min_length`` once trimmed."""
    return [s for s in _SENTENCE_SPLIT_RE.split(text) if len(s.strip()) > min_length]


def _apply_rule(rule: DistortionRule, sentences: Sequence[str]) -> List[CognitiveDistortion]:
    found: List[CognitiveDistortion] = []
    for sentence in sentences:
        if rule.sentence_filter is not None and not rule.sentence_filter(sentence):
            continue
        if any(p.search(sentence) for p in rule.patterns):
            found.append(
                CognitiveDistortion(
                    type=rule.type,
                    label=rule.label,
                    confidence=rule.confidence,
                    excerpt=sentence.strip()[:EXCERPT_CHARS],
                    explanation=rule.explanation,
                )
            )
            if rule.first_only:
                break
    return found


def detect_with_rules(text: str) -> List[CognitiveDistortion]:
    """Raw rule hits, one per matching sentence per family, before de-duplication."""
    sentences = split_sentences(text)
    found: List[CognitiveDistortion] = []
    for rule in RULES:
        found.extend(_apply_rule(rule, sentences))
    return found


def parse_remote_distortions(reply: str, text: str) -> List[CognitiveDistortion]:
    """Turn the model's free-text reply into distortions."""
    reply = (reply or "").lower()
    excerpt = text[:DISTORTION_PREFIX_CHARS][:EXCERPT_CHARS]
    return [
        CognitiveDistortion(
            type=hint.type,
            label=hint.label,
            confidence=hint.confidence,
            excerpt=excerpt,
            explanation=hint.explanation,
        )
        for hint in REMOTE_HINTS
        if any(needle in reply for needle in hint.needles)
    ]


def finalize(distortions: Sequence[CognitiveDistortion]) -> List[CognitiveDistortion]:
    """One entry per type (later wins, first position kept), by confidence, top 5."""
    by_type: Dict[DistortionType, CognitiveDistortion] = {}
    for distortion in distortions:
        by_type[distortion.type] = distortion
    ranked = sorted(by_type.values(), key=lambda d: d.confidence, reverse=True)
    return ranked[:MAX_DISTORTIONS]


def detect_cognitive_distortions(
    text: str,
    classifier: Optional[RemoteClassifier] = None,
) -> List[CognitiveDistortion]:
    """Detect CBT distortions in journal text.

    Local rules always run. When they find fewer than three hits and a
    reachable classifier is supplied, the model's suggestions fill in types
    the rules missed. Remote failures are logged and ignored.
    """
    if not text or len(text.strip()) < MIN_TEXT_LENGTH:
        return []

    distortions = detect_with_rules(text)

    if classifier is not None and len(distortions) < REMOTE_PASS_BELOW:
        reply = classifier.try_name_distortions(text)
        if reply is not None:
            present = {d.type for d in distortions}
            for extra in parse_remote_distortions(reply, text):
                if extra.type not in present:
                    distortions.append(extra)
                    present.add(extra.type)

    return finalize(distortions)
