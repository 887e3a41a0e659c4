"""Reframing prompts, Socratic questions and positive anchors for distortions."""

from __future__ import annotations

import re
from typing import Dict, Iterable, List, Sequence, Tuple

from .schemas import CognitiveDistortion, DistortionType, ReframingResult


MAX_SUGGESTIONS = 3
MAX_ANCHORS = 3
MIN_ANCHOR_SENTENCE = 10

GENERIC_PAIR: Tuple[str, str] = (
    "Try viewing this situation from a different angle or perspective.",
    "What alternative explanations exist for what happened?",
)

REFRAME_PAIRS: Dict[DistortionType, Tuple[str, str]] = {
    DistortionType.ALL_OR_NOTHING: (
        "Consider: What shades of gray exist between these extremes? "
        "What partial successes or progress have you made?",
        "What evidence supports a more balanced view of this situation?",
    ),
    DistortionType.OVERGENERALIZATION: (
        "Reframe: This is one situation, not a pattern. "
        "What other times have things worked differently?",
        "Can you think of exceptions to this pattern? What makes this specific instance unique?",
    ),
    DistortionType.MAGNIFICATION: (
        "Reality check: In a year, how much will this matter? "
        "What's the most likely outcome, not the worst?",
        "If a friend told you this, what would you say? What's a realistic assessment?",
    ),
    DistortionType.SHOULD_STATEMENTS: (
        'Replace "should" with "I prefer" or "it would be nice if." Remove pressure and guilt.',
        'Who says it "should" be this way? What would be a more flexible expectation?',
    ),
    DistortionType.EMOTIONAL_REASONING: (
        "Separate feelings from facts: "
        "Just because you feel something doesn't make it objectively true.",
        "What objective evidence exists beyond this feeling? What would an outside observer see?",
    ),
    DistortionType.MENTAL_FILTER: GENERIC_PAIR,
    DistortionType.DISQUALIFYING_POSITIVE: GENERIC_PAIR,
    DistortionType.JUMPING_TO_CONCLUSIONS: GENERIC_PAIR,
    DistortionType.LABELING: GENERIC_PAIR,
    DistortionType.PERSONALIZATION: GENERIC_PAIR,
}

POSITIVE_PATTERNS = (
    re.compile(r"\b(grateful|thankful|appreciate|accomplished|proud|success|achieved|happy|joy)\b", re.IGNORECASE),
    re.compile(r"\b(better|improved|progress|growing|learned|realized)\b", re.IGNORECASE),
    re.compile(r"\b(love|care|support|help|friend|family)\b", re.IGNORECASE),
)

_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")


def reframe_pair(distortion_type: DistortionType) -> Tuple[str, str]:
    """The (reframe, socratic question) pair for a distortion type."""
    try:
        return REFRAME_PAIRS[DistortionType(distortion_type)]
    except (KeyError, ValueError):
        return GENERIC_PAIR


def _dedupe(items: Iterable[str], limit: int) -> List[str]:
    return list(dict.fromkeys(items))[:limit]


def extract_positive_anchors(text: str) -> List[str]:
    """Sentences worth holding onto: gratitude, growth, connection."""
    anchors: List[str] = []
    for sentence in _SENTENCE_SPLIT_RE.split(text or ""):
        stripped = sentence.strip()
        if len(stripped) <= MIN_ANCHOR_SENTENCE:
            continue
        if any(p.search(sentence) for p in POSITIVE_PATTERNS):
            anchors.append(stripped)
            if len(anchors) >= MAX_ANCHORS:
                break
    return anchors


def generate_reframes(distortions: Sequence[CognitiveDistortion], text: str) -> ReframingResult:
    pairs = [reframe_pair(d.type) for d in distortions]
    return ReframingResult(
        distortions=list(distortions),
        reframes=_dedupe((reframe for reframe, _ in pairs), MAX_SUGGESTIONS),
        socratics=_dedupe((question for _, question in pairs), MAX_SUGGESTIONS),
        positive_anchors=extract_positive_anchors(text),
    )
