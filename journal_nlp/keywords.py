"""Keyword extraction (TF-IDF-like scoring) and pattern-based entity extraction."""

from __future__ import annotations

import math
import re
from typing import Dict, List


STOP_WORDS = frozenset(
    [
        "i", "me", "my", "myself", "we", "our", "ours", "ourselves", "you", "your",
        "yours", "yourself", "yourselves", "he", "him", "his", "himself", "she",
        "her", "hers", "herself", "it", "its", "itself", "they", "them", "their",
        "theirs", "themselves", "what", "which", "who", "whom", "this", "that",
        "these", "those", "am", "is", "are", "was", "were", "be", "been", "being",
        "have", "has", "had", "having", "do", "does", "did", "doing", "a", "an",
        "the", "and", "but", "if", "or", "because", "as", "until", "while", "of",
        "at", "by", "for", "with", "about", "against", "between", "into",
        "through", "during", "before", "after", "above", "below", "to", "from",
        "up", "down", "in", "out", "on", "off", "over", "under", "again",
        "further", "then", "once", "here", "there", "when", "where", "why", "how",
        "all", "both", "each", "few", "more", "most", "other", "some", "such",
        "no", "nor", "not", "only", "own", "same", "so", "than", "too", "very",
        "s", "t", "can", "will", "just", "don", "should", "now", "today",
        "yesterday", "tomorrow", "also", "im", "ive", "id", "ill", "youre",
        "youve", "youll", "youd", "hes", "shes", "theyre", "theyve", "theyll",
        "theyd", "whos", "whats", "wheres", "whens", "whys", "hows", "isnt",
        "arent", "wasnt", "werent", "hasnt", "havent", "hadnt", "doesnt", "dont",
        "didnt", "wont", "wouldnt", "shant", "shouldnt", "cant", "cannot",
        "couldnt", "mustnt", "lets", "thats", "heres", "theres",
    ]
)

MIN_TEXT_LENGTH = 10
MAX_ENTITIES = 10

_IMAGE_LINK_RE = re.compile(r"!\[.*?\]\(.*?\)")
_LINK_RE = re.compile(r"\[.*?\]\(.*?\)")
_MARKDOWN_RE = re.compile(r"[#*_`~]")
_URL_RE = re.compile(r"https?://\S+")
_TOKEN_SPLIT_RE = re.compile(r"\W+")
_DIGITS_RE = re.compile(r"^\d+$")

CAPITALIZED_RE = re.compile(r"\b([A-Z][a-z]+(?:\s+[A-Z][a-z]+){0,2})\b")
QUOTED_RE = re.compile(r'"([^"]+)"')
# Prefix match: also rejects words that merely start with one of these.
NON_ENTITY_PREFIX_RE = re.compile(
    r"^(The|This|That|Today|Tomorrow|Yesterday|Monday|Tuesday|Wednesday|Thursday|Friday"
    r"|Saturday|Sunday|January|February|March|April|May|June|July|August|September"
    r"|October|November|December)"
)


def _clean_for_keywords(text: str) -> str:
    text = _IMAGE_LINK_RE.sub("", text)
    text = _LINK_RE.sub("", text)
    text = _MARKDOWN_RE.sub("", text)
    text = _URL_RE.sub("", text)
    return text.lower()


def tokenize(text: str) -> List[str]:
    """Lowercased content tokens: length > 2, not a stop word, not a number."""
    return [
        word
        for word in _TOKEN_SPLIT_RE.split(_clean_for_keywords(text))
        if len(word) > 2 and word not in STOP_WORDS and not _DIGITS_RE.match(word)
    ]


def extract_keywords(text: str, max_keywords: int = 5) -> List[str]:
    """Return the top keywords of a text, most important first."""
    if not text or len(text.strip()) < MIN_TEXT_LENGTH:
        return []

    words = tokenize(text)
    if not words:
        return []

    freq: Dict[str, int] = {}
    for word in words:
        freq[word] = freq.get(word, 0) + 1

    total = len(words)
    scores: Dict[str, float] = {}
    for word, count in freq.items():
        tf = count / total
        # Favors words repeated a few times over very frequent ones.
        idf = 1.5 if count <= 3 else 1.0 / math.log(count + 1)
        scores[word] = tf * idf * count

    ranked = sorted(scores.items(), key=lambda item: item[1], reverse=True)
    return [word for word, _ in ranked[: max(0, max_keywords)]]


def extract_entities(text: str) -> List[str]:
    """Capitalized phrases and quoted strings, de-duplicated, at most 10."""
    if not text or len(text.strip()) < MIN_TEXT_LENGTH:
        return []

    entities: Dict[str, None] = {}

    for match in CAPITALIZED_RE.finditer(text):
        entity = match.group(1)
        if len(entity) > 2 and not NON_ENTITY_PREFIX_RE.match(entity):
            entities.setdefault(entity, None)

    for match in QUOTED_RE.finditer(text):
        quoted = match.group(1)
        if 2 < len(quoted) < 50:
            entities.setdefault(quoted, None)

    return list(entities)[:MAX_ENTITIES]
