"""Vector similarity over externally supplied embeddings, plus keyword overlap."""

from __future__ import annotations

import json
import numbers
from typing import Any, Dict, List, Mapping, Optional, Sequence

import numpy as np

from .errors import EmbeddingParseError, VectorLengthMismatchError
from .schemas import SimilarityHit


MIN_KEYWORD_SIMILARITY = 0.2
PREVIEW_CHARS = 100


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Cosine of the angle between two equal-length vectors.

    Raises:
        VectorLengthMismatchError: if the lengths differ.

    Returns 0.0 when either vector has zero norm.
    """
    if len(a) != len(b):
        raise VectorLengthMismatchError(len(a), len(b))

    vec_a = np.asarray(a, dtype=np.float64)
    vec_b = np.asarray(b, dtype=np.float64)
    norm_a = float(np.linalg.norm(vec_a))
    norm_b = float(np.linalg.norm(vec_b))
    if norm_a == 0 or norm_b == 0:
        return 0.0
    return float(np.dot(vec_a, vec_b) / (norm_a * norm_b))


def _reject_constant(name: str) -> float:
    raise ValueError(f"non-finite number {name}")


def serialize_embedding(embedding: Sequence[float]) -> str:
    """Encode an embedding as a JSON array; NaN and infinities raise ValueError."""
    if isinstance(embedding, np.ndarray):
        embedding = embedding.tolist()
    return json.dumps(
        [float(x) if isinstance(x, np.floating) else x for x in embedding],
        allow_nan=False,
    )


def parse_embedding(raw: str) -> List[float]:
    """Decode a JSON array of numbers.

    Raises:
        EmbeddingParseError: for invalid JSON, non-arrays or non-numeric items.
    """
    try:
        parsed = json.loads(raw, parse_constant=_reject_constant)
    except (TypeError, ValueError) as exc:
        raise EmbeddingParseError(f"Failed to parse embedding: {exc}") from exc
    if not isinstance(parsed, list) or not all(
        isinstance(n, numbers.Real) and not isinstance(n, bool) for n in parsed
    ):
        raise EmbeddingParseError("Failed to parse embedding: Invalid embedding format")
    return parsed


def find_most_similar(
    query: Sequence[float],
    candidates: Sequence[Mapping[str, Any]],
    limit: int = 5,
    exclude_id: Optional[str] = None,
) -> List[SimilarityHit]:
    """Rank ``{id, embedding}`` candidates by cosine similarity to the query."""
    hits = [
        SimilarityHit(id=item["id"], similarity=cosine_similarity(query, item["embedding"]))
        for item in candidates
        if exclude_id is None or item["id"] != exclude_id
    ]
    hits.sort(key=lambda hit: hit.similarity, reverse=True)
    return hits[: max(0, limit)]


def keyword_similarity(keywords_a: Sequence[str], keywords_b: Sequence[str]) -> float:
    """Jaccard similarity of two keyword lists."""
    if not keywords_a or not keywords_b:
        return 0.0
    set_a = set(keywords_a)
    set_b = set(keywords_b)
    return len(set_a & set_b) / len(set_a | set_b)


def find_similar_entries(
    target_keywords: Sequence[str],
    entries: Sequence[Mapping[str, Any]],
    limit: int = 5,
) -> List[Dict[str, Any]]:
    """Entries whose keywords overlap the target's by more than 20%."""
    if not target_keywords or not entries:
        return []

    scored: List[Dict[str, Any]] = []
    for entry in entries:
        similarity = keyword_similarity(target_keywords, entry.get("keywords") or [])
        if similarity <= MIN_KEYWORD_SIMILARITY:
            continue
        content = entry.get("content") or ""
        preview = content[:PREVIEW_CHARS] + ("..." if len(content) > PREVIEW_CHARS else "")
        scored.append({"id": entry["id"], "similarity": similarity, "preview": preview})

    scored.sort(key=lambda x: x["similarity"], reverse=True)
    return scored[: max(0, limit)]
