"""Loading exported journal entries for the offline batch path."""

from __future__ import annotations

import hashlib
import json
import logging
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, List, Optional

from dateutil import parser as dt_parser

from .schemas import JournalEntry


logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = {".txt", ".md", ".json", ".jsonl"}
CONTENT_KEYS = ("content", "text", "body")
TIMESTAMP_KEYS = ("created_at", "createdAt", "timestamp", "date")


def _normalize_text(text: str) -> str:
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()


def _parse_optional_timestamp(value: object) -> Optional[datetime]:
    if value is None:
        return None
    try:
        if isinstance(value, (int, float)):
            # Millisecond epochs are common in exports.
            seconds = value / 1000.0 if value > 1e11 else float(value)
            return datetime.fromtimestamp(seconds, tz=timezone.utc)
        if isinstance(value, str) and value.strip():
            return dt_parser.parse(value)
    except (ValueError, OverflowError, OSError) as exc:
        logger.debug("Unparseable timestamp %r: %s", value, exc)
        return None
    return None


def _extract_timestamp_from_filename(path: Path) -> Optional[datetime]:
    match = re.search(r"(\d{4}[-_]\d{2}[-_]\d{2})", path.name)
    if not match:
        return None
    return _parse_optional_timestamp(match.group(1).replace("_", "-"))


def _derive_id(source: str, content: str) -> str:
    return hashlib.sha256(f"{source}|{content}".encode("utf-8")).hexdigest()[:16]


class EntryLoader:
    """Loads journal entries from text, markdown, JSON and JSON Lines files."""

    def load_paths(self, inputs: Iterable[str]) -> List[JournalEntry]:
        entries: List[JournalEntry] = []
        for raw in inputs:
            path = Path(raw)
            if path.is_dir():
                for child in sorted(path.rglob("*")):
                    if child.is_file() and child.suffix.lower() in SUPPORTED_EXTENSIONS:
                        entries.extend(self._load_file(child))
            elif path.is_file():
                entries.extend(self._load_file(path))
            else:
                logger.warning("Skipping missing input: %s", path)
        return entries

    def _load_file(self, path: Path) -> List[JournalEntry]:
        suffix = path.suffix.lower()
        if suffix in {".txt", ".md"}:
            entry = self._load_plaintext(path)
            return [entry] if entry else []
        if suffix == ".json":
            return self._load_json(path)
        if suffix == ".jsonl":
            return self._load_jsonl(path)
        return []

    def _load_plaintext(self, path: Path) -> Optional[JournalEntry]:
        text = _normalize_text(path.read_text(encoding="utf-8", errors="ignore"))
        if not text:
            return None
        return JournalEntry(
            id=path.stem,
            content=text,
            source=str(path),
            created_at=_extract_timestamp_from_filename(path),
        )

    def _load_json(self, path: Path) -> List[JournalEntry]:
        raw = path.read_text(encoding="utf-8", errors="ignore")
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Invalid JSON in %s, reading it as plain text", path)
            entry = self._load_plaintext(path)
            return [entry] if entry else []

        if isinstance(data, dict):
            data = data.get("entries", [data])
        if not isinstance(data, list):
            return []

        entries: List[JournalEntry] = []
        for idx, item in enumerate(data):
            entry = self._entry_from_record(item, source=f"{path}#{idx}")
            if entry:
                entries.append(entry)
        return entries

    def _load_jsonl(self, path: Path) -> List[JournalEntry]:
        entries: List[JournalEntry] = []
        with path.open("r", encoding="utf-8", errors="ignore") as fh:
            for lineno, line in enumerate(fh, start=1):
                line = line.strip()
                if not line:
                    continue
                try:
                    item = json.loads(line)
                except json.JSONDecodeError:
                    logger.warning("Skipping invalid JSON on %s line %d", path, lineno)
                    continue
                entry = self._entry_from_record(item, source=f"{path}:{lineno}")
                if entry:
                    entries.append(entry)
        return entries

    def _entry_from_record(self, item: object, source: str) -> Optional[JournalEntry]:
        if isinstance(item, str):
            item = {"content": item}
        if not isinstance(item, dict):
            return None

        content = next((item[k] for k in CONTENT_KEYS if isinstance(item.get(k), str)), "")
        content = _normalize_text(content)
        if not content:
            return None

        timestamp = next((item[k] for k in TIMESTAMP_KEYS if item.get(k) is not None), None)
        extra = {k: v for k, v in item.items() if k not in CONTENT_KEYS + TIMESTAMP_KEYS + ("id",)}
        return JournalEntry(
            id=str(item.get("id") or _derive_id(source, content)),
            content=content,
            source=source,
            created_at=_parse_optional_timestamp(timestamp),
            extra=extra,
        )
