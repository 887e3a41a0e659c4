from __future__ import annotations

import sys
from pathlib import Path
from typing import List, Optional

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from journal_nlp.config import AppConfig  # noqa: E402
from journal_nlp.errors import RemoteModelError  # noqa: E402
from journal_nlp.remote import RemoteClassifier, TextGenerator  # noqa: E402


class FakeGenerator(TextGenerator):
    """In-memory stand-in for a remote model."""

    def __init__(self, reply: str = "", available: bool = True, fail: bool = False):
        self.reply = reply
        self.available = available
        self.fail = fail
        self.prompts: List[str] = []
        self.probes = 0

    def is_available(self) -> bool:
        self.probes += 1
        return self.available

    def generate(self, prompt: str, *, temperature: float, max_tokens: int, timeout: float) -> str:
        self.prompts.append(prompt)
        if self.fail:
            raise RemoteModelError("boom")
        return self.reply


@pytest.fixture
def make_classifier():
    def _make(reply: str = "", available: bool = True, fail: bool = False, ttl: Optional[float] = 0.0):
        return RemoteClassifier(FakeGenerator(reply, available, fail), availability_ttl=ttl)

    return _make


@pytest.fixture
def local_config() -> AppConfig:
    return AppConfig.from_dict({"model": {"provider": "none"}})
