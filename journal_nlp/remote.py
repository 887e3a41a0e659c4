"""Optional remote model backends with a best-effort classification capability.

Everything here degrades to ``None``: callers compose the result with a
deterministic local fallback and never see a remote failure.
"""

from __future__ import annotations

import logging
import threading
import time
from enum import Enum
from typing import Callable, Dict, Optional

import requests
from google import genai
from google.genai import types as genai_types

from .config import AppConfig, ModelConfig
from .errors import ConfigError, RemoteModelError
from .schemas import SentimentLabel


logger = logging.getLogger(__name__)


class ModelProvider(str, Enum):
    OLLAMA = "ollama"
    GEMINI = "gemini"
    NONE = "none"


DEFAULT_MODELS: Dict[ModelProvider, str] = {
    ModelProvider.OLLAMA: "gemma3:1b",
    ModelProvider.GEMINI: "gemini-2.5-flash",
}

SENTIMENT_PREFIX_CHARS = 500
DISTORTION_PREFIX_CHARS = 400


class TextGenerator:
    """A remote text-generation endpoint."""

    def is_available(self) -> bool:
        raise NotImplementedError

    def generate(self, prompt: str, *, temperature: float, max_tokens: int, timeout: float) -> str:
        """Return the model's text, or raise RemoteModelError."""
        raise NotImplementedError


class OllamaGenerator(TextGenerator):
    """Talks to an Ollama server over its HTTP API."""

    def __init__(self, base_url: str, model: str, probe_timeout: float = 2.0):
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.probe_timeout = probe_timeout

    def is_available(self) -> bool:
        try:
            resp = requests.get(f"{self.base_url}/api/tags", timeout=self.probe_timeout)
        except requests.RequestException as exc:
            logger.debug("Ollama probe failed at %s: %s", self.base_url, exc)
            return False
        return resp.ok

    def generate(self, prompt: str, *, temperature: float, max_tokens: int, timeout: float) -> str:
        payload = {
            "model": self.model,
            "prompt": prompt,
            "stream": False,
            "options": {"temperature": temperature, "num_predict": max_tokens},
        }
        try:
            resp = requests.post(f"{self.base_url}/api/generate", json=payload, timeout=timeout)
        except requests.RequestException as exc:
            raise RemoteModelError(f"Ollama request failed: {exc}") from exc
        if not resp.ok:
            raise RemoteModelError(f"Ollama request failed with HTTP {resp.status_code}")
        try:
            data = resp.json()
        except ValueError as exc:
            raise RemoteModelError("Ollama returned a non-JSON body") from exc
        if not isinstance(data, dict):
            raise RemoteModelError("Ollama returned an unexpected payload")
        return str(data.get("response") or "").strip()


class GeminiGenerator(TextGenerator):
    """Google Gemini through the google-genai client."""

    def __init__(self, model: str, api_key: Optional[str] = None, timeout: float = 10.0):
        self.model = model
        if api_key:
            self.client = genai.Client(
                api_key=api_key,
                http_options=genai_types.HttpOptions(timeout=int(timeout * 1000)),
            )
        else:
            self.client = None

    def is_available(self) -> bool:
        return self.client is not None

    def generate(self, prompt: str, *, temperature: float, max_tokens: int, timeout: float) -> str:
        if not self.client:
            raise RemoteModelError("Gemini API key is not configured")
        try:
            resp = self.client.models.generate_content(
                model=self.model,
                contents=prompt,
                config=genai_types.GenerateContentConfig(
                    temperature=temperature,
                    max_output_tokens=max_tokens,
                ),
            )
        except Exception as exc:
            raise RemoteModelError(f"Gemini request failed: {exc}") from exc
        return (resp.text or "").strip()


class AvailabilityProbe:
    """Liveness check with an optional time-boxed cache."""

    def __init__(
        self,
        check: Callable[[], bool],
        ttl_seconds: float = 0.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._check = check
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._last: Optional[bool] = None
        self._checked_at: Optional[float] = None

    def __call__(self) -> bool:
        if self.ttl_seconds <= 0:
            return bool(self._check())
        with self._lock:
            now = self._clock()
            if self._checked_at is not None and now - self._checked_at < self.ttl_seconds:
                return bool(self._last)
            self._last = bool(self._check())
            self._checked_at = now
            return self._last


def parse_sentiment_label(raw: str) -> SentimentLabel:
    """Map free-form model output to a label; unparseable output is NEUTRAL."""
    text = (raw or "").strip().upper()
    if "POSITIVE" in text:
        return SentimentLabel.POSITIVE
    if "NEGATIVE" in text:
        return SentimentLabel.NEGATIVE
    return SentimentLabel.NEUTRAL


class RemoteClassifier:
    """Best-effort remote classification. Every ``try_*`` returns None on failure."""

    def __init__(
        self,
        generator: TextGenerator,
        availability_ttl: float = 0.0,
        sentiment_timeout: float = 10.0,
        distortion_timeout: float = 8.0,
    ):
        self.generator = generator
        self.probe = AvailabilityProbe(generator.is_available, ttl_seconds=availability_ttl)
        self.sentiment_timeout = sentiment_timeout
        self.distortion_timeout = distortion_timeout

    def is_available(self) -> bool:
        return self.probe()

    def try_classify_sentiment(self, text: str) -> Optional[SentimentLabel]:
        if not self.is_available():
            return None
        excerpt = text[:SENTIMENT_PREFIX_CHARS]
        prompt = (
            "Analyze the sentiment of this text and respond with ONLY one word: "
            "POSITIVE, NEGATIVE, or NEUTRAL.\n\n"
            f'Text: "{excerpt}"\n\n'
            "Sentiment:"
        )
        try:
            raw = self.generator.generate(
                prompt, temperature=0.1, max_tokens=10, timeout=self.sentiment_timeout
            )
        except RemoteModelError as exc:
            logger.warning("Remote sentiment analysis failed, falling back to lexicon: %s", exc)
            return None
        return parse_sentiment_label(raw)

    def try_name_distortions(self, text: str) -> Optional[str]:
        """Ask for applicable distortion names; returns the lowercased reply."""
        if not self.is_available():
            return None
        excerpt = text[:DISTORTION_PREFIX_CHARS]
        prompt = (
            "Analyze this journal entry for cognitive distortions. List any you find from: "
            "all-or-nothing, overgeneralization, catastrophizing, should-statements, "
            "emotional-reasoning.\n\n"
            f'Text: "{excerpt}"\n\n'
            'List the distortions found (comma-separated) or "none":'
        )
        try:
            raw = self.generator.generate(
                prompt, temperature=0.2, max_tokens=50, timeout=self.distortion_timeout
            )
        except RemoteModelError as exc:
            logger.warning("LLM distortion detection failed: %s", exc)
            return None
        return raw.strip().lower()


def resolve_provider(name: str) -> ModelProvider:
    try:
        return ModelProvider((name or "none").strip().lower())
    except ValueError as exc:
        raise ConfigError(f"Unknown model provider: {name!r}") from exc


def build_generator(config: ModelConfig, gemini_api_key: Optional[str] = None) -> Optional[TextGenerator]:
    provider = resolve_provider(config.provider)
    if provider is ModelProvider.NONE:
        return None
    model = config.model.strip() or DEFAULT_MODELS[provider]
    if provider is ModelProvider.OLLAMA:
        return OllamaGenerator(config.base_url, model, probe_timeout=config.probe_timeout)
    timeout = max(config.sentiment_timeout, config.distortion_timeout)
    return GeminiGenerator(model, api_key=gemini_api_key, timeout=timeout)


def build_classifier(config: AppConfig) -> Optional[RemoteClassifier]:
    """Build the remote capability from app config, or None when disabled."""
    generator = build_generator(config.model, gemini_api_key=config.gemini_api_key)
    if generator is None:
        return None
    return RemoteClassifier(
        generator,
        availability_ttl=config.model.availability_ttl,
        sentiment_timeout=config.model.sentiment_timeout,
        distortion_timeout=config.model.distortion_timeout,
    )
