"""Configuration loading for the journal analysis core."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml


DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass
class ModelConfig:
    """Optional remote model used for sentiment labels and distortion hints."""

    provider: str = "ollama"
    base_url: str = "http://localhost:11434"
    # Empty selects the provider default (see remote.DEFAULT_MODELS).
    model: str = ""
    probe_timeout: float = 2.0
    sentiment_timeout: float = 10.0
    distortion_timeout: float = 8.0
    # 0 probes on every call; a positive value caches the probe result.
    availability_ttl: float = 0.0


@dataclass
class AnalysisConfig:
    """Tunables for the deterministic engines."""

    max_keywords: int = 5


@dataclass
class LoggingConfig:
    level: str = "INFO"
    format: str = DEFAULT_LOG_FORMAT


@dataclass
class AppConfig:
    """Top-level app configuration."""

    model: ModelConfig = field(default_factory=ModelConfig)
    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    gemini_api_key: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AppConfig":
        """Build config from a dictionary, then apply environment overrides."""
        model = ModelConfig(**data.get("model", {}))
        analysis = AnalysisConfig(**data.get("analysis", {}))
        log_cfg = LoggingConfig(**data.get("logging", {}))

        model.base_url = os.getenv("OLLAMA_BASE_URL", model.base_url)
        if model.provider.lower() == "ollama":
            model.model = os.getenv("OLLAMA_SENTIMENT_MODEL", model.model)
        log_cfg.level = os.getenv("LOG_LEVEL", log_cfg.level)

        return cls(
            model=model,
            analysis=analysis,
            logging=log_cfg,
            gemini_api_key=data.get("gemini_api_key") or os.getenv("GEMINI_API_KEY"),
        )

    @classmethod
    def from_yaml(cls, path: str) -> "AppConfig":
        """Load config from YAML."""
        config_path = Path(path).resolve()
        with config_path.open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
        return cls.from_dict(data)


def configure_logging(config: LoggingConfig) -> None:
    """Configure the root logger from config."""
    level = getattr(logging, str(config.level).upper(), logging.INFO)
    logging.basicConfig(level=level, format=config.format)
