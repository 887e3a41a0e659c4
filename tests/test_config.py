import logging

import pytest

from journal_nlp.config import AppConfig, LoggingConfig, configure_logging


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    for name in ("OLLAMA_BASE_URL", "OLLAMA_SENTIMENT_MODEL", "GEMINI_API_KEY", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    config = AppConfig.from_dict({})
    assert config.model.provider == "ollama"
    assert config.model.base_url == "http://localhost:11434"
    assert config.model.model == ""
    assert config.model.probe_timeout == 2.0
    assert config.analysis.max_keywords == 5
    assert config.logging.level == "INFO"
    assert config.gemini_api_key is None


def test_from_dict_sections():
    config = AppConfig.from_dict(
        {
            "model": {"provider": "gemini", "availability_ttl": 30},
            "analysis": {"max_keywords": 8},
            "logging": {"level": "DEBUG"},
            "gemini_api_key": "key-from-file",
        }
    )
    assert config.model.provider == "gemini"
    assert config.model.availability_ttl == 30
    assert config.analysis.max_keywords == 8
    assert config.logging.level == "DEBUG"
    assert config.gemini_api_key == "key-from-file"


def test_unknown_keys_are_rejected():
    with pytest.raises(TypeError):
        AppConfig.from_dict({"model": {"temperature": 0.5}})


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("OLLAMA_BASE_URL", "http://gpu-box:11434")
    monkeypatch.setenv("OLLAMA_SENTIMENT_MODEL", "llama3.2:3b")
    monkeypatch.setenv("GEMINI_API_KEY", "env-key")
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    config = AppConfig.from_dict({"model": {"model": "gemma3:1b"}})
    assert config.model.base_url == "http://gpu-box:11434"
    assert config.model.model == "llama3.2:3b"
    assert config.gemini_api_key == "env-key"
    assert config.logging.level == "WARNING"


def test_ollama_model_override_ignored_for_gemini(monkeypatch):
    monkeypatch.setenv("OLLAMA_SENTIMENT_MODEL", "llama3.2:3b")
    config = AppConfig.from_dict({"model": {"provider": "gemini"}})
    assert config.model.model == ""


def test_from_yaml(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "model:\n  provider: none\nanalysis:\n  max_keywords: 3\n",
        encoding="utf-8",
    )
    config = AppConfig.from_yaml(str(path))
    assert config.model.provider == "none"
    assert config.analysis.max_keywords == 3


def test_from_empty_yaml(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert AppConfig.from_yaml(str(path)).model.provider == "ollama"


def test_configure_logging(monkeypatch):
    seen = {}
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: seen.update(kwargs))
    configure_logging(LoggingConfig(level="debug"))
    assert seen["level"] == logging.DEBUG

    configure_logging(LoggingConfig(level="not-a-level"))
    assert seen["level"] == logging.INFO
