"""Unit tests for configuration loading."""

import json

import pytest

from core.config import DEFAULTS, TTS_ENV, load_config, tts_config


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for env in (*TTS_ENV, "LOG_LEVEL"):
        monkeypatch.delenv(env, raising=False)


class TestTtsConfig:
    """Tests for the tts section merge."""

    def test_defaults(self):
        assert tts_config() == DEFAULTS["tts"]

    def test_env_overrides_defaults(self, monkeypatch):
        monkeypatch.setenv("QWEN3_TTS_URL", "http://gpu-box:8880")
        monkeypatch.setenv("QWEN3_TTS_VOICE", "Ryan")

        cfg = tts_config()

        assert cfg["server_url"] == "http://gpu-box:8880"
        assert cfg["voice"] == "Ryan"

    def test_explicit_overrides_win(self, monkeypatch):
        monkeypatch.setenv("QWEN3_TTS_VOICE", "Ryan")
        assert tts_config({"voice": "Sohee"})["voice"] == "Sohee"

    def test_unknown_and_none_keys_dropped(self):
        cfg = tts_config({"foo": 1, "voice": None})
        assert "foo" not in cfg
        assert cfg["voice"] == "Vivian"

    def test_defaults_not_mutated(self):
        tts_config({"voice": "Eric"})
        assert DEFAULTS["tts"]["voice"] == "Vivian"


class TestLoadConfig:
    """Tests for load_config with a config directory."""

    def test_empty_dir(self, tmp_path):
        cfg = load_config(tmp_path)
        assert cfg["tts"] == DEFAULTS["tts"]
        assert cfg["log_level"] == "INFO"
        assert cfg["config_dir"] == str(tmp_path.resolve())

    def test_config_json(self, tmp_path):
        (tmp_path / "config.json").write_text(json.dumps({
            "log_level": "DEBUG",
            "tts": {"server_url": "http://localhost:8880", "language": "ja"},
        }), encoding="utf-8")

        cfg = load_config(tmp_path)

        assert cfg["log_level"] == "DEBUG"
        assert cfg["tts"]["server_url"] == "http://localhost:8880"
        assert cfg["tts"]["language"] == "ja"
        assert cfg["tts"]["voice"] == "Vivian"

    def test_dotenv(self, tmp_path, monkeypatch):
        # setenv заранее, чтобы monkeypatch откатил то, что запишет load_dotenv
        monkeypatch.setenv("QWEN3_TTS_VOICE", "placeholder")
        (tmp_path / ".env").write_text("QWEN3_TTS_VOICE=Aiden\n", encoding="utf-8")

        cfg = load_config(tmp_path)

        assert cfg["tts"]["voice"] == "Aiden"

    def test_config_json_beats_env(self, tmp_path, monkeypatch):
        monkeypatch.setenv("QWEN3_TTS_URL", "http://from-env:1")
        (tmp_path / "config.json").write_text(
            json.dumps({"tts": {"server_url": "http://from-file:2"}}), encoding="utf-8")

        assert load_config(tmp_path)["tts"]["server_url"] == "http://from-file:2"
