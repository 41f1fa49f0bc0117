"""
Единый загрузчик конфигурации.
Приоритет: config.json → переменные окружения / .env → дефолты
"""
import json
import logging
import os
from pathlib import Path
from dotenv import load_dotenv

logger = logging.getLogger("core.config")

PLATFORM_ROOT = Path(__file__).resolve().parent.parent

# Дефолтная конфигурация
DEFAULTS = {
    "log_level": "INFO",

    "tts": {
        "provider": "qwen3",
        "server_url": "http://qwen3-tts:8880",
        "voice": "Vivian",
        "model": "",
        "speed": 1.0,
        "language": "en",
        "response_format": "wav",
        "api_key": "",
        "health_timeout": 1.0,
        "voices_timeout": 3.0,
        "synthesize_timeout": 3.0,
    },
}

# Переменная окружения → ключ секции tts
TTS_ENV = {
    "QWEN3_TTS_URL": "server_url",
    "QWEN3_TTS_VOICE": "voice",
    "QWEN3_TTS_LANGUAGE": "language",
    "QWEN3_TTS_API_KEY": "api_key",
}


def _deep_merge(base: dict, override: dict) -> dict:
    """Рекурсивное слияние: override перезаписывает base."""
    result = base.copy()
    for k, v in override.items():
        if k in result and isinstance(result[k], dict) and isinstance(v, dict):
            result[k] = _deep_merge(result[k], v)
        else:
            result[k] = v
    return result


def _env_overrides() -> dict:
    tts = {key: os.environ[env] for env, key in TTS_ENV.items() if os.getenv(env)}
    cfg = {"tts": tts}
    if os.getenv("LOG_LEVEL"):
        cfg["log_level"] = os.environ["LOG_LEVEL"]
    return cfg


def tts_config(overrides: dict | None = None) -> dict:
    """
    Секция tts: дефолты + окружение + overrides (например, конфиг от хоста).
    Неизвестные ключи отбрасываются.
    """
    base = _deep_merge(DEFAULTS["tts"], _env_overrides()["tts"])
    known = {k: v for k, v in (overrides or {}).items() if k in base and v is not None}
    return _deep_merge(base, known)


def load_config(config_dir: str | Path | None = None) -> dict:
    """
    Загружает полную конфигурацию.

    1. Базовые дефолты
    2. .env из папки конфига → .env из корня платформы
    3. config.json из папки конфига
    """
    config_dir = Path(config_dir).resolve() if config_dir else PLATFORM_ROOT

    # Загружаем .env (папка конфига → корень)
    local_env = config_dir / ".env"
    root_env = PLATFORM_ROOT / ".env"
    if local_env.exists():
        load_dotenv(local_env, override=True)
    if root_env.exists():
        load_dotenv(root_env, override=False)

    file_config = {}
    config_file = config_dir / "config.json"
    if config_file.exists():
        file_config = json.loads(config_file.read_text(encoding="utf-8"))
        logger.debug(f"Config loaded: {config_file}")

    cfg = _deep_merge(DEFAULTS, _env_overrides())
    cfg = _deep_merge(cfg, file_config)
    cfg["tts"] = tts_config(cfg["tts"])
    cfg["config_dir"] = str(config_dir)
    return cfg
