"""
Интеграция с хостом: регистрация Qwen3-TTS как tts-расширения.

Хост передаёт контекст в init() и получает провайдер обратно.
Глобального состояния нет — всё живёт в экземпляре Qwen3Plugin.
"""
import logging
from abc import ABC, abstractmethod

from core.config import tts_config
from tts import get_tts
from tts.base import BaseTTS, ConfigurationError

logger = logging.getLogger("plugin")

PLUGIN_NAME = "voice-qwen3-tts"

CONFIG_SCHEMA = {
    "title": "Qwen3-TTS Configuration",
    "description": "Configure the Qwen3-TTS server connection",
    "fields": [
        {
            "name": "server_url",
            "type": "text",
            "label": "Server URL",
            "placeholder": "http://qwen3-tts:8880",
            "default": "http://qwen3-tts:8880",
            "description": "URL of your Qwen3-TTS server",
        },
        {
            "name": "voice",
            "type": "text",
            "label": "Default Voice",
            "placeholder": "Vivian",
            "default": "Vivian",
            "description": "Default voice ID (e.g. Vivian, Ryan, Serena)",
        },
        {
            "name": "language",
            "type": "text",
            "label": "Language",
            "placeholder": "en",
            "default": "en",
            "description": "Language code (e.g. en, zh, ja, ko)",
        },
        {
            "name": "speed",
            "type": "text",
            "label": "Speed",
            "placeholder": "1.0",
            "default": "1.0",
            "description": "Playback speed (0.25-4.0)",
        },
    ],
}


class PluginContext(ABC):
    """То, что хост даёт плагину."""
    log: logging.Logger

    @abstractmethod
    def get_config(self) -> dict:
        pass

    @abstractmethod
    def register_config_schema(self, name: str, schema: dict):
        pass

    @abstractmethod
    def unregister_config_schema(self, name: str):
        pass

    @abstractmethod
    def register_extension(self, kind: str, provider: BaseTTS):
        pass

    @abstractmethod
    def unregister_extension(self, kind: str):
        pass


class Qwen3Plugin:
    name = PLUGIN_NAME
    version = "1.0.0"
    description = "Qwen3-TTS by Alibaba Cloud"

    def __init__(self):
        self.provider: BaseTTS | None = None
        self._cleanups = []

    async def init(self, ctx: PluginContext) -> BaseTTS | None:
        """
        Поднять провайдер и зарегистрировать его у хоста.

        Returns: провайдер, если сервер доступен; иначе None.
        """
        if self.provider or self._cleanups:
            # Повторный init: старый провайдер и регистрации снимаем
            await self.shutdown()

        ctx.register_config_schema(PLUGIN_NAME, CONFIG_SCHEMA)
        self._cleanups.append(lambda: ctx.unregister_config_schema(PLUGIN_NAME))

        cfg = tts_config(ctx.get_config())
        params = dict(cfg)
        try:
            provider = get_tts(params.pop("provider"), **params)
            self.provider = provider
            provider.validate_config()
        except ConfigurationError as e:
            ctx.log.error(f"Failed to init Qwen3 TTS: {e}")
            return None

        if not await provider.health_check():
            ctx.log.warning(f"Qwen3 server not reachable at {cfg['server_url']}")
            return None

        await provider.fetch_voices()
        ctx.register_extension("tts", provider)
        self._cleanups.append(lambda: ctx.unregister_extension("tts"))
        ctx.log.info(f"Qwen3 TTS registered ({cfg['server_url']})")
        return provider

    async def shutdown(self):
        for cleanup in reversed(self._cleanups):
            try:
                cleanup()
            except Exception as e:
                logger.warning(f"Cleanup failed during shutdown: {e}")
        self._cleanups.clear()

        if self.provider:
            await self.provider.shutdown()
            self.provider = None
