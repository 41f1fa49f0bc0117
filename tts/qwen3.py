"""
Qwen3-TTS — адаптер для платформы.
Self-hosted сервер с OpenAI-совместимым API (groxaxo/qwen3-tts-openai-fastapi).
Возвращает WAV, отдаём PCM16.
"""
import asyncio
import logging
import time

import aiohttp

from core.audio import wav_to_pcm
from .base import (
    PCM_S16LE,
    BaseTTS,
    ConfigurationError,
    ProviderClosedError,
    ProviderMetadata,
    SynthesisError,
    SynthesisResult,
    Voice,
)
from .voices import DEFAULT_VOICES, merge_voices, parse_voice_list

logger = logging.getLogger("tts.qwen3")

DEFAULT_SERVER_URL = "http://qwen3-tts:8880"


class Qwen3TTS(BaseTTS):
    metadata = ProviderMetadata(
        name="qwen3-tts",
        version="1.0.0",
        type="tts",
        description="Qwen3-TTS with voice cloning, voice design, and multilingual support",
        capabilities=("voice-selection", "voice-cloning", "voice-design", "multilingual"),
        local=True,
        emoji="\U0001f5e3\ufe0f",
    )

    def __init__(self, server_url: str = DEFAULT_SERVER_URL, voice: str = "Vivian",
                 model: str = "", speed: float = 1.0, language: str = "en",
                 response_format: str = "wav", api_key: str = "",
                 health_timeout: float = 1.0, voices_timeout: float = 3.0,
                 synthesize_timeout: float = 3.0, clock=time.monotonic, **kwargs):
        self.server_url = (server_url or "").rstrip("/")
        self.voice = voice
        self.language = language
        self.model = model or self._model_for(language)
        try:
            self.speed = float(speed)
        except (TypeError, ValueError):
            raise ConfigurationError(f"speed must be a number, got {speed!r}") from None
        self.response_format = response_format
        self.api_key = api_key
        self.health_timeout = health_timeout
        self.voices_timeout = voices_timeout
        self.synthesize_timeout = synthesize_timeout
        self._clock = clock
        self._voices = list(DEFAULT_VOICES)
        self._closed = False
        self.session = None

    @staticmethod
    def _model_for(language: str) -> str:
        if language and language != "en":
            return f"tts-1-hd-{language}"
        return "tts-1-hd"

    @property
    def voices(self) -> list[Voice]:
        return list(self._voices)

    def validate_config(self):
        if not self.server_url:
            raise ConfigurationError("server_url is required")

    async def _get_session(self):
        if self._closed:
            raise ProviderClosedError("Qwen3 TTS provider is shut down")
        if self.session is None or self.session.closed:
            headers = {}
            if self.api_key:
                headers["Authorization"] = f"Bearer {self.api_key}"
            self.session = aiohttp.ClientSession(headers=headers)
        return self.session

    async def health_check(self) -> bool:
        """GET /v1/models с коротким таймаутом. Любая ошибка → False."""
        if self._closed:
            return False
        session = await self._get_session()
        try:
            async with session.get(
                f"{self.server_url}/v1/models",
                timeout=aiohttp.ClientTimeout(total=self.health_timeout),
            ) as resp:
                return 200 <= resp.status < 300
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.debug(f"Qwen3 health check failed: {e!r}")
            return False

    async def fetch_voices(self):
        """
        Подтянуть голоса с сервера и слить с дефолтами.
        При любой ошибке каталог остаётся прежним.
        """
        if self._closed:
            return
        session = await self._get_session()
        try:
            async with session.get(
                f"{self.server_url}/v1/voices",
                timeout=aiohttp.ClientTimeout(total=self.voices_timeout),
            ) as resp:
                if not 200 <= resp.status < 300:
                    logger.warning(f"Qwen3 voices: HTTP {resp.status}, keeping defaults")
                    return
                data = await resp.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            logger.warning(f"Qwen3 voices fetch failed: {e!r}, keeping defaults")
            return

        dynamic = parse_voice_list(data)
        if dynamic is None:
            logger.warning(f"Qwen3 voices: unexpected payload {type(data).__name__}")
            return

        # Целиком новый список — читатель видит либо старый, либо новый каталог
        self._voices = merge_voices(DEFAULT_VOICES, dynamic)
        logger.info(f"Qwen3 voices: {len(dynamic)} from server, {len(self._voices)} total")

    async def synthesize(self, text: str, voice: str | None = None,
                         speed: float | None = None,
                         sample_rate: int | None = None) -> SynthesisResult:
        """
        Синтез через POST /v1/audio/speech.
        Возвращает PCM int16 с частотой из WAV-заголовка ответа.
        """
        session = await self._get_session()
        t0 = self._clock()

        payload = {
            "input": text,
            "voice": voice or self.voice,
            "model": self.model,
            "response_format": self.response_format,
            "speed": float(speed) if speed is not None else self.speed,
        }

        try:
            async with session.post(
                f"{self.server_url}/v1/audio/speech", json=payload,
                timeout=aiohttp.ClientTimeout(total=self.synthesize_timeout),
            ) as resp:
                if not 200 <= resp.status < 300:
                    error = await resp.text()
                    logger.error(f"Qwen3 TTS error {resp.status}: {error[:200]}")
                    raise SynthesisError(
                        f"Qwen3 TTS error: {resp.status} - {error}",
                        status=resp.status, body=error,
                    )
                wav_bytes = await resp.read()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"Qwen3 TTS request failed: {e!r}")
            raise SynthesisError(f"Qwen3 TTS request failed: {e!r}") from e

        pcm, rate = wav_to_pcm(wav_bytes)
        if sample_rate and sample_rate != rate:
            # Сервер не умеет ресемплить, запрошенная частота — только пожелание
            logger.debug(f"Qwen3: requested {sample_rate}Hz, server returned {rate}Hz")

        elapsed_ms = int((self._clock() - t0) * 1000)
        logger.info(f"Qwen3: {len(text)} chars → {len(pcm)} bytes PCM @ {rate}Hz "
                    f"in {elapsed_ms}ms")

        return SynthesisResult(
            audio=pcm,
            sample_rate=rate,
            format=PCM_S16LE,
            duration_ms=elapsed_ms,
        )

    async def shutdown(self):
        self._closed = True
        if self.session and not self.session.closed:
            await self.session.close()
        self.session = None
