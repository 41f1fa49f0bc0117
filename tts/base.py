"""Базовый интерфейс TTS для всей платформы"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field

PCM_S16LE = "pcm_s16le"


class ConfigurationError(ValueError):
    """Конфиг провайдера невалиден (сеть не трогаем)."""


class TTSError(RuntimeError):
    """Базовая ошибка TTS-провайдера."""


class SynthesisError(TTSError):
    """Ошибка синтеза: отказ сервера (status) или сбой транспорта (status=None)."""

    def __init__(self, message: str, status: int | None = None, body: str = ""):
        super().__init__(message)
        self.status = status
        self.body = body


class ProviderClosedError(TTSError):
    """Вызов после shutdown()."""


@dataclass(frozen=True)
class Voice:
    id: str
    name: str
    language: str | None = None
    gender: str | None = None
    description: str | None = None


@dataclass(frozen=True)
class SynthesisResult:
    """PCM-аудио одного вызова synthesize."""
    audio: bytes
    sample_rate: int
    format: str = PCM_S16LE
    duration_ms: int = 0


@dataclass(frozen=True)
class ProviderMetadata:
    name: str
    version: str
    type: str
    description: str
    capabilities: tuple[str, ...] = field(default_factory=tuple)
    local: bool = False
    emoji: str = ""


class BaseTTS(ABC):
    metadata: ProviderMetadata

    @property
    @abstractmethod
    def voices(self) -> list[Voice]:
        """Текущий каталог голосов."""
        pass

    @abstractmethod
    def validate_config(self):
        """Бросает ConfigurationError, если конфиг неполный."""
        pass

    @abstractmethod
    async def synthesize(self, text: str, voice: str | None = None,
                         speed: float | None = None,
                         sample_rate: int | None = None) -> SynthesisResult:
        """
        Синтезировать речь из текста.

        voice/speed/sample_rate переопределяют дефолты конфига только для этого вызова.
        """
        pass

    async def health_check(self) -> bool:
        """Дефолт: провайдер всегда доступен."""
        return True

    async def fetch_voices(self):
        """Дефолт: каталог статический."""
        return None

    @abstractmethod
    async def shutdown(self):
        pass
