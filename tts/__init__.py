from .base import BaseTTS


def get_tts(provider: str, **kwargs) -> BaseTTS:
    """Фабрика TTS провайдеров."""
    if provider == "qwen3":
        from .qwen3 import Qwen3TTS
        return Qwen3TTS(**kwargs)
    else:
        raise ValueError(f"Unknown TTS provider: {provider}. Available: qwen3")
