#!/usr/bin/env python3
"""
Qwen3-TTS — проверка сервера и синтез из командной строки.

Запуск:
  python run.py                       # дефолты + .env
  python run.py configs/local         # config.json из папки
  python run.py configs/local "Привет, мир"

Без текста — только health check и список голосов.
Аудио никуда не сохраняется, в лог пишется размер и время.
"""
import asyncio
import logging
import sys
from pathlib import Path

# Путь к корню платформы
PLATFORM_ROOT = Path(__file__).resolve().parent
sys.path.insert(0, str(PLATFORM_ROOT))

from core.config import load_config
from tts import get_tts
from tts.base import ConfigurationError, SynthesisError

logger = logging.getLogger("run")


async def main(config_dir: str | None, text: str) -> int:
    cfg = load_config(config_dir)
    logging.getLogger().setLevel(cfg["log_level"])

    params = dict(cfg["tts"])
    try:
        provider = get_tts(params.pop("provider"), **params)
    except ConfigurationError as e:
        logger.error(f"Config error: {e}")
        return 1

    logger.info("=" * 50)
    logger.info(f"{provider.metadata.name} v{provider.metadata.version}")
    logger.info(f"Server: {provider.server_url} | Voice: {provider.voice} | Model: {provider.model}")

    try:
        provider.validate_config()

        if not await provider.health_check():
            logger.error(f"Qwen3 server not reachable at {provider.server_url}")
            return 1

        await provider.fetch_voices()
        for v in provider.voices:
            logger.info(f"  {v.id:<12} {v.language or '-':<4} {v.gender or '-':<8} {v.description or ''}")
        logger.info("=" * 50)

        if text:
            result = await provider.synthesize(text)
            duration_s = len(result.audio) / (result.sample_rate * 2) if result.sample_rate else 0
            logger.info(f"Synthesized {len(result.audio)} bytes {result.format} @ {result.sample_rate}Hz "
                        f"({duration_s:.1f}s audio) in {result.duration_ms}ms")
        return 0

    except ConfigurationError as e:
        logger.error(f"Config error: {e}")
        return 1
    except SynthesisError as e:
        logger.error(str(e))
        return 1
    finally:
        await provider.shutdown()


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
        force=True,
    )

    args = sys.argv[1:]
    config_dir = None
    if args and Path(args[0]).is_dir():
        config_dir = args.pop(0)

    sys.exit(asyncio.run(main(config_dir, " ".join(args))))
