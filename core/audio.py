"""
Аудио-утилиты: разбор WAV-контейнера (RIFF/WAVE) в сырой PCM.
Все функции работают с PCM16 (signed 16-bit little-endian).
"""
import struct
import logging

logger = logging.getLogger("core.audio")

DEFAULT_SAMPLE_RATE = 24000
WAV_HEADER_SIZE = 44  # каноничный заголовок: RIFF(12) + fmt(24) + data(8)


def parse_wav_sample_rate(buffer: bytes) -> int:
    """Частота дискретизации из фиксированного 44-байтного заголовка.

    Никогда не падает: для короткого буфера или буфера без RIFF
    возвращает DEFAULT_SAMPLE_RATE.
    """
    if len(buffer) < 28:
        return DEFAULT_SAMPLE_RATE
    if buffer[:4] != b"RIFF":
        return DEFAULT_SAMPLE_RATE
    return struct.unpack_from("<I", buffer, 24)[0]


def wav_to_pcm(wav: bytes) -> tuple[bytes, int]:
    """
    Извлечь PCM и sample rate из WAV, проходя по чанкам.

    Returns: (pcm_data, sample_rate)

    Если чанк data не найден — отдаём всё после 44-го байта
    и частоту из фиксированного заголовка.
    """
    offset = 12
    sample_rate = DEFAULT_SAMPLE_RATE

    while offset + 8 <= len(wav):
        chunk_id = wav[offset:offset + 4]
        chunk_size = struct.unpack_from("<I", wav, offset + 4)[0]

        if chunk_id == b"fmt ":
            # sample rate лежит на смещении 4 внутри payload
            if offset + 16 <= len(wav):
                sample_rate = struct.unpack_from("<I", wav, offset + 12)[0]
        elif chunk_id == b"data":
            start = offset + 8
            return bytes(wav[start:start + chunk_size]), sample_rate

        offset += 8 + chunk_size

    # Срез короче 44 байт даёт пустой PCM, а не ошибку
    logger.debug(f"WAV: no data chunk in {len(wav)} bytes, using offset {WAV_HEADER_SIZE}")
    return bytes(wav[WAV_HEADER_SIZE:]), parse_wav_sample_rate(wav)
