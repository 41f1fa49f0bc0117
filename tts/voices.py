"""Каталог голосов Qwen3-TTS: дефолты, нормализация ответа /v1/voices, слияние."""
from .base import Voice

GENDERS = ("male", "female", "neutral")

DEFAULT_VOICES = (
    Voice("Vivian", "Vivian", "zh", "female", "Bright, slightly edgy young female"),
    Voice("Serena", "Serena", "zh", "female", "Warm, gentle young female"),
    Voice("Ryan", "Ryan", "en", "male", "Dynamic male with strong rhythmic drive"),
    Voice("Aiden", "Aiden", "en", "male", "Sunny American male with clear midrange"),
    Voice("Dylan", "Dylan", "zh", "male", "Youthful Beijing male, clear natural timbre"),
    Voice("Eric", "Eric", "zh", "male", "Lively Chengdu male, slightly husky"),
    Voice("Uncle_Fu", "Uncle Fu", "zh", "male", "Seasoned male, low mellow timbre"),
    Voice("Ono_Anna", "Ono Anna", "ja", "female", "Playful Japanese female, light nimble timbre"),
    Voice("Sohee", "Sohee", "ko", "female", "Warm Korean female with rich emotion"),
)


def _first(record: dict, *keys: str) -> str | None:
    for key in keys:
        value = record.get(key)
        if value:
            return str(value)
    return None


def normalize_voice(item) -> Voice:
    """
    Привести элемент ответа сервера к Voice.

    Ключи берутся в фиксированном порядке (voice_id → id → name).
    Если ничего не нашлось — сам элемент в виде строки становится и id, и name.
    """
    record = item if isinstance(item, dict) else {}
    fallback = str(item)

    gender = record.get("gender")
    return Voice(
        id=_first(record, "voice_id", "id", "name") or fallback,
        name=_first(record, "name", "voice_id", "id") or fallback,
        language=_first(record, "language") or "en",
        gender=gender if gender in GENDERS else "neutral",
        description=_first(record, "description"),
    )


def parse_voice_list(data) -> list[Voice] | None:
    """JSON-ответ /v1/voices → список Voice. None, если форма не распознана."""
    if isinstance(data, dict) and isinstance(data.get("voices"), list):
        data = data["voices"]
    if not isinstance(data, list):
        return None
    return [normalize_voice(item) for item in data]


def merge_voices(defaults, dynamic) -> list[Voice]:
    """
    Дефолты без совпавших id + голоса сервера (серверный побеждает).
    Возвращает новый список, исходные не трогаются.
    """
    dynamic_ids = {v.id for v in dynamic}
    merged = [v for v in defaults if v.id not in dynamic_ids]

    seen = set()
    for v in dynamic:
        if v.id in seen:
            continue
        seen.add(v.id)
        merged.append(v)
    return merged
