"""Общие фикстуры: фейковый Qwen3-TTS сервер на aiohttp.web."""
import asyncio
import io
import wave

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from tts.qwen3 import Qwen3TTS


def make_wav(pcm: bytes, sample_rate: int = 24000) -> bytes:
    """Mono PCM16 → WAV через стандартный модуль wave."""
    buf = io.BytesIO()
    with wave.open(buf, "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(sample_rate)
        wf.writeframes(pcm)
    return buf.getvalue()


class FakeQwen3Server:
    """Отвечает на /v1/models, /v1/voices, /v1/audio/speech по настраиваемым полям."""

    def __init__(self):
        self.url = ""
        self.delay = 0.0
        self.models_status = 200
        self.voices_status = 200
        self.voices = [{"voice_id": "clone_1", "name": "My Clone", "language": "en", "gender": "female"}]
        self.voices_raw = None
        self.speech_status = 200
        self.speech_body = make_wav(b"\x01\x00\x02\x00\x03\x00\x04\x00", 24000)
        self.speech_error = "Voice not found"
        self.requests = []

    def app(self) -> web.Application:
        app = web.Application()
        app.router.add_get("/v1/models", self._models)
        app.router.add_get("/v1/voices", self._voices)
        app.router.add_post("/v1/audio/speech", self._speech)
        return app

    async def _record(self, request: web.Request, body=None):
        self.requests.append({
            "method": request.method,
            "path": request.path,
            "headers": dict(request.headers),
            "json": body,
        })
        if self.delay:
            await asyncio.sleep(self.delay)

    async def _models(self, request: web.Request) -> web.Response:
        await self._record(request)
        return web.json_response({"object": "list", "data": [{"id": "tts-1-hd"}]},
                                 status=self.models_status)

    async def _voices(self, request: web.Request) -> web.Response:
        await self._record(request)
        if self.voices_raw is not None:
            return web.Response(text=self.voices_raw, status=self.voices_status)
        return web.json_response(self.voices, status=self.voices_status)

    async def _speech(self, request: web.Request) -> web.Response:
        await self._record(request, await request.json())
        if self.speech_status != 200:
            return web.Response(text=self.speech_error, status=self.speech_status)
        return web.Response(body=self.speech_body, content_type="audio/wav")


@pytest.fixture
async def qwen3_server():
    fake = FakeQwen3Server()
    server = TestServer(fake.app())
    await server.start_server()
    fake.url = f"http://{server.host}:{server.port}"
    yield fake
    await server.close()


@pytest.fixture
async def provider(qwen3_server):
    p = Qwen3TTS(server_url=qwen3_server.url, health_timeout=5.0,
                 voices_timeout=5.0, synthesize_timeout=5.0)
    yield p
    await p.shutdown()


@pytest.fixture
def wav_factory():
    return make_wav
