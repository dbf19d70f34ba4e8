# tests/conftest.py
from __future__ import annotations

import base64
import io
import struct
import zlib
from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from eyecare.api import routes
from eyecare.llm import LLMClient, LLMError
from eyecare.main import app
from eyecare.services import WizardSessionService


class FakeLLMClient(LLMClient):
    """
    Records every call and answers with a canned reply (or fails).
    """

    def __init__(self, reply: str = "Possible diagnosis: dry eye.", fail: bool = False):
        self.reply = reply
        self.fail = fail
        self.calls: List[Dict[str, Any]] = []

    def chat(
        self,
        messages: List[Dict[str, Any]],
        temperature: float = 0.2,
        model: Optional[str] = None,
        max_tokens: Optional[int] = None,
    ) -> str:
        self.calls.append(
            {
                "messages": messages,
                "temperature": temperature,
                "model": model,
                "max_tokens": max_tokens,
            }
        )
        if self.fail:
            raise LLMError("upstream unavailable")
        return self.reply


def make_data_url(fmt: str = "PNG", size=(8, 8)) -> str:
    buf = io.BytesIO()
    Image.new("RGB", size, color=(200, 30, 30)).save(buf, format=fmt)
    mime = Image.MIME[fmt]
    return f"data:{mime};base64," + base64.b64encode(buf.getvalue()).decode("ascii")


@pytest.fixture
def png_data_url() -> str:
    return make_data_url("PNG")


@pytest.fixture
def jpeg_data_url() -> str:
    return make_data_url("JPEG")


@pytest.fixture
def fake_llm() -> FakeLLMClient:
    return FakeLLMClient()


@pytest.fixture
def service() -> WizardSessionService:
    return WizardSessionService()


@pytest.fixture
def client(fake_llm, service):
    app.dependency_overrides[routes.get_llm_client_factory] = lambda: (lambda: fake_llm)
    app.dependency_overrides[routes.get_session_service] = lambda: service
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def make_oversized_png_data_url(width: int = 30000, height: int = 30000) -> str:
    """
    A tiny PNG whose header claims a huge canvas; no pixel data follows.
    """

    def chunk(kind: bytes, body: bytes) -> bytes:
        crc = zlib.crc32(kind + body) & 0xFFFFFFFF
        return struct.pack(">I", len(body)) + kind + body + struct.pack(">I", crc)

    ihdr = struct.pack(">IIBBBBB", width, height, 8, 2, 0, 0, 0)
    raw = b"\x89PNG\r\n\x1a\n" + chunk(b"IHDR", ihdr) + chunk(b"IEND", b"")
    return "data:image/png;base64," + base64.b64encode(raw).decode("ascii")
