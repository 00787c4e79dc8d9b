"""
Shared pytest fixtures and configuration for all tests
"""
import io
import pytest
import struct
import sys
import zlib
from pathlib import Path

# Add backend to Python path for imports
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

import httpx
from PIL import Image

RESULT_URL = "https://images.example.com/generated/abc123.png?sig=xyz&expires=3600"


def _make_image_bytes(width=640, height=480, fmt="JPEG", color=(180, 60, 60)):
    mode = "RGBA" if fmt == "PNG" else "RGB"
    fill = color + (255,) if mode == "RGBA" else color
    buffered = io.BytesIO()
    Image.new(mode, (width, height), fill).save(buffered, format=fmt)
    return buffered.getvalue()


def _make_oversized_png(width=20000, height=20000):
    """Tiny PNG whose header declares width x height pixels"""
    png = bytearray(_make_image_bytes(1, 1, "PNG"))
    # IHDR data starts after the 8-byte signature, 4-byte length and chunk type
    png[16:24] = struct.pack(">II", width, height)
    png[29:33] = struct.pack(">I", zlib.crc32(bytes(png[12:29])))
    return bytes(png)


@pytest.fixture
def oversized_png_bytes():
    return _make_oversized_png()


@pytest.fixture
def make_image_bytes():
    """Factory producing encoded test images"""
    return _make_image_bytes


@pytest.fixture
def jpeg_bytes():
    return _make_image_bytes(2000, 1000, "JPEG")


@pytest.fixture
def png_bytes():
    return _make_image_bytes(300, 600, "PNG")


class RecordingUpstream:
    """httpx MockTransport that records every outbound request"""

    def __init__(self, status_code=200, json_body=None, content=None, exc=None):
        self.status_code = status_code
        self.json_body = json_body
        self.content = content
        self.exc = exc
        self.requests = []
        self.transport = httpx.MockTransport(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc(f"simulated {self.exc.__name__}", request=request)
        if self.json_body is not None:
            return httpx.Response(self.status_code, json=self.json_body)
        return httpx.Response(self.status_code, content=self.content or b"")


@pytest.fixture
def upstream():
    """Factory for a recording upstream transport"""
    def factory(status_code=200, json_body=None, content=None, exc=None):
        if json_body is None and content is None and exc is None and status_code == 200:
            json_body = {"created": 1700000000, "data": [{"url": RESULT_URL}]}
        return RecordingUpstream(status_code, json_body, content, exc)
    return factory


@pytest.fixture
def temp_dir(tmp_path):
    """Isolated directory for request-scoped temp artifacts"""
    path = tmp_path / "artifacts"
    path.mkdir()
    return path
