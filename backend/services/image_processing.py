"""
Image preparation for the image-edit API.

Responsibilities:
- Validate uploaded mime types and decode PNG/JPEG bytes
- Normalize images onto a fixed square canvas (fit-contain, white padding)
- Build the edit mask sent alongside the image
- Scope temporary files to a single request
"""
import asyncio
import io
import os
import re
import uuid
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict

from PIL import Image, ImageOps, UnidentifiedImageError

from core.errors import InvalidInputError, PayloadTooLargeError
from core.logger import logger

ACCEPTED_MIME_TYPE = re.compile(r"^image/(png|jpeg|jpg)$")
ACCEPTED_FORMATS = {"PNG", "JPEG"}
WHITE = (255, 255, 255, 255)


def validate_mime_type(mime_type: str) -> None:
    if not mime_type or not ACCEPTED_MIME_TYPE.match(mime_type):
        raise InvalidInputError("Only PNG and JPEG images are allowed")


def decode_image(image_bytes: bytes) -> Image.Image:
    """Decode raw bytes into a PIL image, accepting only PNG and JPEG."""
    if not image_bytes:
        raise InvalidInputError("No image file provided")

    try:
        image = Image.open(io.BytesIO(image_bytes))
        image.load()
    except Image.DecompressionBombError as e:
        raise PayloadTooLargeError(f"Image dimensions are too large: {e}") from e
    except (UnidentifiedImageError, OSError) as e:
        raise InvalidInputError(f"Image could not be decoded: {e}") from e

    if image.format not in ACCEPTED_FORMATS:
        raise InvalidInputError("Only PNG and JPEG images are allowed")
    return image


def normalize_image(image_bytes: bytes, size: int = 1024) -> bytes:
    """
    Fit the image inside a size x size canvas padded with opaque white.

    Aspect ratio is preserved and the image is centered. Returns PNG bytes.
    """
    image = decode_image(image_bytes).convert("RGBA")
    canvas = ImageOps.pad(image, (size, size), method=Image.LANCZOS, color=WHITE)

    buffered = io.BytesIO()
    canvas.save(buffered, format="PNG")
    return buffered.getvalue()


def build_edit_mask(size: int = 1024) -> bytes:
    """Fully opaque white mask covering the whole canvas."""
    mask = Image.new("RGBA", (size, size), WHITE)

    buffered = io.BytesIO()
    mask.save(buffered, format="PNG")
    return buffered.getvalue()


def _write_artifacts(temp_dir: str, unique_id: uuid.UUID, artifacts: Dict[str, bytes], paths: Dict[str, str]) -> None:
    os.makedirs(temp_dir, exist_ok=True)
    for name, content in artifacts.items():
        path = os.path.join(temp_dir, f"{name}_{unique_id}.png")
        paths[name] = path
        with open(path, "wb") as f:
            f.write(content)


def _remove_artifacts(paths: Dict[str, str]) -> None:
    for path in paths.values():
        try:
            if os.path.exists(path):
                os.remove(path)
        except OSError as e:
            logger.warning(f"Failed to remove temp file {path}: {e}")


@asynccontextmanager
async def temporary_artifacts(temp_dir: str, **artifacts: bytes) -> AsyncIterator[Dict[str, str]]:
    """
    Write each named artifact to a uniquely named PNG in temp_dir.

    Yields a name -> path mapping. Every file is removed on exit, including
    when the body raises. Disk I/O runs in a worker thread.
    """
    unique_id = uuid.uuid4()
    paths: Dict[str, str] = {}

    try:
        await asyncio.to_thread(_write_artifacts, temp_dir, unique_id, artifacts, paths)
        yield paths
    finally:
        await asyncio.to_thread(_remove_artifacts, paths)
