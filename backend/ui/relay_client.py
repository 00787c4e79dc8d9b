import httpx
from typing import List, Optional

from config.settings import settings
from models.image_transform import Transformation

class RelayError(Exception):
    """A transform request the relay did not complete."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

class RelayClient:
    """Synchronous client for the transform relay endpoints."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: float = 180.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.base_url = (base_url or settings.RELAY_API_URL).rstrip("/")
        self.timeout = timeout
        self.transport = transport

    def _client(self) -> httpx.Client:
        return httpx.Client(base_url=self.base_url, timeout=self.timeout, transport=self.transport)

    def list_transformations(self) -> List[Transformation]:
        """Fetch the transformations the relay offers."""
        try:
            with self._client() as client:
                response = client.get("/image/transformations")
                response.raise_for_status()
                data = response.json()
            return [Transformation(**item) for item in data["transformations"]]
        except (httpx.HTTPError, ValueError, KeyError, TypeError) as e:
            raise RelayError(f"Could not load transformations from {self.base_url}: {e}") from e

    def transform(self, image_bytes: bytes, filename: str, mime_type: str, effect: str) -> str:
        """Send an image for transformation and return the result URL."""
        files = {"image": (filename, image_bytes, mime_type)}
        data = {"transformation": effect}

        try:
            with self._client() as client:
                response = client.post("/image/transform", files=files, data=data)
        except httpx.HTTPError as e:
            raise RelayError(f"Could not reach relay at {self.base_url}: {e}") from e

        if not response.is_success:
            try:
                error_data = response.json()
            except ValueError:
                error_data = {}
            message = error_data.get("message") if isinstance(error_data, dict) else None
            raise RelayError(message or "Failed to transform image", response.status_code)

        try:
            payload = response.json()
        except ValueError:
            payload = None

        url = payload.get("url") if isinstance(payload, dict) else None
        if not isinstance(url, str) or not url:
            raise RelayError("Failed to transform image", response.status_code)
        return url
