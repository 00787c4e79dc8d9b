import httpx
from typing import Optional

from config.settings import settings
from core.errors import UpstreamError, UpstreamInvalidResponse
from core.logger import logger

class OpenAIImageService:
    """Client for the OpenAI image edit endpoint."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        api_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.OPENAI_API_KEY
        self.api_url = api_url or settings.OPENAI_API_URL
        self.timeout = timeout or settings.UPSTREAM_TIMEOUT
        self.transport = transport

    async def edit_image(self, image_path: str, mask_path: str, prompt: str, size: int = 1024) -> str:
        """
        Submit an image and mask for editing and return the first result URL.

        Raises:
            UpstreamError: on missing credentials, transport failures or non-200 responses
            UpstreamInvalidResponse: when a 200 response carries no result URL
        """
        if not self.api_key:
            raise UpstreamError("OpenAI API key not configured")

        data = {
            "prompt": prompt,
            "n": "1",
            "size": f"{size}x{size}",
            "response_format": "url",
        }
        headers = {"Authorization": f"Bearer {self.api_key}"}

        try:
            with open(image_path, "rb") as image_file, open(mask_path, "rb") as mask_file:
                files = {
                    "image": ("image.png", image_file, "image/png"),
                    "mask": ("mask.png", mask_file, "image/png"),
                }
                async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                    response = await client.post(self.api_url, data=data, files=files, headers=headers)
        except httpx.TimeoutException as e:
            logger.error(f"Image API request timed out: {e}")
            raise UpstreamError("Request timeout - image API may be slow") from e
        except httpx.HTTPError as e:
            logger.error(f"Error calling image API: {e}")
            raise UpstreamError(f"Error calling image API: {e}") from e

        if response.status_code != 200:
            logger.error(f"Image API response {response.status_code}: {response.text[:500]}")
            raise UpstreamError(
                self._extract_error_message(response),
                upstream_status=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise UpstreamInvalidResponse("Invalid response from image API") from e

        image_url = self._extract_url(payload)
        if not image_url:
            logger.error(f"Image API returned no result URL: {str(payload)[:500]}")
            raise UpstreamInvalidResponse("Invalid response from image API")
        return image_url

    def _extract_error_message(self, response: httpx.Response) -> str:
        fallback = f"Image API request failed: {response.status_code}"
        try:
            error_data = response.json() if response.content else {}
        except ValueError:
            return fallback

        error = error_data.get("error") if isinstance(error_data, dict) else None
        if isinstance(error, dict) and error.get("message"):
            return error["message"]
        return fallback

    def _extract_url(self, payload) -> Optional[str]:
        if not isinstance(payload, dict):
            return None
        results = payload.get("data")
        if not isinstance(results, list) or not results:
            return None
        first = results[0]
        if not isinstance(first, dict):
            return None
        url = first.get("url")
        return url if isinstance(url, str) and url else None
