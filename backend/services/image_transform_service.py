"""
Transform relay service.

Validates a transformation request, prepares the image and mask, and hands
them to the image-edit API. Each call is a single attempt: nothing is
retried and no state survives the call.
"""
import asyncio
from typing import Optional

from config.settings import settings
from core.errors import PayloadTooLargeError
from core.logger import logger
from services.image_processing import (
    build_edit_mask,
    normalize_image,
    temporary_artifacts,
    validate_mime_type,
)
from services.openai_image_service import OpenAIImageService
from services.transformations import get_prompt


class ImageTransformService:
    def __init__(
        self,
        image_service: Optional[OpenAIImageService] = None,
        temp_dir: Optional[str] = None,
        target_size: Optional[int] = None,
        max_processed_size: Optional[int] = None,
    ):
        self.image_service = image_service or OpenAIImageService()
        self.temp_dir = temp_dir or settings.TEMP_DIR
        self.target_size = target_size or settings.TARGET_IMAGE_SIZE
        self.max_processed_size = max_processed_size or settings.MAX_PROCESSED_SIZE

    async def transform_image(self, image_bytes: bytes, transformation: str, mime_type: str) -> str:
        """
        Apply a named transformation and return the provider's result URL.

        Args:
            image_bytes: Raw PNG or JPEG upload
            transformation: Key of the prompt table (younger, older, healthier, thinner)
            mime_type: Mime type reported for the upload

        Returns:
            The first result URL, exactly as the provider returned it

        Raises:
            InvalidInputError, PayloadTooLargeError, UpstreamError, UpstreamInvalidResponse
        """
        validate_mime_type(mime_type)
        prompt = get_prompt(transformation)

        processed_image = await asyncio.to_thread(normalize_image, image_bytes, self.target_size)
        if len(processed_image) > self.max_processed_size:
            max_mb = self.max_processed_size // (1024 * 1024)
            raise PayloadTooLargeError(f"Processed image is too large (max {max_mb}MB)")

        mask = await asyncio.to_thread(build_edit_mask, self.target_size)

        logger.info(
            f"Submitting '{transformation}' edit "
            f"({len(image_bytes)} bytes in, {len(processed_image)} bytes normalized)"
        )
        async with temporary_artifacts(self.temp_dir, image=processed_image, mask=mask) as paths:
            url = await self.image_service.edit_image(
                paths["image"], paths["mask"], prompt, self.target_size
            )

        logger.info(f"'{transformation}' edit completed")
        return url
