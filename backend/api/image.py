from fastapi import APIRouter, Depends, File, Form, UploadFile
from typing import Optional

from config.settings import settings
from core.errors import InvalidInputError, PayloadTooLargeError
from core.logger import logger
from models.image_transform import (
    TransformationListResponse,
    TransformResponse,
    UpstreamHealthResponse,
)
from services.image_processing import validate_mime_type
from services.image_transform_service import ImageTransformService
from services.transformations import list_transformations

router = APIRouter(prefix="/image", tags=["image"])

def get_image_transform_service() -> ImageTransformService:
    return ImageTransformService()

@router.get("/transformations", response_model=TransformationListResponse)
async def get_transformations():
    """List the available transformations"""
    return TransformationListResponse(transformations=list_transformations())

@router.post("/transform", response_model=TransformResponse)
async def transform_image(
    image: Optional[UploadFile] = File(None),
    transformation: Optional[str] = Form(None),
    service: ImageTransformService = Depends(get_image_transform_service)
):
    """Apply one of the canned transformations to an uploaded image"""
    if image is None:
        raise InvalidInputError("No image file provided")

    logger.info(
        f"Incoming file: filename={image.filename}, "
        f"mimetype={image.content_type}, size={image.size}"
    )
    validate_mime_type(image.content_type)

    if not transformation:
        raise InvalidInputError("No transformation specified")

    content = await image.read()
    if len(content) > settings.MAX_UPLOAD_SIZE:
        max_mb = settings.MAX_UPLOAD_SIZE // (1024 * 1024)
        raise PayloadTooLargeError(f"File too large (max {max_mb}MB)")

    url = await service.transform_image(content, transformation, image.content_type)
    return TransformResponse(url=url)

@router.get("/health", response_model=UpstreamHealthResponse)
async def check_upstream_config():
    """Check if the image API is properly configured"""
    has_key = settings.upstream_configured

    return UpstreamHealthResponse(
        configured=has_key,
        message="OpenAI API key configured" if has_key else "OpenAI API key not set"
    )
