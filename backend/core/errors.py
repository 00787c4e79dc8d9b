"""Error taxonomy for the transform relay."""
from typing import Optional


class ImageTransformError(Exception):
    """Base error carrying the HTTP status reported to the caller."""

    status_code: int = 500
    error: str = "Internal Server Error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {
            "statusCode": self.status_code,
            "message": self.message,
            "error": self.error,
        }


class InvalidInputError(ImageTransformError):
    """Bad mime type, missing file, or unknown transformation."""

    status_code = 400
    error = "Bad Request"


class PayloadTooLargeError(ImageTransformError):
    status_code = 413
    error = "Payload Too Large"


class UpstreamError(ImageTransformError):
    """Network or HTTP failure talking to the image-edit API."""

    status_code = 502
    error = "Bad Gateway"

    def __init__(self, message: str, upstream_status: Optional[int] = None):
        super().__init__(message)
        self.upstream_status = upstream_status


class UpstreamInvalidResponse(UpstreamError):
    """The image-edit API answered successfully but without a result URL."""
