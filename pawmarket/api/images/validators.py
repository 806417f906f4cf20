from fastapi import UploadFile, status

from pawmarket.api.core.constants import ALLOWED_IMAGE_TYPES
from pawmarket.api.core.exceptions.base import PawMarketException
from pawmarket.api.core.messages import MessageCode


async def validate_image_upload(file: UploadFile, max_size_bytes: int) -> bytes:
    """Validate uploaded image content type and size, return bytes."""
    if file.content_type not in ALLOWED_IMAGE_TYPES:
        raise PawMarketException(
            MessageCode.INVALID_FILE_TYPE,
            status.HTTP_400_BAD_REQUEST,
            {"allowed": sorted(ALLOWED_IMAGE_TYPES)},
        )

    # Read one byte past the limit so oversized files fail without a full read
    content = await file.read(max_size_bytes + 1)
    if len(content) > max_size_bytes:
        raise PawMarketException(
            MessageCode.FILE_TOO_LARGE,
            status.HTTP_400_BAD_REQUEST,
            {"max_bytes": max_size_bytes},
        )
    return content
