"""Image upload and removal for listing photos."""

from pathlib import Path

from fastapi import APIRouter, File, Query, Response, UploadFile, status

from pawmarket.api.core.constants import ALLOWED_IMAGE_TYPES
from pawmarket.api.core.dependencies import CurrentUserDep, ImageStorageDep
from pawmarket.api.core.exceptions.base import NotFoundError, PawMarketException
from pawmarket.api.core.messages import APIResponse, MessageCode
from pawmarket.api.images.schemas import UploadedImageModel, UploadedImageResponse
from pawmarket.api.images.validators import validate_image_upload
from pawmarket.utils.logger import get_logger
from pawmarket.utils.settings.storage import StorageSettings

logger = get_logger(__name__)

router = APIRouter(prefix="/images", tags=["images"])


@router.post("/upload", response_model=UploadedImageResponse)
async def upload_image(
    current_user: CurrentUserDep,
    storage: ImageStorageDep,
    file: UploadFile = File(...),
) -> UploadedImageResponse:
    content = await validate_image_upload(file, StorageSettings().MAX_UPLOAD_SIZE)

    # Extension follows the declared type, not the client filename
    extension = ALLOWED_IMAGE_TYPES[file.content_type]
    filename = f"{Path(file.filename or 'image').stem}{extension}"
    url = await storage.store(content, filename, file.content_type)
    if url is None:
        raise PawMarketException(
            MessageCode.UPLOAD_FAILED, status.HTTP_502_BAD_GATEWAY
        )

    logger.info("Image uploaded", user_id=str(current_user.id), url=url)
    return APIResponse.success(
        message_code=MessageCode.IMAGE_UPLOADED, data=UploadedImageModel(url=url)
    )


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def delete_image(
    current_user: CurrentUserDep,
    storage: ImageStorageDep,
    url: str = Query(..., min_length=1),
) -> Response:
    if not await storage.delete(url):
        raise NotFoundError(details={"url": url})
    logger.info("Image deleted", user_id=str(current_user.id), url=url)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
