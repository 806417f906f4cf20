from pydantic import BaseModel

from pawmarket.api.core.messages import APIResponse


class UploadedImageModel(BaseModel):
    url: str


UploadedImageResponse = APIResponse[UploadedImageModel]
