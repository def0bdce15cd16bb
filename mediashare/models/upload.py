from typing import Literal
from pydantic import BaseModel

UploadStatus = Literal["uploading", "completed", "error"]

class ImageFile(BaseModel):
    name: str
    content: bytes
    content_type: str = "application/octet-stream"

    @property
    def size(self) -> int:
        return len(self.content)

class UploadProgress(BaseModel):
    index: int
    percent: int
    status: UploadStatus
