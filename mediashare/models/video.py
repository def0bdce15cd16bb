from enum import Enum
from typing import Optional
from pydantic import BaseModel, field_validator
from mediashare.utils.text import format_description

class VideoProvider(str, Enum):
    YOUTUBE = "youtube"
    VIMEO = "vimeo"
    XVIDEOS = "xvideos"
    PORNHUB = "pornhub"
    GDRIVE = "gdrive"
    DROPBOX = "dropbox"
    TERABOX = "terabox"
    TELEGRAM = "telegram"
    CATBOX = "catbox"

class EmbedResult(BaseModel):
    provider: VideoProvider
    embed_url: str

class VideoEntry(BaseModel):
    url: str
    custom_thumbnail_url: Optional[str] = None
    description: Optional[str] = None

    @field_validator("description")
    @classmethod
    def _normalise_bullets(cls, v: Optional[str]) -> Optional[str]:
        return format_description(v) if v is not None else None
