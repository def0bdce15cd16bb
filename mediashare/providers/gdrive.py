import re
from typing import Optional
from urllib.parse import ParseResult
from mediashare.core.video import VideoHost
from mediashare.models.video import VideoProvider

FILE_ID_RE = re.compile(r"/d/([^/]+)")

class GoogleDriveHost(VideoHost):
    provider = VideoProvider.GDRIVE
    hostnames = ("drive.google.com",)

    def _get_file_id(self, url: str) -> Optional[str]:
        m = FILE_ID_RE.search(url)
        return m.group(1) if m else None

    def embed_url(self, url: str, parsed: ParseResult) -> Optional[str]:
        file_id = self._get_file_id(url)
        if not file_id:
            return None
        return f"https://drive.google.com/file/d/{file_id}/preview"

    def thumbnail_url(self, url: str, parsed: ParseResult) -> Optional[str]:
        file_id = self._get_file_id(url)
        if not file_id:
            return None
        return f"https://drive.google.com/thumbnail?id={file_id}&sz=w2000"
