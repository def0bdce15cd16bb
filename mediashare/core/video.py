from abc import ABC, abstractmethod
from typing import Optional, Tuple
from urllib.parse import ParseResult
from mediashare.config import settings
from mediashare.models.video import VideoProvider

class VideoHost(ABC):
    provider: VideoProvider
    hostnames: Tuple[str, ...] = ()

    def matches(self, hostname: str) -> bool:
        return any(name in hostname for name in self.hostnames)

    @abstractmethod
    def embed_url(self, url: str, parsed: ParseResult) -> Optional[str]:
        """Player URL for the video, or None when a required URL component is missing."""
        pass

    def thumbnail_url(self, url: str, parsed: ParseResult) -> Optional[str]:
        """Thumbnail derivable from the URL alone."""
        return settings.DEFAULT_THUMBNAIL

    def media_url(self, url: str, parsed: ParseResult) -> str:
        """Direct URL of the video file, used for frame capture."""
        return url
