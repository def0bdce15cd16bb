from typing import Optional
from urllib.parse import ParseResult
from mediashare.core.video import VideoHost
from mediashare.models.video import VideoProvider

class TelegramHost(VideoHost):
    provider = VideoProvider.TELEGRAM
    hostnames = ("t.me",)

    def embed_url(self, url: str, parsed: ParseResult) -> Optional[str]:
        parts = [p for p in parsed.path.split("/") if p]
        if len(parts) < 2:
            return None
        channel, message_id = parts[0], parts[1]
        return f"https://t.me/{channel}/{message_id}"
