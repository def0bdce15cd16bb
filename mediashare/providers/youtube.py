from typing import Optional
from urllib.parse import ParseResult, parse_qs
from mediashare.core.video import VideoHost
from mediashare.models.video import VideoProvider

class YouTubeHost(VideoHost):
    provider = VideoProvider.YOUTUBE
    hostnames = ("youtube.com", "youtu.be")

    def _get_video_id(self, parsed: ParseResult, allow_path: bool = False) -> str:
        if "youtu.be" in parsed.hostname:
            return parsed.path[1:]
        qs = parse_qs(parsed.query, keep_blank_values=True)
        if "v" in qs:
            return qs["v"][0]
        if allow_path:
            # /embed/<id>, /shorts/<id>, /live/<id>
            return parsed.path.split("/")[-1]
        return ""

    def embed_url(self, url: str, parsed: ParseResult) -> Optional[str]:
        video_id = self._get_video_id(parsed, allow_path=True)
        if not video_id:
            return None
        return f"https://www.youtube.com/embed/{video_id}"

    def thumbnail_url(self, url: str, parsed: ParseResult) -> Optional[str]:
        video_id = self._get_video_id(parsed)
        if not video_id:
            return None
        return f"https://img.youtube.com/vi/{video_id}/maxresdefault.jpg"
