import re
from typing import Optional
from urllib.parse import ParseResult, parse_qs
from mediashare.core.video import VideoHost
from mediashare.models.video import VideoProvider

XVIDEOS_ID_RE = re.compile(r"video[._]([^/]+)")

# Fixed CDN path template for PornHub poster frames
PORNHUB_THUMB_TEMPLATE = "https://di.phncdn.com/videos/{viewkey}/(m=eaAaGwObaaaa)(mh=xc_qR95oUCHcYYrV)16.jpg"

class XVideosHost(VideoHost):
    provider = VideoProvider.XVIDEOS
    hostnames = ("xvideos.com",)

    def _get_video_id(self, parsed: ParseResult) -> Optional[str]:
        m = XVIDEOS_ID_RE.search(parsed.path)
        if not m or not m.group(1):
            return None
        return m.group(1).split("/")[0]

    def embed_url(self, url: str, parsed: ParseResult) -> Optional[str]:
        video_id = self._get_video_id(parsed)
        if not video_id:
            return None
        return f"https://www.xvideos.com/embedframe/{video_id}"

    def thumbnail_url(self, url: str, parsed: ParseResult) -> Optional[str]:
        video_id = self._get_video_id(parsed)
        if not video_id:
            return None
        shard = "/".join(video_id[i:i + 1] for i in range(3))
        return f"https://img-hw.xvideos-cdn.com/videos/thumbs169/{shard}/{video_id}/{video_id}_169.jpg"

class PornHubHost(VideoHost):
    provider = VideoProvider.PORNHUB
    hostnames = ("pornhub.com",)

    def _get_viewkey(self, parsed: ParseResult) -> Optional[str]:
        qs = parse_qs(parsed.query)
        return (qs.get("viewkey") or [None])[0]

    def embed_url(self, url: str, parsed: ParseResult) -> Optional[str]:
        viewkey = self._get_viewkey(parsed)
        if not viewkey:
            return None
        return f"https://www.pornhub.com/embed/{viewkey}"

    def thumbnail_url(self, url: str, parsed: ParseResult) -> Optional[str]:
        viewkey = self._get_viewkey(parsed)
        if not viewkey:
            return None
        return PORNHUB_THUMB_TEMPLATE.format(viewkey=viewkey)
