import re
from typing import Optional, Tuple
from urllib.parse import ParseResult
import requests
from mediashare.config import settings
from mediashare.core.video import VideoHost
from mediashare.models.video import VideoProvider
from mediashare.utils.cache import ThumbnailCache
from mediashare.utils.logger import logger

VIMEO_RE = re.compile(r"vimeo\.com/(\d+)(?:/([a-zA-Z0-9]+))?")

PLAYER_PARAMS = (
    "badge=0&autopause=0&player_id=0&app_id=58479&autoplay=0&muted=0"
    "&controls=1&loop=0&title=0&byline=0&portrait=0&background=0&transparent=0"
)

OEMBED_URL = "https://vimeo.com/api/oembed.json?url=https://vimeo.com/{video_id}/{hash}"
API_V2_URL = "https://vimeo.com/api/v2/video/{video_id}.json"

class VimeoHost(VideoHost):
    provider = VideoProvider.VIMEO
    hostnames = ("vimeo.com",)

    def __init__(self, session: Optional[requests.Session] = None, timeout: Optional[float] = None):
        self._session = session
        self.timeout = timeout if timeout is not None else settings.HTTP_TIMEOUT

    @property
    def session(self) -> requests.Session:
        # Only the thumbnail lookup needs HTTP; created on first use
        if self._session is None:
            self._session = requests.Session()
        return self._session

    def _get_video_id(self, url: str) -> Optional[Tuple[str, Optional[str]]]:
        """Return (video_id, privacy_hash); the hash is only present on unlisted videos."""
        m = VIMEO_RE.search(url)
        if not m:
            return None
        return m.group(1), m.group(2)

    def embed_url(self, url: str, parsed: ParseResult) -> Optional[str]:
        ids = self._get_video_id(url)
        if not ids:
            return None
        video_id, hash_ = ids
        path = f"{video_id}/{hash_}" if hash_ else video_id
        return f"https://player.vimeo.com/video/{path}?h={hash_ or ''}&{PLAYER_PARAMS}"

    def thumbnail_url(self, url: str, parsed: ParseResult) -> Optional[str]:
        # Needs an API round-trip, see fetch_thumbnail
        return None

    def _get_json(self, api_url: str):
        resp = self.session.get(api_url, timeout=self.timeout)
        if not resp.ok:
            raise ValueError(f"Error {resp.status_code}: {resp.reason}")
        return resp.json()

    def fetch_thumbnail(self, url: str, cache: ThumbnailCache) -> Optional[str]:
        """Look up the thumbnail through the Vimeo API and remember it in ``cache``.

        Private (hashed) videos go through oEmbed, public ones through API v2.
        Returns None on any failure.
        """
        cached = cache.get(url)
        if cached:
            return cached

        try:
            ids = self._get_video_id(url)
            if not ids:
                raise ValueError("Invalid Vimeo URL")
            video_id, hash_ = ids

            thumbnail = None
            if hash_:
                data = self._get_json(OEMBED_URL.format(video_id=video_id, hash=hash_))
                if isinstance(data, dict):
                    thumbnail = data.get("thumbnail_url")
            else:
                data = self._get_json(API_V2_URL.format(video_id=video_id))
                if isinstance(data, list) and data and isinstance(data[0], dict):
                    thumbnail = data[0].get("thumbnail_large")

            if not isinstance(thumbnail, str) or not thumbnail:
                raise ValueError("No thumbnail found")

            # Ask the CDN for the largest rendition
            thumbnail = thumbnail.replace("_640", "_1920", 1)
            cache.set(url, thumbnail)
            return thumbnail
        except (requests.RequestException, ValueError) as e:
            logger.error(f"Error fetching Vimeo thumbnail for {url}: {e}")
            return None
