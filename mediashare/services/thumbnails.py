import asyncio
from io import BytesIO
from typing import Iterable, Optional, Union
import requests
from PIL import Image
from mediashare.config import settings
from mediashare.core.resolver import FRAME_CAPTURE_PROVIDERS, classify, get_host, get_video_thumbnail, parse_url
from mediashare.models.video import VideoEntry, VideoProvider
from mediashare.providers.vimeo import VimeoHost
from mediashare.utils.cache import ThumbnailCache
from mediashare.utils.frames import FrameExtractor
from mediashare.utils.logger import logger

# Thumbnails we can warm by fetching the derived CDN image
STATIC_PRELOAD_PROVIDERS = (VideoProvider.YOUTUBE, VideoProvider.GDRIVE)

class ThumbnailService:
    """Resolves, caches and preloads video thumbnails.

    Two caches are owned by the service: ``cache`` holds the final answer for
    any provider keyed by the original video URL, ``vimeo_cache`` holds Vimeo
    API lookups. Failures never raise; they resolve to ``default_thumbnail``.
    """

    def __init__(
        self,
        cache: Optional[ThumbnailCache] = None,
        vimeo_cache: Optional[ThumbnailCache] = None,
        frame_extractor: Optional[FrameExtractor] = None,
        session: Optional[requests.Session] = None,
        default_thumbnail: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.cache = cache if cache is not None else ThumbnailCache("thumbnails")
        self.vimeo_cache = vimeo_cache if vimeo_cache is not None else ThumbnailCache("vimeo")
        self.session = session or requests.Session()
        self.timeout = timeout if timeout is not None else settings.HTTP_TIMEOUT
        self.vimeo = VimeoHost(session=self.session, timeout=self.timeout)
        self.frames = frame_extractor or FrameExtractor()
        self.default_thumbnail = default_thumbnail or settings.DEFAULT_THUMBNAIL

    def get_thumbnail(self, url: str) -> Optional[str]:
        """Network-free lookup, see :func:`get_video_thumbnail`."""
        return get_video_thumbnail(url, vimeo_cache=self.vimeo_cache, cache=self.cache)

    async def fetch_vimeo_thumbnail(self, url: str) -> Optional[str]:
        cached = self.vimeo_cache.get(url)
        if cached:
            return cached
        return await asyncio.to_thread(self.vimeo.fetch_thumbnail, url, self.vimeo_cache)

    async def resolve(self, url: str, provider: VideoProvider) -> str:
        cached = self.cache.get(url)
        if cached:
            return cached

        if provider in FRAME_CAPTURE_PROVIDERS:
            return await self._capture_thumbnail(url, provider)

        if provider == VideoProvider.VIMEO:
            thumbnail = await self.fetch_vimeo_thumbnail(url)
            if not thumbnail:
                logger.warning(f"No Vimeo thumbnail found for {url}, using default")
                thumbnail = self.default_thumbnail
            self.cache.set(url, thumbnail)
            return thumbnail

        thumbnail = self.get_thumbnail(url)
        if thumbnail:
            self.cache.set(url, thumbnail)
            return thumbnail
        return self.default_thumbnail

    async def _capture_thumbnail(self, url: str, provider: VideoProvider) -> str:
        try:
            parsed = parse_url(url)
            if parsed is None:
                raise ValueError(f"Invalid video URL: {url!r}")
            media_url = get_host(provider).media_url(url, parsed)
            thumbnail = await self.frames.capture(media_url)
        except Exception as e:
            logger.warning(f"Error generating thumbnail for {url}: {e}")
            thumbnail = self.default_thumbnail
        # Cached even on failure so the capture is not attempted again
        self.cache.set(url, thumbnail)
        return thumbnail

    def _fetch_and_decode(self, image_url: str):
        resp = self.session.get(image_url, timeout=self.timeout)
        resp.raise_for_status()
        with Image.open(BytesIO(resp.content)) as img:
            img.verify()

    async def decode_image(self, image_url: str):
        """Download an image and make sure it decodes; raises on failure."""
        await asyncio.to_thread(self._fetch_and_decode, image_url)

    async def preload(self, videos: Iterable[Union[VideoEntry, dict]]):
        entries = [v if isinstance(v, VideoEntry) else VideoEntry(**v) for v in videos]
        await asyncio.gather(*(self._preload_one(entry) for entry in entries))

    async def _preload_one(self, entry: VideoEntry):
        url = entry.url
        try:
            if entry.custom_thumbnail_url:
                try:
                    await self.decode_image(entry.custom_thumbnail_url)
                except Exception as e:
                    logger.warning(f"Failed to decode custom thumbnail for {url}: {e}")
                return

            provider = classify(url)
            if not provider or url in self.cache:
                return

            if provider in STATIC_PRELOAD_PROVIDERS:
                thumbnail = self.get_thumbnail(url)
                if not thumbnail:
                    return
                try:
                    await self.decode_image(thumbnail)
                    self.cache.set(url, thumbnail)
                except Exception as e:
                    logger.warning(f"Failed to decode thumbnail for {url}: {e}")
                    self.cache.set(url, self.default_thumbnail)

            elif provider == VideoProvider.VIMEO:
                try:
                    thumbnail = await self.fetch_vimeo_thumbnail(url)
                    if not thumbnail:
                        raise ValueError("No Vimeo thumbnail found")
                    await self.decode_image(thumbnail)
                    self.cache.set(url, thumbnail)
                except Exception as e:
                    logger.warning(f"Failed to get or decode Vimeo thumbnail for {url}: {e}")
                    self.cache.set(url, self.default_thumbnail)
        except Exception as e:
            logger.warning(f"Error preloading thumbnail for {url}: {e}")
            self.cache.set(url, self.default_thumbnail)
