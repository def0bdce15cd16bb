from typing import List, Optional
from urllib.parse import ParseResult, urlparse
from mediashare.config import settings
from mediashare.core.errors import ERROR_MESSAGES
from mediashare.core.video import VideoHost
from mediashare.models.video import EmbedResult, VideoProvider
from mediashare.providers.file_hosts import CatboxHost, DropboxHost, TeraBoxHost
from mediashare.providers.gdrive import GoogleDriveHost
from mediashare.providers.telegram import TelegramHost
from mediashare.providers.tube_sites import PornHubHost, XVideosHost
from mediashare.providers.vimeo import VimeoHost
from mediashare.providers.youtube import YouTubeHost
from mediashare.utils.cache import ThumbnailCache
from mediashare.utils.logger import logger

# Checked in order; the first host whose name appears in the hostname wins.
HOSTS: List[VideoHost] = [
    YouTubeHost(),
    VimeoHost(),
    XVideosHost(),
    PornHubHost(),
    GoogleDriveHost(),
    DropboxHost(),
    TeraBoxHost(),
    TelegramHost(),
    CatboxHost(),
]

# Providers whose thumbnails come from capturing a frame of the video file
FRAME_CAPTURE_PROVIDERS = (VideoProvider.DROPBOX, VideoProvider.CATBOX)

def parse_url(url: str) -> Optional[ParseResult]:
    """Parse an absolute URL; None when it is empty or has no scheme/host."""
    if not url:
        return None
    try:
        parsed = urlparse(url)
        if not parsed.scheme or not parsed.hostname:
            return None
    except ValueError:
        return None
    return parsed

def find_host(hostname: str) -> Optional[VideoHost]:
    for host in HOSTS:
        if host.matches(hostname):
            return host
    return None

def get_host(provider: VideoProvider) -> VideoHost:
    return next(h for h in HOSTS if h.provider == provider)

def classify(url: str) -> Optional[VideoProvider]:
    if not url:
        logger.warning(f"{ERROR_MESSAGES['INVALID_URL']} (empty URL)")
        return None
    parsed = parse_url(url)
    if parsed is None:
        logger.warning(f"{ERROR_MESSAGES['INVALID_URL']} {url!r}")
        return None
    host = find_host(parsed.hostname)
    if host is None:
        logger.warning(f"{ERROR_MESSAGES['UNSUPPORTED_PROVIDER']} {url}")
        return None
    return host.provider

def resolve_embed(url: str) -> Optional[EmbedResult]:
    try:
        parsed = parse_url(url)
        if parsed is None:
            logger.error(f"Error parsing video URL: {url!r}")
            return None
        host = find_host(parsed.hostname)
        if host is None:
            return None
        embed_url = host.embed_url(url, parsed)
        if not embed_url:
            logger.error(f"Invalid {host.provider.value} URL: {url}")
            return None
        return EmbedResult(provider=host.provider, embed_url=embed_url)
    except Exception as e:
        logger.error(f"Error parsing video URL {url!r}: {e}")
        return None

def get_video_thumbnail(
    url: str,
    vimeo_cache: Optional[ThumbnailCache] = None,
    cache: Optional[ThumbnailCache] = None,
) -> Optional[str]:
    """Thumbnail that can be produced without network access.

    Vimeo and frame-capture providers only return what is already cached.
    Unrecognised hosts get the default thumbnail.
    """
    try:
        parsed = parse_url(url)
        if parsed is None:
            return None
        host = find_host(parsed.hostname)
        if host is None:
            return settings.DEFAULT_THUMBNAIL
        if host.provider == VideoProvider.VIMEO:
            return vimeo_cache.get(url) if vimeo_cache is not None else None
        if host.provider in FRAME_CAPTURE_PROVIDERS:
            return cache.get(url) if cache is not None else None
        return host.thumbnail_url(url, parsed)
    except Exception as e:
        logger.error(f"Error getting video thumbnail for {url!r}: {e}")
        return None
