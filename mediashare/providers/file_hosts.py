from typing import Optional
from urllib.parse import ParseResult, parse_qs, quote, urlparse
from mediashare.core.video import VideoHost
from mediashare.models.video import VideoProvider

CORS_PROXY = "https://corsproxy.io/?"

def dropbox_direct_url(url: str) -> str:
    """Rewrite a Dropbox share link into a direct-content link.

    ``dl=0``/``dl=1`` and anything after the first ``&`` are dropped; ``rlkey``
    is kept and ``raw=1`` appended so the file streams instead of downloading.
    """
    direct = (
        url.replace("www.dropbox.com", "dl.dropboxusercontent.com", 1)
        .replace("?dl=0", "", 1)
        .replace("?dl=1", "", 1)
        .split("&")[0]
    )
    p = urlparse(direct)
    rlkey = (parse_qs(p.query).get("rlkey") or [None])[0]
    query = f"?rlkey={rlkey}&raw=1" if rlkey else "?raw=1"
    return f"{p.scheme}://{p.netloc}{p.path}{query}"

class DropboxHost(VideoHost):
    provider = VideoProvider.DROPBOX
    hostnames = ("dropbox.com",)

    def embed_url(self, url: str, parsed: ParseResult) -> Optional[str]:
        return dropbox_direct_url(url)

    def thumbnail_url(self, url: str, parsed: ParseResult) -> Optional[str]:
        # Only available once a frame has been captured
        return None

    def media_url(self, url: str, parsed: ParseResult) -> str:
        return dropbox_direct_url(url)

class TeraBoxHost(VideoHost):
    provider = VideoProvider.TERABOX
    hostnames = ("terabox.com",)

    def embed_url(self, url: str, parsed: ParseResult) -> Optional[str]:
        return url

class CatboxHost(VideoHost):
    provider = VideoProvider.CATBOX
    hostnames = ("catbox.moe",)

    def embed_url(self, url: str, parsed: ParseResult) -> Optional[str]:
        # Same escaping as JavaScript's encodeURIComponent
        return CORS_PROXY + quote(url, safe="-_.!~*'()")

    def thumbnail_url(self, url: str, parsed: ParseResult) -> Optional[str]:
        return None
