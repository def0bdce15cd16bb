import asyncio
import base64
from io import BytesIO
from typing import Optional
from PIL import Image
from mediashare.config import settings
from mediashare.core.errors import ERROR_MESSAGES, ThumbnailError
from mediashare.utils.logger import logger

# Viewports at or below this width get the small capture size
MOBILE_VIEWPORT = 768

class FrameExtractor:
    """Grabs a single still from a remote video file with ffmpeg."""

    def __init__(
        self,
        ffmpeg_path: Optional[str] = None,
        timeout: Optional[float] = None,
        seek_seconds: Optional[float] = None,
        viewport_width: Optional[int] = None,
        quality: float = 0.7,
    ):
        self.ffmpeg_path = ffmpeg_path or settings.FFMPEG_PATH
        self.timeout = timeout if timeout is not None else settings.FRAME_TIMEOUT
        self.seek_seconds = seek_seconds if seek_seconds is not None else settings.FRAME_SEEK_SECONDS
        self.viewport_width = viewport_width if viewport_width is not None else settings.VIEWPORT_WIDTH
        self.quality = quality

    @property
    def max_width(self) -> int:
        return 480 if self.viewport_width <= MOBILE_VIEWPORT else 960

    def build_command(self, media_url: str) -> list:
        return [
            self.ffmpeg_path,
            "-nostdin",
            "-loglevel", "error",
            "-ss", str(self.seek_seconds),
            "-i", media_url,
            "-frames:v", "1",
            # Downscale only, keep aspect ratio
            "-vf", f"scale='min({self.max_width},iw)':-2",
            "-f", "image2pipe",
            "-vcodec", "png",
            "pipe:1",
        ]

    async def capture(self, media_url: str) -> str:
        """Return the frame at ``seek_seconds`` as a JPEG data URL.

        Raises ThumbnailError when ffmpeg cannot be started, fails, or does not
        finish within ``timeout`` seconds. The ffmpeg process never outlives
        this call.
        """
        cmd = self.build_command(media_url)
        try:
            proc = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise ThumbnailError(f"Could not start ffmpeg: {e}") from e

        try:
            stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=self.timeout)
        except asyncio.TimeoutError:
            raise ThumbnailError(f"Video metadata timeout after {self.timeout}s: {media_url}")
        finally:
            if proc.returncode is None:
                proc.kill()
                await proc.wait()

        if proc.returncode != 0 or not stdout:
            detail = stderr.decode("utf-8", errors="replace").strip()
            raise ThumbnailError(f"{ERROR_MESSAGES['VIDEO_LOAD_FAILED']} ffmpeg could not read a frame from {media_url}: {detail}")

        logger.debug(f"Captured frame from {media_url} ({len(stdout)} bytes)")
        return await asyncio.to_thread(self.to_data_url, stdout)

    def to_data_url(self, image_bytes: bytes) -> str:
        try:
            with Image.open(BytesIO(image_bytes)) as img:
                frame = img.convert("RGB")
        except OSError as e:
            raise ThumbnailError(f"{ERROR_MESSAGES['THUMBNAIL_GENERATION_FAILED']} {e}") from e
        buf = BytesIO()
        frame.save(buf, format="JPEG", quality=round(self.quality * 100))
        encoded = base64.b64encode(buf.getvalue()).decode("ascii")
        return f"data:image/jpeg;base64,{encoded}"
