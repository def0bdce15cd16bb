import asyncio
import base64
from io import BytesIO
from unittest.mock import AsyncMock, patch

import pytest
from PIL import Image

from mediashare.core.errors import ERROR_MESSAGES, ThumbnailError
from mediashare.utils.frames import FrameExtractor


class FakeProcess:
    def __init__(self, stdout=b"", stderr=b"", returncode=0, delay=0.0):
        self._stdout = stdout
        self._stderr = stderr
        self._final_returncode = returncode
        self._delay = delay
        self.returncode = None
        self.killed = False

    async def communicate(self):
        await asyncio.sleep(self._delay)
        self.returncode = self._final_returncode
        return self._stdout, self._stderr

    def kill(self):
        self.killed = True
        self.returncode = -9

    async def wait(self):
        return self.returncode


def _png(width=64, height=36) -> bytes:
    buf = BytesIO()
    Image.new("RGB", (width, height), (0, 128, 255)).save(buf, format="PNG")
    return buf.getvalue()


def test_capture_width_follows_viewport():
    assert FrameExtractor(viewport_width=375).max_width == 480
    assert FrameExtractor(viewport_width=768).max_width == 480
    assert FrameExtractor(viewport_width=1440).max_width == 960


def test_command_seeks_and_scales():
    cmd = FrameExtractor(ffmpeg_path="ffmpeg", seek_seconds=1.0, viewport_width=500).build_command("https://x/v.mp4")
    assert cmd[0] == "ffmpeg"
    assert cmd[cmd.index("-ss") + 1] == "1.0"
    assert cmd[cmd.index("-i") + 1] == "https://x/v.mp4"
    assert cmd[cmd.index("-vf") + 1] == "scale='min(480,iw)':-2"


def test_to_data_url_is_jpeg():
    data_url = FrameExtractor().to_data_url(_png())
    assert data_url.startswith("data:image/jpeg;base64,")
    raw = base64.b64decode(data_url.split(",", 1)[1])
    with Image.open(BytesIO(raw)) as img:
        assert img.format == "JPEG"
        assert img.size == (64, 36)


@pytest.mark.asyncio
async def test_capture_success():
    proc = FakeProcess(stdout=_png())
    with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=proc)):
        data_url = await FrameExtractor().capture("https://x/v.mp4")
    assert data_url.startswith("data:image/jpeg;base64,")
    assert not proc.killed


@pytest.mark.asyncio
async def test_capture_timeout_kills_process():
    proc = FakeProcess(delay=5)
    with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=proc)):
        with pytest.raises(ThumbnailError, match="timeout"):
            await FrameExtractor(timeout=0.05).capture("https://x/v.mp4")
    assert proc.killed


@pytest.mark.asyncio
async def test_capture_ffmpeg_error():
    proc = FakeProcess(stderr=b"404 Not Found", returncode=1)
    with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=proc)):
        with pytest.raises(ThumbnailError, match="404 Not Found"):
            await FrameExtractor().capture("https://x/v.mp4")


@pytest.mark.asyncio
async def test_capture_missing_ffmpeg():
    with patch("asyncio.create_subprocess_exec", AsyncMock(side_effect=FileNotFoundError("ffmpeg"))):
        with pytest.raises(ThumbnailError, match="Could not start ffmpeg"):
            await FrameExtractor().capture("https://x/v.mp4")


@pytest.mark.asyncio
async def test_capture_error_messages_are_user_facing():
    proc = FakeProcess(stderr=b"Invalid data found", returncode=1)
    with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=proc)):
        with pytest.raises(ThumbnailError) as exc:
            await FrameExtractor().capture("https://x/v.mp4")
    assert str(exc.value).startswith(ERROR_MESSAGES["VIDEO_LOAD_FAILED"])

    with pytest.raises(ThumbnailError) as exc:
        FrameExtractor().to_data_url(b"not an image")
    assert str(exc.value).startswith(ERROR_MESSAGES["THUMBNAIL_GENERATION_FAILED"])
