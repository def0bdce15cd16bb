import asyncio
from typing import Callable, Dict, List, Optional, Sequence
import requests
from mediashare.config import settings
from mediashare.core.errors import ERROR_MESSAGES, ImageCompressionError, UploadError
from mediashare.models.upload import ImageFile, UploadProgress, UploadStatus
from mediashare.utils.images import MB, compress_image
from mediashare.utils.logger import logger
from mediashare.utils.retry import api_retry

ProgressCallback = Callable[[int, int, UploadStatus], None]

# Files above this size are compressed before upload
COMPRESS_THRESHOLD = 1 * MB

class ImageUploader:
    """Uploads images to ImgBB, one at a time or in small concurrent batches."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        max_file_size: Optional[int] = None,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
        batch_pause: Optional[float] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.IMGBB_API_KEY
        self.base_url = base_url or settings.IMGBB_BASE_URL
        self.max_file_size = max_file_size if max_file_size is not None else settings.IMGBB_MAX_FILE_SIZE
        self.session = session or requests.Session()
        self.timeout = timeout if timeout is not None else settings.HTTP_TIMEOUT
        self.batch_pause = batch_pause if batch_pause is not None else settings.UPLOAD_BATCH_PAUSE
        # Latest state of each file in the current batch upload
        self.progress: Dict[int, UploadProgress] = {}

    @api_retry()
    def _post(self, file: ImageFile) -> requests.Response:
        return self.session.post(
            self.base_url,
            files={"image": (file.name, file.content, file.content_type)},
            data={"key": self.api_key},
            timeout=self.timeout,
        )

    async def upload_one(self, file: Optional[ImageFile]) -> str:
        """Upload a single image and return its hosted URL.

        Raises UploadError with a message that can be shown to the user.
        """
        try:
            if file is None:
                raise UploadError("No file selected")

            to_upload = file
            if file.size > COMPRESS_THRESHOLD:
                try:
                    to_upload = await asyncio.to_thread(compress_image, file, 2000, 3000, 0.85, 2)
                except ImageCompressionError as e:
                    logger.warning(f"Compression failed for {file.name}, uploading original: {e}")

            if to_upload.size > self.max_file_size:
                raise UploadError(f"The file is too large. Maximum {self.max_file_size // MB}MB")

            resp = await asyncio.to_thread(self._post, to_upload)
            if resp.status_code in (401, 403):
                raise UploadError(ERROR_MESSAGES["PERMISSION_DENIED"])
            if not resp.ok:
                raise UploadError(f"Error {resp.status_code}: {resp.reason}")

            try:
                data = resp.json()
            except ValueError:
                raise UploadError(ERROR_MESSAGES["UPLOAD_FAILED"])
            payload = data.get("data") if isinstance(data, dict) else None
            url = payload.get("url") if isinstance(payload, dict) else None
            if url is not None and not isinstance(url, str):
                url = None
            if not url:
                raise UploadError("No image URL was returned")
            return url
        except UploadError as e:
            logger.error(f"Error uploading to ImgBB: {e}")
            raise
        except requests.RequestException as e:
            logger.error(f"Error uploading to ImgBB: {e}")
            raise UploadError(ERROR_MESSAGES["NETWORK_ERROR"]) from e

    def _report(self, on_progress: Optional[ProgressCallback], index: int, percent: int, status: UploadStatus):
        self.progress[index] = UploadProgress(index=index, percent=percent, status=status)
        if on_progress is None:
            return
        try:
            on_progress(index, percent, status)
        except Exception as e:
            logger.warning(f"Progress callback failed for file {index}: {e}")

    async def _upload_indexed(self, index: int, file: ImageFile, on_progress: Optional[ProgressCallback]) -> Optional[str]:
        try:
            self._report(on_progress, index, 0, "uploading")
            url = await self.upload_one(file)
            self._report(on_progress, index, 100, "completed")
            return url
        except Exception as e:
            logger.error(f"Error uploading file {index}: {e}")
            self._report(on_progress, index, 0, "error")
            return None

    async def upload_batch(
        self,
        files: Sequence[ImageFile],
        batch_size: Optional[int] = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> List[Optional[str]]:
        """Upload ``files`` in sequential batches of ``batch_size``.

        Returns one entry per input file: the hosted URL, or None if that
        upload failed.
        """
        if batch_size is None:
            batch_size = settings.UPLOAD_BATCH_SIZE
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")

        self.progress = {}
        results: List[Optional[str]] = [None] * len(files)
        for start in range(0, len(files), batch_size):
            batch = files[start:start + batch_size]
            logger.info(f"Uploading files {start + 1}-{start + len(batch)} of {len(files)}...")
            batch_results = await asyncio.gather(
                *(self._upload_indexed(start + i, f, on_progress) for i, f in enumerate(batch))
            )
            results[start:start + len(batch)] = batch_results

            # Let the previous batch's buffers be released before the next one
            if start + batch_size < len(files):
                await asyncio.sleep(self.batch_pause)
        return results
