"""Error types and the fixed user-facing messages."""

ERROR_MESSAGES = {
    "UPLOAD_FAILED": "Failed to upload the file. Please try again.",
    "VIDEO_LOAD_FAILED": "Failed to load the video. Please check the URL.",
    "THUMBNAIL_GENERATION_FAILED": "Could not generate the thumbnail.",
    "INVALID_URL": "The video URL is not valid.",
    "UNSUPPORTED_PROVIDER": "Unsupported video provider.",
    "NETWORK_ERROR": "Connection error. Please check your internet connection.",
    "PERMISSION_DENIED": "You do not have permission to perform this action.",
}

class MediaShareError(Exception):
    pass

class UploadError(MediaShareError):
    """Raised when an image could not be uploaded; the message is meant for the user."""

class ImageCompressionError(MediaShareError):
    pass

class ThumbnailError(MediaShareError):
    pass
