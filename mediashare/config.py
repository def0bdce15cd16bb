from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # Image host (ImgBB)
    IMGBB_API_KEY: str = ""
    IMGBB_BASE_URL: str = "https://api.imgbb.com/1/upload"
    IMGBB_MAX_FILE_SIZE: int = 10 * 1024 * 1024

    # Thumbnails
    DEFAULT_THUMBNAIL: str = (
        "https://images.unsplash.com/photo-1611162616475-46b635cb6868"
        "?w=1920&auto=format&fit=crop&q=100&ixlib=rb-4.0.3"
    )
    FRAME_TIMEOUT: float = 30.0
    FRAME_SEEK_SECONDS: float = 1.0
    VIEWPORT_WIDTH: int = 1280
    FFMPEG_PATH: str = "ffmpeg"

    # Uploads
    UPLOAD_BATCH_SIZE: int = 3
    UPLOAD_BATCH_PAUSE: float = 0.1

    # System Settings
    LOG_LEVEL: str = "INFO"
    MAX_RETRIES: int = 3
    HTTP_TIMEOUT: float = 15.0

    model_config = SettingsConfigDict(
        env_file=".env", 
        env_file_encoding="utf-8",
        extra="ignore"
    )

settings = Settings()
