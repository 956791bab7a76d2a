#config.py
import os
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict
from typing import Optional, List
from functools import lru_cache

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")
    # Application Settings
    APP_NAME: str = "Face Reader API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    DOCS_ENABLED: bool = True

    # Server Settings
    HOST: str = "0.0.0.0"
    PORT: int = int(os.environ.get("PORT", 3000))

    # Database Settings (empty disables result persistence)
    DATABASE_URL: str = ""
    DATABASE_SSL_MODE: Optional[str] = None  # e.g. "require" for managed Postgres

    # CORS Settings (accept comma-separated strings to avoid JSON parsing in env)
    ALLOWED_ORIGINS: str = "*"

    # File Upload Settings
    MAX_FILE_SIZE: int = 10 * 1024 * 1024  # 10MB
    ALLOWED_IMAGE_TYPES: List[str] = ["image/jpeg", "image/jpg", "image/png"]
    ALLOWED_IMAGE_EXTENSIONS: List[str] = [".jpeg", ".jpg", ".png"]

    # Storage Settings: local | gcs | s3
    STORAGE_BACKEND: str = "local"
    UPLOAD_DIR: str = os.environ.get("RENDER_DISK_UPLOADS_PATH", "uploads")
    UPLOAD_URL_PREFIX: str = "/render-uploads"

    GCS_BUCKET_NAME: str = ""
    GCS_PROJECT_ID: str = ""
    GOOGLE_APPLICATION_CREDENTIALS: str = ""

    S3_BUCKET_NAME: str = ""
    S3_REGION: str = ""
    S3_ACCESS_KEY_ID: str = ""
    S3_SECRET_ACCESS_KEY: str = ""
    S3_ENDPOINT_URL: Optional[str] = None
    S3_PUBLIC_READ: bool = True
    S3_URL_EXPIRY: int = 7 * 24 * 3600  # presigned URL lifetime for private buckets

    # Middleware settings
    GZIP_MIN_SIZE: int = 500  # bytes

    # AI Settings
    GEMINI_API_KEY: str = os.environ.get("GEMINI_API_KEY", "")
    GEMINI_MODEL: str = "gemini-2.0-flash"
    AI_REQUEST_TIMEOUT: float = 60.0

    # Logging Settings
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    def _split_csv(self, value: str) -> List[str]:
        if value is None:
            return []
        value = value.strip()
        if value == "":
            return []
        return [item.strip() for item in value.split(",")]

    @property
    def allowed_origins_list(self) -> List[str]:
        return self._split_csv(self.ALLOWED_ORIGINS)

    @property
    def storage_backend(self) -> str:
        return self.STORAGE_BACKEND.strip().lower()

    @property
    def database_enabled(self) -> bool:
        return bool(self.DATABASE_URL.strip())

    @property
    def max_request_size(self) -> int:
        # multipart framing and the text fields ride on top of the file itself
        return self.MAX_FILE_SIZE + 1024 * 1024


STORAGE_REQUIREMENTS = {
    "local": ["UPLOAD_DIR"],
    "gcs": ["GCS_BUCKET_NAME", "GCS_PROJECT_ID", "GOOGLE_APPLICATION_CREDENTIALS"],
    "s3": ["S3_BUCKET_NAME", "S3_REGION", "S3_ACCESS_KEY_ID", "S3_SECRET_ACCESS_KEY"],
}


def validate_settings(s: Settings) -> List[str]:
    """Return a list of configuration problems; empty means the app can start."""
    problems = []
    if not s.GEMINI_API_KEY:
        problems.append("GEMINI_API_KEY is not set")

    required = STORAGE_REQUIREMENTS.get(s.storage_backend)
    if required is None:
        problems.append(
            f"STORAGE_BACKEND must be one of {sorted(STORAGE_REQUIREMENTS)}, got {s.STORAGE_BACKEND!r}"
        )
        return problems

    for name in required:
        if not getattr(s, name):
            problems.append(f"{name} is required for the {s.storage_backend} storage backend")
    return problems


@lru_cache()
def get_settings() -> Settings:
    s = Settings()
    # Normalize ALLOWED_ORIGINS if provided as comma-separated string env var CORS_ORIGINS
    cors_env = os.environ.get("CORS_ORIGINS")
    if cors_env:
        s.ALLOWED_ORIGINS = cors_env
    return s

settings: Settings = get_settings()
