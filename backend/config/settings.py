from pydantic_settings import BaseSettings
from typing import Optional, List
import tempfile

class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # API Settings
    PROJECT_NAME: str = "Photo AI Editor"
    VERSION: str = "1.0.0"
    LOG_LEVEL: str = "INFO"

    # Server Settings
    HOST: str = "127.0.0.1"
    PORT: int = 8000

    # External APIs
    OPENAI_API_KEY: Optional[str] = None
    OPENAI_API_URL: str = "https://api.openai.com/v1/images/edits"
    UPSTREAM_TIMEOUT: float = 120.0

    # Upload Limits
    MAX_UPLOAD_SIZE: int = 5 * 1024 * 1024  # 5MB
    MAX_PROCESSED_SIZE: int = 4 * 1024 * 1024  # 4MB, enforced by the image API

    # Processing Configuration
    TARGET_IMAGE_SIZE: int = 1024
    TEMP_DIR: str = tempfile.gettempdir()

    # CORS Settings
    ALLOWED_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:7860",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:7860"
    ]

    # UI Settings
    RELAY_API_URL: str = "http://localhost:8000"
    UI_PORT: int = 7860

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"

    @property
    def upstream_configured(self) -> bool:
        return bool(self.OPENAI_API_KEY)

# Global settings instance
settings = Settings()
