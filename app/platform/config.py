from pathlib import Path
from typing import Literal, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # ── App ─────────────────────────────────────
    APP_NAME: str = "UI/UX Analyzer API"
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"
    DEBUG: bool = True
    PORT: int = 5000

    # ── Cloudinary (required) ───────────────────
    CLOUDINARY_CLOUD_NAME: str
    CLOUDINARY_API_KEY: str
    CLOUDINARY_API_SECRET: str

    UPLOAD_FOLDER: str = "uiuxAnalyzerImages"
    SCREENSHOT_PLACEHOLDER_URL: str = "https://example.com/default-placeholder.png"

    # ── Browser ─────────────────────────────────
    CHROMEDRIVER_PATH: Optional[str] = None
    FAST_LOAD_TIMEOUT: int = 15  # seconds, scrape path
    FULL_LOAD_TIMEOUT: int = 30  # seconds, analysis path

    # ── Lighthouse ──────────────────────────────
    LIGHTHOUSE_PATH: str = "lighthouse"
    LIGHTHOUSE_TIMEOUT: int = 90

    # Upper bound for a whole /analyze request
    ANALYSIS_TIMEOUT: int = 120

    class Config:
        env_file = str(Path(__file__).parent.parent.parent / ".env")
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


settings = Settings()
