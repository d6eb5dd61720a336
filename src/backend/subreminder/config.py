from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    # App
    APP_NAME: str = "SubReminder"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # CORS
    ALLOWED_ORIGINS: List[str] = ["http://localhost:3000"]

    # Parsing
    DATE_LOCALE: str = "en_US"  # en_US reads 03/04/2025 as March 4
    DEFAULT_CURRENCY: str = "USD"

    # Reminders
    REMINDER_DAYS_BEFORE: List[int] = [1, 3]

    # OCR
    TESSERACT_CMD: str = "/usr/local/bin/tesseract"  # macOS default
    OCR_LANGUAGES: str = "eng+chi_sim+chi_tra"
    OCR_MIN_CONFIDENCE: float = 0.3
    OCR_MAX_DIMENSION: int = 4096

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
