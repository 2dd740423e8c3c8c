"""Configuration management using Pydantic Settings"""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Service
    service_name: str = "aging-report-gateway"
    log_level: str = "INFO"

    # Report defaults
    default_report_type: str = "overdue"
    unknown_contact: str = "inconnu"

    # Spreadsheet layout (column letters, 1-based first data row)
    column_code: str = "A"
    column_name: str = "B"
    column_contact: str = "C"
    column_balance: str = "E"
    column_last_payment: str = "F"
    first_data_row: int = 2

    # Uploads
    max_upload_bytes: int = 10 * 1024 * 1024

    # Rendering
    pdf_font_path: Optional[str] = None  # TTF with arrow glyphs, e.g. DejaVuSans.ttf


settings = Settings()
