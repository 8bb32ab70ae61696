from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    store_backend: str = "memory"

    db_host: str = "host.docker.internal"
    db_port: int = 5432
    db_database: str = "paged_content"
    db_username: str = "paged_content"
    db_password: str = "secret"

    convert_binary: str = "convert"
    gs_binary: str = "gs"
    tesseract_binary: str = "tesseract"

    enabled_derivatives: list[str] = Field(
        default_factory=lambda: ["PDF", "OCR", "HOCR", "TN", "JPG", "JP2"]
    )
    pdf_convert_options: dict[str, str] = Field(
        default_factory=lambda: {"-compress": "LZW"}
    )
    pdf_engine: str = "pymupdf"

    ocr_default_language: str = "eng"
    ocr_default_preprocess: bool = False
    ocr_settings_persistence: str = "always"

    hocr_multiple_pages: str = "last_wins"

    temp_dir: str | None = None

    thumbnail_label: str = "Thumbnail"
    tn_size: str = "200x200"
    jpg_size: str = "600x800"
