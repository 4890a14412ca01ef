from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "localhost"
    db_port: int = 5432
    db_database: str = "research_reader"
    db_username: str = "research_reader"
    db_password: str = "secret"
    db_pool_min_size: int = 1
    db_pool_max_size: int = 10

    pdf_engine: str = "pdfplumber"
    max_extract_pages: int = 3

    ocr_engine: str = "tesseract"
    ocr_min_text_length: int = 50
    ocr_max_pages: int = 3
    ocr_language: str = "eng"
    ocr_dpi: int = 200
    ocr_timeout_seconds: int = 60

    max_upload_bytes: int = 10 * 1024 * 1024
    min_upload_bytes: int = 100
    extract_max_chars: int = 2200
    speech_max_chars: int = 2000

    transcreation_provider: str = "gemini"
    transcreation_api_key: str = ""
    transcreation_model_name: str = "gemini-2.0-flash"
    transcreation_base_url: str = ""
    transcreation_timeout_seconds: int = 30
    transcreation_temperature: float = 0.4

    speech_provider: str = "elevenlabs"
    elevenlabs_api_key: str = ""
    elevenlabs_base_url: str = "https://api.elevenlabs.io"
    elevenlabs_model_id: str = "eleven_turbo_v2_5"
    elevenlabs_output_format: str = "mp3_22050_32"
    elevenlabs_timeout_seconds: int = 60
