"""
Core configuration for the Mailing Dashboard API.
Manages environment variables and remote call-center API settings.
"""
import os
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables or .env file."""

    # API Configuration
    api_title: str = os.getenv("API_TITLE", "Mailing Dashboard API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")

    # Remote call-center API
    remote_api_base_url: str = os.getenv("REMOTE_API_BASE_URL", "https://api.rotaportasdeaco.com:3060")
    remote_api_timeout_seconds: float = float(os.getenv("REMOTE_API_TIMEOUT_SECONDS", "30"))
    recordings_endpoint: str = os.getenv("RECORDINGS_ENDPOINT", "/gravacoes-todas")
    mailing_upload_endpoint: str = os.getenv("MAILING_UPLOAD_ENDPOINT", "/subir-malling")
    mailing_stats_endpoint: str = os.getenv("MAILING_STATS_ENDPOINT", "/estatisticas-mailings")
    mailings_list_endpoint: str = os.getenv("MAILINGS_LIST_ENDPOINT", "/mailings")
    compatible_data_endpoint: str = os.getenv("COMPATIBLE_DATA_ENDPOINT", "/mailings-ceps-compativel")
    lists_endpoint: str = os.getenv("LISTS_ENDPOINT", "/listas")

    # Serve generated data instead of calling the remote API
    use_mock_data: bool = os.getenv("USE_MOCK_DATA", "false").lower() in ("1", "true", "yes")

    # Upload queue
    upload_batch_size: int = int(os.getenv("UPLOAD_BATCH_SIZE", "500"))
    upload_parse_progress_budget: int = int(os.getenv("UPLOAD_PARSE_PROGRESS_BUDGET", "10"))
    max_file_size_mb: int = int(os.getenv("MAX_FILE_SIZE_MB", "50"))

    # Compatibility export
    export_page_size: int = int(os.getenv("EXPORT_PAGE_SIZE", "5000"))
    export_page_delay_seconds: float = float(os.getenv("EXPORT_PAGE_DELAY_SECONDS", "0.1"))

    # Pagination Configuration
    default_page_size: int = int(os.getenv("DEFAULT_PAGE_SIZE", "15"))

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Environment
    environment: str = os.getenv("ENVIRONMENT", "dev")

    class Config:
        env_file = ".env"
        case_sensitive = False


# Global settings instance
settings = Settings()
