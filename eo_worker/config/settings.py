from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "localhost"
    db_port: int = 5432
    db_database: str = "eo_summaries"
    db_username: str = "eo"
    db_password: str = "secret"
    db_pool_max_size: int = 10
    db_connect_timeout_seconds: float = 10

    listing_base_url: str = "https://www.federalregister.gov/api/v1/documents.json"
    listing_search_term: str = "Executive Order"
    listing_document_type: str = "Presidential Document"
    listing_page_size: int = 100
    listing_max_pages: int = 5
    http_timeout_seconds: int = 30

    pdf_engine: str = "pdfplumber"
    min_extracted_chars: int = 100
    chunk_size: int = 3000

    summarization_provider: str = "openai"
    summarization_api_key: str = ""
    summarization_model_name: str = "gpt-4"
    summarization_base_url: str | None = None
    summarization_timeout_seconds: int = 30
    summarization_temperature: float = 0.2
    rate_limit_max_attempts: int = 5
    rate_limit_backoff_seconds: float = 5
    chunk_delay_seconds: float = 2.0

    worker_count: int = 1
    max_requeues: int = 3

    api_host: str = "0.0.0.0"
    api_port: int = 8080
