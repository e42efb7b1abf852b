from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "host.docker.internal"
    db_port: int = 5432
    db_database: str = "prospect_intel"
    db_username: str = "prospect_intel"
    db_password: str = "secret"

    storage_backend: str = "postgres"
    memory_store_max_scans: int = 1000
    job_poll_interval_seconds: int = 5
    screenshots_root: str = "/app/screenshots"

    recognition_provider: str = "example"
    recognition_openai_api_key: str = ""
    recognition_openai_model_name: str = "gpt-4o-mini"
    recognition_openai_timeout_seconds: int = 60
    recognition_openai_base_url: str | None = None
    recognition_max_concurrency: int = 3
    recognition_min_confidence: float = 0.5

    image_max_slice_height: int = 2000
    image_slice_overlap: int = 100
    image_contrast_factor: float = 1.3
