"""Application configuration with environment variables."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Environment
    ENV: str = "dev"

    # App Version (format: a.bc.de - major.feature.patch)
    VERSION: str = "0.01.00"

    # Database
    DATABASE_URL: str = "sqlite:///./esms.db"
    DB_ECHO: bool = False

    # CORS (comma-separated)
    CORS_ORIGINS: str = "http://localhost:3000"

    # Rate limiting (requests per minute, 0 disables)
    RATE_LIMIT_API: int = 300
    RATE_LIMIT_STORAGE_URI: str = "memory://"

    # File storage
    STORAGE_BACKEND: str = "local"  # "local" or "s3"
    LOCAL_STORAGE_PATH: str = "/tmp/esms-files"
    PUBLIC_FILE_BASE_URL: str = "/api/files"
    S3_BUCKET: str = "esms-documents"
    S3_REGION: str = "us-east-1"
    S3_ENDPOINT_URL: str = ""
    AWS_ACCESS_KEY_ID: str = ""
    AWS_SECRET_ACCESS_KEY: str = ""
    MAX_UPLOAD_SIZE_MB: int = 25
    PRESIGNED_URL_EXPIRY_SECONDS: int = 3600

    # Observability
    SENTRY_DSN: str = ""
    LOG_LEVEL: str = "INFO"

    @property
    def cors_origins_list(self) -> list[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def max_upload_size_bytes(self) -> int:
        return self.MAX_UPLOAD_SIZE_MB * 1024 * 1024


settings = Settings()
