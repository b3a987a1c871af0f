from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "ATS Resume Scorer API"
    app_version: str = "1.0.0"
    log_level: str = "INFO"

    # Uploads above this size are rejected before analysis
    max_upload_size_mb: int = 10

    # CORS - comma-separated list of allowed origins
    cors_origins: str = "*"

    class Config:
        env_file = ".env"
        extra = "ignore"
        case_sensitive = False

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_size_mb * 1024 * 1024

    def get_cors_origins(self) -> list:
        """Parse CORS origins from comma-separated string"""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache()
def get_settings() -> Settings:
    return Settings()
