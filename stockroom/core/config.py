from typing import List, Optional
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SECRET_KEY = "development_secret_key"


class Settings(BaseSettings):
    """Application settings."""
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    PROJECT_NAME: str = "Stockroom"
    API_PREFIX: str = "/api"

    # Security
    SECRET_KEY: str = DEFAULT_SECRET_KEY
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7  # 7 days
    ALGORITHM: str = "HS256"

    # Storage: "memory" or "sql"
    STORAGE_BACKEND: str = "memory"
    DATABASE_URL: Optional[str] = "sqlite:///./stockroom.db"
    SEED_DEMO_DATA: bool = True
    SEED_ADMIN_EMAIL: str = "admin@inventory.com"
    SEED_ADMIN_PASSWORD: str = "admin123"

    # Environment
    ENVIRONMENT: str = "development"
    DEBUG: bool = False  # DEBUG-level logging

    # CORS, comma separated
    BACKEND_CORS_ORIGINS: str = "http://localhost:3000,http://localhost:3001,http://localhost:5173"

    # Rate limiting
    RATE_LIMIT_WINDOW_SECONDS: int = 15 * 60
    RATE_LIMIT_MAX_REQUESTS: int = 100

    # Logging
    LOG_LEVEL: str = "INFO"

    @field_validator("STORAGE_BACKEND")
    @classmethod
    def check_storage_backend(cls, v: str) -> str:
        v = v.lower()
        if v not in ("memory", "sql"):
            raise ValueError(f"Unsupported storage backend: {v}")
        return v

    @property
    def cors_origins(self) -> List[str]:
        """Parse the CORS origins from the comma separated setting."""
        return [origin.strip() for origin in self.BACKEND_CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT.lower() == "development"


settings = Settings()
