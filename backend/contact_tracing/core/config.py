# backend/contact_tracing/core/config.py
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_NOTIFY_MESSAGE = (
    "Hello, this is the Epidemiology Prevention Center. You have been identified as a "
    "primary contact following contact tracing analysis. Please monitor your health "
    "closely and follow the recommended public health measures."
)


class Settings(BaseSettings):
    # ---- Core ----
    PROJECT_NAME: str = "Contact Tracing API"
    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    # ---- Storage ----
    # "sql" uses DATABASE_URL, "memory" keeps everything in process memory
    STORE_BACKEND: str = "sql"
    # Use a SYNC URL (e.g. sqlite:///./data/app.sqlite3 or postgresql+psycopg2://...)
    DATABASE_URL: str = "sqlite:///./data/app.sqlite3"
    SEED_DEMO_USERS: bool = True

    # ---- CORS ----
    # Comma- or newline-separated allowed origins
    CORS_ORIGINS: str = "http://localhost:3000,http://127.0.0.1:3000"

    # ---- Auth ----
    JWT_SECRET: str = "change_this_secret"
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRES_DAYS: int = 7
    BCRYPT_ROUNDS: int = 12

    # ---- Tracing / notifications ----
    TRACE_DEFAULT_WINDOW_DAYS: int = 14
    NOTIFY_MESSAGE: str = DEFAULT_NOTIFY_MESSAGE

    # pydantic-settings v2 config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def cors_origins_list(self) -> list[str]:
        cleaned: list[str] = []
        for raw in self.CORS_ORIGINS.replace("\n", ",").split(","):
            origin = raw.strip().rstrip("/")
            if origin and origin not in cleaned:
                cleaned.append(origin)
        return cleaned

    @property
    def use_memory_store(self) -> bool:
        return self.STORE_BACKEND.strip().lower() == "memory"


@lru_cache
def get_settings() -> Settings:
    return Settings()


# singleton (import this everywhere)
settings = get_settings()
