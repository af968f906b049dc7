from datetime import datetime, timezone
from enum import Enum

from pydantic_settings import BaseSettings, SettingsConfigDict


class Env(str, Enum):
    DEV = "dev"
    HML = "hml"
    PROD = "prod"


class StorageBackend(str, Enum):
    SQLALCHEMY = "sqlalchemy"
    MEMORY = "memory"


class Settings(BaseSettings):
    APP_ENV: Env = Env.DEV
    DEBUG: bool = False

    DATABASE_URL: str = "sqlite:///./students.db"
    STORAGE_BACKEND: StorageBackend = StorageBackend.SQLALCHEMY
    # no migrations: the schema is created from the models on startup
    CREATE_TABLES: bool = True

    ALLOWED_HOSTS: str = "localhost,127.0.0.1"

    LOG_JSON: bool = True
    LOG_LEVEL: str = "INFO"

    APP_VERSION: str = "0.1.0-dev"
    GIT_SHA: str = "local"
    BUILD_TIME_UTC: str = datetime.now(timezone.utc).isoformat()

    @property
    def cors_origins(self) -> list[str]:
        """ALLOWED_HOSTS as CORS origins; bare hosts get both http and https."""
        origins: list[str] = []
        for host in filter(None, (h.strip() for h in self.ALLOWED_HOSTS.split(","))):
            if host.startswith("http"):
                origins.append(host)
            else:
                origins.extend((f"http://{host}", f"https://{host}"))
        if not origins and self.DEBUG:
            return ["*"]
        return origins

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


# cria instância global
settings = Settings()
