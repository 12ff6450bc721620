# backend/octo_mock/config.py

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parents[2]  # repository root


class Settings(BaseSettings):
    database_url: str = "sqlite://"
    redis_url: str | None = None

    availability_horizon_days: int = 90
    default_capacity: int = 10

    cors_origins: list[str] = ["*"]
    log_level: str = "INFO"
    seed_catalog: bool = True

    model_config = SettingsConfigDict(
        env_file=BASE_DIR / ".env",
        env_prefix="OCTO_",
        extra="ignore",
    )

    @property
    def resolved_database_url(self) -> str:
        url = self.database_url
        if url.startswith("sqlite:///./"):
            # relative sqlite path -> absolute, anchored at the repository root
            relative_path = url.replace("sqlite:///./", "")
            absolute_path = BASE_DIR / relative_path
            return f"sqlite:///{absolute_path}"
        return url

    @property
    def is_memory_database(self) -> bool:
        url = self.resolved_database_url
        return url in ("sqlite://", "sqlite:///:memory:")


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
