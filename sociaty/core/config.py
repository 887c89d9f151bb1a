from functools import lru_cache
from pathlib import Path
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


# repository root
BASE_DIR = Path(__file__).resolve().parent.parent.parent


class Settings(BaseSettings):
    # app
    app_name: str = "Sociaty Marketplace"
    app_env: str = "dev"
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"

    # CORS
    cors_origins: List[str] = ["*"]

    # JSON document store (users + listings)
    data_file: Path = BASE_DIR / "db.json"

    # uploaded media
    upload_dir: Path = BASE_DIR / "uploads"
    upload_url: str = "/uploads"
    max_upload_files: int = 6

    # frontend assets served at /
    public_dir: Path = BASE_DIR / "public"

    # offline LocalMarket key/value file
    local_store_file: Path = BASE_DIR / "local_store.json"

    default_category: str = "misc"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="SOCIATY_",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
