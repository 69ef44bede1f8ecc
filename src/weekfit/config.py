"""Application settings."""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# Default data directory
DATA_DIR = Path(__file__).parent.parent.parent / "data"


class Settings(BaseSettings):
    """Runtime configuration, read from ``WEEKFIT_*`` environment variables."""

    data_dir: Path = DATA_DIR
    db_filename: str = "weekfit.db"
    avatar_dir: Path | None = None
    avatar_url_prefix: str = "/avatars"
    default_user_id: str = "local-user"
    log_level: str = "INFO"
    log_json: bool = False

    model_config = SettingsConfigDict(
        env_prefix="WEEKFIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def db_path(self) -> Path:
        return self.data_dir / self.db_filename

    @property
    def avatar_path(self) -> Path:
        return self.avatar_dir or self.data_dir / "avatars"


@lru_cache()
def get_settings() -> Settings:
    return Settings()
