from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Pipeline settings loaded from environment."""

    model_config = SettingsConfigDict(env_prefix="PRECON_", env_file=".env")

    # Delete and recreate temp/output directories before running
    clean: bool = False
    # Emit per-card diagnostic lines
    debug: bool = False

    out_dir: Path = Path("./decks")
    temp_dir: Path = Path("./temp")

    source_url: str = "https://mtg.wtf/deck"

    # Keep the cache stage polite to the remote host
    fetch_concurrency: int = Field(default=4, ge=1, le=8)
    fetch_timeout: float = 30.0
    fetch_retries: int = Field(default=3, ge=0)
    fetch_backoff: float = 0.5

    user_agent: str = "PreconDecklists/1.0"


settings = Settings()
