"""Application configuration."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    articles_dir: Path = Path("articles")
    debug: bool = False
    app_title: str = "Blog"
    skip_invalid: bool = False
    resolve_timeout: float | None = None

    model_config = SettingsConfigDict(
        env_prefix="BLOGSITE_",
        env_file=".env",
        env_file_encoding="utf-8",
    )


settings = Settings()
