"""Configuration management for docpress."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Container
    main_part_path: str = "word/document.xml"

    # Preview
    cache_size: int = 32

    # Logging
    log_level: str = "INFO"

    class Config:
        env_prefix = "DOCPRESS_"
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
