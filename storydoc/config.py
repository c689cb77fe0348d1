"""Configuration management using pydantic-settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="STORYDOC_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Server settings
    app_name: str = "storydoc"
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000

    # Conversion defaults
    default_starting_key_id: str = "1"
    split_formatting_runs: bool = True  # False = sample format at span start only
    max_content_json_length: int = 1_000_000  # Raw mark-tree JSON bodies, in characters


# Global settings instance
settings = Settings()
