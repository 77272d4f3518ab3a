from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Library settings loaded from environment variables.

    Pydantic Settings reads ANYOF_-prefixed env vars (case-insensitive).
    In development, it also reads from .env file if present.
    """

    # Media type written on rendered error responses
    media_type: str = "application/json"

    # Non-record variants are skipped by add_discriminator; log those skips as
    # warnings (True) or only at debug level (False)
    warn_on_skipped_variants: bool = True

    model_config = SettingsConfigDict(
        env_prefix="ANYOF_",
        env_file=".env",  # Load from .env in development
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore unknown env vars
    )


settings = Settings()
