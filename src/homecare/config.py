from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Pydantic Settings reads env vars matching field names (case-insensitive),
    plus a .env file in development. In production, set them directly.
    """

    # Shown as the OpenAPI title
    app_name: str = "homecare-api"

    # Header used to read and echo the request id
    request_id_header: str = "X-Request-ID"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore unknown env vars
    )


settings = Settings()
