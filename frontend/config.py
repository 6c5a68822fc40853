"""Frontend configuration settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class FrontendSettings(BaseSettings):
    """Configuration for the search session client."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="FRONTEND_",
        extra="ignore",
    )

    # Backend API connection
    api_base_url: str = "http://localhost:3001"
    request_timeout: float = 10.0


settings = FrontendSettings()
