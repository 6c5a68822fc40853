"""Application configuration via environment variables.

Default values are intended for local development only.
Production deployments should override via .env file or environment variables.

Security considerations:
- api_host: Consider restricting to specific IPs in production
- opensearch_use_ssl: Enable SSL/TLS in production
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # OpenSearch
    opensearch_url: str = "http://localhost:9200"
    opensearch_index: str = "events"
    opensearch_timeout: float = 10.0
    opensearch_use_ssl: bool = False
    opensearch_verify_certs: bool = False

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 3001

    # Logging
    log_level: str = "INFO"


settings = Settings()
