"""Configuration for upstream HTTP clients."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class HTTPClientSettings(BaseSettings):
    """HTTP client configuration settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # GitHub Gist API
    github_timeout: float = 30
    github_max_retries: int = 3
    github_retry_delay: float = 1.0

    # GitLab repository API
    gitlab_timeout: float = 30
    gitlab_max_retries: int = 3
    gitlab_retry_delay: float = 1.0


# Global settings instance
http_client_settings = HTTPClientSettings()
