"""
Configuration for share service.

Manages service settings using Pydantic Settings.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ShareServiceSettings(BaseSettings):
    """Settings for the share service."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Service info
    service_name: str = Field("shares", description="Service name")
    service_version: str = Field("0.1.0", description="Service version")
    environment: str = Field("development", description="Environment")
    debug: bool = Field(False, description="Debug mode")
    log_level: str = Field("INFO", description="Logging level")
    json_logs: bool = Field(True, description="Render logs as JSON")
    host: str = Field("0.0.0.0", description="Bind host")
    port: int = Field(5000, ge=1, le=65535, description="Bind port")
    client_urls: str = Field("", description="Comma-separated CORS origins")
    otlp_endpoint: str | None = Field(None, description="OTLP collector endpoint")

    # Storage provider selection: auto, github, gitlab (gitlab_repo, gitlab-repo)
    share_provider: str = Field("auto", description="Storage provider")

    # GitHub Gist
    github_token: str = Field("", description="GitHub token with gist scope")
    github_api_url: str = Field("https://api.github.com", description="GitHub API base URL")

    # GitLab repository
    gitlab_base_url: str = Field("", description="GitLab instance URL")
    gitlab_token: str = Field("", description="GitLab private token")
    gitlab_project_id: str = Field("", description="Project id or full path holding shares")
    gitlab_ref: str = Field("main", description="Branch shares are committed to")
    gitlab_shares_path_prefix: str = Field("shares", description="Directory holding shares")

    # File history pagination
    history_default_limit: int = Field(10, ge=1, description="Default revisions per page")
    history_max_limit: int = Field(100, ge=1, description="Maximum revisions per page")
    history_min_batch_size: int = Field(
        50,
        ge=1,
        description="Minimum number of commits fetched per provider call",
    )
    history_batch_multiplier: int = Field(
        2,
        ge=1,
        description="Commits fetched per requested revision",
    )

    @property
    def allowed_origins(self) -> list[str]:
        """CORS origins; everything is allowed in debug mode."""
        if self.debug:
            return ["*"]
        return [url.strip() for url in self.client_urls.split(",") if url.strip()]

    @property
    def gitlab_configured(self) -> bool:
        """Whether every GitLab setting the repository provider needs is present."""
        return bool(self.gitlab_base_url and self.gitlab_token and self.gitlab_project_id)


def get_settings() -> ShareServiceSettings:
    """
    Get service settings.

    Returns:
        Configured settings instance
    """
    return ShareServiceSettings()
