"""Storage providers for shares and provider selection."""

from services.shares.app.core.config import ShareServiceSettings
from services.shares.app.providers.base import Share, ShareCommit, ShareFile, ShareProvider
from services.shares.app.providers.github_gist import GithubGistProvider
from services.shares.app.providers.gitlab_repo import GitlabRepoProvider

GITLAB_PROVIDER_NAMES = ("gitlab", "gitlab_repo", "gitlab-repo")


def create_share_provider(settings: ShareServiceSettings) -> ShareProvider:
    """
    Build the storage provider selected by configuration.

    ``auto`` picks the GitLab repository provider when it is fully configured
    and falls back to GitHub Gists otherwise.

    Args:
        settings: Service settings

    Returns:
        Provider instance
    """
    choice = (settings.share_provider or "auto").strip().lower()

    if choice in GITLAB_PROVIDER_NAMES or (choice != "github" and settings.gitlab_configured):
        return GitlabRepoProvider(
            base_url=settings.gitlab_base_url,
            token=settings.gitlab_token,
            project_id=settings.gitlab_project_id,
            ref=settings.gitlab_ref,
            shares_path_prefix=settings.gitlab_shares_path_prefix,
        )

    return GithubGistProvider(token=settings.github_token, api_url=settings.github_api_url)


__all__ = [
    "GithubGistProvider",
    "GitlabRepoProvider",
    "Share",
    "ShareCommit",
    "ShareFile",
    "ShareProvider",
    "create_share_provider",
]
