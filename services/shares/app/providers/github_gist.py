"""
GitHub Gist storage provider.

Each share is a private gist; every PATCH creates a gist revision.
"""

from typing import Any

from services.shares.app.providers.base import (
    Share,
    ShareCommit,
    ShareFile,
    ShareProvider,
    translate_not_found,
)
from shared.clients.base import BaseHTTPClient
from shared.clients.config import http_client_settings
from shared.config.logging import get_logger

logger = get_logger(__name__)

GITHUB_API_VERSION = "2022-11-28"


class GithubGistProvider(BaseHTTPClient, ShareProvider):
    """Share provider backed by the GitHub Gist REST API."""

    name = "github"

    def __init__(
        self,
        token: str,
        api_url: str = "https://api.github.com",
        timeout: float | None = None,
        max_retries: int | None = None,
        retry_delay: float | None = None,
    ):
        """
        Initialize GitHub Gist provider.

        Args:
            token: GitHub token with the gist scope
            api_url: GitHub API base URL
            timeout: Request timeout in seconds (defaults to config)
            max_retries: Maximum retry attempts (defaults to config)
            retry_delay: Delay between retries (defaults to config)
        """
        self.token = token
        super().__init__(
            base_url=api_url,
            timeout=timeout or http_client_settings.github_timeout,
            max_retries=max_retries or http_client_settings.github_max_retries,
            retry_delay=retry_delay or http_client_settings.github_retry_delay,
            headers={
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": GITHUB_API_VERSION,
                "Authorization": f"Bearer {token}",
            },
        )

    def is_configured(self) -> bool:
        return bool(self.token)

    async def _build_share(self, data: dict[str, Any]) -> Share:
        files: dict[str, ShareFile] = {}
        for filename, file in (data.get("files") or {}).items():
            if not file:
                continue
            content = file.get("content") or ""
            if file.get("truncated") and file.get("raw_url"):
                # The gist API inlines at most 1MB per file
                response = await self.get(file["raw_url"])
                content = response.text
            files[filename] = ShareFile(filename=filename, content=content)
        return Share(id=data["id"], files=files)

    async def create_share_file(
        self,
        filename: str,
        content: str,
        description: str | None = None,
        public: bool = False,
    ) -> Share:
        self._record("create")
        response = await self.post(
            "/gists",
            json={
                "description": description or "",
                "public": public,
                "files": {filename: {"content": content}},
            },
        )
        share = await self._build_share(response.json())
        logger.info("gist_created", share_id=share.id, filename=filename)
        return share

    async def upsert_share_file(self, share_id: str, filename: str, content: str) -> bool:
        self._record("upsert")
        with translate_not_found(share_id):
            response = await self.patch(
                f"/gists/{share_id}",
                json={"files": {filename: {"content": content}}},
            )

        if (response.json() or {}).get("files"):
            return False

        # Writing empty content removes the file; a gist cannot exist without files
        logger.info("gist_empty_after_update", share_id=share_id, filename=filename)
        await self.delete_share(share_id)
        return True

    async def get_share(self, share_id: str, ref: str | None = None) -> Share:
        self._record("get")
        path = f"/gists/{share_id}/{ref}" if ref else f"/gists/{share_id}"
        with translate_not_found(share_id, ref=ref):
            response = await self.get(path)
            return await self._build_share(response.json())

    async def delete_share(self, share_id: str) -> None:
        self._record("delete")
        with translate_not_found(share_id):
            await self.delete(f"/gists/{share_id}")
        logger.info("gist_deleted", share_id=share_id)

    async def list_commits(
        self,
        share_id: str,
        per_page: int | None = None,
        page: int | None = None,
    ) -> list[ShareCommit]:
        self._record("list_commits")
        params = {key: value for key, value in (("per_page", per_page), ("page", page)) if value}
        with translate_not_found(share_id):
            response = await self.get(f"/gists/{share_id}/commits", params=params)

        return [
            ShareCommit(version=item["version"], committed_at=item["committed_at"])
            for item in response.json() or []
        ]

    async def list_file_commits(
        self,
        share_id: str,
        filename: str,
        per_page: int | None = None,
        page: int | None = None,
    ) -> list[ShareCommit]:
        # Gists only expose a per-gist log; callers filter by content
        return await self.list_commits(share_id, per_page=per_page, page=page)

    async def get_file_content_at_ref(self, share_id: str, filename: str, ref: str) -> str | None:
        share = await self.get_share(share_id, ref=ref)
        file = share.files.get(filename)
        return file.content if file else None
