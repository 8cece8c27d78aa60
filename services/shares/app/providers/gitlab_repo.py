"""
GitLab repository storage provider.

Shares live as directories ``<prefix>/<share_id>/`` in a single project on a
single branch. Every write is a commit, so the repository commit log filtered
by path is the share's revision history.
"""

import asyncio
import base64
from urllib.parse import quote
from uuid import uuid4

import httpx

from services.shares.app.providers.base import (
    Share,
    ShareCommit,
    ShareFile,
    ShareProvider,
    is_not_found,
    translate_not_found,
)
from shared.clients.base import BaseHTTPClient
from shared.clients.config import http_client_settings
from shared.config.logging import get_logger
from shared.exceptions import ConfigurationError, ShareNotFoundError

logger = get_logger(__name__)

TREE_PAGE_SIZE = 100


def decode_content(content: str | None) -> str:
    """Decode a base64 file payload from the repository files API."""
    if not content:
        return ""
    return base64.b64decode(content).decode("utf-8")


class GitlabRepoProvider(BaseHTTPClient, ShareProvider):
    """Share provider backed by the GitLab repository files and commits APIs."""

    name = "gitlab"

    def __init__(
        self,
        base_url: str,
        token: str,
        project_id: str,
        ref: str = "main",
        shares_path_prefix: str = "shares",
        timeout: float | None = None,
        max_retries: int | None = None,
        retry_delay: float | None = None,
    ):
        """
        Initialize GitLab repository provider.

        Args:
            base_url: GitLab instance URL (without /api/v4)
            token: Private token with api scope
            project_id: Numeric id or full path of the project holding shares
            ref: Branch shares are committed to
            shares_path_prefix: Directory under which share directories live
            timeout: Request timeout in seconds (defaults to config)
            max_retries: Maximum retry attempts (defaults to config)
            retry_delay: Delay between retries (defaults to config)
        """
        self.instance_url = (base_url or "").rstrip("/")
        self.token = token
        self.project_id = project_id
        self.ref = ref
        self.shares_path_prefix = (shares_path_prefix or "shares").strip("/")
        super().__init__(
            base_url=f"{self.instance_url}/api/v4",
            timeout=timeout or http_client_settings.gitlab_timeout,
            max_retries=max_retries or http_client_settings.gitlab_max_retries,
            retry_delay=retry_delay or http_client_settings.gitlab_retry_delay,
            headers={"PRIVATE-TOKEN": token},
        )

    def is_configured(self) -> bool:
        return bool(self.instance_url and self.token and self.project_id)

    def _ensure_configured(self) -> None:
        if not self.is_configured():
            raise ConfigurationError(
                "GitLab repo provider is not configured "
                "(GITLAB_BASE_URL/GITLAB_TOKEN/GITLAB_PROJECT_ID)",
                key="gitlab",
            )

    @property
    def _project_path(self) -> str:
        return f"/projects/{quote(self.project_id, safe='')}"

    def _file_url(self, file_path: str) -> str:
        # file_path is a single URL-encoded segment, slashes included
        return f"{self._project_path}/repository/files/{quote(file_path, safe='')}"

    def share_dir(self, share_id: str) -> str:
        return f"{self.shares_path_prefix}/{share_id}"

    def share_file_path(self, share_id: str, filename: str) -> str:
        return f"{self.share_dir(share_id)}/{filename}"

    async def create_share_file(
        self,
        filename: str,
        content: str,
        description: str | None = None,
        public: bool = False,
    ) -> Share:
        self._ensure_configured()
        self._record("create")

        share_id = str(uuid4())
        commit_message = f"create share {share_id}"
        if description:
            commit_message = f"{commit_message}: {description}"

        await self.post(
            self._file_url(self.share_file_path(share_id, filename)),
            json={"branch": self.ref, "content": content, "commit_message": commit_message},
        )
        logger.info("gitlab_share_created", share_id=share_id, filename=filename)

        return Share(id=share_id, files={filename: ShareFile(filename=filename, content=content)})

    async def upsert_share_file(self, share_id: str, filename: str, content: str) -> bool:
        self._ensure_configured()
        self._record("upsert")

        url = self._file_url(self.share_file_path(share_id, filename))
        try:
            await self.put(
                url,
                json={
                    "branch": self.ref,
                    "content": content,
                    "commit_message": f"update share {share_id}: {filename}",
                },
            )
        except httpx.HTTPStatusError as e:
            # GitLab answers 400 when updating a file that does not exist yet
            if e.response.status_code not in (400, 404):
                raise
            await self.post(
                url,
                json={
                    "branch": self.ref,
                    "content": content,
                    "commit_message": f"create file for share {share_id}: {filename}",
                },
            )
        return False

    async def _list_share_files(self, share_id: str, ref: str | None = None) -> list[str]:
        with translate_not_found(share_id, ref=ref):
            response = await self.get(
                f"{self._project_path}/repository/tree",
                params={
                    "path": self.share_dir(share_id),
                    "ref": ref or self.ref,
                    "recursive": True,
                    "per_page": TREE_PAGE_SIZE,
                },
            )
        return [item["path"] for item in response.json() or [] if item.get("type") == "blob"]

    async def _get_file_content(self, file_path: str, ref: str | None = None) -> str:
        response = await self.get(self._file_url(file_path), params={"ref": ref or self.ref})
        return decode_content((response.json() or {}).get("content"))

    async def get_share(self, share_id: str, ref: str | None = None) -> Share:
        self._ensure_configured()
        self._record("get")

        file_paths = await self._list_share_files(share_id, ref=ref)
        if not file_paths:
            raise ShareNotFoundError(share_id, ref=ref)

        with translate_not_found(share_id, ref=ref):
            contents = await asyncio.gather(
                *(self._get_file_content(path, ref=ref) for path in file_paths)
            )

        files = {}
        for path, content in zip(file_paths, contents):
            filename = path.rsplit("/", 1)[-1]
            files[filename] = ShareFile(filename=filename, content=content)
        return Share(id=share_id, files=files)

    async def delete_share(self, share_id: str) -> None:
        self._ensure_configured()
        self._record("delete")

        file_paths = await self._list_share_files(share_id, ref=self.ref)
        if not file_paths:
            return

        await self.post(
            f"{self._project_path}/repository/commits",
            json={
                "branch": self.ref,
                "commit_message": f"delete share {share_id}",
                "actions": [{"action": "delete", "file_path": path} for path in file_paths],
            },
        )
        logger.info("gitlab_share_deleted", share_id=share_id, files=len(file_paths))

    async def _list_commits_for_path(
        self,
        share_id: str,
        path: str,
        per_page: int | None,
        page: int | None,
    ) -> list[ShareCommit]:
        params: dict = {"ref_name": self.ref, "path": path}
        if per_page:
            params["per_page"] = per_page
        if page:
            params["page"] = page

        with translate_not_found(share_id):
            response = await self.get(f"{self._project_path}/repository/commits", params=params)

        return [
            ShareCommit(
                version=item["id"],
                committed_at=item.get("committed_date") or item.get("created_at") or "",
            )
            for item in response.json() or []
        ]

    async def list_commits(
        self,
        share_id: str,
        per_page: int | None = None,
        page: int | None = None,
    ) -> list[ShareCommit]:
        self._ensure_configured()
        self._record("list_commits")
        return await self._list_commits_for_path(share_id, self.share_dir(share_id), per_page, page)

    async def list_file_commits(
        self,
        share_id: str,
        filename: str,
        per_page: int | None = None,
        page: int | None = None,
    ) -> list[ShareCommit]:
        self._ensure_configured()
        self._record("list_file_commits")
        return await self._list_commits_for_path(
            share_id, self.share_file_path(share_id, filename), per_page, page
        )

    async def get_file_content_at_ref(self, share_id: str, filename: str, ref: str) -> str | None:
        self._ensure_configured()
        self._record("get_file")
        try:
            return await self._get_file_content(self.share_file_path(share_id, filename), ref=ref)
        except httpx.HTTPStatusError as e:
            if is_not_found(e):
                return None
            raise
