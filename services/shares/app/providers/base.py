"""
Storage provider contract for shared diagrams.

A share is a small set of files hosted by a code-host. Every write creates a
revision upstream, which is what the file history walk pages through.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager

import httpx
from pydantic import BaseModel, Field

from shared.exceptions import ShareNotFoundError
from shared.observability.metrics import share_operations_total


class ShareFile(BaseModel):
    """A single file of a share."""

    filename: str = Field(..., description="File name")
    content: str = Field(..., description="File content")


class Share(BaseModel):
    """A share and its files at one revision."""

    id: str = Field(..., description="Share ID")
    files: dict[str, ShareFile] = Field(default_factory=dict, description="Files by name")


class ShareCommit(BaseModel):
    """One revision of a share, as reported by the provider (newest first)."""

    version: str = Field(..., description="Provider revision token (commit SHA)")
    committed_at: str = Field(..., description="Commit timestamp as reported upstream")


def is_not_found(error: BaseException) -> bool:
    """Whether an upstream error is an HTTP 404."""
    return isinstance(error, httpx.HTTPStatusError) and error.response.status_code == 404


@contextmanager
def translate_not_found(share_id: str, ref: str | None = None) -> Iterator[None]:
    """Re-raise upstream 404 responses as ShareNotFoundError."""
    try:
        yield
    except httpx.HTTPStatusError as e:
        if is_not_found(e):
            raise ShareNotFoundError(share_id, ref=ref) from e
        raise


class ShareProvider(ABC):
    """Abstract storage backend for shares.

    Implementations must return commit lists newest-first, return an empty list
    past the end of history, and raise ShareNotFoundError for unknown shares.
    """

    name: str = "unknown"
    # Largest per_page the upstream API honours
    max_page_size: int = 100

    def is_configured(self) -> bool:
        """Whether the provider has the credentials it needs."""
        return True

    async def close(self) -> None:
        """Release network resources."""
        return None

    def _record(self, operation: str) -> None:
        share_operations_total.labels(provider=self.name, operation=operation).inc()

    @abstractmethod
    async def create_share_file(
        self,
        filename: str,
        content: str,
        description: str | None = None,
        public: bool = False,
    ) -> Share:
        """Create a new share holding a single file."""

    @abstractmethod
    async def upsert_share_file(self, share_id: str, filename: str, content: str) -> bool:
        """
        Create or replace a file of an existing share.

        Returns:
            True if the share was removed because it no longer holds any file
        """

    @abstractmethod
    async def get_share(self, share_id: str, ref: str | None = None) -> Share:
        """Get a share at its latest revision or at ``ref``."""

    @abstractmethod
    async def delete_share(self, share_id: str) -> None:
        """Delete a share and all its files."""

    @abstractmethod
    async def list_commits(
        self,
        share_id: str,
        per_page: int | None = None,
        page: int | None = None,
    ) -> list[ShareCommit]:
        """List revisions of the whole share, newest first."""

    @abstractmethod
    async def list_file_commits(
        self,
        share_id: str,
        filename: str,
        per_page: int | None = None,
        page: int | None = None,
    ) -> list[ShareCommit]:
        """
        List revisions relevant to one file, newest first.

        Backends without a per-file log may return every share revision and
        leave filtering to the caller.
        """

    @abstractmethod
    async def get_file_content_at_ref(self, share_id: str, filename: str, ref: str) -> str | None:
        """
        Get file content at a revision.

        Returns:
            File content, or None if the file did not exist at that revision
        """
