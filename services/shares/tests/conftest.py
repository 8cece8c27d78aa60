"""
Shared fixtures for share service tests.

Provides an in-memory storage provider with a scripted revision history.
"""

from uuid import uuid4

import pytest

from services.shares.app.providers.base import Share, ShareCommit, ShareFile, ShareProvider
from shared.exceptions import ShareNotFoundError


def make_sha(n: int) -> str:
    """Deterministic 40-character hex revision token."""
    return f"{n:040x}"


class InMemoryShareProvider(ShareProvider):
    """Share provider keeping every revision of every share in memory."""

    name = "memory"

    def __init__(self):
        # share id -> [(commit, {filename: content}), ...] newest first
        self.histories: dict[str, list[tuple[ShareCommit, dict[str, str]]]] = {}
        self.failing_refs: set[str] = set()
        self.list_calls: list[dict] = []
        self.content_calls: list[str] = []
        self.closed = False
        self._counter = 0

    def _next_version(self) -> str:
        self._counter += 1
        return make_sha(self._counter)

    def add_revision(self, share_id: str, files: dict[str, str], version: str | None = None) -> str:
        """Record a new newest revision holding exactly ``files``."""
        version = version or self._next_version()
        commit = ShareCommit(version=version, committed_at=f"2024-12-05T10:{self._counter % 60:02d}:00Z")
        self.histories.setdefault(share_id, []).insert(0, (commit, dict(files)))
        return version

    def seed_file_history(
        self, share_id: str, filename: str, contents: list[str | None]
    ) -> list[str]:
        """
        Build a history from file contents given newest first.

        ``None`` means the file does not exist at that revision. Returns the
        versions newest first.
        """
        versions = []
        for content in reversed(contents):
            files = {} if content is None else {filename: content}
            versions.insert(0, self.add_revision(share_id, files))
        return versions

    def _history(self, share_id: str) -> list[tuple[ShareCommit, dict[str, str]]]:
        if share_id not in self.histories:
            raise ShareNotFoundError(share_id)
        return self.histories[share_id]

    async def close(self) -> None:
        self.closed = True

    async def create_share_file(self, filename, content, description=None, public=False) -> Share:
        share_id = str(uuid4())
        self.add_revision(share_id, {filename: content})
        return Share(id=share_id, files={filename: ShareFile(filename=filename, content=content)})

    async def upsert_share_file(self, share_id, filename, content) -> bool:
        files = dict(self._history(share_id)[0][1])
        if content:
            files[filename] = content
        else:
            files.pop(filename, None)
        if not files:
            del self.histories[share_id]
            return True
        self.add_revision(share_id, files)
        return False

    async def get_share(self, share_id, ref=None) -> Share:
        history = self._history(share_id)
        for commit, files in history:
            if ref is None or commit.version == ref:
                return Share(
                    id=share_id,
                    files={name: ShareFile(filename=name, content=body) for name, body in files.items()},
                )
        raise ShareNotFoundError(share_id, ref=ref)

    async def delete_share(self, share_id) -> None:
        self._history(share_id)
        del self.histories[share_id]

    async def list_commits(self, share_id, per_page=None, page=None) -> list[ShareCommit]:
        history = self._history(share_id)
        # Upstream APIs silently cap page sizes
        per_page = min(per_page or self.max_page_size, self.max_page_size)
        page = page or 1
        start = (page - 1) * per_page
        return [commit for commit, _ in history[start : start + per_page]]

    async def list_file_commits(self, share_id, filename, per_page=None, page=None):
        self.list_calls.append({"share_id": share_id, "per_page": per_page, "page": page})
        return await self.list_commits(share_id, per_page=per_page, page=page)

    async def get_file_content_at_ref(self, share_id, filename, ref) -> str | None:
        self.content_calls.append(ref)
        if ref in self.failing_refs:
            raise RuntimeError(f"upstream failure at {ref}")
        for commit, files in self._history(share_id):
            if commit.version == ref:
                return files.get(filename)
        raise ShareNotFoundError(share_id, ref=ref)


@pytest.fixture
def memory_provider():
    """Create an empty in-memory share provider."""
    return InMemoryShareProvider()


@pytest.fixture
def sha():
    """Expose the revision token helper to tests."""
    return make_sha
