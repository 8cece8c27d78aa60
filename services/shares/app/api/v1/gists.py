"""
Gists API endpoints.

Provides REST API for shared diagrams and their revision history. The routes
keep the ``/gists`` paths the client uses whichever provider is active.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from services.shares.app.api.schemas.requests import CreateShareRequest, UpdateShareRequest
from services.shares.app.api.schemas.responses import (
    CommitListResponse,
    FileVersionsResponse,
    MessageResponse,
    PaginationInfo,
    ShareResponse,
    UpdateShareResponse,
)
from services.shares.app.core.config import ShareServiceSettings, get_settings
from services.shares.app.core.dependencies import get_file_history_service, get_share_provider
from services.shares.app.providers.base import ShareProvider
from services.shares.app.services.history_service import FileHistoryService
from shared.exceptions import ValidationError
from shared.utils.validation import (
    sanitize_filename,
    validate_commit_sha,
    validate_content,
    validate_limit,
    validate_page,
    validate_per_page,
    validate_share_id,
)

router = APIRouter(prefix="/gists")


def _require_share_id(share_id: str) -> str:
    if not validate_share_id(share_id):
        raise ValidationError("Invalid share id", field="id", value=share_id)
    return share_id


def _require_sha(value: str, field: str) -> str:
    if not validate_commit_sha(value):
        raise ValidationError(f"Invalid {field}", field=field, value=value)
    return value


@router.post("", response_model=ShareResponse, summary="Create a share")
async def create_share(
    request: CreateShareRequest,
    provider: Annotated[ShareProvider, Depends(get_share_provider)],
) -> ShareResponse:
    """Store a diagram as a new share holding a single file."""
    share = await provider.create_share_file(
        filename=sanitize_filename(request.filename),
        content=validate_content(request.content),
        description=request.description,
        public=request.public,
    )
    return ShareResponse(data=share)


@router.get("/{share_id}", response_model=ShareResponse, summary="Get a share")
async def get_share(
    share_id: str,
    provider: Annotated[ShareProvider, Depends(get_share_provider)],
) -> ShareResponse:
    """Retrieve a share at its latest revision."""
    share = await provider.get_share(_require_share_id(share_id))
    return ShareResponse(data=share)


@router.delete("/{share_id}", response_model=MessageResponse, summary="Delete a share")
async def delete_share(
    share_id: str,
    provider: Annotated[ShareProvider, Depends(get_share_provider)],
) -> MessageResponse:
    """Delete a share and all its files."""
    await provider.delete_share(_require_share_id(share_id))
    return MessageResponse(success=True, message="Gist deleted")


@router.patch("/{share_id}", response_model=UpdateShareResponse, summary="Update a share file")
async def update_share(
    share_id: str,
    request: UpdateShareRequest,
    provider: Annotated[ShareProvider, Depends(get_share_provider)],
) -> UpdateShareResponse:
    """Create or replace one file of a share."""
    deleted = await provider.upsert_share_file(
        _require_share_id(share_id),
        filename=sanitize_filename(request.filename),
        content=validate_content(request.content),
    )
    return UpdateShareResponse(deleted=deleted, message="Gist updated")


@router.get("/{share_id}/commits", response_model=CommitListResponse, summary="List share revisions")
async def list_commits(
    share_id: str,
    provider: Annotated[ShareProvider, Depends(get_share_provider)],
    page: Annotated[int | None, Query()] = None,
    per_page: Annotated[int | None, Query()] = None,
) -> CommitListResponse:
    """List raw revisions of a share, newest first."""
    commits = await provider.list_commits(
        _require_share_id(share_id),
        per_page=validate_per_page(per_page),
        page=validate_page(page),
    )
    return CommitListResponse(data=commits)


@router.get(
    "/{share_id}/file-versions/{filename}",
    response_model=FileVersionsResponse,
    summary="List revisions that changed a file",
)
async def list_file_versions(
    share_id: str,
    filename: str,
    service: Annotated[FileHistoryService, Depends(get_file_history_service)],
    settings: Annotated[ShareServiceSettings, Depends(get_settings)],
    cursor: Annotated[str | None, Query()] = None,
    limit: Annotated[int | None, Query()] = None,
) -> FileVersionsResponse:
    """
    List revisions in which a file's content changed, newest first.

    Pass ``pagination.cursor`` of a response back as ``cursor`` to get the
    next page.
    """
    _require_share_id(share_id)
    if cursor:
        _require_sha(cursor, "cursor")

    result = await service.list_changed_revisions(
        share_id,
        sanitize_filename(filename),
        limit=validate_limit(limit, settings.history_default_limit, settings.history_max_limit),
        cursor=cursor or None,
    )

    return FileVersionsResponse(
        data=result.revisions,
        pagination=PaginationInfo(
            cursor=result.next_cursor,
            has_more=result.has_more,
            limit=result.limit,
            count=result.count,
        ),
    )


@router.get("/{share_id}/{sha}", response_model=ShareResponse, summary="Get a share revision")
async def get_share_revision(
    share_id: str,
    sha: str,
    provider: Annotated[ShareProvider, Depends(get_share_provider)],
) -> ShareResponse:
    """Retrieve a share as it was at a given revision."""
    share = await provider.get_share(_require_share_id(share_id), ref=_require_sha(sha, "sha"))
    return ShareResponse(data=share)
