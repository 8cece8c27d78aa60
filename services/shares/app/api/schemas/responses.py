"""
Response schemas for share API.

Every response uses the ``{success, ...}`` envelope the client expects.
"""

from pydantic import BaseModel, ConfigDict, Field

from services.shares.app.providers.base import Share, ShareCommit


class ShareResponse(BaseModel):
    """Envelope holding a single share."""

    success: bool = Field(True, description="Operation success status")
    data: Share = Field(..., description="Share and its files")

    model_config = {
        "json_schema_extra": {
            "example": {
                "success": True,
                "data": {
                    "id": "aa5a315d61ae9438b18d",
                    "files": {
                        "diagram.json": {"filename": "diagram.json", "content": "{}"},
                    },
                },
            }
        }
    }


class CommitListResponse(BaseModel):
    """Envelope holding raw share revisions."""

    success: bool = Field(True, description="Operation success status")
    data: list[ShareCommit] = Field(..., description="Revisions, newest first")


class PaginationInfo(BaseModel):
    """Cursor pagination state of a file history page."""

    cursor: str | None = Field(None, description="Cursor for the next page")
    has_more: bool = Field(..., alias="hasMore", description="Whether another page exists")
    limit: int = Field(..., description="Limit applied")
    count: int = Field(..., description="Revisions in this page")

    model_config = ConfigDict(populate_by_name=True)


class FileVersionsResponse(BaseModel):
    """Envelope holding revisions that changed a file."""

    success: bool = Field(True, description="Operation success status")
    data: list[ShareCommit] = Field(..., description="Changed revisions, newest first")
    pagination: PaginationInfo = Field(..., description="Pagination state")

    model_config = {
        "json_schema_extra": {
            "example": {
                "success": True,
                "data": [
                    {
                        "version": "57a7f021a713b1c5a6a199b54cc514735d2d462f",
                        "committed_at": "2024-12-05T10:00:00Z",
                    }
                ],
                "pagination": {
                    "cursor": None,
                    "hasMore": False,
                    "limit": 10,
                    "count": 1,
                },
            }
        }
    }


class UpdateShareResponse(BaseModel):
    """Response model for share updates."""

    deleted: bool = Field(..., description="Share was removed because it has no files left")
    success: bool = Field(True, description="Operation success status")
    message: str = Field(..., description="Result message")


class MessageResponse(BaseModel):
    """Response model for operations returning only a message."""

    success: bool = Field(..., description="Operation success status")
    message: str = Field(..., description="Result message")

    model_config = {"json_schema_extra": {"example": {"success": True, "message": "Gist deleted"}}}
