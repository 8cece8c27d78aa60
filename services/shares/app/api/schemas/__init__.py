"""API schemas for share service."""

from services.shares.app.api.schemas.requests import CreateShareRequest, UpdateShareRequest
from services.shares.app.api.schemas.responses import (
    CommitListResponse,
    FileVersionsResponse,
    MessageResponse,
    PaginationInfo,
    ShareResponse,
    UpdateShareResponse,
)

__all__ = [
    "CreateShareRequest",
    "UpdateShareRequest",
    "CommitListResponse",
    "FileVersionsResponse",
    "MessageResponse",
    "PaginationInfo",
    "ShareResponse",
    "UpdateShareResponse",
]
