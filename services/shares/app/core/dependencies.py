"""
Dependency injection for share service.

Provides FastAPI dependencies for the storage provider and services.
"""

from typing import Annotated

from fastapi import Depends, Request

from services.shares.app.core.config import ShareServiceSettings, get_settings
from services.shares.app.providers import ShareProvider, create_share_provider
from services.shares.app.services.history_service import FileHistoryService


def get_share_provider(request: Request) -> ShareProvider:
    """
    Get the storage provider opened for this application.

    The provider (and its HTTP connection pool) is created in the lifespan and
    shared by all requests; it is created lazily if the lifespan did not run.

    Args:
        request: Incoming request

    Returns:
        ShareProvider instance
    """
    provider = getattr(request.app.state, "share_provider", None)
    if provider is None:
        provider = create_share_provider(get_settings())
        request.app.state.share_provider = provider
    return provider


async def get_file_history_service(
    provider: Annotated[ShareProvider, Depends(get_share_provider)],
    settings: Annotated[ShareServiceSettings, Depends(get_settings)],
) -> FileHistoryService:
    """
    Get file history service instance.

    Args:
        provider: Storage provider
        settings: Service settings

    Returns:
        FileHistoryService instance
    """
    return FileHistoryService(
        provider,
        min_batch_size=settings.history_min_batch_size,
        batch_multiplier=settings.history_batch_multiplier,
    )
