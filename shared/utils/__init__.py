"""
Common utility functions.
"""

from shared.utils.validation import (
    sanitize_filename,
    validate_commit_sha,
    validate_content,
    validate_limit,
    validate_page,
    validate_per_page,
    validate_share_id,
)

__all__ = [
    "validate_share_id",
    "validate_commit_sha",
    "validate_page",
    "validate_per_page",
    "validate_limit",
    "validate_content",
    "sanitize_filename",
]
