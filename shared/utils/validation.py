"""
Validation and sanitization helpers for share API input.
"""

import re

from shared.exceptions import ValidationError

UUID4_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$", re.IGNORECASE
)
GIST_ID_PATTERN = re.compile(r"^[0-9a-f]{20,40}$", re.IGNORECASE)
COMMIT_SHA_PATTERN = re.compile(r"^[0-9a-f]{40}$", re.IGNORECASE)
UNSAFE_FILENAME_CHARS = re.compile(r'[/\\?*|"<>:]')

DEFAULT_FILENAME = "share.json"
MAX_PAGE = 1000
MAX_PER_PAGE = 100
MAX_CONTENT_SIZE = 10 * 1024 * 1024


def validate_share_id(share_id: str) -> bool:
    """
    Check that a share id looks like one a provider would issue.

    GitLab shares are UUID v4 directories, gists use hex ids.
    """
    if not share_id:
        return False
    return bool(UUID4_PATTERN.match(share_id) or GIST_ID_PATTERN.match(share_id))


def validate_commit_sha(sha: str) -> bool:
    """Check that a revision token is a full 40-character hex commit SHA."""
    return bool(sha) and bool(COMMIT_SHA_PATTERN.match(sha))


def validate_page(page: int | None) -> int:
    """
    Normalize a 1-based page number.

    Missing or non-positive values fall back to 1; values are capped at MAX_PAGE.
    """
    if page is None or page < 1:
        return 1
    return min(int(page), MAX_PAGE)


def validate_per_page(per_page: int | None) -> int:
    """Normalize a page size; missing or non-positive values fall back to the cap."""
    if per_page is None or per_page < 1:
        return MAX_PER_PAGE
    return min(int(per_page), MAX_PER_PAGE)


def validate_limit(limit: int | None, default_limit: int = 10, max_limit: int = 100) -> int:
    """
    Normalize a result limit.

    Args:
        limit: Requested limit
        default_limit: Value used when limit is missing or non-positive
        max_limit: Upper bound

    Returns:
        Limit in the range [1, max_limit]
    """
    if limit is None or limit < 1:
        return default_limit
    return min(int(limit), max_limit)


def validate_content(content: str | None) -> str:
    """
    Validate diagram content before it is sent to the provider.

    Raises:
        ValidationError: If content is missing or larger than MAX_CONTENT_SIZE
    """
    if content is None:
        raise ValidationError("Content is required", field="content")
    if len(content) > MAX_CONTENT_SIZE:
        raise ValidationError("Content is too large (max 10MB)", field="content")
    return content


def sanitize_filename(filename: str | None) -> str:
    """
    Strip path separators and shell-unsafe characters from a filename.

    Returns DEFAULT_FILENAME when nothing usable remains.
    """
    if not filename or not filename.strip():
        return DEFAULT_FILENAME

    sanitized = UNSAFE_FILENAME_CHARS.sub("", filename)
    sanitized = sanitized.lstrip(".").strip()
    return sanitized or DEFAULT_FILENAME
