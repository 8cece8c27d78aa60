"""
Tests for validation utilities.
"""

import uuid

import pytest

from shared.exceptions import ValidationError
from shared.utils.validation import (
    DEFAULT_FILENAME,
    MAX_CONTENT_SIZE,
    sanitize_filename,
    validate_commit_sha,
    validate_content,
    validate_limit,
    validate_page,
    validate_per_page,
    validate_share_id,
)


class TestValidateShareId:
    """Tests for validate_share_id."""

    def test_uuid4_share_id(self):
        """Test GitLab-style UUID v4 share ids."""
        assert validate_share_id(str(uuid.uuid4())) is True

    def test_gist_id(self):
        """Test GitHub gist ids."""
        assert validate_share_id("aa5a315d61ae9438b18d") is True
        assert validate_share_id("0123456789abcdef0123456789abcdef") is True

    @pytest.mark.parametrize(
        "share_id",
        ["", "abc", "../etc/passwd", "550e8400-e29b-11d4-a716-446655440000", "g" * 32],
    )
    def test_invalid_share_ids(self, share_id):
        """Test rejected share ids, including a non-v4 UUID."""
        assert validate_share_id(share_id) is False


class TestValidateCommitSha:
    """Tests for validate_commit_sha."""

    def test_full_sha(self):
        """Test 40-character hex SHAs."""
        assert validate_commit_sha("a" * 40) is True
        assert validate_commit_sha("0123456789ABCDEF0123456789abcdef01234567") is True

    @pytest.mark.parametrize("sha", ["", "a" * 39, "a" * 41, "z" * 40])
    def test_invalid_sha(self, sha):
        """Test short, long and non-hex values."""
        assert validate_commit_sha(sha) is False


class TestPaginationParams:
    """Tests for page, per_page and limit normalization."""

    @pytest.mark.parametrize("page,expected", [(None, 1), (0, 1), (-5, 1), (3, 3), (5000, 1000)])
    def test_validate_page(self, page, expected):
        """Test page normalization."""
        assert validate_page(page) == expected

    @pytest.mark.parametrize("per_page,expected", [(None, 100), (0, 100), (30, 30), (500, 100)])
    def test_validate_per_page(self, per_page, expected):
        """Test page size normalization."""
        assert validate_per_page(per_page) == expected

    @pytest.mark.parametrize("limit,expected", [(None, 10), (0, 10), (-1, 10), (25, 25), (250, 100)])
    def test_validate_limit(self, limit, expected):
        """Test limit normalization."""
        assert validate_limit(limit) == expected

    def test_validate_limit_custom_bounds(self):
        """Test limit normalization with configured defaults."""
        assert validate_limit(None, default_limit=5, max_limit=20) == 5
        assert validate_limit(50, default_limit=5, max_limit=20) == 20


class TestValidateContent:
    """Tests for validate_content."""

    def test_valid_content(self):
        """Test that content is returned unchanged."""
        assert validate_content('{"shapes": []}') == '{"shapes": []}'

    def test_empty_string_allowed(self):
        """Test that empty content is not the same as missing content."""
        assert validate_content("") == ""

    def test_missing_content(self):
        """Test that None is rejected."""
        with pytest.raises(ValidationError, match="Content is required"):
            validate_content(None)

    def test_content_too_large(self):
        """Test size limit."""
        with pytest.raises(ValidationError) as exc_info:
            validate_content("x" * (MAX_CONTENT_SIZE + 1))

        assert exc_info.value.details["field"] == "content"


class TestSanitizeFilename:
    """Tests for sanitize_filename."""

    def test_plain_filename(self):
        """Test that safe names are unchanged."""
        assert sanitize_filename("diagram.json") == "diagram.json"

    def test_strips_path_separators(self):
        """Test that directory traversal is removed."""
        assert sanitize_filename("../../etc/passwd") == "etcpasswd"

    def test_strips_unsafe_characters(self):
        """Test shell and Windows-reserved characters."""
        assert sanitize_filename('my:diagram?*<v2>|".json') == "mydiagramv2.json"

    @pytest.mark.parametrize("filename", [None, "", "   ", "...", "///"])
    def test_falls_back_to_default(self, filename):
        """Test that unusable names become the default filename."""
        assert sanitize_filename(filename) == DEFAULT_FILENAME
