"""
File history service.

Turns a provider's raw, newest-first commit log into a cursor-paginated list of
revisions that actually changed one file of a share.
"""

import asyncio
import time
from dataclasses import dataclass, field
from enum import Enum

from services.shares.app.providers.base import ShareCommit, ShareProvider
from shared.config.logging import get_logger
from shared.exceptions import ValidationError
from shared.observability.metrics import (
    history_batches_fetched_total,
    history_walk_duration_seconds,
    revision_comparisons_total,
)
from shared.observability.tracing import get_tracer

logger = get_logger(__name__)
tracer = get_tracer(__name__)


class WalkState(str, Enum):
    """States of one history walk."""

    SEEKING_CURSOR = "seeking_cursor"
    COMPARING = "comparing"
    LIMIT_REACHED = "limit_reached"
    STOPPED_AT_DELETION = "stopped_at_deletion"
    EXHAUSTED = "exhausted"


class ComparisonOutcome(str, Enum):
    """Result of comparing a candidate revision against the baseline."""

    CHANGED = "changed"
    REAPPEARED = "reappeared"
    UNCHANGED = "unchanged"
    DELETED = "deleted"
    FAILED_OPEN = "failed_open"


# A failed comparison keeps the candidate: listing an unchanged revision is
# preferable to hiding a changed one.
ACCEPTED_OUTCOMES = frozenset(
    {ComparisonOutcome.CHANGED, ComparisonOutcome.REAPPEARED, ComparisonOutcome.FAILED_OPEN}
)


@dataclass
class ChangedRevisionsPage:
    """One page of revisions that changed a file."""

    revisions: list[ShareCommit] = field(default_factory=list)
    next_cursor: str | None = None
    limit: int = 10

    @property
    def has_more(self) -> bool:
        return self.next_cursor is not None

    @property
    def count(self) -> int:
        return len(self.revisions)


class FileHistoryService:
    """Service for paging through the changes of a single share file."""

    def __init__(
        self,
        provider: ShareProvider,
        min_batch_size: int = 50,
        batch_multiplier: int = 2,
    ):
        """
        Initialize file history service.

        Args:
            provider: Storage provider the commit log and contents come from
            min_batch_size: Minimum number of commits fetched per provider call
            batch_multiplier: Commits fetched per requested revision
        """
        self.provider = provider
        self.min_batch_size = min_batch_size
        self.batch_multiplier = batch_multiplier

    def batch_size_for(self, limit: int) -> int:
        """Commits requested per provider call for a given page limit."""
        batch_size = max(limit * self.batch_multiplier, self.min_batch_size)
        return min(batch_size, self.provider.max_page_size)

    async def list_changed_revisions(
        self,
        share_id: str,
        filename: str,
        limit: int = 10,
        cursor: str | None = None,
    ) -> ChangedRevisionsPage:
        """
        List revisions in which ``filename`` changed, newest first.

        The walk starts at the newest revision, or right after ``cursor`` when
        one is given. The first revision where the file exists is kept; every
        later revision is kept only if its content differs from the last kept
        one (the cursor revision counts as the last kept one when resuming).
        The walk stops at the first revision where the file no longer exists.

        Args:
            share_id: Share ID
            filename: File whose history is listed
            limit: Maximum number of revisions to return
            cursor: ``next_cursor`` of the previous page, or None

        Returns:
            Page of changed revisions; ``next_cursor`` is set only when the
            page is full

        Raises:
            ValidationError: If limit or filename is invalid
            ShareNotFoundError: If the share does not exist
        """
        if limit < 1:
            raise ValidationError("Limit must be a positive integer", field="limit", value=limit)
        if not filename:
            raise ValidationError("Filename is required", field="filename")

        cursor = cursor or None
        batch_size = self.batch_size_for(limit)
        accepted: list[ShareCommit] = []
        baseline = cursor
        state = WalkState.SEEKING_CURSOR if cursor else WalkState.COMPARING
        cursor_seen = cursor is None
        page = 1
        started = time.perf_counter()

        with tracer.start_as_current_span("file_history.walk") as span:
            span.set_attribute("share.id", share_id)
            span.set_attribute("history.limit", limit)

            while state in (WalkState.SEEKING_CURSOR, WalkState.COMPARING):
                batch = await self.provider.list_file_commits(
                    share_id, filename, per_page=batch_size, page=page
                )
                history_batches_fetched_total.labels(provider=self.provider.name).inc()

                if not batch:
                    state = WalkState.EXHAUSTED
                    break

                for commit in batch:
                    if state is WalkState.SEEKING_CURSOR:
                        if commit.version == cursor:
                            state = WalkState.COMPARING
                            cursor_seen = True
                        continue

                    if baseline is None:
                        content = await self.provider.get_file_content_at_ref(
                            share_id, filename, commit.version
                        )
                        if content is not None:
                            accepted.append(commit)
                            baseline = commit.version
                    else:
                        outcome = await self._compare(share_id, filename, baseline, commit)
                        if outcome is ComparisonOutcome.DELETED:
                            state = WalkState.STOPPED_AT_DELETION
                            break
                        if outcome in ACCEPTED_OUTCOMES:
                            accepted.append(commit)
                            baseline = commit.version

                    if len(accepted) >= limit:
                        state = WalkState.LIMIT_REACHED
                        break

                if state in (WalkState.SEEKING_CURSOR, WalkState.COMPARING):
                    if len(batch) < batch_size:
                        state = WalkState.EXHAUSTED
                    else:
                        page += 1

            span.set_attribute("history.pages", page)
            span.set_attribute("history.state", state.value)

        if not cursor_seen:
            logger.warning("history_cursor_not_found", share_id=share_id, cursor=cursor)

        history_walk_duration_seconds.labels(provider=self.provider.name).observe(
            time.perf_counter() - started
        )

        next_cursor = accepted[-1].version if len(accepted) == limit else None
        logger.info(
            "file_history_listed",
            share_id=share_id,
            filename=filename,
            count=len(accepted),
            pages=page,
            state=state.value,
            has_more=next_cursor is not None,
        )
        return ChangedRevisionsPage(revisions=accepted, next_cursor=next_cursor, limit=limit)

    async def _compare(
        self,
        share_id: str,
        filename: str,
        baseline: str,
        candidate: ShareCommit,
    ) -> ComparisonOutcome:
        """Compare the file at ``candidate`` with the file at ``baseline``."""
        try:
            baseline_content, candidate_content = await asyncio.gather(
                self.provider.get_file_content_at_ref(share_id, filename, baseline),
                self.provider.get_file_content_at_ref(share_id, filename, candidate.version),
            )
        except Exception as e:
            logger.warning(
                "revision_comparison_failed",
                share_id=share_id,
                filename=filename,
                baseline=baseline,
                candidate=candidate.version,
                error=str(e),
            )
            outcome = ComparisonOutcome.FAILED_OPEN
        else:
            if candidate_content is None:
                outcome = ComparisonOutcome.DELETED
            elif baseline_content is None:
                outcome = ComparisonOutcome.REAPPEARED
            elif baseline_content != candidate_content:
                outcome = ComparisonOutcome.CHANGED
            else:
                outcome = ComparisonOutcome.UNCHANGED

        revision_comparisons_total.labels(
            provider=self.provider.name, outcome=outcome.value
        ).inc()
        return outcome
