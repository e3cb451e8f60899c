"""Review orchestration: dedupe -> open check -> review files -> post -> close check."""

import asyncio
from typing import Any, Awaitable, Callable, Optional

from src.config import settings
from src.core.logging import get_logger
from src.schemas.review import Finding, ReviewComment, ReviewResult, ReviewStatus, ReviewTask
from src.services.dedupe.service import DedupeGuard
from src.services.reviewer.line_mapper import commentable_lines
from src.services.reviewer.patch_parser import FileDiff, extract_file_diff, parse_diff
from src.services.reviewer.summary import build_summary

logger = get_logger("reviewer.orchestrator")

Reviewer = Callable[[str, str], Awaitable[list[dict]]]


def validate_finding(entry: Any) -> Optional[Finding]:
    """Return a Finding for a well-formed reviewer entry, else None.

    ``line`` must be a positive integer (decimal strings are accepted) and
    ``body`` a non-blank string.
    """
    if not isinstance(entry, dict):
        return None

    line = entry.get("line")
    body = entry.get("body")

    if isinstance(line, str):
        try:
            line = int(line.strip())
        except ValueError:
            return None
    if isinstance(line, bool) or not isinstance(line, int) or line <= 0:
        return None
    if not isinstance(body, str) or not body.strip():
        return None

    return Finding(line=line, body=body)


def skipped_files_notice(skipped: int, limit: int) -> str:
    return f"⚠️ {skipped} file(s) not reviewed: this review is limited to {limit} files."


class ReviewOrchestrator:
    """Drive one review task through its external side effects.

    Args:
        github: Diff source, check sink and review sink
            (``fetch_diff``, ``open_check``, ``close_check``, ``submit_review``)
        reviewer: Async ``(path, diff_text) -> [{line, body}, ...]``
        dedupe: Guard admitting each task once
    """

    def __init__(
        self,
        github: Any,
        reviewer: Reviewer,
        dedupe: DedupeGuard,
        max_diff_chars: int | None = None,
        max_files: int | None = None,
        concurrency: int | None = None,
    ) -> None:
        self.github = github
        self.reviewer = reviewer
        self.dedupe = dedupe
        self.max_diff_chars = max_diff_chars if max_diff_chars is not None else settings.max_diff_chars
        self.max_files = max_files if max_files is not None else settings.max_files_per_review
        self.concurrency = concurrency if concurrency is not None else settings.review_concurrency

    async def run(self, task: ReviewTask) -> ReviewResult:
        """Review one task.

        Returns a skipped result for duplicates. Any failure after the check
        is opened closes the check with ``failure`` and is re-raised.
        """
        if not await self.dedupe.admit(task.dedupe_key):
            return ReviewResult(status=ReviewStatus.SKIPPED)

        logger.info(f"Starting review: {task.dedupe_key}")
        check_id = await asyncio.to_thread(
            self.github.open_check, task.owner, task.repo, task.head_sha
        )

        try:
            comments, skipped = await self._review(task)

            body = build_summary(comments)
            summary = f"Review complete: {len(comments)} comment(s)"
            if skipped:
                body += f"\n\n{skipped_files_notice(skipped, self.max_files)}"
                summary += f", {skipped} file(s) not reviewed"
            event = "COMMENT" if comments or skipped else "APPROVE"
            await asyncio.to_thread(
                self.github.submit_review,
                task.owner,
                task.repo,
                task.pr_number,
                task.head_sha,
                body,
                event,
                comments,
            )

            await asyncio.to_thread(
                self.github.close_check,
                task.owner,
                task.repo,
                check_id,
                "success",
                summary,
            )
        except Exception as e:
            await self._fail_check(task, check_id, e)
            raise

        logger.info(f"Review completed: {task.dedupe_key} ({len(comments)} comments)")
        return ReviewResult(status=ReviewStatus.REVIEWED, comments=comments)

    async def _review(self, task: ReviewTask) -> tuple[list[ReviewComment], int]:
        """Review every reviewable file; return the comments and the number of files skipped."""
        diff_text = await asyncio.to_thread(
            self.github.fetch_diff, task.owner, task.repo, task.pr_number
        )
        document = parse_diff(diff_text)
        files = document.reviewable_files

        logger.info(f"Found {len(files)} reviewable files of {len(document)} in diff")

        skipped = 0
        if self.max_files is not None and len(files) > self.max_files:
            skipped = len(files) - self.max_files
            logger.warning(f"Limiting review to {self.max_files} files, skipping {skipped}")
            files = files[: self.max_files]

        semaphore = asyncio.Semaphore(self.concurrency)

        async def review_one(file_diff: FileDiff) -> list[ReviewComment]:
            async with semaphore:
                return await self._review_file(diff_text, file_diff)

        # Wait for every file before failing so no call outlives the task
        per_file = await asyncio.gather(*(review_one(f) for f in files), return_exceptions=True)
        for outcome in per_file:
            if isinstance(outcome, BaseException):
                raise outcome
        return [comment for file_comments in per_file for comment in file_comments], skipped

    async def _review_file(self, diff_text: str, file_diff: FileDiff) -> list[ReviewComment]:
        section = extract_file_diff(diff_text, file_diff.path)
        if section is None:
            return []

        entries = await self.reviewer(file_diff.path, section[: self.max_diff_chars])

        comments = []
        dropped = 0
        for entry in entries or []:
            finding = validate_finding(entry)
            if finding is None:
                dropped += 1
                continue
            comments.append(ReviewComment(path=file_diff.path, line=finding.line, body=finding.body))

        if dropped:
            logger.debug(f"Dropped {dropped} malformed entries for {file_diff.path}")

        covered = commentable_lines(file_diff)
        outside = [c.line for c in comments if c.line not in covered]
        if outside:
            logger.warning(f"Findings outside the diff of {file_diff.path}: lines {outside}")

        return comments

    async def _fail_check(self, task: ReviewTask, check_id: int, error: Exception) -> None:
        logger.error(f"Review failed for {task.dedupe_key}: {error}")
        try:
            await asyncio.to_thread(
                self.github.close_check,
                task.owner,
                task.repo,
                check_id,
                "failure",
                f"Review failed: {error}",
            )
        except Exception as close_error:
            logger.error(f"Failed to close check {check_id} after error: {close_error}")
