"""Reviewer service - orchestration layer."""

from src.core.logging import get_logger
from src.schemas.review import ReviewResult, ReviewStatus, ReviewTask
from src.services.dedupe.service import get_dedupe_guard
from src.services.github import service as github_service
from src.services.reviewer.graph import review_file
from src.services.reviewer.orchestrator import ReviewOrchestrator

logger = get_logger("reviewer.service")


def get_orchestrator() -> ReviewOrchestrator:
    """Wire the orchestrator to GitHub, the LLM reviewer and the dedupe store."""
    return ReviewOrchestrator(
        github=github_service,
        reviewer=review_file,
        dedupe=get_dedupe_guard(),
    )


async def review_pull_request(task: ReviewTask) -> ReviewResult:
    """Review a pull request at its head commit."""
    return await get_orchestrator().run(task)


async def run_review(task: ReviewTask) -> ReviewResult:
    """Run the review in background."""
    try:
        result = await review_pull_request(task)
        logger.info(f"Review finished: {task.dedupe_key} status={result.status.value}")
        return result
    except Exception as e:
        logger.exception(f"Review failed: {task.dedupe_key}: {e}")
        return ReviewResult(status=ReviewStatus.FAILED)
