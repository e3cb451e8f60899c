"""GitHub service - business logic layer.

Diff source, status check sink and review sink used by the review
orchestrator. PyGithub failures are re-raised as typed service errors.
"""

from typing import Literal, Optional, Sequence

from github import GithubException

from src.core.exceptions import (
    CheckLifecycleError,
    DiffFetchError,
    ReviewSubmissionError,
    ValidationError,
)
from src.core.logging import get_logger
from src.schemas.review import ReviewComment, ReviewTask
from src.services.github.client import (
    complete_check_run,
    create_check_run,
    create_review,
    fetch_pull_request,
    fetch_pull_request_diff,
    fetch_repository,
)

logger = get_logger("github.service")

REVIEWED_ACTIONS = ("opened", "synchronize")

Conclusion = Literal["success", "failure"]
ReviewEvent = Literal["APPROVE", "COMMENT"]


def _error_message(e: GithubException) -> str:
    data = e.data if isinstance(e.data, dict) else {}
    return f"{e.status} {data.get('message', e.data)}"


def fetch_diff(owner: str, repo: str, pr_number: int) -> str:
    """Fetch the full unified diff of a pull request."""
    logger.info(f"Fetching diff: {owner}/{repo}#{pr_number}")
    try:
        pr = fetch_pull_request(owner, repo, pr_number)
        diff = fetch_pull_request_diff(pr)
    except GithubException as e:
        raise DiffFetchError(owner, repo, pr_number, _error_message(e)) from e
    logger.info(f"Fetched diff of {len(diff)} chars")
    return diff


def open_check(owner: str, repo: str, head_sha: str) -> int:
    """Open an in-progress status check on the head commit, returning its id."""
    try:
        check_run = create_check_run(fetch_repository(owner, repo), head_sha)
    except GithubException as e:
        raise CheckLifecycleError("open", _error_message(e)) from e
    logger.info(f"Opened check {check_run.id} on {owner}/{repo}@{head_sha[:7]}")
    return check_run.id


def close_check(
    owner: str,
    repo: str,
    check_id: int,
    conclusion: Conclusion,
    summary: str,
) -> None:
    """Complete a status check with the given conclusion and summary."""
    try:
        complete_check_run(fetch_repository(owner, repo), check_id, conclusion, summary)
    except GithubException as e:
        raise CheckLifecycleError("close", _error_message(e)) from e
    logger.info(f"Closed check {check_id}: {conclusion}")


def submit_review(
    owner: str,
    repo: str,
    pr_number: int,
    head_sha: str,
    body: str,
    event: ReviewEvent,
    comments: Sequence[ReviewComment],
) -> None:
    """Submit one review carrying every inline comment."""
    try:
        repository = fetch_repository(owner, repo)
        pr = repository.get_pull(pr_number)
        create_review(
            repository,
            pr,
            head_sha,
            body,
            [c.model_dump() for c in comments],
            event,
        )
    except GithubException as e:
        logger.error(f"Failed to submit review: {e}")
        raise ReviewSubmissionError(owner, repo, pr_number, _error_message(e)) from e
    logger.info(f"Submitted review with {len(comments)} comments")


def parse_pull_request_event(payload: dict) -> Optional[ReviewTask]:
    """Build a review task from a pull_request webhook payload.

    Returns None for actions that are not reviewed.

    Raises:
        ValidationError: If a reviewed action lacks the fields of a task
    """
    action = payload.get("action")
    pr = payload.get("pull_request") or {}
    repo = payload.get("repository") or {}

    owner = (repo.get("owner") or {}).get("login")
    repo_name = repo.get("name")
    pr_number = pr.get("number")
    head_sha = (pr.get("head") or {}).get("sha")

    logger.info(f"PR event: {action} on {owner}/{repo_name}#{pr_number}")

    if action not in REVIEWED_ACTIONS:
        return None

    if not all([owner, repo_name, pr_number, head_sha]):
        raise ValidationError(
            "Incomplete pull_request payload",
            details={
                "owner": owner,
                "repo": repo_name,
                "pr_number": pr_number,
                "head_sha": head_sha,
            },
        )

    return ReviewTask(owner=owner, repo=repo_name, pr_number=pr_number, head_sha=head_sha)
