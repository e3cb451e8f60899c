"""GitHub API client - data layer."""

import threading
from typing import Optional
from github import Auth, Github
from github.CheckRun import CheckRun
from github.GithubObject import NotSet
from github.PullRequest import PullRequest
from github.Repository import Repository

from src.config import settings
from src.core.logging import get_logger

logger = get_logger("github.data")

DIFF_MEDIA_TYPE = "application/vnd.github.v3.diff"
# GitHub rejects check run summaries longer than this
MAX_CHECK_SUMMARY_CHARS = 65_535

_github_client: Optional[Github] = None
_client_lock = threading.Lock()


def _build_auth() -> Auth.Auth:
    if all([settings.github_app_id, settings.github_private_key, settings.github_installation_id]):
        private_key = settings.github_private_key.replace("\\n", "\n")
        app_auth = Auth.AppAuth(int(settings.github_app_id), private_key)
        logger.info("GitHub App client initialized")
        # Installation tokens are refreshed by PyGithub when they expire
        return app_auth.get_installation_auth(int(settings.github_installation_id))

    if settings.github_token:
        logger.info("GitHub token client initialized")
        return Auth.Token(settings.github_token)

    raise ValueError("GitHub credentials not configured")


def get_github_client() -> Github:
    """Get the process-wide authenticated GitHub client.

    The first caller builds the client; later callers reuse it.
    """
    global _github_client

    if _github_client:
        return _github_client

    with _client_lock:
        if _github_client is None:
            _github_client = Github(auth=_build_auth())
    return _github_client


def fetch_repository(owner: str, repo: str) -> Repository:
    """Fetch a repository from GitHub API."""
    client = get_github_client()
    return client.get_repo(f"{owner}/{repo}")


def fetch_pull_request(owner: str, repo: str, pr_number: int) -> PullRequest:
    """Fetch a pull request from GitHub API."""
    return fetch_repository(owner, repo).get_pull(pr_number)


def fetch_pull_request_diff(pr: PullRequest) -> str:
    """Fetch the full unified diff of a PR using the diff media type."""
    _, data = pr._requester.requestJsonAndCheck(
        "GET",
        pr.url,
        headers={"Accept": DIFF_MEDIA_TYPE},
    )
    # Non-JSON bodies come back wrapped as {"data": <text>}; an empty diff as None
    if isinstance(data, dict):
        return data.get("data", "")
    return ""


def create_check_run(repository: Repository, head_sha: str) -> CheckRun:
    """Create an in-progress check run on a commit."""
    return repository.create_check_run(
        name=settings.check_name,
        head_sha=head_sha,
        status="in_progress",
    )


def complete_check_run(
    repository: Repository,
    check_run_id: int,
    conclusion: str,
    summary: str,
) -> None:
    """Mark a check run as completed."""
    check_run = repository.get_check_run(check_run_id)
    check_run.edit(
        status="completed",
        conclusion=conclusion,
        output={
            "title": settings.check_name,
            "summary": summary[:MAX_CHECK_SUMMARY_CHARS],
        },
    )


def create_review(
    repository: Repository,
    pr: PullRequest,
    head_sha: str,
    body: str,
    comments: list[dict],
    event: str = "COMMENT",
) -> None:
    """Create a review with inline comments on a PR."""
    pr.create_review(
        commit=repository.get_commit(head_sha),
        body=body,
        event=event,
        comments=comments if comments else NotSet,
    )
    logger.info(f"Created {event} review with {len(comments)} comments")
