"""Tests for the GitHub diff source, check sink and review sink."""

from unittest.mock import MagicMock, patch

import pytest
from github import GithubException
from github.GithubObject import NotSet

from src.core.exceptions import (
    CheckLifecycleError,
    DiffFetchError,
    ReviewSubmissionError,
    ValidationError,
)
from src.schemas.review import ReviewComment, ReviewTask
from src.services.github import client
from src.services.github.service import (
    close_check,
    fetch_diff,
    open_check,
    parse_pull_request_event,
    submit_review,
)


def github_error(status: int = 404, message: str = "Not Found") -> GithubException:
    return GithubException(status, {"message": message}, None)


def pr_payload(action: str = "opened", **overrides) -> dict:
    payload = {
        "action": action,
        "pull_request": {"number": 7, "head": {"sha": "abc123"}},
        "repository": {"name": "widgets", "owner": {"login": "acme"}},
    }
    payload.update(overrides)
    return payload


class TestFetchDiff:
    """Tests for fetch_diff function."""

    @patch("src.services.github.service.fetch_pull_request_diff")
    @patch("src.services.github.service.fetch_pull_request")
    def test_returns_diff(self, mock_fetch_pr, mock_fetch_diff):
        mock_fetch_diff.return_value = "diff --git a/x b/x\n"

        assert fetch_diff("acme", "widgets", 7) == "diff --git a/x b/x\n"
        mock_fetch_pr.assert_called_once_with("acme", "widgets", 7)
        mock_fetch_diff.assert_called_once_with(mock_fetch_pr.return_value)

    @patch("src.services.github.service.fetch_pull_request")
    def test_github_error(self, mock_fetch_pr):
        """GitHub failures become DiffFetchError."""
        mock_fetch_pr.side_effect = github_error()

        with pytest.raises(DiffFetchError, match="acme/widgets#7.*404 Not Found"):
            fetch_diff("acme", "widgets", 7)


class TestCheckLifecycle:
    """Tests for open_check and close_check functions."""

    @patch("src.services.github.service.create_check_run")
    @patch("src.services.github.service.fetch_repository")
    def test_open_check(self, mock_fetch_repo, mock_create):
        mock_create.return_value = MagicMock(id=42)

        assert open_check("acme", "widgets", "abc123") == 42
        mock_create.assert_called_once_with(mock_fetch_repo.return_value, "abc123")

    @patch("src.services.github.service.create_check_run")
    @patch("src.services.github.service.fetch_repository")
    def test_open_check_error(self, mock_fetch_repo, mock_create):
        mock_create.side_effect = github_error(403, "Resource not accessible")

        with pytest.raises(CheckLifecycleError, match="open"):
            open_check("acme", "widgets", "abc123")

    @patch("src.services.github.service.complete_check_run")
    @patch("src.services.github.service.fetch_repository")
    def test_close_check(self, mock_fetch_repo, mock_complete):
        close_check("acme", "widgets", 42, "failure", "Review failed: boom")

        mock_complete.assert_called_once_with(
            mock_fetch_repo.return_value, 42, "failure", "Review failed: boom"
        )

    @patch("src.services.github.service.complete_check_run")
    @patch("src.services.github.service.fetch_repository")
    def test_close_check_error(self, mock_fetch_repo, mock_complete):
        mock_complete.side_effect = github_error(502, "Bad Gateway")

        with pytest.raises(CheckLifecycleError, match="close"):
            close_check("acme", "widgets", 42, "success", "ok")


class TestSubmitReview:
    """Tests for submit_review function."""

    @patch("src.services.github.service.create_review")
    @patch("src.services.github.service.fetch_repository")
    def test_comments_sent_as_dicts(self, mock_fetch_repo, mock_create_review):
        repository = mock_fetch_repo.return_value
        comments = [ReviewComment(path="src/app.py", line=11, body="🐛 bug")]

        submit_review("acme", "widgets", 7, "abc123", "body", "COMMENT", comments)

        repository.get_pull.assert_called_once_with(7)
        mock_create_review.assert_called_once_with(
            repository,
            repository.get_pull.return_value,
            "abc123",
            "body",
            [{"path": "src/app.py", "line": 11, "body": "🐛 bug"}],
            "COMMENT",
        )

    @patch("src.services.github.service.create_review")
    @patch("src.services.github.service.fetch_repository")
    def test_github_error(self, mock_fetch_repo, mock_create_review):
        mock_create_review.side_effect = github_error(422, "Line could not be resolved")

        with pytest.raises(ReviewSubmissionError, match="Line could not be resolved"):
            submit_review("acme", "widgets", 7, "abc123", "body", "COMMENT", [])


class TestParsePullRequestEvent:
    """Tests for parse_pull_request_event function."""

    @pytest.mark.parametrize("action", ["opened", "synchronize"])
    def test_reviewed_actions(self, action):
        assert parse_pull_request_event(pr_payload(action)) == ReviewTask(
            owner="acme", repo="widgets", pr_number=7, head_sha="abc123"
        )

    @pytest.mark.parametrize("action", ["closed", "edited", "labeled", None])
    def test_other_actions(self, action):
        assert parse_pull_request_event(pr_payload(action)) is None

    def test_missing_head_sha(self):
        payload = pr_payload(pull_request={"number": 7})

        with pytest.raises(ValidationError):
            parse_pull_request_event(payload)


class TestClient:
    """Tests for the PyGithub data layer."""

    def test_fetch_pull_request_diff(self):
        """The diff body comes back wrapped by the requester."""
        pr = MagicMock(url="https://api.github.com/repos/acme/widgets/pulls/7")
        pr._requester.requestJsonAndCheck.return_value = ({}, {"data": "diff --git a/x b/x\n"})

        assert client.fetch_pull_request_diff(pr) == "diff --git a/x b/x\n"
        pr._requester.requestJsonAndCheck.assert_called_once_with(
            "GET",
            "https://api.github.com/repos/acme/widgets/pulls/7",
            headers={"Accept": "application/vnd.github.v3.diff"},
        )

    def test_fetch_pull_request_diff_empty(self):
        pr = MagicMock()
        pr._requester.requestJsonAndCheck.return_value = ({}, None)

        assert client.fetch_pull_request_diff(pr) == ""

    @patch("src.services.github.client.settings")
    def test_create_check_run(self, mock_settings):
        mock_settings.check_name = "AI Code Review"
        repository = MagicMock()

        client.create_check_run(repository, "abc123")

        repository.create_check_run.assert_called_once_with(
            name="AI Code Review", head_sha="abc123", status="in_progress"
        )

    @patch("src.services.github.client.settings")
    def test_complete_check_run_truncates_summary(self, mock_settings):
        mock_settings.check_name = "AI Code Review"
        repository = MagicMock()

        client.complete_check_run(repository, 42, "failure", "x" * 70_000)

        repository.get_check_run.assert_called_once_with(42)
        kwargs = repository.get_check_run.return_value.edit.call_args.kwargs
        assert kwargs["status"] == "completed"
        assert kwargs["conclusion"] == "failure"
        assert kwargs["output"]["title"] == "AI Code Review"
        assert len(kwargs["output"]["summary"]) == client.MAX_CHECK_SUMMARY_CHARS

    def test_create_review_without_comments(self):
        """An approval without inline comments omits the comments field."""
        repository, pr = MagicMock(), MagicMock()

        client.create_review(repository, pr, "abc123", "clean", [], "APPROVE")

        repository.get_commit.assert_called_once_with("abc123")
        pr.create_review.assert_called_once_with(
            commit=repository.get_commit.return_value,
            body="clean",
            event="APPROVE",
            comments=NotSet,
        )

    @patch("src.services.github.client._github_client", None)
    @patch("src.services.github.client.settings")
    def test_get_github_client_requires_credentials(self, mock_settings):
        mock_settings.github_app_id = None
        mock_settings.github_private_key = None
        mock_settings.github_installation_id = None
        mock_settings.github_token = None

        with pytest.raises(ValueError, match="credentials not configured"):
            client.get_github_client()

    @patch("src.services.github.client._github_client", None)
    @patch("src.services.github.client.Github")
    @patch("src.services.github.client.settings")
    def test_get_github_client_cached(self, mock_settings, mock_github):
        """The client is built once and reused."""
        mock_settings.github_app_id = None
        mock_settings.github_private_key = None
        mock_settings.github_installation_id = None
        mock_settings.github_token = "ghp_test"

        first = client.get_github_client()
        second = client.get_github_client()

        assert first is second
        mock_github.assert_called_once()
