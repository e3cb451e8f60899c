"""Custom exceptions for the application."""


class ApiException(Exception):
    """Base exception for all API errors."""

    def __init__(
        self,
        status_code: int,
        message: str,
        details: dict | None = None,
    ) -> None:
        self.status_code = status_code
        self.message = message
        self.details = details or {}
        super().__init__(message)


class UnauthorizedError(ApiException):
    """Unauthorized access exception."""

    def __init__(self, message: str = "Invalid credentials") -> None:
        super().__init__(401, message)


class ValidationError(ApiException):
    """Request validation error."""

    def __init__(self, message: str, details: dict | None = None) -> None:
        super().__init__(422, message, details)


class ExternalServiceError(ApiException):
    """External service (GitHub, LLM, dedupe store) error."""

    def __init__(self, service: str, message: str) -> None:
        super().__init__(502, f"{service} error: {message}")


class SignatureVerificationError(UnauthorizedError):
    """Webhook signature verification failed."""

    def __init__(self, source: str = "webhook") -> None:
        super().__init__(f"Invalid {source} signature")


class DedupeStoreError(ExternalServiceError):
    """Dedupe store failed for a reason other than an existing record."""

    def __init__(self, message: str) -> None:
        super().__init__("Dedupe store", message)


class DiffFetchError(ExternalServiceError):
    """Could not fetch the unified diff of a pull request."""

    def __init__(self, owner: str, repo: str, pr_number: int, message: str) -> None:
        super().__init__("GitHub", f"diff fetch for {owner}/{repo}#{pr_number} failed: {message}")


class ReviewerCallError(ExternalServiceError):
    """The language model call for one file failed."""

    def __init__(self, path: str, message: str) -> None:
        self.path = path
        super().__init__("Reviewer", f"{path}: {message}")


class ReviewSubmissionError(ExternalServiceError):
    """Posting the review to the pull request failed."""

    def __init__(self, owner: str, repo: str, pr_number: int, message: str) -> None:
        super().__init__("GitHub", f"review submission for {owner}/{repo}#{pr_number} failed: {message}")


class CheckLifecycleError(ExternalServiceError):
    """Opening or closing the status check failed."""

    def __init__(self, action: str, message: str) -> None:
        super().__init__("GitHub", f"check {action} failed: {message}")
