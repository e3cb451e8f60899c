"""GitHub service."""

from src.services.github.service import (
    close_check,
    fetch_diff,
    open_check,
    parse_pull_request_event,
    submit_review,
)

__all__ = [
    "close_check",
    "fetch_diff",
    "open_check",
    "parse_pull_request_event",
    "submit_review",
]
