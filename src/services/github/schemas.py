"""Pydantic schemas for GitHub service."""

from pydantic import BaseModel


class WebhookResponse(BaseModel):
    """Response schema for webhook events."""

    message: str
    pr: str | None = None
    action: str | None = None


class PingResponse(BaseModel):
    """Response schema for GitHub ping event."""

    message: str = "pong"
    zen: str = ""


class ReviewStartedResponse(BaseModel):
    """Response schema when review is started."""

    message: str = "Review started"
    pr: str
    head_sha: str
