"""Review-related schemas."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ReviewTask(BaseModel):
    """One unit of review work: a pull request at a specific head commit."""

    model_config = ConfigDict(populate_by_name=True)

    owner: str
    repo: str
    pr_number: int = Field(alias="prNumber")
    head_sha: str = Field(alias="headSha")

    @property
    def dedupe_key(self) -> str:
        return f"{self.owner}/{self.repo}#{self.pr_number}@{self.head_sha}"


class Finding(BaseModel):
    """A reviewer remark at an absolute line of the new file."""

    line: int
    body: str


class ReviewComment(BaseModel):
    """A finding attached to its file, as posted to GitHub."""

    path: str
    line: int
    body: str


class ReviewStatus(str, Enum):
    SKIPPED = "skipped"
    REVIEWED = "reviewed"
    FAILED = "failed"


class ReviewResult(BaseModel):
    """Terminal outcome of one review task."""

    status: ReviewStatus
    comments: list[ReviewComment] = []
