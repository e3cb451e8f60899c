"""Agent state schema for the per-file reviewer."""

from typing import Annotated, TypedDict

from langgraph.graph.message import add_messages


class FileReviewState(TypedDict):
    """State for reviewing a single file's diff."""

    # File context (immutable)
    path: str
    diff: str

    # Model conversation
    messages: Annotated[list, add_messages]

    # Output: untrusted [{line, body}] entries exactly as the model produced them
    findings: list[dict]
