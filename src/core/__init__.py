"""Shared library utilities."""

from src.core.llm import get_chat_llm
from src.core.logging import get_logger
from src.core.security import require_github_signature, verify_github_signature

__all__ = [
    "get_chat_llm",
    "get_logger",
    "require_github_signature",
    "verify_github_signature",
]
