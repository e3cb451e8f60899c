"""Render the human-readable body of a posted review."""

from typing import Optional, Sequence

from src.schemas.review import ReviewComment

REVIEW_TITLE = "🤖 **AI Code Review**"
CLEAN_REVIEW_MESSAGE = f"{REVIEW_TITLE} ✅ The code looks clean!"

# Ordered: the first marker found in a comment body decides its category.
CATEGORIES: tuple[tuple[str, str], ...] = (
    ("🐛", "Bug"),
    ("🔒", "Security"),
    ("⚡", "Performance"),
    ("🧹", "Style"),
    ("💡", "Suggestion"),
)
CRITICAL_CATEGORIES = frozenset({"Bug", "Security"})
MAX_CRITICAL_ENTRIES = 3
CRITICAL_PREVIEW_CHARS = 80


def categorize(body: str) -> Optional[str]:
    """Return the label of the first category marker in ``body``, if any."""
    for marker, label in CATEGORIES:
        if marker in body:
            return label
    return None


def build_summary(comments: Sequence[ReviewComment]) -> str:
    """Build the review body: total, per-category table and major issues."""
    if not comments:
        return CLEAN_REVIEW_MESSAGE

    counts = {label: 0 for _, label in CATEGORIES}
    critical: list[str] = []

    for comment in comments:
        label = categorize(comment.body)
        if label is None:
            continue
        counts[label] += 1
        if label in CRITICAL_CATEGORIES and len(critical) < MAX_CRITICAL_ENTRIES:
            first_line = comment.body.split("\n", 1)[0][:CRITICAL_PREVIEW_CHARS]
            critical.append(f"- {comment.path}: {first_line}")

    parts = [f"{REVIEW_TITLE}: {len(comments)} comment(s)"]

    rows = [
        f"| {marker} {label} | {counts[label]} |"
        for marker, label in CATEGORIES
        if counts[label]
    ]
    if rows:
        parts.append("\n".join(["| Category | Count |", "|---|---|", *rows]))

    if critical:
        parts.append("\n".join(["### Major issues", *critical]))

    return "\n\n".join(parts)
