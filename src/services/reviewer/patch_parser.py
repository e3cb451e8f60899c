"""Unified diff parser: split a multi-file PR diff into per-file hunks."""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

FILE_BOUNDARY = "diff --git"
NEW_PATH_PREFIX = "+++ b/"

# @@ -old_start[,old_count] +new_start[,new_count] @@
HUNK_HEADER_RE = re.compile(r"^@@ -\d+(?:,\d+)? \+(\d+)(?:,\d+)?")


class LineKind(str, Enum):
    CONTEXT = "context"
    ADDITION = "addition"
    DELETION = "deletion"


@dataclass(frozen=True)
class HunkLine:
    """One raw diff line tagged by its leading marker."""

    text: str
    kind: LineKind

    @classmethod
    def from_raw(cls, text: str) -> "HunkLine":
        if text.startswith("+"):
            return cls(text, LineKind.ADDITION)
        if text.startswith("-"):
            return cls(text, LineKind.DELETION)
        return cls(text, LineKind.CONTEXT)

    @property
    def is_deletion(self) -> bool:
        return self.kind is LineKind.DELETION


@dataclass(frozen=True)
class Hunk:
    start_line: int
    lines: tuple[HunkLine, ...] = ()


@dataclass(frozen=True)
class FileDiff:
    path: str
    hunks: tuple[Hunk, ...] = ()

    @property
    def is_reviewable(self) -> bool:
        return len(self.hunks) > 0


@dataclass(frozen=True)
class DiffDocument:
    files: tuple[FileDiff, ...] = ()

    def __iter__(self):
        return iter(self.files)

    def __len__(self) -> int:
        return len(self.files)

    @property
    def reviewable_files(self) -> list[FileDiff]:
        return [f for f in self.files if f.is_reviewable]


def parse_diff(diff_text: str) -> DiffDocument:
    """Parse a multi-file unified diff into per-file hunks.

    A ``diff --git`` line closes the current file, ``+++ b/<path>`` opens a
    new one and ``@@ ... +start[,count] @@`` opens a hunk on it. Every later
    line that is not a deletion belongs to the newest hunk. Deletion lines are
    never stored since only lines present in the new file are numbered.

    Malformed input never raises: hunks without a file, lines before the
    first hunk and unrecognised lines are dropped.

    Args:
        diff_text: Raw unified diff of a whole pull request

    Returns:
        DiffDocument with one FileDiff per ``+++ b/`` marker, in order
    """
    if not diff_text or not isinstance(diff_text, str):
        return DiffDocument()

    # [path, [(start_line, [HunkLine, ...]), ...]]
    files: list[tuple[str, list[tuple[int, list[HunkLine]]]]] = []
    current: Optional[list[tuple[int, list[HunkLine]]]] = None

    lines = diff_text.split("\n")
    if lines[-1] == "":
        lines.pop()

    for raw in lines:
        # Only "\n" ends a diff line; other control characters belong to the source
        line = raw[:-1] if raw.endswith("\r") else raw
        if line.startswith(FILE_BOUNDARY):
            current = None
            continue

        if line.startswith(NEW_PATH_PREFIX):
            current = []
            files.append((line[len(NEW_PATH_PREFIX):], current))
            continue

        hunk_match = HUNK_HEADER_RE.match(line)
        if hunk_match:
            if current is not None:
                current.append((int(hunk_match.group(1)), []))
            continue

        if not current or line.startswith("-"):
            continue

        # "\ No newline at end of file" is metadata, not a file line
        if line.startswith("\\"):
            continue

        current[-1][1].append(HunkLine.from_raw(line))

    return DiffDocument(
        files=tuple(
            FileDiff(
                path=path,
                hunks=tuple(Hunk(start, tuple(lines)) for start, lines in hunks),
            )
            for path, hunks in files
        )
    )


def extract_file_diff(diff_text: str, path: str) -> Optional[str]:
    """Return the section of ``diff_text`` belonging to ``path``.

    The full diff is split on ``diff --git`` and the first section holding a
    line exactly equal to ``+++ b/<path>`` is returned (without the boundary
    marker itself), or None when there is no such section.
    """
    if not diff_text:
        return None

    marker = f"{NEW_PATH_PREFIX}{path}"
    for section in diff_text.split(FILE_BOUNDARY):
        if any(line.rstrip("\r") == marker for line in section.split("\n")):
            return section
    return None
