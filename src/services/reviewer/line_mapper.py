"""Map positions inside a hunk to line numbers in the new file."""

from src.services.reviewer.patch_parser import FileDiff, Hunk


def absolute_line(hunk: Hunk, index_in_hunk: int) -> int:
    """Return the new-file line number of ``hunk.lines[index_in_hunk]``.

    Counting starts at ``hunk.start_line`` and advances once per preceding
    line that is not a deletion. Hunks that still carry deletion rows are
    handled the same way as the parser's deletion-free hunks.

    Raises:
        IndexError: If ``index_in_hunk`` is outside ``hunk.lines``
    """
    if not 0 <= index_in_hunk < len(hunk.lines):
        raise IndexError(
            f"index {index_in_hunk} out of range for hunk of {len(hunk.lines)} lines"
        )

    line_number = hunk.start_line
    for line in hunk.lines[:index_in_hunk]:
        if not line.is_deletion:
            line_number += 1
    return line_number


def commentable_lines(file_diff: FileDiff) -> set[int]:
    """Return every new-file line number covered by the file's hunks."""
    lines: set[int] = set()
    for hunk in file_diff.hunks:
        line_number = hunk.start_line
        for line in hunk.lines:
            if line.is_deletion:
                continue
            lines.add(line_number)
            line_number += 1
    return lines
