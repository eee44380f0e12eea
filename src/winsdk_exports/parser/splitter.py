from typing import List

from .config import (
    ARCHIVE_MEMBER_PREFIX,
    DLL_EXPORTS_HEADER,
    LIB_EXPORTS_HEADER,
    REPORT_LINE_SEPARATOR,
    SUMMARY_MARKER,
)


def is_block_header(line: str) -> bool:
    """True if line starts a new block."""
    return (
        line == LIB_EXPORTS_HEADER
        or line == DLL_EXPORTS_HEADER
        or line.startswith(ARCHIVE_MEMBER_PREFIX)
    )


def split_blocks(text: str, separator: str = REPORT_LINE_SEPARATOR) -> List[List[str]]:
    """
    Partition a report into blocks.

    Each block starts with a header line and holds every following line up to
    the next header. Lines before the first header are dropped, and scanning
    stops at the summary marker.
    """
    blocks: List[List[str]] = []
    current: List[str] = []
    for line in text.split(separator):
        if line == SUMMARY_MARKER:
            break
        if is_block_header(line):
            current = [line]
            blocks.append(current)
        elif blocks:
            current.append(line)
    return blocks
