"""
This facade exposes the public API for the parser module.
"""
from .facade import parse_report, parse_report_file, parse_blocks, read_report
from .splitter import split_blocks
from .blocks import BlockKind, classify_block, parse_block
from .fields import extract_value
from .accumulator import ResultAccumulator

__all__ = [
    "parse_report",
    "parse_report_file",
    "parse_blocks",
    "read_report",
    "split_blocks",
    "BlockKind",
    "classify_block",
    "parse_block",
    "extract_value",
    "ResultAccumulator",
]
