from collections import Counter
from pathlib import Path
from typing import Iterable, List

from winsdk_exports.exceptions import ReportError
from winsdk_exports.logging_config import logger
from winsdk_exports.schemas import ExportSymbolResult
from winsdk_exports.tracing import trace
from .accumulator import ResultAccumulator
from .blocks import parse_block
from .splitter import split_blocks


def parse_blocks(blocks: Iterable[List[str]]) -> ExportSymbolResult:
    """
    Parse already-split blocks into one result.

    Raises:
        ReportError: The first block failure, with the block index and header
                     attached. Nothing is returned for a failed parse.
    """
    accumulator = ResultAccumulator()
    kinds: Counter = Counter()
    for index, block in enumerate(blocks):
        try:
            kinds[parse_block(accumulator, block).value] += 1
        except ReportError as exc:
            raise exc.with_block(index, block[0]) from exc

    result = accumulator.finalize()
    logger.debug(f"Parsed blocks {dict(kinds)} into {result.counts()}")
    return result


@trace
def parse_report(text: str) -> ExportSymbolResult:
    """
    Parse the text of one dumpbin report.

    This is the main entry point of the parser: it splits the report into
    blocks and dispatches each block to its record parser.
    """
    return parse_blocks(split_blocks(text))


def read_report(path: Path, encoding: str = "utf-8") -> str:
    """Read a saved report, keeping its CRLF line endings intact."""
    with open(path, "r", encoding=encoding, newline="") as handle:
        return handle.read()


def parse_report_file(path: Path, encoding: str = "utf-8") -> ExportSymbolResult:
    """Parse a report saved to disk."""
    logger.debug(f"Parsing report: {path}")
    return parse_report(read_report(Path(path), encoding))
