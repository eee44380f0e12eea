"""
Public API for the ordinal merge.
"""

from typing import Iterable, List, Mapping, Optional, Sequence, Tuple

from winsdk_exports.logging_config import logger
from winsdk_exports.schemas import ExportSymbolResult, MergeResult
from winsdk_exports.tracing import trace
from .config import MergeConfig, get_merge_config
from .ordinal_index import build_ordinal_index
from .resolver import OrdinalResolver


def select_snapshots(
    deps: Sequence[str],
    results_by_snapshot: Mapping[str, Optional[ExportSymbolResult]],
) -> List[Tuple[str, ExportSymbolResult]]:
    """Pair each snapshot in deps order with its result, skipping missing ones."""
    selected = []
    for snapshot in deps:
        result = results_by_snapshot.get(snapshot)
        if result is None:
            logger.debug(f"No parsed result for snapshot '{snapshot}', skipping")
            continue
        selected.append((snapshot, result))
    return selected


@trace
def merge(
    name: str,
    deps: Sequence[str],
    results_by_snapshot: Mapping[str, Optional[ExportSymbolResult]],
    excluded_symbols: Optional[Iterable[str]] = None,
    config: Optional[MergeConfig] = None,
) -> MergeResult:
    """
    Merge the parsed snapshots of one library into a name index.

    This is the main entry point for ordinal resolution. It:
    1. Builds the ordinal index from every DLL export table, in deps order
    2. Resolves every LibSymbol to a name
    3. Groups the records by resolved name

    Args:
        name: Logical library name (used in diagnostics)
        deps: Snapshot ids; later snapshots win ordinal conflicts
        results_by_snapshot: Parsed result per snapshot id; absent ids are skipped
        excluded_symbols: Raw symbol names to skip (defaults to the configured list)
        config: Merge configuration (defaults to the global one)

    Returns:
        MergeResult with the name index and the conflict/miss diagnostics
    """
    config = config or get_merge_config()
    excluded = frozenset(excluded_symbols) if excluded_symbols is not None else config.excluded_symbols

    snapshots = select_snapshots(deps, results_by_snapshot)
    ordinal_index = build_ordinal_index((result for _, result in snapshots), config.noname_sentinel)

    resolver = OrdinalResolver(name, ordinal_index, excluded)
    merged = resolver.resolve(snapshots)

    logger.info(
        f"Merged {name} from {len(snapshots)}/{len(deps)} snapshots: "
        f"{len(merged.symbols)} names, {len(merged.conflicts)} conflicts, {len(merged.misses)} misses"
    )
    return merged
