"""
Batch orchestration: dump and parse every binary of a snapshot, and merge
one library across snapshots.
"""

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Dict, Iterable, Optional, Sequence

from winsdk_exports.discovery import iter_binaries
from winsdk_exports.dumpbin import DumpbinConfig, run_dumpbin
from winsdk_exports.logging_config import logger
from winsdk_exports.parser import parse_report
from winsdk_exports.resolution import merge
from winsdk_exports.schemas import ExportSymbolResult, MergeResult
from winsdk_exports.store import ExportStore
from winsdk_exports.tracing import trace

DEFAULT_ARCH = "x86"
DEFAULT_WORKERS = 4

DEFAULT_X86_SNAPSHOTS = (
    "00-Windows2000-SP4-DLL",
    "01-WindowsXP-RTM-DLL",
    "01-WindowsXP-SP1-LIB",
    "01-WindowsXP-SP3-DLL",
    "06-Windows10-RTM-DLL",
    "06-Windows10-SP13-LIB",
)


def library_name(binary: Path) -> str:
    return Path(binary).stem.lower()


def export_library(
    store: ExportStore,
    binary: Path,
    snapshot: str,
    config: Optional[DumpbinConfig] = None,
) -> ExportSymbolResult:
    """Dump, save, parse and save one binary of a snapshot."""
    name = library_name(binary)
    text = run_dumpbin(binary, config)
    store.write_report_text(name, snapshot, text)
    result = parse_report(text)
    store.write_result(name, snapshot, result)
    return result


@trace
def export_snapshot(
    root: Path,
    snapshot: str,
    arch: str = DEFAULT_ARCH,
    workers: int = DEFAULT_WORKERS,
    config: Optional[DumpbinConfig] = None,
) -> Dict[str, ExportSymbolResult]:
    """
    Export every binary under deps/<snapshot>/<arch>/.

    Binaries are independent, so they are processed in a thread pool.
    The first failure is re-raised once all submitted work has finished.
    """
    store = ExportStore(root, arch)
    store.ensure_dirs()
    binaries = iter_binaries(store.paths.deps_dir(snapshot, arch))
    logger.info(f"Exporting {len(binaries)} binaries from {snapshot}/{arch}")

    with ThreadPoolExecutor(max_workers=max(1, workers)) as executor:
        futures = [
            (binary, executor.submit(export_library, store, binary, snapshot, config))
            for binary in binaries
        ]
        return {library_name(binary): future.result() for binary, future in futures}


def export_snapshots(
    root: Path,
    snapshots: Iterable[str] = DEFAULT_X86_SNAPSHOTS,
    arch: str = DEFAULT_ARCH,
    workers: int = DEFAULT_WORKERS,
    config: Optional[DumpbinConfig] = None,
) -> Dict[str, Dict[str, ExportSymbolResult]]:
    return {
        snapshot: export_snapshot(root, snapshot, arch, workers, config)
        for snapshot in snapshots
    }


def merge_library(
    root: Path,
    name: str,
    deps: Sequence[str],
    arch: str = DEFAULT_ARCH,
    excluded_symbols: Optional[Iterable[str]] = None,
) -> MergeResult:
    """Merge the saved snapshots of one library and write the merged JSON."""
    store = ExportStore(root, arch)
    merged = merge(name, deps, store.load_snapshots(name, deps), excluded_symbols)
    store.write_merged(merged)
    return merged
