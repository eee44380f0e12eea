from typing import Dict, Iterable, Tuple

from winsdk_exports.schemas import ExportSymbolResult
from .config import NONAME_SENTINEL

# ordinal -> distinct export names, in first-seen order
OrdinalIndex = Dict[int, Tuple[str, ...]]


def export_base_name(name: str) -> str:
    """Drop anything after the first space, e.g. "(forwarded to ...)"."""
    return name.split(" ", 1)[0]


def build_ordinal_index(
    results: Iterable[ExportSymbolResult],
    noname_sentinel: str = NONAME_SENTINEL,
) -> OrdinalIndex:
    """
    Map every ordinal in the DLL export tables to its candidate names.

    Results are visited in the order given, so the last name of each entry
    comes from the latest snapshot that introduced a new name for it.
    """
    names_by_ordinal: Dict[int, Dict[str, None]] = {}
    for result in results:
        for export in result.dll_exports:
            name = export_base_name(export.name)
            if not name or name == noname_sentinel:
                continue
            names_by_ordinal.setdefault(export.ordinal, {}).setdefault(name, None)
    return {ordinal: tuple(names) for ordinal, names in names_by_ordinal.items()}
