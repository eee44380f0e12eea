"""
Name resolution for import-library symbols.

Ordinal imports are named through an OrdinalIndex built from DLL export
tables; named imports use their own import name.
"""

from typing import Dict, FrozenSet, Iterable, List, Optional, Tuple

from typing_extensions import assert_never

from winsdk_exports.logging_config import logger
from winsdk_exports.schemas import (
    DiagnosticKind,
    ExportSymbolResult,
    LibSymbol,
    MergeDiagnostic,
    MergeResult,
    NameType,
)
from .ordinal_index import OrdinalIndex


class OrdinalResolver:
    """
    Resolves LibSymbol records of one library to canonical names.

    Handles:
    - Ordinal imports: last candidate of the ordinal's index entry wins;
      several candidates are recorded as a conflict
    - Named imports: the import name
    - Anything left unnamed: the raw symbol name, recorded as a miss

    A resolver is built per merge and collects that merge's diagnostics.
    """

    def __init__(self, library: str, ordinal_index: OrdinalIndex, excluded_symbols: FrozenSet[str]):
        self.library = library
        self.ordinal_index = ordinal_index
        self.excluded_symbols = excluded_symbols
        self.diagnostics: List[MergeDiagnostic] = []

    def _record(self, diagnostic: MergeDiagnostic) -> None:
        self.diagnostics.append(diagnostic)
        logger.warning(diagnostic.message)

    def _name_from_ordinal(self, symbol: LibSymbol, snapshot: str) -> Optional[str]:
        candidates = self.ordinal_index.get(symbol.ordinal)
        if not candidates:
            return None
        resolved = candidates[-1]
        if len(candidates) > 1:
            self._record(MergeDiagnostic(
                kind=DiagnosticKind.CONFLICT,
                library=self.library,
                snapshot=snapshot,
                symbol_name=symbol.symbol_name,
                ordinal=symbol.ordinal,
                candidates=list(candidates),
                resolved_name=resolved,
            ))
        return resolved

    def resolve_name(self, symbol: LibSymbol, snapshot: str) -> str:
        """
        Canonical name for one symbol.

        Returns:
            The resolved name; the raw symbol name when nothing else is known.
        """
        name_type = symbol.name_type
        if name_type is NameType.ORDINAL:
            resolved = self._name_from_ordinal(symbol, snapshot)
        elif (
            name_type is NameType.NAME
            or name_type is NameType.UNDECORATE
            or name_type is NameType.NO_PREFIX
        ):
            resolved = symbol.name
        else:
            assert_never(name_type)

        if not resolved:
            resolved = symbol.symbol_name
            self._record(MergeDiagnostic(
                kind=DiagnosticKind.MISS,
                library=self.library,
                snapshot=snapshot,
                symbol_name=symbol.symbol_name,
                ordinal=symbol.ordinal,
                resolved_name=resolved,
            ))
        return resolved

    def resolve(self, snapshots: Iterable[Tuple[str, ExportSymbolResult]]) -> MergeResult:
        """
        Group every eligible LibSymbol under its resolved name.

        Records without a DLL name and excluded symbol names are skipped.
        """
        symbols: Dict[str, List[LibSymbol]] = {}
        for snapshot, result in snapshots:
            for symbol in result.lib_symbols:
                if not symbol.dll_name:
                    continue
                if symbol.symbol_name in self.excluded_symbols:
                    logger.debug(f"Skipping excluded symbol {symbol.symbol_name} in {self.library}:{snapshot}")
                    continue
                name = self.resolve_name(symbol, snapshot)
                if not name:
                    logger.debug(f"Skipping unnamed symbol at offset {symbol.offset:#x} in {self.library}:{snapshot}")
                    continue
                symbols.setdefault(name, []).append(symbol)

        return MergeResult(library=self.library, symbols=symbols, diagnostics=list(self.diagnostics))
