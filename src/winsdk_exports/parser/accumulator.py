from typing import List

from winsdk_exports.schemas import (
    DllExport,
    ExportSymbolResult,
    LibExport,
    LibPublicSymbol,
    LibSymbol,
)


class ResultAccumulator:
    """
    Collects records while one report is scanned.

    Owned by a single parse; finalize() hands back an immutable
    ExportSymbolResult and closes the accumulator.
    """

    def __init__(self):
        self._dll_exports: List[DllExport] = []
        self._lib_exports: List[LibExport] = []
        self._lib_public_symbols: List[LibPublicSymbol] = []
        self._lib_symbols: List[LibSymbol] = []
        self._finalized = False

    def _check_open(self) -> None:
        if self._finalized:
            raise RuntimeError("ResultAccumulator is already finalized")

    def add_dll_export(self, record: DllExport) -> None:
        self._check_open()
        self._dll_exports.append(record)

    def add_lib_export(self, record: LibExport) -> None:
        self._check_open()
        self._lib_exports.append(record)

    def add_lib_public_symbol(self, record: LibPublicSymbol) -> None:
        self._check_open()
        self._lib_public_symbols.append(record)

    def add_lib_symbol(self, record: LibSymbol) -> None:
        self._check_open()
        self._lib_symbols.append(record)

    def finalize(self) -> ExportSymbolResult:
        self._check_open()
        self._finalized = True
        return ExportSymbolResult(
            dll_exports=tuple(self._dll_exports),
            lib_exports=tuple(self._lib_exports),
            lib_public_symbols=tuple(self._lib_public_symbols),
            lib_symbols=tuple(self._lib_symbols),
        )
