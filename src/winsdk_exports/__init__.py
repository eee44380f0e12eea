"""
winsdk-exports - symbol tables from dumpbin reports of Windows DLLs and
import libraries, with ordinal resolution across SDK snapshots.
"""

__version__ = "1.0.0"

from winsdk_exports.schemas import (
    DllExport,
    ExportSymbolResult,
    LibExport,
    LibPublicSymbol,
    LibSymbol,
    MergeDiagnostic,
    MergeResult,
    NameType,
)
from winsdk_exports.exceptions import FormatError, NameTypeError, ReportError, WinsdkError
from winsdk_exports.parser import parse_report
from winsdk_exports.resolution import merge

__all__ = [
    "__version__",
    "DllExport",
    "ExportSymbolResult",
    "LibExport",
    "LibPublicSymbol",
    "LibSymbol",
    "MergeDiagnostic",
    "MergeResult",
    "NameType",
    "FormatError",
    "NameTypeError",
    "ReportError",
    "WinsdkError",
    "parse_report",
    "merge",
]
